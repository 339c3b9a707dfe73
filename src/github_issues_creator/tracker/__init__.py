"""Issue tracker backends."""

from __future__ import annotations

from github_issues_creator.config import ImporterSettings
from github_issues_creator.tracker.base import (
    CreatedIssue,
    IssueTracker,
    Milestone,
    PrerequisiteCheck,
    TrackerError,
)


def create_tracker(settings: ImporterSettings, repository: str) -> IssueTracker:
    """Create the tracker backend selected by settings."""

    if settings.backend == "api":
        from github_issues_creator.tracker.api import GitHubApiTracker

        return GitHubApiTracker(
            token=settings.github_token,
            repository=repository,
            base_url=settings.github_base_url,
        )

    from github_issues_creator.tracker.gh_cli import GhCliTracker

    return GhCliTracker(repository=repository, gh_path=settings.gh_path)


__all__ = [
    "CreatedIssue",
    "IssueTracker",
    "Milestone",
    "PrerequisiteCheck",
    "TrackerError",
    "create_tracker",
]
