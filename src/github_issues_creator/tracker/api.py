"""Issue tracker backed by the GitHub REST API.

This wraps PyGithub to keep GitHub calls out of the importer and make tests easy.
"""

from __future__ import annotations

import logging

import requests
from github import Auth, Github, GithubException
from github.Repository import Repository

from github_issues_creator.batch import yaml_parser_description
from github_issues_creator.tracker.base import (
    CreatedIssue,
    IssueTracker,
    Milestone,
    PrerequisiteCheck,
    TrackerError,
)

logger = logging.getLogger(__name__)


# PyGithub raises requests exceptions for transport failures (reset, timeout).
_API_ERRORS = (GithubException, requests.exceptions.RequestException)


def _error_text(e: Exception) -> str:
    if not isinstance(e, GithubException):
        return f"{type(e).__name__}: {e}"
    data = e.data
    if isinstance(data, dict):
        message = data.get("message")
        errors = data.get("errors")
        if isinstance(message, str) and errors:
            return f"HTTP {e.status}: {message} {errors}"
        if isinstance(message, str):
            return f"HTTP {e.status}: {message}"
    return f"HTTP {e.status}: {data}"


class GitHubApiTracker(IssueTracker):
    """Small wrapper around PyGithub for the operations the importer needs."""

    def __init__(
        self,
        *,
        token: str,
        repository: str,
        base_url: str = "https://api.github.com",
        github_api: Github | None = None,
    ) -> None:
        if not token:
            raise ValueError("GitHub token is required")
        if not repository:
            raise ValueError("GitHub repository is required")

        self._repository_name = repository.strip().strip("/")
        self._github = github_api or Github(auth=Auth.Token(token), base_url=base_url.rstrip("/"))
        self._repo: Repository | None = None

    @property
    def repository(self) -> str:
        return self._repository_name

    def _get_repo(self) -> Repository:
        if self._repo is None:
            try:
                self._repo = self._github.get_repo(self._repository_name)
            except _API_ERRORS as e:
                raise TrackerError(_error_text(e)) from e
            logger.info("Connected to repository", extra={"repo": self._repository_name})
        return self._repo

    def check_prerequisites(self) -> list[PrerequisiteCheck]:
        checks: list[PrerequisiteCheck] = [
            PrerequisiteCheck(name="GitHub token configured", ok=True),
            PrerequisiteCheck(
                name="YAML parser available", ok=True, detail=yaml_parser_description()
            ),
        ]

        try:
            login = self._github.get_user().login
        except _API_ERRORS as e:
            checks.append(
                PrerequisiteCheck(
                    name="Could not authenticate with GitHub",
                    ok=False,
                    detail=_error_text(e),
                    remediation=("Check ISSUES_CREATOR_GITHUB_TOKEN",),
                )
            )
        else:
            checks.append(
                PrerequisiteCheck(name="Authenticated with GitHub", ok=True, detail=login)
            )

        try:
            self._get_repo()
        except TrackerError as e:
            checks.append(
                PrerequisiteCheck(
                    name=f"Cannot access repository: {self._repository_name}",
                    ok=False,
                    detail=str(e),
                    remediation=("Verify the repository name and your access permissions",),
                )
            )
        else:
            checks.append(
                PrerequisiteCheck(name=f"Repository found: {self._repository_name}", ok=True)
            )

        return checks

    def list_label_names(self) -> set[str]:
        try:
            return {label.name for label in self._get_repo().get_labels()}
        except _API_ERRORS as e:
            raise TrackerError(_error_text(e)) from e

    def create_label(self, *, name: str, color: str, description: str = "") -> None:
        try:
            self._get_repo().create_label(name=name, color=color, description=description)
        except _API_ERRORS as e:
            raise TrackerError(_error_text(e)) from e
        logger.info("Label created", extra={"label": name, "color": color})

    def list_milestones(self) -> list[Milestone]:
        try:
            return [
                Milestone(title=m.title, number=m.number)
                for m in self._get_repo().get_milestones(state="all")
            ]
        except _API_ERRORS as e:
            raise TrackerError(_error_text(e)) from e

    def create_milestone(self, *, title: str) -> Milestone:
        try:
            created = self._get_repo().create_milestone(title=title, state="open")
        except _API_ERRORS as e:
            raise TrackerError(_error_text(e)) from e
        logger.info("Milestone created", extra={"milestone": title, "number": created.number})
        return Milestone(title=created.title, number=created.number)

    def create_issue(
        self,
        *,
        title: str,
        body: str,
        labels: list[str],
        milestone: Milestone | None = None,
    ) -> CreatedIssue:
        if not title.strip():
            raise ValueError("Issue title is required")

        repo = self._get_repo()
        try:
            if milestone is not None and milestone.number is not None:
                issue = repo.create_issue(
                    title=title,
                    body=body,
                    labels=labels,
                    milestone=repo.get_milestone(milestone.number),
                )
            else:
                issue = repo.create_issue(title=title, body=body, labels=labels)
        except _API_ERRORS as e:
            raise TrackerError(_error_text(e)) from e

        logger.info("Issue created", extra={"title": title, "number": issue.number})
        return CreatedIssue(title=issue.title, url=issue.html_url)

    def close(self) -> None:
        self._github.close()
