"""Unit tests for tracker backend selection."""

from __future__ import annotations

from pathlib import Path

import pytest

from github_issues_creator.config import ImporterSettings
from github_issues_creator.tracker import create_tracker
from github_issues_creator.tracker.api import GitHubApiTracker
from github_issues_creator.tracker.gh_cli import GhCliTracker


def test_default_backend_is_gh_cli(clean_env: Path) -> None:
    tracker = create_tracker(ImporterSettings(), "acme/widgets")

    assert isinstance(tracker, GhCliTracker)
    assert tracker.repository == "acme/widgets"


def test_api_backend_uses_token(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ISSUES_CREATOR_BACKEND", "api")
    monkeypatch.setenv("ISSUES_CREATOR_GITHUB_TOKEN", "test-token")

    tracker = create_tracker(ImporterSettings(), "acme/widgets/")

    assert isinstance(tracker, GitHubApiTracker)
    assert tracker.repository == "acme/widgets"
    tracker.close()
