"""Test configuration and fixtures."""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path
from unittest.mock import Mock

import pytest

from github_issues_creator.console import Console
from github_issues_creator.tracker.base import (
    CreatedIssue,
    IssueTracker,
    Milestone,
    PrerequisiteCheck,
)

_SETTINGS_ENV_VARS = (
    "ISSUES_CREATOR_BACKEND",
    "ISSUES_CREATOR_GH_PATH",
    "ISSUES_CREATOR_GITHUB_TOKEN",
    "GITHUB_BASE_URL",
    "ISSUES_CREATOR_ISSUE_DELAY",
    "ISSUES_CREATOR_COLOR",
    "LOG_LEVEL",
)


@pytest.fixture
def clean_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run in an empty directory with no settings variables set."""
    for name in _SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def output() -> io.StringIO:
    """Provide a buffer that collects console output."""
    return io.StringIO()


@pytest.fixture
def console(output: io.StringIO) -> Console:
    """Provide an uncoloured console writing to `output`."""
    return Console(output, color=False)


@pytest.fixture
def tracker() -> Mock:
    """Provide a tracker mock where nothing exists yet and every call succeeds."""
    mock = Mock(spec=IssueTracker)
    mock.repository = "acme/widgets"
    mock.check_prerequisites.return_value = [
        PrerequisiteCheck(name="GitHub CLI (gh) installed", ok=True),
        PrerequisiteCheck(name="Authenticated with GitHub", ok=True),
    ]
    mock.list_label_names.return_value = set()
    mock.list_milestones.return_value = []
    mock.create_milestone.side_effect = lambda *, title: Milestone(title=title, number=7)
    mock.create_issue.side_effect = lambda *, title, body, labels, milestone=None: CreatedIssue(
        title=title, url="https://github.com/acme/widgets/issues/1"
    )
    return mock


@pytest.fixture
def write_batch(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a batch file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
