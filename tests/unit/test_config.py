"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from github_issues_creator.config import ImporterSettings


def test_settings_defaults(clean_env: Path) -> None:
    settings = ImporterSettings()

    assert settings.backend == "gh"
    assert settings.gh_path == "gh"
    assert settings.github_token == ""
    assert settings.github_base_url == "https://api.github.com"
    assert settings.issue_delay_seconds == 0.5
    assert settings.color is True
    assert settings.log_level == "WARNING"


def test_settings_loads_from_dotenv(clean_env: Path) -> None:
    (clean_env / ".env").write_text(
        "\n".join(
            [
                "ISSUES_CREATOR_BACKEND=api",
                "ISSUES_CREATOR_GITHUB_TOKEN=test-token",
                "ISSUES_CREATOR_ISSUE_DELAY=0",
                "LOG_LEVEL=DEBUG",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = ImporterSettings()

    assert settings.backend == "api"
    assert settings.github_token == "test-token"
    assert settings.issue_delay_seconds == 0
    assert settings.log_level == "DEBUG"


def test_api_backend_requires_token(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ISSUES_CREATOR_BACKEND", "api")

    with pytest.raises(ValidationError, match="ISSUES_CREATOR_GITHUB_TOKEN"):
        ImporterSettings()


def test_unknown_backend_is_rejected(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ISSUES_CREATOR_BACKEND", "gitlab")

    with pytest.raises(ValidationError):
        ImporterSettings()


def test_negative_delay_is_rejected(clean_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ISSUES_CREATOR_ISSUE_DELAY", "-1")

    with pytest.raises(ValidationError):
        ImporterSettings()
