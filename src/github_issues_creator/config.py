"""Configuration for the issues creator.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The default backend drives the GitHub CLI and relies on its ambient
authentication, so no token is needed. The `api` backend talks to the REST API
directly and needs `ISSUES_CREATOR_GITHUB_TOKEN`.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ImporterSettings(BaseSettings):
    """Settings for the issues creator.

    Environment variables:
    - ISSUES_CREATOR_BACKEND       (optional, `gh` or `api`)
    - ISSUES_CREATOR_GH_PATH       (optional)
    - ISSUES_CREATOR_GITHUB_TOKEN  (required for the `api` backend)
    - GITHUB_BASE_URL              (optional)
    - ISSUES_CREATOR_ISSUE_DELAY   (optional)
    - ISSUES_CREATOR_COLOR         (optional)
    - LOG_LEVEL                    (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `ImporterSettings(_env_file=path_to_env)`.
    """

    backend: Literal["gh", "api"] = Field(
        default="gh",
        validation_alias="ISSUES_CREATOR_BACKEND",
        description="Tracker backend: the gh CLI or the GitHub REST API",
    )
    gh_path: str = Field(
        default="gh",
        validation_alias="ISSUES_CREATOR_GH_PATH",
        description="Name or path of the GitHub CLI executable",
    )

    github_token: str = Field(
        default="",
        validation_alias="ISSUES_CREATOR_GITHUB_TOKEN",
        description="GitHub token used by the api backend",
    )
    github_base_url: str = Field(
        default="https://api.github.com",
        validation_alias="GITHUB_BASE_URL",
        description="GitHub API base URL (useful for GitHub Enterprise)",
    )

    issue_delay_seconds: float = Field(
        default=0.5,
        ge=0.0,
        validation_alias="ISSUES_CREATOR_ISSUE_DELAY",
        description="Fixed pause between issue creations to stay under rate limits",
    )

    color: bool = Field(
        default=True,
        validation_alias="ISSUES_CREATOR_COLOR",
        description="Colourise terminal output (ignored when stdout is not a TTY)",
    )

    log_level: str = Field(
        default="WARNING",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_token_for_api(self) -> ImporterSettings:
        if self.backend == "api" and not self.github_token.strip():
            raise ValueError("ISSUES_CREATOR_GITHUB_TOKEN is required when ISSUES_CREATOR_BACKEND=api")
        return self
