"""Issue batch files: YAML documents describing issues to create.

A batch file looks like::

    sprint: 1
    milestone: "Sprint 1"
    issues:
      - title: "[Sprint 1] Feature name"
        labels: [sprint-1, must-have]
        body: |
          ## User Story
          ...

Files are read fresh on every run and never written back.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

YAML_SUFFIXES: tuple[str, ...] = (".yaml", ".yml")


class BatchFileError(Exception):
    """Raised when a batch file cannot be read, parsed or validated."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path.name}: {reason}")
        self.path = path
        self.reason = reason


class IssueDefinition(BaseModel):
    """A single issue entry of a batch file."""

    model_config = ConfigDict(extra="ignore")

    title: str
    body: str = Field(default="")
    labels: list[str] = Field(default_factory=list)

    # Accepted for documentation purposes; the importer does not apply them.
    assignees: list[str] = Field(default_factory=list)
    projects: list[str] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _scalar_title_is_text(cls, value: Any) -> Any:
        # `title: 2024` parses as a number.
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must be a non-empty string")
        return value

    @field_validator("body", mode="before")
    @classmethod
    def _body_defaults_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("labels", "assignees", "projects", mode="before")
    @classmethod
    def _null_list_is_empty(cls, value: Any) -> Any:
        if value is None:
            return []
        # YAML reads labels like `2024` as numbers.
        if isinstance(value, list):
            return [str(v) if isinstance(v, int | float) and not isinstance(v, bool) else v for v in value]
        return value

    @field_validator("labels")
    @classmethod
    def _unique_labels(cls, value: list[str]) -> list[str]:
        seen: set[str] = set()
        labels: list[str] = []
        for raw in value:
            name = raw.strip()
            if name and name not in seen:
                seen.add(name)
                labels.append(name)
        return labels

    @property
    def label_string(self) -> str:
        """Labels joined by commas, as shown to the user."""

        return ",".join(self.labels)


class RejectedIssue(BaseModel):
    """An issue entry that failed validation; counted as a failed issue."""

    index: int
    title: str | None = None
    reason: str

    @property
    def display_name(self) -> str:
        return self.title or f"issue #{self.index}"


def _validation_summary(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        where = ".".join(str(p) for p in detail["loc"])
        parts.append(f"{where}: {detail['msg']}" if where else detail["msg"])
    return "; ".join(parts)


class IssueBatch(BaseModel):
    """Parsed contents of one batch file.

    Issue entries are validated one at a time: a bad entry lands in `rejected`
    and its valid siblings are still created.
    """

    model_config = ConfigDict(extra="ignore")

    sprint: int | str | None = None
    milestone: str | None = None
    issues: list[IssueDefinition] = Field(default_factory=list)
    rejected: list[RejectedIssue] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _split_invalid_issues(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = {key: value for key, value in data.items() if key != "rejected"}
        entries = data.get("issues")
        if not isinstance(entries, list):
            return data

        issues: list[IssueDefinition] = []
        rejected: list[RejectedIssue] = []
        for index, entry in enumerate(entries, start=1):
            try:
                issues.append(IssueDefinition.model_validate(entry))
            except ValidationError as e:
                title = entry.get("title") if isinstance(entry, dict) else None
                rejected.append(
                    RejectedIssue(
                        index=index,
                        title=(title.strip() or None) if isinstance(title, str) else None,
                        reason=_validation_summary(e),
                    )
                )
        return {**data, "issues": issues, "rejected": rejected}

    @field_validator("milestone", mode="before")
    @classmethod
    def _normalize_milestone(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, int | float) and not isinstance(value, bool):
            value = str(value)
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("issues", mode="before")
    @classmethod
    def _null_issues_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def unique_labels(self) -> list[str]:
        """Distinct label names used by any issue, sorted."""

        return sorted({label for issue in self.issues for label in issue.labels})


def load_batch_file(path: Path) -> IssueBatch:
    """Read and validate a batch file.

    Raises:
        BatchFileError: if the file is unreadable, not valid YAML, or does not
            match the batch schema.
    """

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise BatchFileError(path, f"invalid YAML: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise BatchFileError(path, f"cannot read file: {e}") from e

    if raw is None:
        return IssueBatch()

    if not isinstance(raw, dict):
        raise BatchFileError(path, "top-level YAML value must be a mapping")

    try:
        return IssueBatch.model_validate(raw)
    except ValidationError as e:
        raise BatchFileError(path, f"invalid issue definitions: {e}") from e


def discover_batch_files(directory: Path) -> list[Path]:
    """Return YAML files directly inside `directory` in a stable order."""

    if not directory.is_dir():
        return []

    candidates = [
        p for p in directory.iterdir() if p.is_file() and p.name.endswith(YAML_SUFFIXES)
    ]
    # Stable ordering: filename sort.
    return sorted(candidates, key=lambda p: p.name)


def yaml_parser_description() -> str:
    """Describe the YAML parser in use, for prerequisite reporting."""

    loader = "libyaml C loader" if getattr(yaml, "__with_libyaml__", False) else "pure-Python loader"
    return f"PyYAML {yaml.__version__} ({loader})"
