"""Abstract base class for issue tracker backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


class TrackerError(Exception):
    """Raised when a tracker operation fails.

    The message carries the error text reported by the tracker.
    """


@dataclass(frozen=True, slots=True)
class PrerequisiteCheck:
    """Outcome of one prerequisite check."""

    name: str
    ok: bool
    detail: str = ""
    remediation: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Milestone:
    """A milestone resolved against the tracker.

    `number` is None for the placeholder returned in dry-run mode when the
    milestone does not exist yet.
    """

    title: str
    number: int | None

    @property
    def is_placeholder(self) -> bool:
        return self.number is None


@dataclass(frozen=True, slots=True)
class CreatedIssue:
    """Minimal issue metadata returned by the tracker."""

    title: str
    url: str = ""


class IssueTracker(ABC):
    """Operations the importer needs from a remote issue tracker.

    Every remote failure surfaces as `TrackerError`.
    """

    @property
    @abstractmethod
    def repository(self) -> str:
        """Repository name ("owner/repo")."""

    @abstractmethod
    def check_prerequisites(self) -> list[PrerequisiteCheck]:
        """Run all prerequisite checks and return every outcome."""

    @abstractmethod
    def list_label_names(self) -> set[str]:
        """Return the names of all labels in the repository."""

    @abstractmethod
    def create_label(self, *, name: str, color: str, description: str = "") -> None:
        """Create a label."""

    @abstractmethod
    def list_milestones(self) -> list[Milestone]:
        """Return all milestones (open and closed)."""

    @abstractmethod
    def create_milestone(self, *, title: str) -> Milestone:
        """Create an open milestone and return it with its assigned number."""

    @abstractmethod
    def create_issue(
        self,
        *,
        title: str,
        body: str,
        labels: list[str],
        milestone: Milestone | None = None,
    ) -> CreatedIssue:
        """Create an issue."""

    def close(self) -> None:
        """Release any held resources."""
