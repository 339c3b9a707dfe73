"""Batch importer: turns issue batch files into tracker issues.

For each file the importer validates the YAML, makes sure every referenced label
exists, resolves (or creates) the milestone and then creates the issues one by
one. Failures below the file level are reported and counted, never raised, so a
single bad issue or file does not stop the run.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from github_issues_creator.batch import BatchFileError, IssueBatch, load_batch_file
from github_issues_creator.console import BOLD, CYAN, GREEN, RED, YELLOW, Console
from github_issues_creator.labels import label_spec_for
from github_issues_creator.tracker.base import IssueTracker, Milestone, TrackerError

logger = logging.getLogger(__name__)

DRY_RUN_TAG = "[DRY RUN]"


@dataclass(slots=True)
class FileResult:
    """Outcome of processing one batch file."""

    path: Path
    created: int = 0
    failed: int = 0
    error: str | None = None


@dataclass(slots=True)
class RunResult:
    """Accumulates file results across a run."""

    files: list[FileResult] = field(default_factory=list)

    def add(self, result: FileResult) -> None:
        self.files.append(result)

    @property
    def total_created(self) -> int:
        return sum(f.created for f in self.files)

    @property
    def total_failed(self) -> int:
        return sum(f.failed for f in self.files)


def split_labels(labels: str) -> list[str]:
    """Split a comma-separated label string, trimming whitespace."""

    parts = [p.strip() for p in labels.split(",")]
    return [p for p in parts if p]


class IssueImporter:
    """Creates labels, milestones and issues for batch files."""

    def __init__(
        self,
        *,
        tracker: IssueTracker,
        console: Console,
        dry_run: bool = False,
        issue_delay_seconds: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._tracker = tracker
        self._console = console
        self._dry_run = dry_run
        self._issue_delay_seconds = issue_delay_seconds
        self._sleep = sleep

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def _dry_run_tag(self) -> str:
        return self._console.paint(DRY_RUN_TAG, YELLOW)

    def check_prerequisites(self) -> bool:
        """Print every prerequisite check; return True when all passed."""

        console = self._console
        console.info("Checking prerequisites...")

        checks = self._tracker.check_prerequisites()
        for check in checks:
            label = f"{check.name} ({check.detail})" if check.detail else check.name
            if check.ok:
                console.ok(label)
            else:
                console.fail(label)
                for hint in check.remediation:
                    console.print(f"  {hint}")

        failed = [c for c in checks if not c.ok]
        if failed:
            logger.error(
                "Prerequisite checks failed", extra={"failed": [c.name for c in failed]}
            )
            console.print()
            console.error("Please fix the above errors before continuing")
            return False

        console.ok("All prerequisites met")
        console.print()
        return True

    def prepare_labels(self, batch: IssueBatch) -> None:
        """Create any label used by `batch` that does not exist yet.

        Best effort: failures are reported and the batch carries on.
        """

        names = batch.unique_labels()
        if not names:
            return

        console = self._console
        console.info("Checking labels...")

        try:
            existing = self._tracker.list_label_names()
        except TrackerError as e:
            logger.warning("Could not list labels", extra={"error": str(e)})
            console.fail("Could not list existing labels; skipping label creation")
            console.error(f"  Error: {e}")
            return

        for name in names:
            if name in existing:
                continue

            spec = label_spec_for(name)
            if self._dry_run:
                console.print(
                    f"{self._dry_run_tag()} Would create label: {console.paint(name, CYAN)}"
                )
                continue

            console.warn(f"Creating label: {name}")
            try:
                self._tracker.create_label(
                    name=spec.name, color=spec.color, description=spec.description
                )
            except TrackerError as e:
                logger.warning("Label creation failed", extra={"label": name, "error": str(e)})
                console.fail(f"Failed to create label: {name}")
                console.error(f"  Error: {e}")
            else:
                existing.add(name)

        console.ok(f"Labels ready ({len(names)} unique labels)")
        console.print()

    def resolve_milestone(self, title: str) -> Milestone | None:
        """Look a milestone up by exact title, creating it when missing.

        In dry-run mode a missing milestone resolves to a placeholder without a
        number. Returns None when lookup or creation fails.
        """

        try:
            for milestone in self._tracker.list_milestones():
                if milestone.title == title:
                    return milestone
        except TrackerError as e:
            logger.warning(
                "Could not list milestones", extra={"milestone": title, "error": str(e)}
            )
            self._console.fail(f"Could not look up milestone: {title}")
            self._console.error(f"  Error: {e}")
            return None

        if self._dry_run:
            self._console.print(f"{self._dry_run_tag()} Would create milestone: {title}")
            return Milestone(title=title, number=None)

        self._console.warn(f"Creating milestone: {title}")
        try:
            return self._tracker.create_milestone(title=title)
        except TrackerError as e:
            logger.warning(
                "Milestone creation failed", extra={"milestone": title, "error": str(e)}
            )
            self._console.fail(f"Failed to create milestone: {title}")
            self._console.error(f"  Error: {e}")
            return None

    def create_issue(
        self,
        *,
        title: str,
        body: str,
        labels: str,
        milestone: Milestone | None,
    ) -> bool:
        """Create (or preview) one issue; return True on success."""

        console = self._console

        if self._dry_run:
            console.print(f"{self._dry_run_tag()} Would create issue:")
            console.field("Title", title, indent="  ")
            if labels:
                console.field("Labels", labels, indent="  ")
            if milestone is not None and not milestone.is_placeholder:
                console.field("Milestone", f"{milestone.title} (ID: {milestone.number})", indent="  ")
            console.field("Body", f"{len(body)} characters", indent="  ")
            console.print()
            return True

        try:
            self._tracker.create_issue(
                title=title,
                body=body,
                labels=split_labels(labels),
                milestone=milestone,
            )
        except TrackerError as e:
            logger.warning("Issue creation failed", extra={"title": title, "error": str(e)})
            console.print(console.paint("✗", RED) + f" {title}")
            console.error(f"  Error: {e}")
            return False

        console.print(console.paint("✓", GREEN) + f" {title}")
        return True

    def process_file(self, path: Path) -> FileResult:
        """Process one batch file and return its counts."""

        console = self._console
        filename = path.name

        console.print()
        console.rule()
        console.print(console.paint(f"Processing: {filename}", BOLD))
        console.rule()
        console.print()

        try:
            batch = load_batch_file(path)
        except BatchFileError as e:
            logger.warning("Invalid batch file", extra={"path": str(path), "error": e.reason})
            console.error(f"Error: Invalid YAML file: {filename}")
            console.error(f"  {e.reason}")
            return FileResult(path=path, failed=1, error=e.reason)

        self.prepare_labels(batch)

        milestone: Milestone | None = None
        if batch.milestone is not None:
            milestone = self.resolve_milestone(batch.milestone)
            if milestone is not None:
                ident = "will be created" if milestone.is_placeholder else f"ID: {milestone.number}"
                console.field("Milestone", f"{batch.milestone} {console.paint(f'({ident})', CYAN)}")

        if batch.sprint is not None:
            console.field("Sprint", batch.sprint)

        result = FileResult(path=path)

        if not batch.issues and not batch.rejected:
            console.warn(f"No issues found in {filename}")
            return result

        console.field("Issues", len(batch.issues) + len(batch.rejected))
        console.print()

        for rejected in batch.rejected:
            logger.warning(
                "Invalid issue definition",
                extra={"path": str(path), "title": rejected.display_name, "error": rejected.reason},
            )
            console.print(console.paint("✗", RED) + f" {rejected.display_name}")
            console.error(f"  Error: invalid issue definition: {rejected.reason}")
            result.failed += 1

        for index, issue in enumerate(batch.issues):
            if self.create_issue(
                title=issue.title,
                body=issue.body,
                labels=issue.label_string,
                milestone=milestone,
            ):
                result.created += 1
            else:
                result.failed += 1

            is_last = index == len(batch.issues) - 1
            if not self._dry_run and not is_last and self._issue_delay_seconds > 0:
                self._sleep(self._issue_delay_seconds)

        console.print()
        if result.failed == 0:
            console.ok(f"Successfully processed {filename}")
            console.print(f"  Created: {result.created} issues")
        else:
            console.warn(f"⚠ Partially processed {filename}")
            console.print(f"  Created: {result.created} issues")
            console.print(f"  Failed: {result.failed} issues")

        logger.info(
            "Batch file processed",
            extra={"path": str(path), "created": result.created, "failed": result.failed},
        )
        return result

    def run(self, files: Sequence[Path]) -> RunResult:
        """Process `files` in order and print the final summary."""

        console = self._console

        if self._dry_run:
            console.print(
                console.paint("DRY RUN MODE", YELLOW, BOLD) + " - No issues will be created"
            )
            console.print()

        console.field("Repository", self._tracker.repository)
        console.field("Files to process", len(files))
        console.print()

        result = RunResult()
        total = len(files)
        for current, path in enumerate(files, start=1):
            console.print(console.paint(f"[{current}/{total}]", CYAN))
            result.add(self.process_file(path))

        self.print_summary(result)
        return result

    def print_summary(self, result: RunResult) -> None:
        console = self._console
        issues_url = f"https://github.com/{self._tracker.repository}/issues"

        console.print()
        console.rule()

        if self._dry_run:
            console.print(console.paint("DRY RUN COMPLETE", YELLOW, BOLD))
            console.print("No issues were created.")
            console.print(f"Run without {console.paint('--dry-run', CYAN)} to create issues.")
        elif result.total_failed == 0:
            console.print(console.paint("✓ ALL ISSUES CREATED SUCCESSFULLY", GREEN, BOLD))
            console.print()
            console.field("View issues at", issues_url)
        else:
            console.print(console.paint("⚠ COMPLETED WITH ERRORS", YELLOW, BOLD))
            console.print("Some issues failed to create. See errors above.")
            console.print()
            console.field("View created issues at", issues_url)

        console.rule()
        console.print()
