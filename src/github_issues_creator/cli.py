"""CLI entrypoint: `github-issues-creator <owner/repo> <file-or-dir> [--dry-run]`.

Exit codes:
- 0: every issue created (or dry run)
- 1: usage, configuration or prerequisite error
- 130: interrupted
- N: number of issues (or batch files) that failed
"""

from __future__ import annotations

import argparse
import logging
import re
import sys
from pathlib import Path
from typing import NoReturn

from pydantic import ValidationError

from github_issues_creator import __version__
from github_issues_creator.batch import discover_batch_files
from github_issues_creator.config import ImporterSettings
from github_issues_creator.console import BOLD, CYAN, RED, YELLOW, Console, banner
from github_issues_creator.importer import IssueImporter
from github_issues_creator.logging import configure_logging
from github_issues_creator.tracker import create_tracker

logger = logging.getLogger(__name__)

PROG = "github-issues-creator"

EXIT_USAGE = 1
EXIT_INTERRUPTED = 130
MAX_EXIT_STATUS = 255

REPOSITORY_PATTERN = re.compile(r"^[a-zA-Z0-9_-]+/[a-zA-Z0-9_.-]+$")

EPILOG = f"""\
examples:
  {PROG} sthDINESH/Vertex sprint-1.yaml
  {PROG} myorg/myrepo ./issues/
  {PROG} sthDINESH/Vertex sprint-1.yaml --dry-run

YAML file format:
  ---
  sprint: 1
  milestone: "Sprint 1"
  issues:
    - title: "[Sprint 1] Feature Name"
      labels:
        - sprint-1
        - must-have
      body: |
        ## User Story
        **As a** user
        **I want to** do something
        **So that I can** achieve goal

prerequisites:
  - GitHub CLI (gh): brew install gh
  - Authenticated: gh auth login
  (or ISSUES_CREATOR_BACKEND=api with ISSUES_CREATOR_GITHUB_TOKEN set)
"""


class UsageError(Exception):
    """Raised for invalid command-line input detected after parsing."""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports errors with a full usage block and exit 1."""

    def error(self, message: str) -> NoReturn:
        console = Console(sys.stderr)
        console.print(console.paint(f"Error: {message}", RED))
        console.print()
        self.print_help(sys.stderr)
        self.exit(EXIT_USAGE)


def _repository(value: str) -> str:
    if not REPOSITORY_PATTERN.match(value):
        raise argparse.ArgumentTypeError(
            f"invalid repository format: expected owner/repository, got {value!r}"
        )
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=PROG,
        description="Create GitHub issues, labels and milestones from YAML files",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument(
        "-v", "--version", action="version", version=f"GitHub Issues Creator v{__version__}"
    )
    parser.add_argument(
        "repository",
        type=_repository,
        help="GitHub repository in the form 'owner/repo'",
    )
    parser.add_argument(
        "path",
        type=Path,
        help="YAML file with issue definitions, or a directory of YAML files",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview issues without creating anything",
    )
    return parser


def resolve_batch_files(path: Path) -> list[Path]:
    """Return the batch files named by `path` (a file or a directory)."""

    if path.is_dir():
        files = discover_batch_files(path)
        if not files:
            raise UsageError(f"No YAML files found in directory: {path}")
        return files
    if path.is_file():
        return [path]
    raise UsageError(f"File or directory not found: {path}")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        files = resolve_batch_files(args.path)
    except UsageError as e:
        err = Console(sys.stderr)
        err.print(err.paint(f"Error: {e}", RED))
        return EXIT_USAGE

    try:
        settings = ImporterSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment or .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_USAGE

    configure_logging(settings.log_level, repository=args.repository, dry_run=args.dry_run)
    console = Console(color=settings.color)

    try:
        console.print(console.paint(banner(__version__), CYAN))
        console.print()

        tracker = create_tracker(settings, args.repository)
        try:
            importer = IssueImporter(
                tracker=tracker,
                console=console,
                dry_run=args.dry_run,
                issue_delay_seconds=settings.issue_delay_seconds,
            )
            if not importer.check_prerequisites():
                return EXIT_USAGE

            result = importer.run(files)
        finally:
            tracker.close()

        logger.info(
            "Run finished",
            extra={
                "files": len(files),
                "created": result.total_created,
                "failed": result.total_failed,
            },
        )

        if args.dry_run:
            return 0
        return min(result.total_failed, MAX_EXIT_STATUS)

    except KeyboardInterrupt:
        console.print()
        console.print(console.paint("Script interrupted. Exiting...", YELLOW))
        return EXIT_INTERRUPTED

    except Exception:
        logger.exception("Run failed")
        console.print(console.paint("Unexpected error; see log output above.", RED, BOLD))
        return EXIT_USAGE


if __name__ == "__main__":
    raise SystemExit(main())
