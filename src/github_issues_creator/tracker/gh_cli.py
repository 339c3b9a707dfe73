"""Issue tracker backed by the GitHub CLI (`gh`).

Authentication is whatever `gh auth login` left behind; this module never
reads or stores credentials.
"""

from __future__ import annotations

import json
import logging
import shutil
import subprocess
from collections.abc import Callable

from github_issues_creator.batch import yaml_parser_description
from github_issues_creator.tracker.base import (
    CreatedIssue,
    IssueTracker,
    Milestone,
    PrerequisiteCheck,
    TrackerError,
)

logger = logging.getLogger(__name__)

Runner = Callable[[list[str]], subprocess.CompletedProcess[str]]


def _run(cmd: list[str]) -> subprocess.CompletedProcess[str]:
    return subprocess.run(cmd, capture_output=True, text=True)


class GhCliTracker(IssueTracker):
    """Runs `gh` subcommands for every tracker operation."""

    def __init__(
        self,
        *,
        repository: str,
        gh_path: str = "gh",
        runner: Runner | None = None,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        if not repository:
            raise ValueError("GitHub repository is required")

        self._repository_name = repository.strip().strip("/")
        self._gh_path = gh_path
        self._runner = runner or _run
        self._which = which

    @property
    def repository(self) -> str:
        return self._repository_name

    def _gh(self, *args: str) -> str:
        cmd = [self._gh_path, *args]
        logger.debug("Running gh", extra={"args": list(args)})
        try:
            r = self._runner(cmd)
        except OSError as e:
            raise TrackerError(f"cannot run {self._gh_path}: {e}") from e
        if r.returncode != 0:
            message = (r.stderr or r.stdout or "").strip()
            raise TrackerError(message or f"gh exited with status {r.returncode}")
        return r.stdout.strip()

    def _succeeds(self, *args: str) -> bool:
        try:
            self._gh(*args)
        except TrackerError:
            return False
        return True

    def check_prerequisites(self) -> list[PrerequisiteCheck]:
        checks: list[PrerequisiteCheck] = []

        installed = self._which(self._gh_path) is not None
        if installed:
            checks.append(PrerequisiteCheck(name="GitHub CLI (gh) installed", ok=True))
        else:
            checks.append(
                PrerequisiteCheck(
                    name="GitHub CLI (gh) is not installed",
                    ok=False,
                    remediation=(
                        "Install: brew install gh (macOS)",
                        "Or visit: https://cli.github.com",
                    ),
                )
            )

        checks.append(
            PrerequisiteCheck(
                name="YAML parser available", ok=True, detail=yaml_parser_description()
            )
        )

        if not installed:
            return checks

        if self._succeeds("auth", "status"):
            checks.append(PrerequisiteCheck(name="Authenticated with GitHub", ok=True))
        else:
            checks.append(
                PrerequisiteCheck(
                    name="Not authenticated with GitHub CLI",
                    ok=False,
                    remediation=("Run: gh auth login",),
                )
            )

        if self._succeeds("repo", "view", self._repository_name, "--json", "name"):
            checks.append(
                PrerequisiteCheck(name=f"Repository found: {self._repository_name}", ok=True)
            )
        else:
            checks.append(
                PrerequisiteCheck(
                    name=f"Cannot access repository: {self._repository_name}",
                    ok=False,
                    remediation=("Verify the repository name and your access permissions",),
                )
            )

        return checks

    def list_label_names(self) -> set[str]:
        out = self._gh(
            "api",
            "--paginate",
            f"repos/{self._repository_name}/labels?per_page=100",
            "--jq",
            ".[].name",
        )
        return {line for line in out.splitlines() if line}

    def create_label(self, *, name: str, color: str, description: str = "") -> None:
        self._gh(
            "api",
            f"repos/{self._repository_name}/labels",
            "-f",
            f"name={name}",
            "-f",
            f"color={color}",
            "-f",
            f"description={description}",
        )
        logger.info("Label created", extra={"label": name, "color": color})

    def list_milestones(self) -> list[Milestone]:
        out = self._gh(
            "api",
            "--paginate",
            f"repos/{self._repository_name}/milestones?state=all&per_page=100",
            "--jq",
            ".[] | {number, title}",
        )
        milestones: list[Milestone] = []
        for line in out.splitlines():
            if not line.strip():
                continue
            try:
                data = json.loads(line)
                milestone = Milestone(title=str(data["title"]), number=int(data["number"]))
            except (ValueError, KeyError, TypeError) as e:
                raise TrackerError(f"unexpected milestone response: {line!r}") from e
            milestones.append(milestone)
        return milestones

    def create_milestone(self, *, title: str) -> Milestone:
        out = self._gh(
            "api",
            f"repos/{self._repository_name}/milestones",
            "-f",
            f"title={title}",
            "-f",
            "state=open",
            "--jq",
            ".number",
        )
        try:
            number = int(out)
        except ValueError as e:
            raise TrackerError(f"unexpected milestone response: {out!r}") from e
        logger.info("Milestone created", extra={"milestone": title, "number": number})
        return Milestone(title=title, number=number)

    def create_issue(
        self,
        *,
        title: str,
        body: str,
        labels: list[str],
        milestone: Milestone | None = None,
    ) -> CreatedIssue:
        args = [
            "issue",
            "create",
            "--repo",
            self._repository_name,
            "--title",
            title,
            "--body",
            body,
        ]
        for label in labels:
            args += ["--label", label]
        # gh resolves milestones by title, not number.
        if milestone is not None and not milestone.is_placeholder:
            args += ["--milestone", milestone.title]

        url = self._gh(*args)
        logger.info("Issue created", extra={"title": title, "url": url})
        return CreatedIssue(title=title, url=url)
