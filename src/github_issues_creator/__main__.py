"""Allow `python -m github_issues_creator`."""

from __future__ import annotations

from github_issues_creator.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
