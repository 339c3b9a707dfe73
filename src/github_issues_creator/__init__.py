"""GitHub Issues Creator.

Creates GitHub issues, labels and milestones from YAML batch files:
- configuration loaded from `.env`
- structured logging
- issue creation through the `gh` CLI or the GitHub REST API
"""

__version__ = "1.0.0"

from github_issues_creator.config import ImporterSettings

__all__ = ["__version__", "ImporterSettings"]
