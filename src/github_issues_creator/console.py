"""Terminal output primitives: ANSI colours and a small printing helper."""

from __future__ import annotations

import sys
from typing import TextIO

RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
BLUE = "\033[0;34m"
CYAN = "\033[0;36m"
BOLD = "\033[1m"
RESET = "\033[0m"

RULE = "━" * 60


class Console:
    """Writes human-readable, optionally coloured, lines to a stream."""

    def __init__(self, stream: TextIO | None = None, *, color: bool = True) -> None:
        self._stream = stream if stream is not None else sys.stdout
        isatty = getattr(self._stream, "isatty", None)
        self.color = color and bool(isatty and isatty())

    def paint(self, text: object, *styles: str) -> str:
        if not self.color or not styles:
            return str(text)
        return "".join(styles) + str(text) + RESET

    def print(self, text: str = "") -> None:  # noqa: A003
        print(text, file=self._stream, flush=True)

    def rule(self) -> None:
        self.print(self.paint(RULE, CYAN))

    def ok(self, text: str) -> None:
        self.print(self.paint(f"✓ {text}", GREEN))

    def fail(self, text: str) -> None:
        self.print(self.paint(f"✗ {text}", RED))

    def warn(self, text: str) -> None:
        self.print(self.paint(text, YELLOW))

    def error(self, text: str) -> None:
        self.print(self.paint(text, RED))

    def info(self, text: str) -> None:
        self.print(self.paint(text, BLUE))

    def field(self, name: str, value: object, indent: str = "") -> None:
        self.print(f"{indent}{self.paint(name + ':', BLUE)} {value}")


def banner(version: str) -> str:
    title = f"GitHub Issues Creator v{version}"
    width = 64
    lines = [
        "╔" + "═" * width + "╗",
        "║" + " " * width + "║",
        "║" + title.center(width) + "║",
        "║" + " " * width + "║",
        "║" + "Create GitHub issues from YAML files".center(width) + "║",
        "║" + " " * width + "║",
        "╚" + "═" * width + "╝",
    ]
    return "\n".join(lines)
