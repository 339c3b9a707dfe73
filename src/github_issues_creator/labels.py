"""Default label conventions.

Labels referenced by batch files are created on demand. Well-known names get a
stable colour so boards look the same across repositories; anything else falls
back to neutral gray.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_LABEL_COLOR = "EDEDED"


@dataclass(frozen=True, slots=True)
class LabelSpec:
    name: str
    color: str
    description: str = ""


KNOWN_LABEL_SPECS: tuple[LabelSpec, ...] = (
    LabelSpec(name="user-story", color="0052CC", description="User story"),
    LabelSpec(name="must-have", color="D93F0B", description="MoSCoW: must have"),
    LabelSpec(name="should-have", color="FBCA04", description="MoSCoW: should have"),
    LabelSpec(name="could-have", color="C2E0C6", description="MoSCoW: could have"),
    LabelSpec(name="frontend", color="1D76DB", description="Frontend work"),
    LabelSpec(name="backend", color="0E8A16", description="Backend work"),
    LabelSpec(name="ai-integration", color="5319E7", description="AI integration work"),
    LabelSpec(name="deployment", color="0E8A16", description="Deployment work"),
    LabelSpec(name="devops", color="FBCA04", description="DevOps and infrastructure"),
    LabelSpec(name="testing", color="D4C5F9", description="Automated testing"),
    LabelSpec(name="qa", color="C2E0C6", description="Quality assurance"),
    LabelSpec(name="ux", color="BFD4F2", description="User experience"),
    LabelSpec(name="bug", color="D73A4A", description="Something isn't working"),
    LabelSpec(name="enhancement", color="A2EEEF", description="New feature or request"),
    LabelSpec(name="documentation", color="0075CA", description="Improvements or additions to documentation"),
)

_KNOWN_BY_NAME: dict[str, LabelSpec] = {spec.name: spec for spec in KNOWN_LABEL_SPECS}


def label_spec_for(name: str) -> LabelSpec:
    """Return the spec used when creating `name`, defaulting to gray."""

    normalized = name.strip()
    known = _KNOWN_BY_NAME.get(normalized)
    if known is not None:
        return known
    return LabelSpec(name=normalized, color=DEFAULT_LABEL_COLOR)
