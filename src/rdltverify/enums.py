"""Enumerations for rdltverify type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class Section(StrEnum):
    """Section of an RDLT input document.

    StrEnum provides automatic string conversion: str(Section.CENTER) == "CENTER"
    """

    R = "R"
    """Arc lines: start, end, c-attribute, l-attribute (implicit first section)"""

    CENTER = "CENTER"
    """Comma-separated center vertices of reusable blocks"""

    IN = "IN"
    """Boundary arcs entering a reusable block"""

    OUT = "OUT"
    """Boundary arcs leaving a reusable block"""


class VerificationState(StrEnum):
    """Lifecycle of a verification session.

    NOT_LOADED -> PARSED -> PHASE1_{VALID,INVALID}; only PHASE1_VALID moves on
    to PHASE2_{VALID,INVALID}. PHASE1_INVALID is terminal until the next load.
    """

    NOT_LOADED = "not-loaded"
    PARSED = "parsed"
    PHASE1_VALID = "phase1-valid"
    PHASE1_INVALID = "phase1-invalid"
    PHASE2_VALID = "phase2-valid"
    PHASE2_INVALID = "phase2-invalid"


class IssueSeverity(StrEnum):
    """Severity attached to reported issues."""

    ERROR = "error"


__all__ = [
    "IssueSeverity",
    "Section",
    "VerificationState",
]
