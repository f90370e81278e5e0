"""Issue codes attached to parse issues, phase 1 issues and phase 2 violations.

Python 3.13+. Zero external dependencies.
"""

from enum import StrEnum

__all__ = ["IssueCode"]


class IssueCode(StrEnum):
    """Stable identifiers for reported issues.

    StrEnum keeps serialized output as plain strings ("no-composite-vector")
    rather than the "IssueCode.X" repr a plain Enum would produce.
    """

    # Input reader
    MALFORMED_ARC = "malformed-arc"

    # Phase 1
    NO_COMPOSITE_VECTOR = "no-composite-vector"
    CONSTRAINT_CHECK_FAILED = "constraint-check-failed"

    # Phase 2
    POS_NOT_IN_ANTECEDENT = "pos-not-in-antecedent"
