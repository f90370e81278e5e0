"""Shared constants for rdltverify.

Centralized values used across ingestion, analysis and verification.
Placing constants here avoids circular imports between the analysis and
verification packages.

Constants are grouped by domain:
- Attribute sentinels: How control constraints are normalized
- Identifiers: Generated names for cycles, arcs and composite vectors
- Input limits: Caller-side bounds on exponential enumeration
- Result messages: Verdict strings reported to the presentation layer

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Attribute sentinels
    "EPSILON",
    "NO_CONSTRAINT",
    # Identifiers
    "CYCLE_ID_PREFIX",
    "RID_PREFIX",
    "COMPOSITE_PREFIX",
    "ARC_SEPARATOR",
    # Input limits
    "MAX_VERTICES",
    # Result messages
    "MSG_FREE_CHOICE",
    "MSG_NOT_FREE_CHOICE",
    "MSG_NO_SIBLINGS",
    "MSG_PHASE2_SKIPPED",
]

# ============================================================================
# ATTRIBUTE SENTINELS
# ============================================================================

# Unconstrained c-attribute as written in RDLT input.
EPSILON: str = "ε"

# Normalized "no constraint" value. Absent arcs and epsilon arcs both map here.
NO_CONSTRAINT: str = "0"

# ============================================================================
# IDENTIFIERS
# ============================================================================

# Cycles are numbered c-1, c-2, ... in discovery order.
CYCLE_ID_PREFIX: str = "c-"

# Arc ids generated by the text reader: r-1, r-2, ...
RID_PREFIX: str = "r-"

# Composite vector names: CV_x2,x3
COMPOSITE_PREFIX: str = "CV_"

# Canonical "start, end" rendering of an arc.
ARC_SEPARATOR: str = ", "

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Default maximum vertex count accepted by load(); 0 means unlimited.
# Path and cycle enumeration are exponential in the worst case, so callers
# verifying untrusted input should set a cap through VerificationConfig.
MAX_VERTICES: int = 0

# ============================================================================
# RESULT MESSAGES
# ============================================================================

MSG_FREE_CHOICE: str = "RDLT is Σ-distinct PCS free-choice."
MSG_NOT_FREE_CHOICE: str = "RDLT is not Σ-distinct PCS free-choice"
MSG_NO_SIBLINGS: str = (
    "There are no siblings with the same set of parents. The RDLT is not Σ-distinct PCS."
)
MSG_PHASE2_SKIPPED: str = (
    "Phase 2 skipped: no valid composite vectors. RDLT is not Σ-distinct PCS."
)
