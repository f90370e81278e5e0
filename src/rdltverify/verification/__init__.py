"""Two-phase Σ-distinct PCS free-choice verification.

Phase 1 builds and validates composite vectors; Phase 2 checks POS
containment over the sibling groups Phase 1 retained.

Python 3.13+.
"""

from rdltverify.verification.phase1 import (
    build_constraint_matrix,
    candidate_children,
    find_composite_vectors,
    verify_phase1,
)
from rdltverify.verification.phase2 import sibling_groups, verify_phase2

__all__ = [
    "build_constraint_matrix",
    "candidate_children",
    "find_composite_vectors",
    "sibling_groups",
    "verify_phase1",
    "verify_phase2",
]
