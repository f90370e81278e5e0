"""Phase 2: Σ-distinct PCS free-choice check over sibling groups.

Consumes the valid composite vectors of Phase 1. For every sibling group
that contains retained vertices, the POS sets of its retained members are
united into POSall; every element of POSall must lie in the antecedent set
of every retained member.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from rdltverify.analysis.paths import PathAnalyzer
from rdltverify.constants import MSG_FREE_CHOICE, MSG_NOT_FREE_CHOICE, MSG_PHASE2_SKIPPED
from rdltverify.diagnostics import Phase2Result, Violation

if TYPE_CHECKING:
    from rdltverify.analysis.index import GraphIndex
    from rdltverify.ingest import GraphSnapshot
    from rdltverify.model import CompositeVector

__all__ = ["sibling_groups", "verify_phase2"]

logger = logging.getLogger(__name__)


def sibling_groups(index: GraphIndex) -> tuple[tuple[str, ...], ...]:
    """Group vertices whose parent-indicator vectors are identical.

    Only groups of two or more vertices with at least one parent are
    returned. Groups and members follow vertex enumeration order.

    Example:
        >>> from rdltverify.model import Arc
        >>> from rdltverify.analysis.index import GraphIndex
        >>> index = GraphIndex([Arc("r-1", "s", "a", "ε"), Arc("r-2", "s", "b", "ε")])
        >>> sibling_groups(index)
        (('a', 'b'),)
    """
    groups: dict[tuple[int, ...], list[str]] = {}
    for vertex in index.vertices:
        vector = index.adjacency_vector(vertex)
        if any(vector):
            groups.setdefault(vector, []).append(vertex)
    return tuple(tuple(members) for members in groups.values() if len(members) > 1)


def verify_phase2(
    snapshot: GraphSnapshot,
    valid_composite_vectors: Sequence[CompositeVector],
    *,
    analyzer: PathAnalyzer | None = None,
) -> Phase2Result:
    """Decide the Σ-distinct PCS free-choice property.

    Args:
        snapshot: Loaded RDLT snapshot
        valid_composite_vectors: Phase 1 output
        analyzer: Path analyzer to reuse (default: a fresh one)

    Returns:
        Phase2Result. When no composite vector is supplied the phase is
        skipped and the result is invalid.
    """
    if not valid_composite_vectors:
        logger.debug("Phase 2 skipped: no valid composite vectors")
        return Phase2Result(is_valid=False, message=MSG_PHASE2_SKIPPED, violations=(), skipped=True)

    if analyzer is None:
        analyzer = PathAnalyzer(snapshot)

    retained = {vertex for vector in valid_composite_vectors for vertex in vector.siblings}
    violations: list[Violation] = []

    for group in sibling_groups(snapshot.index):
        members = tuple(vertex for vertex in group if vertex in retained)
        if not members:
            continue

        pos_all = tuple(sorted({w for x in members for w in analyzer.pos(x)}))
        for w in pos_all:
            for x in members:
                antecedent = analyzer.antecedent(x)
                if w not in antecedent:
                    violations.append(
                        Violation(
                            sibling_group=members,
                            vertex=x,
                            missing_in_antecedent=w,
                            pos_all=pos_all,
                            antecedent=antecedent,
                        )
                    )

    is_valid = not violations
    logger.debug("Phase 2: %d violations", len(violations))
    return Phase2Result(
        is_valid=is_valid,
        message=MSG_FREE_CHOICE if is_valid else MSG_NOT_FREE_CHOICE,
        violations=tuple(violations),
    )
