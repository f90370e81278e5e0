"""Phase 1: composite vectors and constraint matrices.

Finds sibling pairs that share an identical parent set and checks that the
constraints on the arcs into each pair do not repeat.

Architecture:
    - candidate_children(): Vertices with at least two distinct parents
    - find_composite_vectors(): Pairs whose parent vectors AND to themselves
    - build_constraint_matrix(): Per-vector constraint rows and row verdicts
    - verify_phase1(): Orchestrates the steps into a Phase1Result

Python 3.13+.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from collections.abc import Sequence
from typing import TYPE_CHECKING

from rdltverify.constants import MSG_NO_SIBLINGS, NO_CONSTRAINT
from rdltverify.diagnostics import IssueCode, Phase1Issue, Phase1Result
from rdltverify.model import CompositeVector, ConstraintMatrix, ConstraintRow

if TYPE_CHECKING:
    from rdltverify.analysis.index import GraphIndex
    from rdltverify.ingest import GraphSnapshot

__all__ = [
    "build_constraint_matrix",
    "candidate_children",
    "find_composite_vectors",
    "verify_phase1",
]

logger = logging.getLogger(__name__)


def candidate_children(index: GraphIndex) -> tuple[str, ...]:
    """Vertices whose in-degree (matrix column sum) is at least 2."""
    return tuple(v for v in index.vertices if index.in_degree(v) >= 2)


def find_composite_vectors(
    index: GraphIndex,
    candidates: Sequence[str],
) -> tuple[CompositeVector, ...]:
    """Pair up candidates with identical parent-indicator vectors.

    For every unordered pair (A, B) the bitwise AND of both parent vectors
    is computed; the pair forms a composite vector iff the AND result equals
    both vectors.

    Args:
        index: Graph index of the snapshot
        candidates: Candidate child vertices, in vertex order

    Returns:
        Composite vectors in pair order (i < j)
    """
    vectors = {v: index.adjacency_vector(v) for v in candidates}
    composites: list[CompositeVector] = []

    for i, vertex_a in enumerate(candidates):
        for vertex_b in candidates[i + 1 :]:
            vector_a = vectors[vertex_a]
            vector_b = vectors[vertex_b]
            combined = tuple(a & b for a, b in zip(vector_a, vector_b, strict=True))
            candidate = CompositeVector(
                siblings=(vertex_a, vertex_b),
                vector=combined,
                vector_a=vector_a,
                vector_b=vector_b,
            )
            if candidate.is_composite:
                composites.append(candidate)

    return tuple(composites)


def build_constraint_matrix(index: GraphIndex, vector: CompositeVector) -> ConstraintMatrix:
    """Build the constraint matrix of one composite vector.

    One row per vertex p holds ``constraint_between(p, A)`` and
    ``constraint_between(p, B)``. A row is valid iff both constraints are
    "0", or no non-"0" constraint occurs more than once in the whole matrix.

    Example:
        >>> from rdltverify.model import Arc
        >>> from rdltverify.analysis.index import GraphIndex
        >>> index = GraphIndex([
        ...     Arc("r-1", "x1", "x2", "a"), Arc("r-2", "x1", "x3", "b"),
        ...     Arc("r-3", "x4", "x2", "c"), Arc("r-4", "x4", "x3", "d"),
        ... ])
        >>> cv = find_composite_vectors(index, candidate_children(index))[0]
        >>> build_constraint_matrix(index, cv).is_valid
        True
    """
    vertex_a, vertex_b = vector.siblings
    raw_rows = [
        (parent, (index.constraint_between(parent, vertex_a), index.constraint_between(parent, vertex_b)))
        for parent in index.vertices
    ]

    counts: Counter[str] = Counter(
        constraint
        for _, constraints in raw_rows
        for constraint in constraints
        if constraint != NO_CONSTRAINT
    )
    no_duplicates = all(count <= 1 for count in counts.values())

    rows = tuple(
        ConstraintRow(
            vertex=parent,
            constraints=constraints,
            valid=no_duplicates or all(c == NO_CONSTRAINT for c in constraints),
        )
        for parent, constraints in raw_rows
    )
    return ConstraintMatrix(name=vector.name, rows=rows, constraint_counts=dict(counts))


def verify_phase1(snapshot: GraphSnapshot) -> Phase1Result:
    """Run Phase 1 on a snapshot.

    Returns:
        Phase1Result. ``valid`` is True iff at least one composite vector
        passed its constraint matrix. Missing composite vectors and failing
        matrices are reported as issues, never raised.
    """
    start_time = time.perf_counter()
    index = snapshot.index
    issues: list[Phase1Issue] = []

    candidates = candidate_children(index)
    composites = find_composite_vectors(index, candidates)
    logger.debug("Phase 1: %d candidate children, %d composite vectors", len(candidates), len(composites))

    if not composites:
        issues.append(Phase1Issue(code=IssueCode.NO_COMPOSITE_VECTOR, message=MSG_NO_SIBLINGS))

    valid_vectors: list[CompositeVector] = []
    for vector in composites:
        matrix = build_constraint_matrix(index, vector)
        if matrix.is_valid:
            valid_vectors.append(vector)
        else:
            issues.append(
                Phase1Issue(
                    code=IssueCode.CONSTRAINT_CHECK_FAILED,
                    message=f"Composite vector {vector.name} failed constraint checks",
                    vector=vector.name,
                    matrix=matrix,
                )
            )

    retained = sorted({vertex for vector in valid_vectors for vertex in vector.siblings})
    elapsed = (time.perf_counter() - start_time) * 1000

    return Phase1Result(
        execution_time=elapsed,
        valid=bool(valid_vectors),
        retained_vertices=tuple(retained),
        issues=tuple(issues),
        valid_composite_vectors=tuple(valid_vectors),
    )
