"""Cycle detection, join consolidation and expanded reusability (eRU).

Pipeline per snapshot:
    1. detect_cycles(): simple cycles, join points searched first,
       rotations deduplicated
    2. _consolidate(): add join-alternative arcs that close back into the cycle
    3. criticality: minimum numeric level over the consolidated arcs; cycles
       without any parsable level are dropped
    4. eRU: per arc, the minimum of the per-cycle minimums (0 if acyclic)

Every step returns new values; arcs of the snapshot are never modified. The
eRU values are merged into annotated arc copies in a single final step
(update_eru).

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import TYPE_CHECKING

from rdltverify.analysis.graph import detect_cycles, is_connected
from rdltverify.analysis.index import GraphIndex
from rdltverify.model import Arc, Cycle, CycleSummary

if TYPE_CHECKING:
    from rdltverify.ingest import GraphSnapshot

__all__ = [
    "compute_eru",
    "evaluate_cycles",
    "find_cycles",
    "update_eru",
]

logger = logging.getLogger(__name__)


def _search_roots(adjacency: Mapping[str, Sequence[str]]) -> list[str]:
    """Join points to start cycle searches from, in first-reached order.

    A join point has more than one distinct predecessor; only joins with
    outgoing arcs can start a search. The adjacency holds distinct
    successors, so parallel arcs from one source never make a join point
    (a raw in-degree count would).
    """
    incoming: dict[str, list[str]] = {}
    for node, successors in adjacency.items():
        for neighbor in successors:
            incoming.setdefault(neighbor, []).append(node)
    return [
        node
        for node, sources in incoming.items()
        if len(sources) > 1 and adjacency.get(node)
    ]


def _consolidate(
    walk: Sequence[Arc],
    index: GraphIndex,
) -> list[Arc]:
    """Add join-alternative arcs to a detected cycle.

    For every cycle vertex that is a join point of the whole graph, each
    alternative source not already feeding the join inside the cycle is
    considered. Its arc into the join is added when the source is itself a
    cycle vertex reachable from another cycle vertex.

    Args:
        walk: Arcs of the detected cycle, in walk order
        index: Graph index of the snapshot

    Returns:
        Walk arcs followed by the added alternatives, with no repeated r-id
    """
    cycle_vertices: dict[str, None] = {}
    cycle_graph: dict[str, set[str]] = {}
    for arc in walk:
        cycle_vertices.setdefault(arc.start)
        cycle_vertices.setdefault(arc.end)
        cycle_graph.setdefault(arc.start, set()).add(arc.end)

    consolidated = list(walk)
    seen_ids = {arc.r_id for arc in walk}

    for join in cycle_vertices:
        sources = index.predecessors(join)
        if len(sources) < 2:
            continue
        represented = {arc.start for arc in walk if arc.end == join}

        for source in sources:
            if source in represented or source not in cycle_vertices:
                continue
            alternative = index.arc_between(source, join)
            if alternative is None or alternative.r_id in seen_ids:
                continue
            if any(
                vertex != source and is_connected(cycle_graph, vertex, source)
                for vertex in cycle_vertices
            ):
                consolidated.append(alternative)
                seen_ids.add(alternative.r_id)
                cycle_graph.setdefault(source, set()).add(join)

    return consolidated


def find_cycles(snapshot: GraphSnapshot) -> tuple[Cycle, ...]:
    """Detect, consolidate and rate every cycle of the snapshot.

    Args:
        snapshot: Loaded RDLT snapshot

    Returns:
        Cycles with ids assigned sequentially in discovery order; cycles
        whose arcs carry no numeric level are omitted and consume no id

    Example:
        >>> from rdltverify.ingest import load
        >>> snapshot = load([
        ...     {"r-id": "r-1", "arc": "x1, x2", "c-attribute": "ε", "l-attribute": "1"},
        ...     {"r-id": "r-2", "arc": "x2, x3", "c-attribute": "a", "l-attribute": "2"},
        ...     {"r-id": "r-3", "arc": "x3, x1", "c-attribute": "ε", "l-attribute": "1"},
        ... ])
        >>> [c.cycle_id for c in find_cycles(snapshot)]
        ['c-1']
    """
    index = snapshot.index
    adjacency = index.adjacency_list
    prefix = snapshot.config.cycle_id_prefix

    cycles: list[Cycle] = []
    for pairs in detect_cycles(adjacency, roots=_search_roots(adjacency)):
        walk = [index.arc_between(start, end) for start, end in pairs]
        consolidated = _consolidate([arc for arc in walk if arc is not None], index)

        levels = [arc.level for arc in consolidated if arc.level is not None]
        if not levels:
            logger.debug("Dropping cycle without numeric level: %s", pairs)
            continue

        minimum = min(levels)
        cycles.append(
            Cycle(
                cycle_id=f"{prefix}{len(cycles) + 1}",
                arcs=tuple(consolidated),
                critical_arcs=tuple(arc for arc in consolidated if arc.level == minimum),
                eru=minimum,
            )
        )

    logger.debug("Found %d cycles in %d arcs", len(cycles), len(snapshot.arcs))
    return tuple(cycles)


def compute_eru(cycles: Sequence[Cycle]) -> dict[str, int]:
    """Merge per-cycle minimum levels into per-arc eRU values.

    Returns:
        Mapping from r-id to the minimum eRU over all cycles containing
        the arc. Arcs in no cycle are absent from the mapping.
    """
    eru: dict[str, int] = {}
    for cycle in cycles:
        for arc in cycle.arcs:
            current = eru.get(arc.r_id)
            eru[arc.r_id] = cycle.eru if current is None else min(current, cycle.eru)
    return eru


def evaluate_cycles(snapshot: GraphSnapshot) -> tuple[CycleSummary, ...]:
    """Cycles in display form: ``"r-id: start, end"`` strings."""
    return tuple(cycle.summary() for cycle in find_cycles(snapshot))


def update_eru(snapshot: GraphSnapshot) -> tuple[Arc, ...]:
    """Return copies of the snapshot's arcs annotated with eRU.

    Arcs that belong to no cycle get eRU 0.
    """
    eru = compute_eru(find_cycles(snapshot))
    return tuple(replace(arc, eru=eru.get(arc.r_id, 0)) for arc in snapshot.arcs)
