"""Antecedent, consequent and point-of-synchronization (POS) sets.

For a vertex x of an RDLT with source vertex s:
    antecedent(x): every vertex on some simple path s -> x (x and s included)
    consequent(x): vertices reached forward from x that are not in
                   antecedent(x); exploration stops at back-edge origins
    pos(x):        antecedent vertices entered by an arc leaving a consequent
                   vertex, plus s

All three degrade to empty results when the graph has no source vertex.
Successors are visited in vertex enumeration order and every result is
sorted.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from rdltverify.analysis.back_edges import back_edge_origins
from rdltverify.analysis.graph import all_simple_paths

if TYPE_CHECKING:
    from rdltverify.ingest import GraphSnapshot

__all__ = [
    "AntecedentConsequent",
    "PathAnalyzer",
]


@dataclass(frozen=True, slots=True)
class AntecedentConsequent:
    """Sorted antecedent and consequent sets of one vertex."""

    antecedent: tuple[str, ...]
    consequent: tuple[str, ...]


class PathAnalyzer:
    """Path-based set computations over one snapshot.

    Results are memoized per vertex; the snapshot is immutable so cached
    values never go stale.

    Example:
        >>> from rdltverify.ingest import load
        >>> snapshot = load([
        ...     {"r-id": "r-1", "arc": "x1, x2", "c-attribute": "ε", "l-attribute": "1"},
        ...     {"r-id": "r-2", "arc": "x2, x3", "c-attribute": "ε", "l-attribute": "1"},
        ... ])
        >>> PathAnalyzer(snapshot).antecedent("x3")
        ('x1', 'x2', 'x3')
    """

    __slots__ = ("_cache", "_origins", "_snapshot", "_successors")

    def __init__(self, snapshot: GraphSnapshot) -> None:
        self._snapshot = snapshot
        self._successors = snapshot.index.successor_map()
        self._origins = back_edge_origins(snapshot.back_edges)
        self._cache: dict[str, AntecedentConsequent] = {}

    @property
    def source_vertex(self) -> str | None:
        return self._snapshot.source_vertex

    def all_simple_paths(self, start: str, end: str) -> list[tuple[str, ...]]:
        """Every simple path from ``start`` to ``end``.

        Unknown vertices yield no paths.
        """
        index = self._snapshot.index
        if start not in index or end not in index:
            return []
        return all_simple_paths(self._successors, start, end)

    def antecedent(self, vertex: str) -> tuple[str, ...]:
        return self.antecedent_consequent(vertex).antecedent

    def consequent(self, vertex: str) -> tuple[str, ...]:
        return self.antecedent_consequent(vertex).consequent

    def antecedent_consequent(self, vertex: str) -> AntecedentConsequent:
        """Compute both sets for ``vertex``.

        Returns:
            AntecedentConsequent; both empty when there is no source vertex
        """
        cached = self._cache.get(vertex)
        if cached is not None:
            return cached

        source = self.source_vertex
        if source is None:
            result = AntecedentConsequent(antecedent=(), consequent=())
        else:
            on_paths = {v for path in self.all_simple_paths(source, vertex) for v in path}
            result = AntecedentConsequent(
                antecedent=tuple(sorted(on_paths)),
                consequent=self._consequent(vertex, on_paths),
            )

        self._cache[vertex] = result
        return result

    def _consequent(self, vertex: str, antecedent: set[str]) -> tuple[str, ...]:
        """Forward DFS from ``vertex`` that does not expand back-edge origins.

        A back-edge origin is still collected when reached; only its own
        successors are left unexplored.
        """
        consequent: set[str] = set()
        visited: set[str] = {vertex}
        stack: list[str] = [vertex]

        while stack:
            current = stack.pop()
            for nxt in self._successors.get(current, ()):
                if nxt not in antecedent:
                    consequent.add(nxt)
                if nxt in self._origins or nxt in visited:
                    continue
                visited.add(nxt)
                stack.append(nxt)

        return tuple(sorted(consequent))

    def pos(self, vertex: str) -> tuple[str, ...]:
        """Point(s) of synchronization of ``vertex``.

        For every consequent vertex c and antecedent vertex a with an arc
        c -> a, a belongs to the result. The source vertex always does.

        Returns:
            Sorted POS set, empty when there is no source vertex
        """
        source = self.source_vertex
        if source is None:
            return ()

        index = self._snapshot.index
        sets = self.antecedent_consequent(vertex)
        points = {
            a for c in sets.consequent for a in sets.antecedent if index.has_arc(c, a)
        }
        points.add(source)
        return tuple(sorted(points))
