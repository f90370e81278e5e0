"""Vertex enumeration, adjacency list and adjacency matrix for an arc set.

GraphIndex is the single derived view every other analysis reads. It is a
pure function of the arc sequence: vertices are enumerated in first-encounter
order (start vertex before end vertex, arcs in input order), parallel arcs
collapse to a single matrix entry and a single successor.

Python 3.13+.
"""

from collections.abc import Sequence

from rdltverify.constants import EPSILON, NO_CONSTRAINT
from rdltverify.model import Arc

__all__ = ["GraphIndex"]


class GraphIndex:
    """Immutable index over one RDLT arc set.

    Attributes are exposed read-only; the index is never updated in place.
    Loading a new arc set builds a new index.

    Example:
        >>> arcs = [Arc("r-1", "x1", "x2", "ε"), Arc("r-2", "x2", "x3", "a")]
        >>> index = GraphIndex(arcs)
        >>> index.vertices
        ('x1', 'x2', 'x3')
        >>> index.adjacency_vector("x2")
        (1, 0, 0)
        >>> index.constraint_between("x1", "x2")
        '0'
    """

    __slots__ = (
        "_arcs",
        "_epsilon",
        "_first_arc",
        "_matrix",
        "_positions",
        "_predecessors",
        "_successors",
        "_vertices",
    )

    def __init__(self, arcs: Sequence[Arc], *, epsilon: str = EPSILON) -> None:
        """Build the index.

        Args:
            arcs: Canonical arc sequence (already validated by ingestion)
            epsilon: c-attribute value normalized to "no constraint"
        """
        self._arcs: tuple[Arc, ...] = tuple(arcs)
        self._epsilon = epsilon

        positions: dict[str, int] = {}
        for arc in self._arcs:
            for vertex in (arc.start, arc.end):
                if vertex not in positions:
                    positions[vertex] = len(positions)
        self._positions = positions
        self._vertices: tuple[str, ...] = tuple(positions)

        successors: dict[str, list[str]] = {}
        predecessors: dict[str, list[str]] = {}
        first_arc: dict[tuple[str, str], Arc] = {}
        for arc in self._arcs:
            key = (arc.start, arc.end)
            if key in first_arc:
                continue
            first_arc[key] = arc
            successors.setdefault(arc.start, []).append(arc.end)
            predecessors.setdefault(arc.end, []).append(arc.start)
        self._first_arc = first_arc
        self._successors = {v: tuple(s) for v, s in successors.items()}
        self._predecessors = {v: tuple(p) for v, p in predecessors.items()}

        size = len(self._vertices)
        rows = [[0] * size for _ in range(size)]
        for start, end in first_arc:
            rows[positions[start]][positions[end]] = 1
        self._matrix: tuple[tuple[int, ...], ...] = tuple(tuple(row) for row in rows)

    # ------------------------------------------------------------------
    # Basic views
    # ------------------------------------------------------------------

    @property
    def arcs(self) -> tuple[Arc, ...]:
        return self._arcs

    @property
    def vertices(self) -> tuple[str, ...]:
        """Vertices in first-encounter order."""
        return self._vertices

    @property
    def matrix(self) -> tuple[tuple[int, ...], ...]:
        """Boolean adjacency matrix; ``matrix[i][j] == 1`` iff v_i -> v_j."""
        return self._matrix

    @property
    def adjacency_list(self) -> dict[str, tuple[str, ...]]:
        """Distinct successors per vertex, keyed in first-appearance-as-start order."""
        return dict(self._successors)

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._positions

    def position(self, vertex: str) -> int:
        """Index of ``vertex`` in the enumeration, -1 if unknown."""
        return self._positions.get(vertex, -1)

    def successors(self, vertex: str) -> tuple[str, ...]:
        return self._successors.get(vertex, ())

    def predecessors(self, vertex: str) -> tuple[str, ...]:
        """Distinct sources of arcs into ``vertex``, in arc order."""
        return self._predecessors.get(vertex, ())

    def has_arc(self, start: str, end: str) -> bool:
        return (start, end) in self._first_arc

    def arc_between(self, start: str, end: str) -> Arc | None:
        """First arc (in input order) from ``start`` to ``end``."""
        return self._first_arc.get((start, end))

    # ------------------------------------------------------------------
    # Vector views
    # ------------------------------------------------------------------

    def adjacency_vector(self, vertex: str) -> tuple[int, ...]:
        """Parent-indicator vector of ``vertex`` (its matrix column).

        Entry i is 1 iff there is an arc from v_i into ``vertex``. Unknown
        vertices yield an empty vector.
        """
        col = self._positions.get(vertex)
        if col is None:
            return ()
        return tuple(row[col] for row in self._matrix)

    def in_degree(self, vertex: str) -> int:
        """Column sum of the adjacency matrix (distinct parents)."""
        return sum(self.adjacency_vector(vertex))

    def constraint_between(self, parent: str, child: str) -> str:
        """c-attribute of arc ``parent -> child``.

        Returns:
            The constraint label, or "0" when the arc is absent or
            unconstrained (epsilon)
        """
        arc = self._first_arc.get((parent, child))
        if arc is None or arc.c_attribute == self._epsilon:
            return NO_CONSTRAINT
        return arc.c_attribute

    def successor_map(self) -> dict[str, tuple[str, ...]]:
        """Successors of every vertex in vertex enumeration order.

        Unlike ``adjacency_list`` (input order), successors here follow the
        matrix column order, and every vertex has an entry.
        """
        return {
            vertex: tuple(
                self._vertices[j] for j, cell in enumerate(self._matrix[i]) if cell
            )
            for i, vertex in enumerate(self._vertices)
        }
