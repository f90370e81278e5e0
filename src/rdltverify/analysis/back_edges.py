"""Back-edge classification and source-vertex detection.

Back edges are classified purely by the vertex enumeration order of the
GraphIndex: arc v_i -> v_j is a back edge iff j <= i (self-loops included).
This is not a DFS back-edge definition; it matches the RDLT formalism only
when arcs are supplied in a source-reachable order, which Phase 2 relies on.

Python 3.13+.
"""

from rdltverify.analysis.index import GraphIndex
from rdltverify.model import BackEdge

__all__ = ["back_edge_origins", "find_back_edges", "find_source_vertex"]


def find_back_edges(index: GraphIndex) -> tuple[BackEdge, ...]:
    """Classify back edges, scanning the matrix row by row.

    Args:
        index: Graph index providing the enumeration order

    Returns:
        Back edges in row-major matrix order

    Example:
        >>> from rdltverify.model import Arc
        >>> arcs = [Arc("r-1", "x1", "x2", "ε"), Arc("r-2", "x2", "x1", "ε")]
        >>> [e.format() for e in find_back_edges(GraphIndex(arcs))]
        ['x2 -> x1']
    """
    vertices = index.vertices
    return tuple(
        BackEdge(vertices[i], vertices[j])
        for i, row in enumerate(index.matrix)
        for j, cell in enumerate(row)
        if cell and j <= i
    )


def back_edge_origins(back_edges: tuple[BackEdge, ...]) -> frozenset[str]:
    return frozenset(edge.start for edge in back_edges)


def find_source_vertex(index: GraphIndex) -> str | None:
    """First vertex (in enumeration order) with no incoming arcs.

    Returns:
        The source vertex, or None if every vertex has a parent
    """
    for vertex in index.vertices:
        if index.in_degree(vertex) == 0:
            return vertex
    return None
