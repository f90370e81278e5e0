"""Graph traversal primitives for RDLT analysis.

Provides the generic algorithms the cycle engine and path analyzer are built
on: simple-cycle detection with rotation deduplication, simple-path
enumeration and plain reachability. All traversals use an explicit stack so
that path state is owned by a single traversal and never aliased between
sibling branches.

Python 3.13+.
"""

from collections import deque
from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import TypeAlias

__all__ = [
    "ArcPair",
    "all_simple_paths",
    "detect_cycles",
    "is_connected",
    "is_same_cycle",
]

ArcPair: TypeAlias = tuple[str, str]


def is_same_cycle(first: Sequence[ArcPair], second: Sequence[ArcPair]) -> bool:
    """Check whether two cycles are cyclic rotations of each other.

    Cycles are compared as sequences of ``(start, end)`` pairs. Reflections
    (the same vertices traversed in the opposite direction) are different
    cycles.

    Args:
        first: Arc pairs of the first cycle
        second: Arc pairs of the second cycle

    Returns:
        True if ``first`` appears as a contiguous rotation of ``second``

    Example:
        >>> a = [("a", "b"), ("b", "c"), ("c", "a")]
        >>> b = [("b", "c"), ("c", "a"), ("a", "b")]
        >>> is_same_cycle(a, b)
        True
    """
    if len(first) != len(second):
        return False
    n = len(second)
    doubled = [*second, *second]
    return any(
        all(first[j] == doubled[i + j] for j in range(n)) for i in range(n)
    )


def detect_cycles(
    adjacency: Mapping[str, Sequence[str]],
    *,
    roots: Iterable[str] = (),
) -> list[tuple[ArcPair, ...]]:
    """Detect simple cycles with a depth-first search over an adjacency list.

    Searches start from ``roots`` first, then from every remaining key of
    ``adjacency`` in order. A vertex entered by any search is marked visited
    and never used as a search root or re-entered again. A cycle is recorded
    whenever the search reaches a vertex that is on the active path; the
    cycle is the suffix of the path from that vertex, closed back to it.
    Rotations of an already recorded cycle are discarded.

    Args:
        adjacency: Mapping from vertex to its ordered successors
        roots: Vertices to search from before the adjacency keys

    Returns:
        Cycles in discovery order, each as a tuple of ``(start, end)`` pairs

    Example:
        >>> detect_cycles({"a": ["b"], "b": ["c"], "c": ["a"]})
        [(('a', 'b'), ('b', 'c'), ('c', 'a'))]

    Complexity:
        Time: O(V + E) traversal plus O(C * L^2) rotation checks
        Space: O(V) for the path and visited tracking
    """
    visited: set[str] = set()
    cycles: list[tuple[ArcPair, ...]] = []

    for start_node in [*roots, *adjacency]:
        if start_node in visited:
            continue

        path: list[str] = [start_node]
        on_path: set[str] = {start_node}
        visited.add(start_node)

        # Each frame resumes iteration over one vertex's successors
        stack: list[tuple[str, Iterator[str]]] = [
            (start_node, iter(adjacency.get(start_node, ())))
        ]

        while stack:
            node, neighbors = stack[-1]
            neighbor = next(neighbors, None)

            if neighbor is None:
                stack.pop()
                path.pop()
                on_path.discard(node)
                continue

            if neighbor in on_path:
                members = path[path.index(neighbor) :]
                cycle = tuple(zip(members, [*members[1:], neighbor], strict=True))
                if not any(is_same_cycle(cycle, seen) for seen in cycles):
                    cycles.append(cycle)
            elif neighbor not in visited:
                visited.add(neighbor)
                path.append(neighbor)
                on_path.add(neighbor)
                stack.append((neighbor, iter(adjacency.get(neighbor, ()))))

    return cycles


def all_simple_paths(
    successors: Mapping[str, Sequence[str]],
    start: str,
    end: str,
) -> list[tuple[str, ...]]:
    """Enumerate every simple path from ``start`` to ``end``.

    Backtracking search: a vertex may appear at most once per path. The path
    from a vertex to itself is the single-vertex path.

    Args:
        successors: Mapping from vertex to its ordered successors
        start: First vertex of every path
        end: Last vertex of every path

    Returns:
        Paths in search order, each a tuple of vertices

    Example:
        >>> succ = {"s": ["a", "b"], "a": ["t"], "b": ["t"]}
        >>> all_simple_paths(succ, "s", "t")
        [('s', 'a', 't'), ('s', 'b', 't')]

    Complexity:
        Exponential in the worst case; intended for small graphs.
    """
    if start == end:
        return [(start,)]

    paths: list[tuple[str, ...]] = []
    path: list[str] = [start]
    on_path: set[str] = {start}
    stack: list[Iterator[str]] = [iter(successors.get(start, ()))]

    while stack:
        nxt = next(stack[-1], None)
        if nxt is None:
            stack.pop()
            on_path.discard(path.pop())
            continue
        if nxt in on_path:
            continue
        if nxt == end:
            paths.append((*path, nxt))
            continue
        path.append(nxt)
        on_path.add(nxt)
        stack.append(iter(successors.get(nxt, ())))

    return paths


def is_connected(graph: Mapping[str, Iterable[str]], start: str, end: str) -> bool:
    """Check whether ``end`` is reachable from ``start`` (breadth-first)."""
    if start == end:
        return True

    seen: set[str] = {start}
    queue: deque[str] = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in graph.get(current, ()):
            if neighbor == end:
                return True
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return False
