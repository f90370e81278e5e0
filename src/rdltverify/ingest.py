"""Arc ingestion: canonicalize raw arc input into an immutable GraphSnapshot.

The arc collection may arrive as a flat sequence of records or as a mapping
whose values are sequences of records (one per RDLT component). The shape is
resolved here, once; everything downstream sees a single ordered tuple of
typed Arc records.

Architecture:
    - _flatten_records(): Resolve the top-level shape (only fatal check)
    - _coerce_record(): Convert one record to an Arc, or skip it
    - load(): Build the GraphIndex and derived structure into a snapshot

Python 3.13+.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace

from rdltverify.analysis.back_edges import find_back_edges, find_source_vertex
from rdltverify.analysis.index import GraphIndex
from rdltverify.config import VerificationConfig
from rdltverify.diagnostics import RDLTLimitError, RDLTStructureError
from rdltverify.model import Arc, BackEdge, extract_level

__all__ = ["GraphSnapshot", "StructureReport", "load"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StructureReport:
    """Derived structural view of a snapshot (matrix, back edges, source).

    Attributes:
        vertices: Vertex enumeration order
        matrix: Boolean adjacency matrix in that order
        back_edges: Arcs v_i -> v_j with j <= i
        source_vertex: First vertex with no incoming arcs, or None
    """

    vertices: tuple[str, ...]
    matrix: tuple[tuple[int, ...], ...]
    back_edges: tuple[BackEdge, ...]
    source_vertex: str | None

    def format_matrix(self) -> str:
        """Render the adjacency matrix as a whitespace-aligned table."""
        width = max((len(v) for v in self.vertices), default=1)
        header = " " * width + " " + " ".join(v.rjust(width) for v in self.vertices)
        lines = [header]
        for vertex, row in zip(self.vertices, self.matrix, strict=True):
            cells = " ".join(str(cell).rjust(width) for cell in row)
            lines.append(f"{vertex.rjust(width)} {cells}")
        return "\n".join(lines)


@dataclass(frozen=True, slots=True, eq=False)
class GraphSnapshot:
    """One immutable RDLT snapshot and every structure derived from it.

    Attributes:
        arcs: Canonical arcs in input order
        index: Vertex enumeration, adjacency list and matrix
        back_edges: Back edges under the enumeration order
        source_vertex: First zero-indegree vertex, or None
        config: Configuration the snapshot was loaded with
    """

    arcs: tuple[Arc, ...]
    index: GraphIndex
    back_edges: tuple[BackEdge, ...]
    source_vertex: str | None
    config: VerificationConfig

    @property
    def vertices(self) -> tuple[str, ...]:
        return self.index.vertices

    def structure(self) -> StructureReport:
        return StructureReport(
            vertices=self.index.vertices,
            matrix=self.index.matrix,
            back_edges=self.back_edges,
            source_vertex=self.source_vertex,
        )


def _is_record_sequence(value: object) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _flatten_records(arcs: object) -> list[object]:
    """Resolve the top-level input shape into a flat record list.

    Raises:
        RDLTStructureError: If ``arcs`` is neither a sequence nor a mapping
            whose values are all sequences
    """
    if isinstance(arcs, Mapping):
        records: list[object] = []
        for key, component in arcs.items():
            if not _is_record_sequence(component):
                msg = (
                    f"Expected arc component {key!r} to be a sequence, "
                    f"found {type(component).__name__}"
                )
                raise RDLTStructureError(msg)
            records.extend(component)
        return records

    if _is_record_sequence(arcs):
        return list(arcs)  # type: ignore[call-overload]

    msg = f"Expected arcs to be a sequence or a mapping of sequences, found {type(arcs).__name__}"
    raise RDLTStructureError(msg)


def _coerce_record(entry: object, position: int, epsilon: str) -> Arc | None:
    """Convert one raw record into an Arc.

    Returns:
        The Arc, or None when the record lacks required fields (logged)
    """
    if isinstance(entry, Arc):
        if entry.level is None and entry.l_attribute is not None:
            return replace(entry, level=extract_level(entry.l_attribute))
        return entry

    if not isinstance(entry, Mapping):
        logger.warning("Skipping arc record %d: not a mapping (%s)", position, type(entry).__name__)
        return None

    r_id = entry.get("r-id")
    arc = entry.get("arc")
    if isinstance(r_id, bool) or not isinstance(r_id, (str, int)) or not isinstance(arc, str):
        logger.warning("Skipping arc record %d: missing 'r-id' or 'arc'", position)
        return None

    endpoints = [part.strip() for part in arc.split(",")]
    if len(endpoints) != 2 or not all(endpoints):
        logger.warning("Skipping arc record %d: malformed arc %r", position, arc)
        return None

    c_attribute = entry.get("c-attribute")
    l_attribute = entry.get("l-attribute")
    return Arc(
        r_id=str(r_id),
        start=endpoints[0],
        end=endpoints[1],
        c_attribute=epsilon if c_attribute is None else str(c_attribute),
        l_attribute=None if l_attribute is None else str(l_attribute),
        level=extract_level(l_attribute),
    )


def load(arcs: object, *, config: VerificationConfig | None = None) -> GraphSnapshot:
    """Build an immutable GraphSnapshot from raw arc input.

    Args:
        arcs: Sequence of arc records, or mapping of component name to a
              sequence of arc records. A record is a mapping with "r-id",
              "arc" ("start, end"), and optional "c-attribute" and
              "l-attribute"; Arc instances are accepted, with ``level``
              derived from ``l_attribute`` when left unset.
        config: Verification configuration (default: VerificationConfig())

    Returns:
        GraphSnapshot with index, back edges and source vertex computed

    Raises:
        RDLTStructureError: If the top-level shape is not recognized
        RDLTLimitError: If the vertex count exceeds config.max_vertices

    Example:
        >>> snapshot = load([
        ...     {"r-id": "r-1", "arc": "x1, x2", "c-attribute": "ε", "l-attribute": "1"},
        ...     {"r-id": "r-2", "arc": "x2, x1", "c-attribute": "a", "l-attribute": "2"},
        ... ])
        >>> snapshot.vertices
        ('x1', 'x2')
        >>> snapshot.source_vertex is None
        True
    """
    if config is None:
        config = VerificationConfig()

    canonical: list[Arc] = []
    seen_ids: set[str] = set()
    for position, entry in enumerate(_flatten_records(arcs)):
        arc = _coerce_record(entry, position, config.epsilon)
        if arc is None:
            continue
        if arc.r_id in seen_ids:
            logger.warning("Skipping arc record %d: duplicate r-id %r", position, arc.r_id)
            continue
        seen_ids.add(arc.r_id)
        canonical.append(arc)

    index = GraphIndex(canonical, epsilon=config.epsilon)

    if config.max_vertices and len(index) > config.max_vertices:
        msg = f"RDLT has {len(index)} vertices; limit is {config.max_vertices}"
        raise RDLTLimitError(msg, vertex_count=len(index), limit=config.max_vertices)

    back_edges = find_back_edges(index)
    source_vertex = find_source_vertex(index)

    logger.debug(
        "Loaded RDLT: %d arcs, %d vertices, %d back edges, source=%s",
        len(canonical),
        len(index),
        len(back_edges),
        source_vertex,
    )

    return GraphSnapshot(
        arcs=tuple(canonical),
        index=index,
        back_edges=back_edges,
        source_vertex=source_vertex,
        config=config,
    )
