"""Typed records for the RDLT data model.

Every record is a frozen, slotted dataclass. Derived views (cycles, composite
vectors, constraint matrices) are built from one immutable graph snapshot and
never mutated afterwards; annotated copies are produced with
``dataclasses.replace``.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from rdltverify.constants import ARC_SEPARATOR, COMPOSITE_PREFIX, NO_CONSTRAINT

__all__ = [
    "Arc",
    "BackEdge",
    "CompositeVector",
    "ConstraintMatrix",
    "ConstraintRow",
    "Cycle",
    "CycleSummary",
    "extract_level",
    "format_arc",
]

_NON_DIGITS = re.compile(r"\D")


def extract_level(l_attribute: object) -> int | None:
    """Extract the numeric level embedded in an l-attribute.

    All digits in the label are concatenated, so ``"l2"`` yields ``2`` and
    ``"1a0"`` yields ``10``.

    Args:
        l_attribute: Raw level label (any type, None allowed)

    Returns:
        Integer level, or None if the label carries no digits

    Example:
        >>> extract_level("L3")
        3
        >>> extract_level("ε") is None
        True
    """
    if l_attribute is None:
        return None
    digits = _NON_DIGITS.sub("", str(l_attribute))
    if not digits:
        return None
    return int(digits)


def format_arc(start: str, end: str) -> str:
    """Render an arc as the canonical ``"start, end"`` string."""
    return f"{start}{ARC_SEPARATOR}{end}"


@dataclass(frozen=True, slots=True)
class Arc:
    """Directed, labeled RDLT arc.

    Attributes:
        r_id: Unique arc identifier
        start: Source vertex
        end: Target vertex
        c_attribute: Control constraint label ("ε" = unconstrained)
        l_attribute: Raw level label as supplied
        level: Digits of l_attribute as an integer (None if absent)
        eru: Expanded reusability, None until computed
    """

    r_id: str
    start: str
    end: str
    c_attribute: str
    l_attribute: str | None = None
    level: int | None = None
    eru: int | None = None

    @property
    def arc(self) -> str:
        """Canonical ``"start, end"`` rendering."""
        return format_arc(self.start, self.end)

    def format(self) -> str:
        """Render as ``"r-id: start, end"``, the form used in cycle listings."""
        return f"{self.r_id}: {self.arc}"

    def as_record(self) -> dict[str, object]:
        """Return the input-shaped record, including eRU when computed.

        Example:
            >>> Arc("r-1", "x1", "x2", "a", "1", 1, 1).as_record()["arc"]
            'x1, x2'
        """
        record: dict[str, object] = {
            "r-id": self.r_id,
            "arc": self.arc,
            "c-attribute": self.c_attribute,
            "l-attribute": self.l_attribute,
        }
        if self.eru is not None:
            record["eRU"] = self.eru
        return record


@dataclass(frozen=True, slots=True)
class BackEdge:
    """Arc v_i -> v_j with j <= i under the fixed vertex enumeration."""

    start: str
    end: str

    def format(self) -> str:
        return f"{self.start} -> {self.end}"


@dataclass(frozen=True, slots=True)
class Cycle:
    """Consolidated cycle with its criticality data.

    Attributes:
        cycle_id: Sequential id in discovery order ("c-1", "c-2", ...)
        arcs: Consolidated arcs: the detected walk followed by any
            join-alternative arcs, never repeating an r-id
        critical_arcs: Arcs whose level equals the cycle minimum
        eru: Minimum level over the consolidated arcs
    """

    cycle_id: str
    arcs: tuple[Arc, ...]
    critical_arcs: tuple[Arc, ...]
    eru: int

    @property
    def vertices(self) -> frozenset[str]:
        return frozenset(v for arc in self.arcs for v in (arc.start, arc.end))

    def summary(self) -> CycleSummary:
        """Convert to the display form with ``"r-id: start, end"`` strings."""
        return CycleSummary(
            cycle_id=self.cycle_id,
            cycle=tuple(arc.format() for arc in self.arcs),
            critical_arcs=tuple(arc.format() for arc in self.critical_arcs),
        )


@dataclass(frozen=True, slots=True)
class CycleSummary:
    """Formatted cycle as reported by ``evaluate_cycles``."""

    cycle_id: str
    cycle: tuple[str, ...]
    critical_arcs: tuple[str, ...]

    def as_record(self) -> dict[str, object]:
        return {
            "cycle-id": self.cycle_id,
            "cycle": list(self.cycle),
            "ca": list(self.critical_arcs),
        }


@dataclass(frozen=True, slots=True)
class CompositeVector:
    """Pairing of two sibling vertices that share a parent-indicator vector.

    Attributes:
        siblings: The paired vertices (A, B) in vertex order
        vector: Bitwise AND of both parent-indicator vectors
        vector_a: Parent-indicator vector of A
        vector_b: Parent-indicator vector of B
    """

    siblings: tuple[str, str]
    vector: tuple[int, ...]
    vector_a: tuple[int, ...]
    vector_b: tuple[int, ...]

    @property
    def name(self) -> str:
        """Display name, e.g. ``CV_x2,x3``."""
        return f"{COMPOSITE_PREFIX}{self.siblings[0]},{self.siblings[1]}"

    @property
    def is_composite(self) -> bool:
        """True iff the AND result preserves both original vectors."""
        return self.vector == self.vector_a and self.vector == self.vector_b


@dataclass(frozen=True, slots=True)
class ConstraintRow:
    """One row of a constraint matrix: a candidate parent and its constraints."""

    vertex: str
    constraints: tuple[str, str]
    valid: bool

    @property
    def marker(self) -> str:
        """Row verdict as rendered in the matrix: ``"1"`` valid, ``"0"`` not."""
        return "1" if self.valid else "0"

    @property
    def is_unconstrained(self) -> bool:
        return all(c == NO_CONSTRAINT for c in self.constraints)


@dataclass(frozen=True, slots=True)
class ConstraintMatrix:
    """Constraint matrix built for one composite vector.

    Attributes:
        name: Composite vector name the matrix belongs to
        rows: One row per vertex of the graph, in vertex order
        constraint_counts: Occurrences of every non-"0" constraint value
    """

    name: str
    rows: tuple[ConstraintRow, ...]
    constraint_counts: Mapping[str, int] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return all(row.valid for row in self.rows)

    @property
    def has_repeated_constraint(self) -> bool:
        return any(count > 1 for count in self.constraint_counts.values())

    def as_table(self) -> list[list[str]]:
        """Header row plus ``[vertex, marker]`` rows."""
        table: list[list[str]] = [["", self.name]]
        table.extend([row.vertex, row.marker] for row in self.rows)
        return table
