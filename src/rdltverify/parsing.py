"""Reader for the line-oriented RDLT text format.

Format:
    - Lines before the first section marker belong to section R
    - A line reading exactly CENTER, IN or OUT switches section
    - R:      start, end, c-attribute, l-attribute
    - CENTER: comma-separated vertex names
    - IN/OUT: start, end (boundary arcs of a reusable block)

Malformed R lines are skipped and reported as ParseIssue records; the reader
never raises on content.

Python 3.13+.
"""

import logging
from dataclasses import dataclass

from rdltverify.constants import RID_PREFIX
from rdltverify.diagnostics import IssueCode, ParseIssue
from rdltverify.enums import Section
from rdltverify.model import format_arc

__all__ = ["RDLTDocument", "parse_rdlt"]

logger = logging.getLogger(__name__)

_MARKERS: dict[str, Section] = {
    Section.CENTER.value: Section.CENTER,
    Section.IN.value: Section.IN,
    Section.OUT.value: Section.OUT,
}


@dataclass(frozen=True, slots=True)
class RDLTDocument:
    """Parsed RDLT text.

    Attributes:
        arcs: Arc records ready for ``load()``
        centers: Center vertices of reusable blocks
        in_arcs: Boundary arcs entering blocks ("start, end")
        out_arcs: Boundary arcs leaving blocks ("start, end")
        issues: Malformed lines that were skipped
    """

    arcs: tuple[dict[str, str], ...]
    centers: tuple[str, ...]
    in_arcs: tuple[str, ...]
    out_arcs: tuple[str, ...]
    issues: tuple[ParseIssue, ...]

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)


def _split_fields(line: str) -> list[str]:
    return [part.strip() for part in line.split(",")]


def parse_rdlt(text: str) -> RDLTDocument:
    """Parse RDLT source text.

    Args:
        text: Document content

    Returns:
        RDLTDocument; arc records get sequential r-ids ("r-1", "r-2", ...)
        in the order of well-formed R lines

    Example:
        >>> doc = parse_rdlt("x1, x2, ε, 1\\nx2, x1, a, 2\\nCENTER\\nx1")
        >>> [a["r-id"] for a in doc.arcs]
        ['r-1', 'r-2']
        >>> doc.centers
        ('x1',)
    """
    section = Section.R
    arcs: list[dict[str, str]] = []
    centers: list[str] = []
    in_arcs: list[str] = []
    out_arcs: list[str] = []
    issues: list[ParseIssue] = []

    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue
        if line in _MARKERS:
            section = _MARKERS[line]
            continue

        fields = _split_fields(line)
        match section:
            case Section.R:
                if len(fields) != 4 or not all(fields):
                    logger.warning("Skipping malformed arc at line %d: %r", line_number, line)
                    issues.append(
                        ParseIssue(
                            code=IssueCode.MALFORMED_ARC,
                            message="Expected 'start, end, c-attribute, l-attribute'",
                            content=line,
                            line=line_number,
                        )
                    )
                    continue
                start, end, c_attribute, l_attribute = fields
                arcs.append(
                    {
                        "r-id": f"{RID_PREFIX}{len(arcs) + 1}",
                        "arc": format_arc(start, end),
                        "c-attribute": c_attribute,
                        "l-attribute": l_attribute,
                    }
                )
            case Section.CENTER:
                centers.extend(name for name in fields if name)
            case Section.IN | Section.OUT:
                target = in_arcs if section is Section.IN else out_arcs
                if len(fields) == 2 and all(fields):
                    target.append(format_arc(*fields))
                else:
                    target.append(line)

    logger.debug(
        "Parsed RDLT text: %d arcs, %d centers, %d in, %d out, %d issues",
        len(arcs),
        len(centers),
        len(in_arcs),
        len(out_arcs),
        len(issues),
    )

    return RDLTDocument(
        arcs=tuple(arcs),
        centers=tuple(centers),
        in_arcs=tuple(in_arcs),
        out_arcs=tuple(out_arcs),
        issues=tuple(issues),
    )
