#!/usr/bin/env python3
"""Verify an RDLT text file from the command line.

Loads an RDLT document, prints its structure (adjacency matrix, back edges,
source vertex), the consolidated cycles with their critical arcs and eRU
values, and finally runs the two-phase Σ-distinct PCS free-choice check.

Usage:
    python examples/verify_rdlt.py examples/free_choice.rdlt
    python examples/verify_rdlt.py --pos x2 examples/free_choice.rdlt
    python examples/verify_rdlt.py --verbose examples/free_choice.rdlt

Exit Codes:
    0   RDLT is Σ-distinct PCS free-choice
    1   RDLT is not Σ-distinct PCS free-choice
    2   File read or load error

Python 3.13+.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from rdltverify import RDLTError, VerificationSession


def _print_structure(session: VerificationSession) -> None:
    structure = session.evaluate()
    print("Adjacency Matrix:")
    print(structure.format_matrix())
    print()
    edges = ", ".join(edge.format() for edge in structure.back_edges) or "None"
    print(f"Back Edges: {edges}")
    print(f"Source Vertex: {structure.source_vertex or 'None'}")


def _print_cycles(session: VerificationSession) -> None:
    cycles = session.evaluate_cycles()
    print(f"Cycles ({len(cycles)}):")
    for summary in cycles:
        print(f"  {summary.cycle_id}: {'; '.join(summary.cycle)}")
        print(f"    critical: {'; '.join(summary.critical_arcs)}")
    print("eRU:")
    for arc in session.update_eru():
        print(f"  {arc.format()} -> {arc.eru}")


def _print_vertex(session: VerificationSession, vertex: str) -> None:
    sets = session.antecedent_consequent(vertex)
    print(f"Vertex {vertex}:")
    print(f"  Antecedent: {', '.join(sets.antecedent) or 'None'}")
    print(f"  Consequent: {', '.join(sets.consequent) or 'None'}")
    print(f"  POS: {', '.join(session.pos(vertex)) or 'None'}")


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Check an RDLT for the Σ-distinct PCS free-choice property.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", type=Path, help="RDLT text file")
    parser.add_argument(
        "--pos",
        action="append",
        default=[],
        metavar="VERTEX",
        help="Also print antecedent, consequent and POS of VERTEX (repeatable)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable DEBUG logging",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        text = args.file.read_text(encoding="utf-8")
    except OSError as e:
        print(f"[ERROR] Cannot read file: {e}", file=sys.stderr)
        return 2

    session = VerificationSession()
    try:
        session.load_text(text)
    except RDLTError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2

    document = session.document
    if document is not None and document.has_issues:
        print(f"Skipped {len(document.issues)} malformed line(s):")
        for issue in document.issues:
            print(f"  {issue.format(sanitize=True)}")
        print()

    _print_structure(session)
    print()
    _print_cycles(session)
    for vertex in args.pos:
        print()
        _print_vertex(session, vertex)

    print()
    report = session.verify()
    print(report.format())
    return 0 if report.is_free_choice else 1


if __name__ == "__main__":
    sys.exit(main())
