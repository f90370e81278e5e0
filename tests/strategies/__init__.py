"""Hypothesis strategies for rdltverify property-based testing.

Usage:
    from tests.strategies import arc_lists, ring_arcs
"""

from .graph import arc_lists, node_names, ring_arcs, sibling_arcs

__all__ = ["arc_lists", "node_names", "ring_arcs", "sibling_arcs"]
