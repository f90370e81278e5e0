"""Graph analysis for RDLT verification.

Provides the graph index, back-edge classification, cycle detection with
eRU computation, and antecedent/consequent/POS path sets.

Python 3.13+.
"""

from .back_edges import find_back_edges, find_source_vertex
from .cycles import compute_eru, evaluate_cycles, find_cycles, update_eru
from .graph import all_simple_paths, detect_cycles, is_connected, is_same_cycle
from .index import GraphIndex
from .paths import AntecedentConsequent, PathAnalyzer

__all__ = [
    "AntecedentConsequent",
    "GraphIndex",
    "PathAnalyzer",
    "all_simple_paths",
    "compute_eru",
    "detect_cycles",
    "evaluate_cycles",
    "find_back_edges",
    "find_cycles",
    "find_source_vertex",
    "is_connected",
    "is_same_cycle",
    "update_eru",
]
