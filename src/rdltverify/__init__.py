"""rdltverify - structural soundness checks for RDLT process models.

An RDLT is a directed graph whose arcs carry a control constraint
(c-attribute) and a level label (l-attribute). rdltverify enumerates and
consolidates its cycles, derives per-arc expanded reusability (eRU), and
decides whether the model is Σ-distinct PCS free-choice.

Public API:
    VerificationSession - Load once, verify in two phases
    load - Canonicalize arc records into an immutable GraphSnapshot
    parse_rdlt - Read the line-oriented RDLT text format
    verify_phase1 / verify_phase2 - The two decision phases
    evaluate_cycles / update_eru - Cycle listing and eRU annotation
    antecedent_consequent / pos - Per-vertex path sets

Exceptions:
    RDLTError - Base exception class
    RDLTStructureError - Unrecognized top-level arc input
    RDLTLimitError - Vertex cap exceeded
    RDLTStateError - Session used before loading

Submodules:
    rdltverify.analysis - Graph index, back edges, cycles, path sets
    rdltverify.verification - Composite vectors and free-choice check
    rdltverify.diagnostics - Error types and result records
"""

from .config import VerificationConfig
from .diagnostics import (
    Phase1Result,
    Phase2Result,
    RDLTError,
    RDLTLimitError,
    RDLTStateError,
    RDLTStructureError,
    VerificationReport,
)
from .ingest import GraphSnapshot
from .model import Arc, CompositeVector, Cycle, CycleSummary
from .parsing import RDLTDocument, parse_rdlt
from .session import (
    VerificationSession,
    antecedent_consequent,
    evaluate,
    evaluate_cycles,
    load,
    pos,
    update_eru,
    verify_phase1,
    verify_phase2,
)

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("rdltverify")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "Arc",
    "CompositeVector",
    "Cycle",
    "CycleSummary",
    "GraphSnapshot",
    "Phase1Result",
    "Phase2Result",
    "RDLTDocument",
    "RDLTError",
    "RDLTLimitError",
    "RDLTStateError",
    "RDLTStructureError",
    "VerificationConfig",
    "VerificationReport",
    "VerificationSession",
    "__version__",
    "antecedent_consequent",
    "evaluate",
    "evaluate_cycles",
    "load",
    "parse_rdlt",
    "pos",
    "update_eru",
    "verify_phase1",
    "verify_phase2",
]
