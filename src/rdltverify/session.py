"""Verification session and module-level RDLT operations.

The module-level functions are stateless and operate on one GraphSnapshot.
VerificationSession wraps them in the verification lifecycle:

    NOT_LOADED -> PARSED -> PHASE1_VALID   -> PHASE2_VALID | PHASE2_INVALID
                         -> PHASE1_INVALID (terminal until the next load)

Loading always builds a fresh snapshot and discards every derived result of
the previous one.

Python 3.13+.
"""

import logging
import time
from collections.abc import Sequence

from rdltverify.analysis.cycles import evaluate_cycles as _evaluate_cycles
from rdltverify.analysis.cycles import update_eru as _update_eru
from rdltverify.analysis.paths import AntecedentConsequent, PathAnalyzer
from rdltverify.config import VerificationConfig
from rdltverify.diagnostics import (
    Phase1Result,
    Phase2Result,
    RDLTStateError,
    VerificationReport,
)
from rdltverify.enums import VerificationState
from rdltverify.ingest import GraphSnapshot, StructureReport, load
from rdltverify.model import Arc, CompositeVector, CycleSummary
from rdltverify.parsing import RDLTDocument, parse_rdlt
from rdltverify.verification import verify_phase1, verify_phase2

__all__ = [
    "VerificationSession",
    "antecedent_consequent",
    "evaluate",
    "evaluate_cycles",
    "load",
    "pos",
    "update_eru",
    "verify_phase1",
    "verify_phase2",
]

logger = logging.getLogger(__name__)


# ============================================================================
# MODULE-LEVEL OPERATIONS
# ============================================================================


def evaluate(snapshot: GraphSnapshot) -> StructureReport:
    """Adjacency matrix, back edges and source vertex of a snapshot."""
    return snapshot.structure()


def antecedent_consequent(snapshot: GraphSnapshot, vertex: str) -> AntecedentConsequent:
    """Antecedent and consequent sets of ``vertex`` (empty without a source)."""
    return PathAnalyzer(snapshot).antecedent_consequent(vertex)


def pos(snapshot: GraphSnapshot, vertex: str) -> tuple[str, ...]:
    """Point(s) of synchronization of ``vertex`` (empty without a source)."""
    return PathAnalyzer(snapshot).pos(vertex)


def evaluate_cycles(snapshot: GraphSnapshot) -> tuple[CycleSummary, ...]:
    """Consolidated cycles with critical arcs, in display form."""
    return _evaluate_cycles(snapshot)


def update_eru(snapshot: GraphSnapshot) -> tuple[Arc, ...]:
    """Arcs of the snapshot annotated with eRU (0 for acyclic arcs)."""
    return _update_eru(snapshot)


# ============================================================================
# SESSION
# ============================================================================


class VerificationSession:
    """Holds one loaded RDLT and tracks its verification state.

    Not thread-safe; a session belongs to one caller. Results are immutable
    and may be shared freely.

    Example:
        >>> session = VerificationSession()
        >>> _ = session.load_text('''
        ... x1, x2, a, 1
        ... x1, x3, b, 1
        ... x4, x2, c, 1
        ... x4, x3, d, 1
        ... ''')
        >>> report = session.verify()
        >>> report.phase1.valid
        True
    """

    __slots__ = (
        "_analyzer",
        "_config",
        "_document",
        "_phase1",
        "_phase2",
        "_snapshot",
        "_state",
    )

    def __init__(self, *, config: VerificationConfig | None = None) -> None:
        """Initialize an empty session.

        Args:
            config: Configuration used for every load (default: VerificationConfig())
        """
        self._config = config if config is not None else VerificationConfig()
        self._snapshot: GraphSnapshot | None = None
        self._document: RDLTDocument | None = None
        self._analyzer: PathAnalyzer | None = None
        self._phase1: Phase1Result | None = None
        self._phase2: Phase2Result | None = None
        self._state = VerificationState.NOT_LOADED

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def config(self) -> VerificationConfig:
        return self._config

    @property
    def state(self) -> VerificationState:
        return self._state

    @property
    def document(self) -> RDLTDocument | None:
        """Parsed document of the last ``load_text``; None after ``load``."""
        return self._document

    @property
    def snapshot(self) -> GraphSnapshot:
        """Current snapshot.

        Raises:
            RDLTStateError: If nothing has been loaded
        """
        if self._snapshot is None:
            msg = "No RDLT loaded; call load() or load_text() first"
            raise RDLTStateError(msg)
        return self._snapshot

    @property
    def phase1_result(self) -> Phase1Result | None:
        return self._phase1

    @property
    def phase2_result(self) -> Phase2Result | None:
        return self._phase2

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, arcs: object) -> GraphSnapshot:
        """Load raw arc records, discarding all previous results.

        Raises:
            RDLTStructureError: If the top-level arc shape is not recognized
            RDLTLimitError: If the vertex cap is exceeded
        """
        snapshot = load(arcs, config=self._config)
        self._reset(snapshot)
        self._document = None
        return snapshot

    def load_text(self, text: str) -> GraphSnapshot:
        """Parse RDLT text and load its arcs."""
        document = parse_rdlt(text)
        snapshot = self.load(document.arcs)
        self._document = document
        return snapshot

    def _reset(self, snapshot: GraphSnapshot) -> None:
        self._snapshot = snapshot
        self._analyzer = PathAnalyzer(snapshot)
        self._phase1 = None
        self._phase2 = None
        self._state = VerificationState.PARSED
        logger.info(
            "RDLT loaded: %d vertices, %d arcs",
            len(snapshot.vertices),
            len(snapshot.arcs),
        )

    def _path_analyzer(self) -> PathAnalyzer:
        snapshot = self.snapshot
        if self._analyzer is None:
            self._analyzer = PathAnalyzer(snapshot)
        return self._analyzer

    # ------------------------------------------------------------------
    # Analyses
    # ------------------------------------------------------------------

    def evaluate(self) -> StructureReport:
        return evaluate(self.snapshot)

    def antecedent_consequent(self, vertex: str) -> AntecedentConsequent:
        return self._path_analyzer().antecedent_consequent(vertex)

    def pos(self, vertex: str) -> tuple[str, ...]:
        return self._path_analyzer().pos(vertex)

    def evaluate_cycles(self) -> tuple[CycleSummary, ...]:
        return evaluate_cycles(self.snapshot)

    def update_eru(self) -> tuple[Arc, ...]:
        return update_eru(self.snapshot)

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    def verify_phase1(self) -> Phase1Result:
        """Run Phase 1 and move to PHASE1_VALID or PHASE1_INVALID."""
        result = verify_phase1(self.snapshot)
        self._phase1 = result
        self._phase2 = None
        self._state = (
            VerificationState.PHASE1_VALID if result.valid else VerificationState.PHASE1_INVALID
        )
        logger.info(
            "Phase 1 %s: %d valid composite vectors",
            "passed" if result.valid else "failed",
            result.valid_vector_count,
        )
        return result

    def verify_phase2(
        self,
        valid_composite_vectors: Sequence[CompositeVector] | None = None,
    ) -> Phase2Result:
        """Run Phase 2 on the Phase 1 output.

        Args:
            valid_composite_vectors: Vectors to check (default: the vectors of
                the last Phase 1 run of this session)

        Returns:
            Phase2Result; a skipped, invalid result unless the session is
            in PHASE1_VALID. The state is left unchanged when skipped.

        Raises:
            RDLTStateError: If nothing has been loaded
        """
        snapshot = self.snapshot
        if self._state is not VerificationState.PHASE1_VALID or self._phase1 is None:
            logger.debug("Phase 2 not run in state %s", self._state)
            return verify_phase2(snapshot, ())
        if valid_composite_vectors is None:
            valid_composite_vectors = self._phase1.valid_composite_vectors

        result = verify_phase2(snapshot, valid_composite_vectors, analyzer=self._path_analyzer())
        if not result.skipped:
            self._phase2 = result
            self._state = (
                VerificationState.PHASE2_VALID if result.is_valid else VerificationState.PHASE2_INVALID
            )
            logger.info("Phase 2: %s", result.message)
        return result

    def verify(self) -> VerificationReport:
        """Run the full two-phase verification.

        Phase 2 runs only when Phase 1 is valid.

        Raises:
            RDLTStateError: If nothing has been loaded
        """
        start_time = time.perf_counter()
        phase1 = self.verify_phase1()
        phase2 = self.verify_phase2() if phase1.valid else None
        elapsed = (time.perf_counter() - start_time) * 1000
        return VerificationReport(
            phase1=phase1,
            phase2=phase2,
            state=self._state,
            execution_time=elapsed,
        )
