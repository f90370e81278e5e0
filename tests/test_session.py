"""Tests for VerificationSession and the module-level operations."""

import logging
from collections.abc import Callable

import pytest

import rdltverify
from rdltverify import (
    RDLTStateError,
    RDLTStructureError,
    VerificationConfig,
    VerificationSession,
    antecedent_consequent,
    evaluate,
    load,
    pos,
)
from rdltverify.constants import MSG_FREE_CHOICE
from rdltverify.enums import VerificationState
from tests.helpers.arcs import make_arc

FREE_CHOICE_TEXT = """\
x1, x2, a, 1
x1, x3, b, 1
x4, x2, c, 1
x4, x3, d, 1
"""


def _constraint_failure(arcs: list[dict[str, str]]) -> list[dict[str, str]]:
    failing = [*arcs]
    failing[4] = make_arc("r-5", "a", "y", "c1")
    return failing


class TestModuleOperations:
    """Tests for the stateless snapshot operations."""

    def test_evaluate(self, triangle_arcs: list[dict[str, str]]) -> None:
        """evaluate reports matrix, back edges and source."""
        report = evaluate(load(triangle_arcs))
        assert report.vertices == ("x1", "x2", "x3")
        assert [edge.format() for edge in report.back_edges] == ["x3 -> x1"]
        assert report.source_vertex is None

    def test_format_matrix(self, triangle_arcs: list[dict[str, str]]) -> None:
        """The matrix renders as an aligned table."""
        assert evaluate(load(triangle_arcs)).format_matrix().splitlines() == [
            "   x1 x2 x3",
            "x1  0  1  0",
            "x2  0  0  1",
            "x3  1  0  0",
        ]

    def test_antecedent_consequent_and_pos(self, free_choice_arcs: list[dict[str, str]]) -> None:
        """Stateless wrappers agree with the path analyzer."""
        snapshot = load(free_choice_arcs)
        sets = antecedent_consequent(snapshot, "x")
        assert sets.antecedent == ("a", "b", "s", "x")
        assert sets.consequent == ("t",)
        assert pos(snapshot, "x") == ("s",)

    def test_version(self) -> None:
        """A version string is always available."""
        assert isinstance(rdltverify.__version__, str)


class TestSessionLifecycle:
    """Tests for state transitions."""

    def test_initial_state(self) -> None:
        """A fresh session has nothing loaded."""
        session = VerificationSession()
        assert session.state is VerificationState.NOT_LOADED
        assert session.phase1_result is None
        assert session.document is None

    @pytest.mark.parametrize(
        "operation",
        [
            lambda s: s.snapshot,
            lambda s: s.evaluate(),
            lambda s: s.pos("x"),
            lambda s: s.evaluate_cycles(),
            lambda s: s.verify_phase1(),
            lambda s: s.verify(),
        ],
    )
    def test_operations_require_load(
        self, operation: Callable[[VerificationSession], object]
    ) -> None:
        """Every analysis raises RDLTStateError before a load."""
        with pytest.raises(RDLTStateError):
            operation(VerificationSession())

    def test_load_moves_to_parsed(self, free_choice_arcs: list[dict[str, str]]) -> None:
        """Loading arcs yields PARSED and no document."""
        session = VerificationSession()
        snapshot = session.load(free_choice_arcs)
        assert session.state is VerificationState.PARSED
        assert session.snapshot is snapshot
        assert session.document is None

    def test_load_text(self) -> None:
        """load_text keeps the parsed document."""
        session = VerificationSession()
        session.load_text(FREE_CHOICE_TEXT)
        assert session.state is VerificationState.PARSED
        assert session.document is not None
        assert len(session.document.arcs) == 4
        assert session.snapshot.vertices == ("x1", "x2", "x3", "x4")

    def test_phase_transitions_valid(self, free_choice_arcs: list[dict[str, str]]) -> None:
        """PARSED -> PHASE1_VALID -> PHASE2_VALID."""
        session = VerificationSession()
        session.load(free_choice_arcs)
        assert session.verify_phase1().valid
        assert session.state is VerificationState.PHASE1_VALID
        assert session.verify_phase2().is_valid
        assert session.state is VerificationState.PHASE2_VALID

    def test_phase1_invalid_is_terminal(self, free_choice_arcs: list[dict[str, str]]) -> None:
        """Phase 2 is skipped and the state stays PHASE1_INVALID."""
        session = VerificationSession()
        session.load(_constraint_failure(free_choice_arcs))
        assert not session.verify_phase1().valid
        assert session.state is VerificationState.PHASE1_INVALID

        result = session.verify_phase2()
        assert result.skipped
        assert session.state is VerificationState.PHASE1_INVALID
        assert session.phase2_result is None

    def test_phase2_before_phase1_skips(self, free_choice_arcs: list[dict[str, str]]) -> None:
        """Without a Phase 1 run there is nothing to check."""
        session = VerificationSession()
        session.load(free_choice_arcs)
        assert session.verify_phase2().skipped
        assert session.state is VerificationState.PARSED

    def test_phase1_invalid_stays_terminal_with_explicit_vectors(
        self, free_choice_arcs: list[dict[str, str]]
    ) -> None:
        """Vectors from another snapshot cannot move past a failed Phase 1."""
        vectors = rdltverify.verify_phase1(load(free_choice_arcs)).valid_composite_vectors
        assert vectors

        session = VerificationSession()
        session.load(_constraint_failure(free_choice_arcs))
        session.verify_phase1()
        result = session.verify_phase2(vectors)
        assert result.skipped
        assert not result.is_valid
        assert session.state is VerificationState.PHASE1_INVALID
        assert session.phase2_result is None

    def test_explicit_vectors_before_phase1_skip(
        self, unreachable_siblings_arcs: list[dict[str, str]]
    ) -> None:
        """A freshly loaded session does not jump to a Phase 2 state."""
        session = VerificationSession()
        snapshot = session.load(unreachable_siblings_arcs)
        vectors = rdltverify.verify_phase1(snapshot).valid_composite_vectors
        assert session.verify_phase2(vectors).skipped
        assert session.state is VerificationState.PARSED

    def test_explicit_vectors_after_valid_phase1(
        self, unreachable_siblings_arcs: list[dict[str, str]]
    ) -> None:
        """From PHASE1_VALID, supplied vectors are checked and recorded."""
        session = VerificationSession()
        session.load(unreachable_siblings_arcs)
        vectors = session.verify_phase1().valid_composite_vectors
        result = session.verify_phase2(vectors)
        assert result.violation_count == 2
        assert session.state is VerificationState.PHASE2_INVALID
        assert session.phase2_result is result

    def test_reload_discards_results(self, free_choice_arcs: list[dict[str, str]]) -> None:
        """A new load resets the state and every derived result."""
        session = VerificationSession()
        session.load(free_choice_arcs)
        session.verify()
        session.load_text(FREE_CHOICE_TEXT)
        assert session.state is VerificationState.PARSED
        assert session.phase1_result is None
        assert session.phase2_result is None

    def test_failed_load_keeps_previous_snapshot(self, free_choice_arcs: list[dict[str, str]]) -> None:
        """A structural error leaves the session as it was."""
        session = VerificationSession()
        snapshot = session.load(free_choice_arcs)
        session.verify_phase1()
        with pytest.raises(RDLTStructureError):
            session.load(42)
        assert session.snapshot is snapshot
        assert session.state is VerificationState.PHASE1_VALID

    def test_config_applies_to_loads(self) -> None:
        """The session's configuration reaches ingestion."""
        session = VerificationSession(config=VerificationConfig(cycle_id_prefix="k"))
        session.load([make_arc("r-1", "a", "b"), make_arc("r-2", "b", "a")])
        (summary,) = session.evaluate_cycles()
        assert summary.cycle_id == "k1"

    def test_load_logged(
        self, free_choice_arcs: list[dict[str, str]], caplog: pytest.LogCaptureFixture
    ) -> None:
        """Loading logs the graph size at INFO."""
        with caplog.at_level(logging.INFO, logger="rdltverify.session"):
            VerificationSession().load(free_choice_arcs)
        assert "RDLT loaded: 6 vertices, 8 arcs" in caplog.text


class TestSessionAnalyses:
    """Tests for analyses run through a session."""

    def test_cycles_and_eru(self, triangle_arcs: list[dict[str, str]]) -> None:
        """Cycle listing and eRU annotation."""
        session = VerificationSession()
        session.load(triangle_arcs)
        (summary,) = session.evaluate_cycles()
        assert summary.critical_arcs == ("r-1: x1, x2", "r-3: x3, x1")
        assert [arc.eru for arc in session.update_eru()] == [1, 1, 1]

    def test_path_sets(self, free_choice_arcs: list[dict[str, str]]) -> None:
        """Antecedent, consequent and POS through the session."""
        session = VerificationSession()
        session.load(free_choice_arcs)
        assert session.antecedent_consequent("y").consequent == ("t",)
        assert session.pos("y") == ("s",)
        assert session.evaluate().source_vertex == "s"


class TestVerify:
    """Tests for the full two-phase run."""

    def test_free_choice_report(self) -> None:
        """A valid RDLT yields a positive verdict."""
        session = VerificationSession()
        session.load_text(FREE_CHOICE_TEXT)
        report = session.verify()
        assert report.is_free_choice
        assert report.state is VerificationState.PHASE2_VALID
        assert report.phase2 is not None
        assert report.phase2.message == MSG_FREE_CHOICE
        text = report.format()
        assert f"Verdict: {MSG_FREE_CHOICE}" in text
        assert "Total Execution Time:" in text

    def test_constraint_failure_report(self, free_choice_arcs: list[dict[str, str]]) -> None:
        """Phase 2 does not run after a Phase 1 failure."""
        session = VerificationSession()
        session.load(_constraint_failure(free_choice_arcs))
        report = session.verify()
        assert report.phase2 is None
        assert not report.is_free_choice
        assert report.state is VerificationState.PHASE1_INVALID
        assert "Phase 2 skipped: Phase 1 verification failed." in report.format()

    def test_violation_report(self, unreachable_siblings_arcs: list[dict[str, str]]) -> None:
        """Phase 2 violations make the verdict negative."""
        session = VerificationSession()
        session.load(unreachable_siblings_arcs)
        report = session.verify()
        assert report.phase1.valid
        assert report.phase2 is not None
        assert not report.phase2.is_valid
        assert report.state is VerificationState.PHASE2_INVALID
        assert "Verdict: RDLT is not Σ-distinct PCS free-choice." in report.format()

    def test_no_siblings_report(self) -> None:
        """A chain has no composite vectors and fails Phase 1."""
        session = VerificationSession()
        session.load([make_arc("r-1", "x1", "x2"), make_arc("r-2", "x2", "x3")])
        report = session.verify()
        assert not report.phase1.valid
        assert "Constraints are invalid." in report.format()
