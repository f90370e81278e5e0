"""Tests for antecedent, consequent and POS computation."""

import pytest
from hypothesis import given

from rdltverify.analysis import AntecedentConsequent, PathAnalyzer
from rdltverify.ingest import load
from tests.helpers.arcs import make_arc
from tests.strategies import arc_lists


@pytest.fixture
def loop_analyzer() -> PathAnalyzer:
    """s -> a -> b -> a with an exit b -> c; b -> a is the back edge."""
    snapshot = load(
        [
            make_arc("r-1", "s", "a"),
            make_arc("r-2", "a", "b"),
            make_arc("r-3", "b", "a"),
            make_arc("r-4", "b", "c"),
        ]
    )
    return PathAnalyzer(snapshot)


class TestAntecedent:
    """Tests for antecedent sets."""

    def test_union_of_simple_paths(self, loop_analyzer: PathAnalyzer) -> None:
        """Antecedent collects every vertex on a path from the source."""
        assert loop_analyzer.antecedent("b") == ("a", "b", "s")
        assert loop_analyzer.antecedent("c") == ("a", "b", "c", "s")

    def test_source_antecedent_is_itself(self, loop_analyzer: PathAnalyzer) -> None:
        """The source reaches itself by the empty path."""
        assert loop_analyzer.antecedent("s") == ("s",)

    def test_unknown_vertex(self, loop_analyzer: PathAnalyzer) -> None:
        """Unknown vertices have empty sets."""
        assert loop_analyzer.antecedent_consequent("zz") == AntecedentConsequent((), ())
        assert loop_analyzer.all_simple_paths("s", "zz") == []

    def test_diamond_paths(self) -> None:
        """Both branches of a diamond contribute."""
        analyzer = PathAnalyzer(
            load(
                [
                    make_arc("r-1", "s", "a"),
                    make_arc("r-2", "s", "b"),
                    make_arc("r-3", "a", "t"),
                    make_arc("r-4", "b", "t"),
                ]
            )
        )
        assert analyzer.all_simple_paths("s", "t") == [("s", "a", "t"), ("s", "b", "t")]
        assert analyzer.antecedent("t") == ("a", "b", "s", "t")


class TestConsequent:
    """Tests for consequent sets."""

    def test_forward_vertices_outside_antecedent(self, loop_analyzer: PathAnalyzer) -> None:
        """From b, only c lies outside the antecedent."""
        assert loop_analyzer.consequent("b") == ("c",)

    def test_back_edge_origin_not_expanded(self, loop_analyzer: PathAnalyzer) -> None:
        """From a, b is collected but its successor c is not explored."""
        assert loop_analyzer.consequent("a") == ("b",)

    def test_sink_has_empty_consequent(self, loop_analyzer: PathAnalyzer) -> None:
        """Nothing follows c."""
        assert loop_analyzer.consequent("c") == ()

    def test_results_are_memoized(self, loop_analyzer: PathAnalyzer) -> None:
        """The same result object is returned for repeated queries."""
        first = loop_analyzer.antecedent_consequent("b")
        assert loop_analyzer.antecedent_consequent("b") is first


class TestPos:
    """Tests for points of synchronization."""

    def test_source_always_included(self, loop_analyzer: PathAnalyzer) -> None:
        """POS of b is just the source."""
        assert loop_analyzer.pos("b") == ("s",)

    def test_reentry_point_included(self, loop_analyzer: PathAnalyzer) -> None:
        """b -> a re-enters a's antecedent from its consequent."""
        assert loop_analyzer.pos("a") == ("a", "s")

    def test_no_source(self) -> None:
        """Without a source every set is empty."""
        analyzer = PathAnalyzer(load([make_arc("r-1", "a", "b"), make_arc("r-2", "b", "a")]))
        assert analyzer.source_vertex is None
        assert analyzer.pos("a") == ()
        assert analyzer.antecedent_consequent("a") == AntecedentConsequent((), ())


class TestPathProperties:
    """Property tests over generated graphs with a source."""

    @given(arcs=arc_lists(acyclic_source=True))
    def test_antecedent_contains_source_and_vertex(self, arcs: list[dict[str, str]]) -> None:
        """PROPERTY: a non-empty antecedent holds both the source and the vertex."""
        snapshot = load(arcs)
        analyzer = PathAnalyzer(snapshot)
        for vertex in snapshot.vertices:
            antecedent = analyzer.antecedent(vertex)
            if antecedent:
                assert snapshot.source_vertex in antecedent
                assert vertex in antecedent

    @given(arcs=arc_lists(acyclic_source=True))
    def test_antecedent_and_consequent_disjoint(self, arcs: list[dict[str, str]]) -> None:
        """PROPERTY: no vertex is in both sets."""
        snapshot = load(arcs)
        analyzer = PathAnalyzer(snapshot)
        for vertex in snapshot.vertices:
            sets = analyzer.antecedent_consequent(vertex)
            assert not set(sets.antecedent) & set(sets.consequent)

    @given(arcs=arc_lists(acyclic_source=True))
    def test_pos_within_antecedent_plus_source(self, arcs: list[dict[str, str]]) -> None:
        """PROPERTY: POS is the source plus antecedent vertices, sorted."""
        snapshot = load(arcs)
        analyzer = PathAnalyzer(snapshot)
        for vertex in snapshot.vertices:
            points = analyzer.pos(vertex)
            assert snapshot.source_vertex in points
            assert list(points) == sorted(points)
            allowed = {*analyzer.antecedent(vertex), snapshot.source_vertex}
            assert set(points) <= allowed
