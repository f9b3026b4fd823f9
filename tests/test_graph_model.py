"""
Unit Tests for versenet.domain.models

Tests for:
    - Verse: cached degree, reference lookup, immutability
    - VerseGraph: id index, lazy neighbor resolution, lookups
    - Score and report records
"""

import dataclasses

import pytest

from versenet.domain.models import (
    Verse, VerseGraph, build_graph,
    NodeScore, RankedScores, summarize_scores,
)


# =============================================================================
# Verse Tests
# =============================================================================

class TestVerse:
    """Tests for the Verse entity."""

    def test_degree_cached_from_neighbor_ids(self):
        verse = Verse(id="1", label="GEN 1 1", group="GEN", neighbor_ids=["2", "3", "404"])
        assert verse.degree == 3
        assert verse.neighbor_ids == ("2", "3", "404")

    def test_references_is_directional(self):
        verse = Verse(id="1", label="GEN 1 1", neighbor_ids=("2",))
        assert verse.references("2")
        assert not verse.references("3")

    def test_verse_is_immutable(self):
        verse = Verse(id="1", label="GEN 1 1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            verse.label = "EXO 1 1"

    def test_to_dict(self):
        d = Verse(id="1", label="GEN 1 1", group="GEN", neighbor_ids=("2",)).to_dict()
        assert d == {"id": "1", "label": "GEN 1 1", "group": "GEN", "neighbor_ids": ["2"], "degree": 1}


# =============================================================================
# VerseGraph Tests
# =============================================================================

class TestVerseGraph:
    """Tests for the graph id index and neighbor resolution."""

    def test_build_graph_preserves_order(self, chain_graph):
        assert chain_graph.ids == ["A", "B", "C", "D"]
        assert len(chain_graph) == 4
        assert chain_graph.position_of("C") == 2

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError, match="Duplicate verse id"):
            build_graph([Verse(id="1", label="a"), Verse(id="1", label="b")])

    def test_resolve_unknown_returns_none(self, chain_graph):
        assert chain_graph.resolve("A").label.endswith("A")
        assert chain_graph.resolve("missing") is None

    def test_neighbors_of_unknown_is_empty(self, chain_graph):
        assert chain_graph.neighbors_of("B") == ("A", "C")
        assert chain_graph.neighbors_of("missing") == ()

    def test_resolved_neighbors_skip_dangling(self, dangling_graph):
        neighbors = dangling_graph.resolved_neighbors("C")
        assert [v.id for v in neighbors] == ["B"]
        # Degree still counts every listed reference
        assert dangling_graph.resolve("C").degree == 3

    def test_contains_and_iteration(self, chain_graph):
        assert "A" in chain_graph
        assert "Z" not in chain_graph
        assert [v.id for v in chain_graph] == ["A", "B", "C", "D"]

    def test_degree_aggregates(self, chain_graph, empty_graph):
        assert chain_graph.total_degree == 6
        assert chain_graph.max_degree == 2
        assert empty_graph.total_degree == 0
        assert empty_graph.max_degree == 0

    def test_find_by_reference(self):
        graph = build_graph([
            Verse(id="1", label="GEN 1 1", group="GEN"),
            Verse(id="2", label="GEN 1 10", group="GEN"),
            Verse(id="3", label="JOH 3 16", group="JOH"),
        ])
        assert graph.find_by_reference("gen 1 1").id == "1"
        assert graph.find_by_reference("  joh   3 16 ").id == "3"
        assert graph.find_by_reference("JOH 3").id == "3"
        assert graph.find_by_reference("REV 22 21") is None
        assert graph.find_by_reference("   ") is None

    def test_describe_and_groups(self, two_cliques_graph):
        assert two_cliques_graph.groups() == ["GEN", "JOH", "TST"]
        stats = two_cliques_graph.describe()
        assert stats["verse_count"] == 11
        assert stats["reference_count"] == 26
        assert stats["group_count"] == 3


# =============================================================================
# Score Record Tests
# =============================================================================

class TestRankedScores:
    """Tests for ranking and statistics of score records."""

    def test_sorted_descending_with_stable_ties(self):
        ranked = RankedScores.from_scores("degree", [("a", 0.5), ("b", 1.0), ("c", 0.5), ("d", 1.0)])
        assert [e.node_id for e in ranked] == ["b", "d", "a", "c"]

    def test_lookup_helpers(self):
        ranked = RankedScores.from_scores("degree", [("a", 0.25), ("b", 1.0)])
        assert ranked.score_of("a") == 0.25
        assert ranked.as_dict() == {"b": 1.0, "a": 0.25}
        assert ranked.top(1) == [NodeScore("b", 1.0)]
        with pytest.raises(KeyError):
            ranked.score_of("zzz")

    def test_statistics(self):
        stats = summarize_scores([0.0, 0.5, 1.0])
        assert stats["mean"] == pytest.approx(0.5)
        assert stats["median"] == pytest.approx(0.5)
        assert stats["max"] == 1.0
        assert stats["sum"] == pytest.approx(1.5)

    def test_statistics_empty(self):
        assert summarize_scores([]) == {
            "mean": 0.0, "median": 0.0, "std": 0.0, "min": 0.0, "max": 0.0, "sum": 0.0,
        }
