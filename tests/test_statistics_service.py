"""
Unit Tests for the Statistics Service

Tests for:
    - Network summary scalars (density, median, reciprocity)
    - Report assembly and ordering of sub-computations
    - Cache lifecycle (reuse, invalidate, graph change)
    - Determinism under a fixed seed and clock
    - Cancellation and progress reporting
"""

import json
import threading

import pytest

from conftest import make_graph
from versenet.application.services import (
    StatisticsCache,
    StatisticsService,
    compute_network_summary,
    compute_reciprocity,
)
from versenet.domain.exceptions import ComputationCancelled
from versenet.domain.models import NetworkReport
from versenet.domain.services import CentralityEngine


# =============================================================================
# Network Summary
# =============================================================================

class TestNetworkSummary:

    def test_chain_summary(self, chain_graph):
        centrality = CentralityEngine().degree_centrality(chain_graph)
        summary = compute_network_summary(chain_graph, centrality)
        assert summary.node_count == 4
        assert summary.edge_count == 6
        assert summary.avg_degree == 1.5
        assert summary.median_degree == 1
        assert summary.max_degree == 2
        assert summary.density == pytest.approx(0.5)
        assert summary.reciprocity == 1.0
        assert [v.refs for v in summary.top_verses] == [2, 2, 1, 1]
        assert summary.top_verses[0].centrality == 1.0

    def test_median_uses_descending_order(self):
        graph = make_graph({"A": ["B", "C", "D"], "B": ["A"], "C": [], "D": ["A", "B"]})
        centrality = CentralityEngine().degree_centrality(graph)
        # Descending degrees: [3, 2, 1, 0] -> element n // 2
        assert compute_network_summary(graph, centrality).median_degree == 1

    def test_top_verses_limit(self, random_graph):
        centrality = CentralityEngine().degree_centrality(random_graph)
        summary = compute_network_summary(random_graph, centrality, top_verses=3)
        assert len(summary.top_verses) == 3

    def test_empty_graph(self, empty_graph):
        centrality = CentralityEngine().degree_centrality(empty_graph)
        summary = compute_network_summary(empty_graph, centrality)
        assert summary.node_count == 0
        assert summary.density == 0.0
        assert summary.top_verses == []

    def test_single_verse_density(self):
        graph = make_graph({"A": []})
        centrality = CentralityEngine().degree_centrality(graph)
        summary = compute_network_summary(graph, centrality)
        assert summary.density == 0.0
        assert summary.avg_degree == 0.0

    def test_reciprocity(self):
        one_way = make_graph({"A": ["B"], "B": []})
        assert compute_reciprocity(one_way) == 0.0
        mixed = make_graph({"A": ["B", "C"], "B": ["A"], "C": [], "D": ["Z"]})
        assert compute_reciprocity(mixed) == pytest.approx(2 / 3)


# =============================================================================
# Report
# =============================================================================

class TestCompute:

    def test_report_sections(self, chain_graph, fixed_clock):
        service = StatisticsService(seed=1, clock=fixed_clock)
        report = service.compute(chain_graph)
        assert report.network.node_count == 4
        assert [r.verse for r in report.centrality] == ["TST 1 B", "TST 1 C", "TST 1 A", "TST 1 D"]
        assert report.centrality[0].ref_count == 2
        assert report.timestamp == "2024-01-01T12:00:00"
        assert report.parameters == {
            "sampleSize": 200, "maxDepth": 6, "iterations": 5,
            "hubCount": 30, "topN": 20, "seed": 1,
        }
        assert report.diagnostics["samples"] == 4

    def test_top_n_trims_rankings(self, random_graph):
        report = StatisticsService(seed=1, top_n=5, hub_count=7).compute(random_graph)
        assert len(report.centrality) == 5
        assert len(report.betweenness) == 5
        assert len(report.clustering) == 5
        assert len(report.hubs) == 7

    def test_communities_section(self, two_cliques_graph):
        report = StatisticsService(seed=1).compute(two_cliques_graph)
        summary = report.communities
        assert summary.community_count == 2
        groups = sorted(tuple(c.groups.items()) for c in summary.communities)
        assert groups == [(("GEN", 4),), (("JOH", 4),)]
        for entry in summary.communities:
            assert len(entry.members) == 4
            assert all(m.startswith(("GEN", "JOH")) for m in entry.members)

    def test_empty_graph(self, empty_graph):
        report = StatisticsService(seed=1).compute(empty_graph)
        assert report.network.node_count == 0
        assert report.centrality == []
        assert report.hubs == []
        assert report.communities.community_count == 0

    def test_report_serializes_to_json(self, random_graph, fixed_clock):
        report = StatisticsService(seed=4, clock=fixed_clock).compute(random_graph)
        data = json.loads(report.to_json())
        assert set(data) == {
            "network", "centrality", "betweenness", "clustering",
            "hubs", "communities", "statistics", "parameters", "diagnostics", "timestamp",
        }
        assert set(data["network"]) >= {
            "nodeCount", "edgeCount", "avgDegree", "medianDegree",
            "maxDegree", "density", "topVerses",
        }
        assert set(data["centrality"][0]) == {"verse", "refCount", "score"}
        assert set(data["communities"]) >= {"communities", "communityCount"}

    def test_score_statistics_in_report(self, chain_graph, fixed_clock):
        report = StatisticsService(seed=1, clock=fixed_clock).compute(chain_graph)
        assert set(report.statistics) == {"centrality", "betweenness", "clustering", "hubs"}
        degree = report.statistics["centrality"]
        assert degree["mean"] == 0.75
        assert degree["median"] == 0.75
        assert degree["min"] == 0.5
        assert degree["max"] == 1.0
        assert degree["sum"] == 3.0
        assert degree["std"] == pytest.approx(0.25)
        assert report.statistics["clustering"]["max"] == 0.0
        # No clustering on a chain, so hub scores equal degree centrality
        assert report.statistics["hubs"] == degree

    def test_score_statistics_serialized(self, random_graph, fixed_clock):
        report = StatisticsService(seed=4, clock=fixed_clock).compute(random_graph)
        data = json.loads(report.to_json())
        assert set(data["statistics"]["betweenness"]) == {"mean", "median", "std", "min", "max", "sum"}
        assert data["statistics"]["betweenness"]["max"] in (0.0, 1.0)
        restored = NetworkReport.from_json(report.to_json())
        assert restored.statistics == report.statistics

    def test_json_round_trip(self, random_graph, fixed_clock):
        report = StatisticsService(seed=4, clock=fixed_clock).compute(random_graph)
        assert NetworkReport.from_json(report.to_json()) == report

    def test_reproducible_under_seed(self, random_graph, fixed_clock):
        first = StatisticsService(seed=8, clock=fixed_clock).compute(random_graph)
        second = StatisticsService(seed=8, clock=fixed_clock).compute(random_graph)
        assert first.to_json() == second.to_json()

    @pytest.mark.parametrize("kwargs", [
        {"sample_size": 0}, {"iterations": 0}, {"hub_count": 0}, {"top_n": 0}, {"max_depth": -1},
    ])
    def test_invalid_parameters(self, kwargs):
        with pytest.raises(ValueError):
            StatisticsService(**kwargs)


# =============================================================================
# Cache
# =============================================================================

class TestCache:

    def test_report_cached(self, chain_graph):
        service = StatisticsService(seed=1)
        assert service.compute(chain_graph) is service.compute(chain_graph)
        assert service.cache.last_computed is not None

    def test_individual_metrics_reuse_cache(self, chain_graph):
        service = StatisticsService(seed=1)
        report_centrality = service.degree_centrality(chain_graph)
        service.compute(chain_graph)
        assert service.degree_centrality(chain_graph) is report_centrality

    def test_invalidate(self, chain_graph, fixed_clock):
        service = StatisticsService(seed=1, clock=fixed_clock)
        first = service.compute(chain_graph)
        service.invalidate()
        assert service.cache.is_empty
        second = service.compute(chain_graph)
        assert second is not first
        assert second == first

    def test_new_graph_invalidates(self, chain_graph, complete_graph):
        service = StatisticsService(seed=1)
        service.compute(chain_graph)
        report = service.compute(complete_graph)
        assert report.network.node_count == 4
        assert report.network.edge_count == 12
        assert service.cache.graph is complete_graph

    def test_cache_bind(self, chain_graph, star_graph):
        cache = StatisticsCache()
        cache.bind(chain_graph)
        cache.centrality = CentralityEngine().degree_centrality(chain_graph)
        cache.bind(chain_graph)
        assert cache.centrality is not None
        cache.bind(star_graph)
        assert cache.centrality is None

    def test_context_manager_clears_cache(self, chain_graph):
        with StatisticsService(seed=1) as service:
            service.compute(chain_graph)
        assert service.cache.is_empty


# =============================================================================
# Progress & Cancellation
# =============================================================================

class TestProgressAndCancellation:

    def test_progress_phases_in_order(self, random_graph):
        phases = []

        def progress(phase, current, total):
            if not phases or phases[-1] != phase:
                phases.append(phase)

        StatisticsService(seed=1).compute(random_graph, progress_callback=progress)
        assert phases[0] == "betweenness"
        assert phases[1] == "clustering"
        assert phases[2].startswith("communities")

    def test_progress_interval_reaches_every_engine(self, random_graph):
        counts = {}

        def progress(phase, current, total):
            counts[phase] = counts.get(phase, 0) + 1

        StatisticsService(seed=1, progress_interval=10).compute(random_graph, progress_callback=progress)
        # 40 verses: checkpoints at 0, 10, 20 and 30
        assert counts["clustering"] == 4
        assert counts["communities[1]"] == 4
        # 40 samples plus the closing (total, total) call
        assert counts["betweenness"] == 5

    def test_cancelled_run_is_not_cached(self, random_graph):
        service = StatisticsService(seed=1)
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(ComputationCancelled):
            service.compute(random_graph, cancel_event=cancel)
        assert service.cache.report is None
        assert service.cache.betweenness is None
        # A later run without cancellation succeeds
        assert service.compute(random_graph).network.node_count == 40
