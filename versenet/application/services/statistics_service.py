"""
Statistics Service

Main orchestrator for verse network statistics. Runs the engines in a
fixed order (degree -> betweenness -> clustering -> hubs -> communities),
computes graph-wide scalars and assembles one serializable NetworkReport.

Results are held in an explicit StatisticsCache. The cache is bound to
one graph instance and is cleared wholesale by ``invalidate()`` or when a
different graph is supplied.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

from versenet.domain.models.graph import VerseGraph
from versenet.domain.models.report import (
    CommunityEntry,
    CommunitySummary,
    NetworkReport,
    NetworkSummary,
    RankedVerse,
    TopVerse,
)
from versenet.domain.models.scores import CommunityPartition, HubRanking, NodeScore, RankedScores
from versenet.domain.services import CentralityEngine, ClusteringEngine, CommunityDetector
from versenet.domain.services.checkpoints import ProgressCallback, require_positive

SCORE_PRECISION = 6


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------

@dataclass
class StatisticsCache:
    """Single-slot cache of every result computed for one graph."""
    graph: Optional[VerseGraph] = None
    centrality: Optional[RankedScores] = None
    betweenness: Optional[RankedScores] = None
    clustering: Optional[RankedScores] = None
    hubs: Optional[HubRanking] = None
    communities: Optional[CommunityPartition] = None
    report: Optional[NetworkReport] = None
    last_computed: Optional[datetime] = None

    def bind(self, graph: VerseGraph) -> None:
        """Attach to ``graph``, dropping everything if it is a different one."""
        if self.graph is not graph:
            self.invalidate()
            self.graph = graph

    def invalidate(self) -> None:
        self.graph = None
        self.centrality = None
        self.betweenness = None
        self.clustering = None
        self.hubs = None
        self.communities = None
        self.report = None
        self.last_computed = None

    @property
    def is_empty(self) -> bool:
        return self.report is None and self.centrality is None


# ---------------------------------------------------------------------------
# Network summary (pure function)
# ---------------------------------------------------------------------------

def compute_reciprocity(graph: VerseGraph) -> float:
    """Share of resolvable references whose target references back."""
    resolved = 0
    reciprocal = 0
    for verse in graph:
        for neighbor in graph.resolved_neighbors(verse.id):
            resolved += 1
            if neighbor.references(verse.id):
                reciprocal += 1
    return reciprocal / resolved if resolved else 0.0


def compute_network_summary(
    graph: VerseGraph,
    centrality: RankedScores,
    top_verses: int = 10,
) -> NetworkSummary:
    """
    Graph-wide scalars.

    Density treats the reference list as double-counted undirected edges:
    (edges / 2) / C(n, 2). ``reciprocity`` reports how far the dataset
    actually follows that convention.
    """
    n = len(graph)
    if n == 0:
        return NetworkSummary()

    degrees = sorted((v.degree for v in graph), reverse=True)
    edge_count = sum(degrees)
    possible = n * (n - 1) / 2
    density = (edge_count / 2) / possible if possible else 0.0

    top = []
    for entry in centrality.top(top_verses):
        verse = graph.resolve(entry.node_id)
        top.append(TopVerse(
            verse=verse.label,
            refs=verse.degree,
            centrality=round(entry.score, 3),
        ))

    return NetworkSummary(
        node_count=n,
        edge_count=edge_count,
        avg_degree=round(edge_count / n, 2),
        median_degree=degrees[n // 2],
        max_degree=degrees[0],
        density=density,
        reciprocity=round(compute_reciprocity(graph), SCORE_PRECISION),
        top_verses=top,
    )


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

class StatisticsService:
    """
    Service computing and caching verse network statistics.
    """

    def __init__(
        self,
        sample_size: int = 200,
        max_depth: int = 6,
        iterations: int = 5,
        hub_count: int = 30,
        top_n: int = 20,
        top_verses: int = 10,
        seed: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None,
        progress_interval: int = 50,
    ):
        self.logger = logging.getLogger(__name__)
        self.top_n = require_positive("top_n", top_n)
        self.top_verses = require_positive("top_verses", top_verses)
        self.seed = seed
        self._clock = clock or datetime.now

        # Initialize engines
        self.centrality_engine = CentralityEngine(
            sample_size=sample_size, max_depth=max_depth, seed=seed,
            progress_interval=progress_interval,
        )
        self.clustering_engine = ClusteringEngine(
            hub_count=hub_count, progress_interval=progress_interval,
        )
        self.community_detector = CommunityDetector(
            iterations=iterations, seed=seed, progress_interval=progress_interval,
        )

        self.cache = StatisticsCache()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.invalidate()

    @property
    def parameters(self) -> Dict[str, Optional[int]]:
        return {
            "sampleSize": self.centrality_engine.sample_size,
            "maxDepth": self.centrality_engine.max_depth,
            "iterations": self.community_detector.iterations,
            "hubCount": self.clustering_engine.hub_count,
            "topN": self.top_n,
            "seed": self.seed,
        }

    def invalidate(self) -> None:
        """Drop every cached result."""
        self.cache.invalidate()
        self.logger.debug("Statistics cache cleared")

    # --- individual metrics (cached) ---

    def degree_centrality(self, graph: VerseGraph) -> RankedScores:
        self.cache.bind(graph)
        if self.cache.centrality is None:
            self.cache.centrality = self.centrality_engine.degree_centrality(graph)
        return self.cache.centrality

    def betweenness_centrality(
        self,
        graph: VerseGraph,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> RankedScores:
        self.cache.bind(graph)
        if self.cache.betweenness is None:
            self.cache.betweenness = self.centrality_engine.betweenness_centrality(
                graph, progress_callback=progress_callback, cancel_event=cancel_event,
            )
        return self.cache.betweenness

    def clustering_coefficients(
        self,
        graph: VerseGraph,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> RankedScores:
        self.cache.bind(graph)
        if self.cache.clustering is None:
            self.cache.clustering = self.clustering_engine.clustering_coefficients(
                graph, progress_callback=progress_callback, cancel_event=cancel_event,
            )
        return self.cache.clustering

    def hubs(self, graph: VerseGraph) -> HubRanking:
        self.cache.bind(graph)
        if self.cache.hubs is None:
            centrality = self.degree_centrality(graph)
            clustering = self.clustering_coefficients(graph)
            self.cache.hubs = self.clustering_engine.hub_scores(graph, centrality, clustering)
        return self.cache.hubs

    def communities(
        self,
        graph: VerseGraph,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> CommunityPartition:
        self.cache.bind(graph)
        if self.cache.communities is None:
            self.cache.communities = self.community_detector.detect(
                graph, progress_callback=progress_callback, cancel_event=cancel_event,
            )
        return self.cache.communities

    def network_summary(self, graph: VerseGraph) -> NetworkSummary:
        return compute_network_summary(graph, self.degree_centrality(graph), self.top_verses)

    # --- full pipeline ---

    def compute(
        self,
        graph: VerseGraph,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> NetworkReport:
        """
        Compute all statistics for ``graph``.

        Args:
            graph: Verse graph to analyze
            progress_callback: Called as (phase, current, total)
            cancel_event: Cooperative cancellation; raises ComputationCancelled

        Returns:
            NetworkReport (cached until invalidated)
        """
        self.cache.bind(graph)
        if self.cache.report is not None:
            return self.cache.report

        self.logger.info("=" * 60)
        self.logger.info(f"Computing all network statistics ({len(graph)} verses)...")
        start = time.perf_counter()

        centrality = self.degree_centrality(graph)
        betweenness = self.betweenness_centrality(graph, progress_callback, cancel_event)
        clustering = self.clustering_coefficients(graph, progress_callback, cancel_event)
        hubs = self.hubs(graph)
        partition = self.communities(graph, progress_callback, cancel_event)

        computed_at = self._clock()
        sampling = self.centrality_engine.last_run
        report = NetworkReport(
            network=compute_network_summary(graph, centrality, self.top_verses),
            centrality=self._ranked(graph, centrality.top(self.top_n)),
            betweenness=self._ranked(graph, betweenness.top(self.top_n)),
            clustering=self._ranked(graph, clustering.top(self.top_n)),
            hubs=self._ranked(graph, hubs.hubs()),
            communities=self._community_summary(graph, partition),
            timestamp=computed_at.isoformat(),
            statistics={
                "centrality": self._rounded(centrality.statistics),
                "betweenness": self._rounded(betweenness.statistics),
                "clustering": self._rounded(clustering.statistics),
                "hubs": self._rounded(hubs.scores.statistics),
            },
            parameters=self.parameters,
            diagnostics={
                "samples": sampling.samples,
                "pathsFound": sampling.paths_found,
                "iterationsRun": partition.iterations_run,
                "converged": partition.converged,
            },
        )

        self.cache.report = report
        self.cache.last_computed = computed_at
        self.logger.info(f"All statistics computed in {time.perf_counter() - start:.2f}s")
        self.logger.info("=" * 60)
        return report

    # --- report assembly ---

    @staticmethod
    def _rounded(statistics: Dict[str, float]) -> Dict[str, float]:
        return {name: round(value, SCORE_PRECISION) for name, value in statistics.items()}

    @staticmethod
    def _ranked(graph: VerseGraph, entries: List[NodeScore]) -> List[RankedVerse]:
        rows = []
        for entry in entries:
            verse = graph.resolve(entry.node_id)
            rows.append(RankedVerse(
                verse=verse.label,
                ref_count=verse.degree,
                score=round(entry.score, SCORE_PRECISION),
            ))
        return rows

    @staticmethod
    def _community_summary(graph: VerseGraph, partition: CommunityPartition) -> CommunitySummary:
        entries = []
        for community in partition.communities:
            members = [graph.resolve(i) for i in community.member_ids]
            groups = Counter(m.group for m in members).most_common(3)
            entries.append(CommunityEntry(
                label=community.label,
                members=[m.label for m in members],
                groups=dict(groups),
            ))
        return CommunitySummary(communities=entries)
