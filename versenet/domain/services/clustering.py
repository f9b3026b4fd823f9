"""
Clustering Engine

Local clustering coefficient per verse and hub scores derived from it.

The neighbor connectivity check follows the dataset's reference
direction: a neighbor pair (i, j) with i before j in the verse's
reference list counts as connected when neighbor i references neighbor j.
A verse listing itself is not its own neighbor; the self-reference still
counts toward its degree.

Hub score = degree centrality * (1 - clustering coefficient): verses with
many references whose neighbors do not reference each other bridge
otherwise separate regions of the network.
"""

import logging
import threading
from typing import List, Optional, Tuple

from versenet.domain.models.graph import Verse, VerseGraph
from versenet.domain.models.scores import HubRanking, RankedScores
from versenet.domain.services.checkpoints import ProgressCallback, checkpoint, require_positive

DEFAULT_HUB_COUNT = 50


def neighbor_connections(neighbors: List[Verse]) -> Tuple[int, int]:
    """Return (connected pairs, possible pairs) among ``neighbors``."""
    k = len(neighbors)
    possible = k * (k - 1) // 2
    connected = 0
    for i in range(k):
        source = neighbors[i]
        for j in range(i + 1, k):
            if source.references(neighbors[j].id):
                connected += 1
    return connected, possible


class ClusteringEngine:
    """Engine for clustering coefficients and hub identification."""

    def __init__(self, hub_count: int = DEFAULT_HUB_COUNT, progress_interval: int = 1000):
        self.hub_count = require_positive("hub_count", hub_count)
        self.progress_interval = require_positive("progress_interval", progress_interval)
        self.logger = logging.getLogger(__name__)

    def coefficient(self, graph: VerseGraph, verse: Verse) -> float:
        """Clustering coefficient of one verse (0 below two resolved neighbors)."""
        if verse.degree < 2:
            return 0.0
        neighbors = [n for n in graph.resolved_neighbors(verse.id) if n.id != verse.id]
        if len(neighbors) < 2:
            return 0.0
        connected, possible = neighbor_connections(neighbors)
        return connected / possible

    def clustering_coefficients(
        self,
        graph: VerseGraph,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> RankedScores:
        """Compute the clustering coefficient of every verse."""
        self.logger.info("Computing clustering coefficients...")
        total = len(graph)
        scores = []
        for i, verse in enumerate(graph):
            checkpoint("clustering", i, total, self.progress_interval, progress_callback, cancel_event)
            scores.append((verse.id, self.coefficient(graph, verse)))
        self.logger.info("Clustering coefficients computed")
        return RankedScores.from_scores("clustering", scores)

    def hub_scores(
        self,
        graph: VerseGraph,
        centrality: RankedScores,
        clustering: RankedScores,
        top_n: Optional[int] = None,
    ) -> HubRanking:
        """
        Rank verses by hub score and flag the top ``top_n`` as hubs.

        Args:
            graph: Graph the scores were computed on
            centrality: Degree centrality scores
            clustering: Clustering coefficients
            top_n: Hubs to flag (defaults to the engine's hub_count)
        """
        if top_n is None:
            top_n = self.hub_count
        require_positive("top_n", top_n)

        degree = centrality.as_dict()
        local = clustering.as_dict()
        scores = RankedScores.from_scores(
            "hub",
            [(v.id, degree.get(v.id, 0.0) * (1.0 - local.get(v.id, 0.0))) for v in graph],
        )
        hub_ids = [e.node_id for e in scores.top(top_n)]
        self.logger.debug(f"Flagged {len(hub_ids)} hub verses")
        return HubRanking(scores=scores, hub_ids=hub_ids)
