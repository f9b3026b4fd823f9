"""
Centrality Engine

Computes centrality metrics to identify the most important verses:
- Degree centrality: reference count relative to the best-connected verse
- Betweenness centrality: Monte-Carlo estimate from sampled shortest paths

Betweenness sampling draws random ordered pairs of distinct verses, runs
the depth-bounded path finder and credits every interior verse of each
path found. Accumulators are normalized by the largest one, so the top
bridge verse scores 1.0.
"""

import itertools
import logging
import random
import threading
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

from versenet.domain.models.graph import VerseGraph
from versenet.domain.models.scores import RankedScores
from versenet.domain.services.checkpoints import ProgressCallback, checkpoint, require_positive
from versenet.domain.services.path_finder import DEFAULT_MAX_DEPTH, shortest_path

DEFAULT_SAMPLE_SIZE = 200


@dataclass
class SamplingRun:
    """Diagnostics of the last betweenness run."""
    samples: int = 0
    paths_found: int = 0
    exhaustive: bool = False


class CentralityEngine:
    """
    Engine for degree and sampled betweenness centrality.

    Each betweenness call draws from a fresh ``random.Random(seed)``, so a
    fixed seed reproduces the same scores call after call; ``seed=None``
    samples from OS entropy.
    """

    def __init__(
        self,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
        max_depth: int = DEFAULT_MAX_DEPTH,
        seed: Optional[int] = None,
        progress_interval: int = 50,
    ):
        self.sample_size = require_positive("sample_size", sample_size)
        self.max_depth = require_positive("max_depth", max_depth)
        self.progress_interval = require_positive("progress_interval", progress_interval)
        self.seed = seed
        self.last_run = SamplingRun()
        self.logger = logging.getLogger(__name__)

    def degree_centrality(self, graph: VerseGraph) -> RankedScores:
        """
        Compute degree centrality: degree / max degree.

        All scores are 0 when no verse has a reference.
        """
        self.logger.debug("Computing degree centrality...")
        max_degree = graph.max_degree
        if max_degree == 0:
            return RankedScores.from_scores("degree", [(v.id, 0.0) for v in graph])
        return RankedScores.from_scores(
            "degree",
            [(v.id, v.degree / max_degree) for v in graph],
        )

    def betweenness_centrality(
        self,
        graph: VerseGraph,
        sample_size: Optional[int] = None,
        exhaustive: bool = False,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> RankedScores:
        """
        Estimate betweenness centrality from sampled shortest paths.

        Args:
            graph: Graph to analyze
            sample_size: Pairs to draw (defaults to the engine's), capped
                at the verse count
            exhaustive: Visit every ordered pair instead of sampling
            progress_callback: Called as (phase, current, total)
            cancel_event: Checked before every sample

        Returns:
            RankedScores normalized to the maximum accumulator
        """
        if sample_size is None:
            sample_size = self.sample_size
        require_positive("sample_size", sample_size)

        ids = graph.ids
        n = len(ids)
        accumulator: Dict[str, int] = dict.fromkeys(ids, 0)
        run = SamplingRun(exhaustive=exhaustive)

        if n >= 2:
            if exhaustive:
                total = n * (n - 1)
                pairs = itertools.permutations(ids, 2)
            else:
                total = min(sample_size, n)
                pairs = self._sample_pairs(ids, total)
            self.logger.info(f"Computing betweenness centrality ({total} {'pairs' if exhaustive else 'samples'})...")

            for i, (source_id, target_id) in enumerate(pairs):
                checkpoint("betweenness", i, total, self.progress_interval, progress_callback, cancel_event)
                run.samples += 1
                path = shortest_path(source_id, target_id, graph, self.max_depth)
                if path is None or len(path) <= 2:
                    continue
                run.paths_found += 1
                for interior_id in path[1:-1]:
                    accumulator[interior_id] += 1

            if progress_callback:
                progress_callback("betweenness", total, total)

        self.last_run = run
        self.logger.info(f"Found {run.paths_found} paths with interior verses out of {run.samples} samples")

        max_count = max(accumulator.values(), default=0)
        if max_count == 0:
            return RankedScores.from_scores("betweenness", [(i, 0.0) for i in ids])
        return RankedScores.from_scores(
            "betweenness",
            [(i, accumulator[i] / max_count) for i in ids],
        )

    def _sample_pairs(self, ids, count: int) -> Iterator[Tuple[str, str]]:
        rng = random.Random(self.seed)
        for _ in range(count):
            source, target = rng.sample(ids, 2)
            yield source, target
