"""
Community Detector

Asynchronous label propagation:

1. Every verse starts with its own id as label.
2. Each iteration visits the verses in a freshly shuffled order. A verse
   with references adopts the most frequent label among its resolved
   neighbors; labels updated earlier in the same sweep are already
   visible. On a tie the current label is kept when it is one of the
   most frequent, otherwise the first tied label in reference order wins.
3. Propagation stops after the configured number of iterations or after
   a sweep without changes.

Verses are then grouped by label; groups below ``min_size`` are dropped
and the rest are ordered largest first.
"""

import logging
import random
import threading
from collections import defaultdict
from typing import Dict, List, Optional

from versenet.domain.models.graph import Verse, VerseGraph
from versenet.domain.models.scores import Community, CommunityPartition
from versenet.domain.services.checkpoints import ProgressCallback, checkpoint, require_positive

DEFAULT_ITERATIONS = 5
DEFAULT_MIN_SIZE = 3


def most_frequent_label(current: str, neighbor_labels: List[str]) -> str:
    """Pick the majority label, keeping ``current`` on ties it is part of."""
    if not neighbor_labels:
        return current
    counts: Dict[str, int] = {}
    for label in neighbor_labels:
        counts[label] = counts.get(label, 0) + 1
    best = max(counts.values())
    if counts.get(current) == best:
        return current
    for label, count in counts.items():
        if count == best:
            return label
    return current


class CommunityDetector:
    """
    Label-propagation community detector.

    Each ``detect`` call shuffles with a fresh ``random.Random(seed)``;
    a fixed seed yields the same partition on every call.
    """

    def __init__(
        self,
        iterations: int = DEFAULT_ITERATIONS,
        min_size: int = DEFAULT_MIN_SIZE,
        seed: Optional[int] = None,
        progress_interval: int = 1000,
    ):
        self.iterations = require_positive("iterations", iterations)
        self.min_size = require_positive("min_size", min_size)
        self.progress_interval = require_positive("progress_interval", progress_interval)
        self.seed = seed
        self.logger = logging.getLogger(__name__)

    def detect(
        self,
        graph: VerseGraph,
        progress_callback: Optional[ProgressCallback] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> CommunityPartition:
        """
        Partition the graph into communities.

        Returns:
            CommunityPartition with a label for every verse and the
            communities of at least ``min_size`` members
        """
        self.logger.info("Detecting communities...")
        rng = random.Random(self.seed)
        labels: Dict[str, str] = {v.id: v.id for v in graph}
        order: List[Verse] = list(graph)
        total = len(order)

        iterations_run = 0
        converged = False
        for iteration in range(1, self.iterations + 1):
            rng.shuffle(order)
            changed = 0
            for i, verse in enumerate(order):
                checkpoint(f"communities[{iteration}]", i, total, self.progress_interval,
                           progress_callback, cancel_event)
                if verse.degree == 0:
                    continue
                neighbor_labels = [labels[n] for n in verse.neighbor_ids if n in labels]
                new_label = most_frequent_label(labels[verse.id], neighbor_labels)
                if new_label != labels[verse.id]:
                    labels[verse.id] = new_label
                    changed += 1

            iterations_run = iteration
            self.logger.info(f"Community detection - Iteration {iteration}/{self.iterations}: {changed} changes")
            if changed == 0:
                converged = True
                self.logger.info(f"Converged early at iteration {iteration}")
                break

        communities = self._group(graph, labels)
        self.logger.info(f"Found {len(communities)} communities")
        return CommunityPartition(
            labels=labels,
            communities=communities,
            iterations_run=iterations_run,
            converged=converged,
        )

    def _group(self, graph: VerseGraph, labels: Dict[str, str]) -> List[Community]:
        members: Dict[str, List[str]] = defaultdict(list)
        for verse in graph:
            members[labels[verse.id]].append(verse.id)
        significant = [
            Community(label=label, member_ids=ids)
            for label, ids in members.items()
            if len(ids) >= self.min_size
        ]
        significant.sort(key=lambda c: c.size, reverse=True)
        return significant
