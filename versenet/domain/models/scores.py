"""
Score Result Domain Models

Per-algorithm results. Scores are returned as new records keyed by verse
id; verses themselves are never annotated.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Sequence, Tuple

import numpy as np


@dataclass(frozen=True)
class NodeScore:
    """Score of a single verse."""
    node_id: str
    score: float


def summarize_scores(values: Sequence[float]) -> Dict[str, float]:
    """Summary statistics of a score distribution (zeros when empty)."""
    if len(values) == 0:
        return {"mean": 0.0, "median": 0.0, "std": 0.0, "min": 0.0, "max": 0.0, "sum": 0.0}
    arr = np.asarray(values, dtype=float)
    return {
        "mean": float(np.mean(arr)),
        "median": float(np.median(arr)),
        "std": float(np.std(arr)),
        "min": float(np.min(arr)),
        "max": float(np.max(arr)),
        "sum": float(np.sum(arr)),
    }


@dataclass
class RankedScores:
    """
    Scores for every verse, sorted by score descending.

    Ties keep the graph's verse order (stable sort).
    """
    metric: str
    entries: List[NodeScore]
    statistics: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_scores(cls, metric: str, ordered_scores: Sequence[Tuple[str, float]]) -> "RankedScores":
        """Rank ``(node_id, score)`` pairs given in graph order."""
        ranked = sorted(ordered_scores, key=lambda item: item[1], reverse=True)
        return cls(
            metric=metric,
            entries=[NodeScore(node_id, score) for node_id, score in ranked],
            statistics=summarize_scores([score for _, score in ordered_scores]),
        )

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def top(self, n: int) -> List[NodeScore]:
        return self.entries[:n]

    def as_dict(self) -> Dict[str, float]:
        return {e.node_id: e.score for e in self.entries}

    def score_of(self, node_id: str) -> float:
        for entry in self.entries:
            if entry.node_id == node_id:
                return entry.score
        raise KeyError(node_id)


@dataclass
class HubRanking:
    """Hub scores with the top-N verses flagged as hubs."""
    scores: RankedScores
    hub_ids: List[str]

    def hubs(self) -> List[NodeScore]:
        return self.scores.top(len(self.hub_ids))

    def is_hub(self, node_id: str) -> bool:
        return node_id in self.hub_ids


@dataclass
class Community:
    """A group of verses sharing a propagated label."""
    label: str
    member_ids: List[str]

    @property
    def size(self) -> int:
        return len(self.member_ids)


@dataclass
class CommunityPartition:
    """
    Result of label propagation.

    ``labels`` covers every verse of the graph; ``communities`` keeps only
    the groups that reached the minimum size, largest first.
    """
    labels: Dict[str, str]
    communities: List[Community]
    iterations_run: int = 0
    converged: bool = False

    @property
    def community_count(self) -> int:
        return len(self.communities)

    def community_of(self, node_id: str) -> str:
        return self.labels[node_id]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "communities": [[c.label, list(c.member_ids)] for c in self.communities],
            "community_count": self.community_count,
            "iterations_run": self.iterations_run,
            "converged": self.converged,
        }
