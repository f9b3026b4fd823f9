"""
Network Report Domain Models

The composite, serializable statistics report. ``to_dict`` produces the
export document (camelCase keys, as consumed by the viewer); ``from_dict``
parses it back into an equal report.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional


@dataclass
class RankedVerse:
    """One row of a ranked table."""
    verse: str
    ref_count: int
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {"verse": self.verse, "refCount": self.ref_count, "score": self.score}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RankedVerse:
        return cls(verse=data["verse"], ref_count=data["refCount"], score=data["score"])


@dataclass
class TopVerse:
    """Most connected verse shown in the overview."""
    verse: str
    refs: int
    centrality: float

    def to_dict(self) -> Dict[str, Any]:
        return {"verse": self.verse, "refs": self.refs, "centrality": self.centrality}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> TopVerse:
        return cls(verse=data["verse"], refs=data["refs"], centrality=data["centrality"])


@dataclass
class NetworkSummary:
    """Graph-wide scalar statistics."""
    node_count: int = 0
    edge_count: int = 0
    avg_degree: float = 0.0
    median_degree: int = 0
    max_degree: int = 0
    density: float = 0.0
    reciprocity: float = 0.0
    top_verses: List[TopVerse] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodeCount": self.node_count,
            "edgeCount": self.edge_count,
            "avgDegree": self.avg_degree,
            "medianDegree": self.median_degree,
            "maxDegree": self.max_degree,
            "density": self.density,
            "reciprocity": self.reciprocity,
            "topVerses": [v.to_dict() for v in self.top_verses],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> NetworkSummary:
        return cls(
            node_count=data["nodeCount"],
            edge_count=data["edgeCount"],
            avg_degree=data["avgDegree"],
            median_degree=data["medianDegree"],
            max_degree=data["maxDegree"],
            density=data["density"],
            reciprocity=data.get("reciprocity", 0.0),
            top_verses=[TopVerse.from_dict(v) for v in data.get("topVerses", [])],
        )


@dataclass
class CommunityEntry:
    """A reported community: representative label, member verses, group mix."""
    label: str
    members: List[str]
    groups: Dict[str, int] = field(default_factory=dict)


@dataclass
class CommunitySummary:
    communities: List[CommunityEntry] = field(default_factory=list)

    @property
    def community_count(self) -> int:
        return len(self.communities)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "communities": [[c.label, list(c.members)] for c in self.communities],
            "communityCount": self.community_count,
            "groupDistribution": {c.label: dict(c.groups) for c in self.communities},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CommunitySummary:
        distribution = data.get("groupDistribution", {})
        return cls(communities=[
            CommunityEntry(label=label, members=list(members), groups=dict(distribution.get(label, {})))
            for label, members in data.get("communities", [])
        ])


@dataclass
class NetworkReport:
    """
    Composite result of one statistics run.

    ``statistics`` summarizes the full score distribution of each ranking
    (mean, median, std, min, max, sum over every verse), not only the
    rows shown in the tables.
    """
    network: NetworkSummary
    centrality: List[RankedVerse]
    betweenness: List[RankedVerse]
    clustering: List[RankedVerse]
    hubs: List[RankedVerse]
    communities: CommunitySummary
    timestamp: str
    statistics: Dict[str, Dict[str, float]] = field(default_factory=dict)
    parameters: Dict[str, Any] = field(default_factory=dict)
    diagnostics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "network": self.network.to_dict(),
            "centrality": [r.to_dict() for r in self.centrality],
            "betweenness": [r.to_dict() for r in self.betweenness],
            "clustering": [r.to_dict() for r in self.clustering],
            "hubs": [r.to_dict() for r in self.hubs],
            "communities": self.communities.to_dict(),
            "statistics": {name: dict(stats) for name, stats in self.statistics.items()},
            "parameters": dict(self.parameters),
            "diagnostics": dict(self.diagnostics),
            "timestamp": self.timestamp,
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> NetworkReport:
        def ranked(key: str) -> List[RankedVerse]:
            return [RankedVerse.from_dict(r) for r in data.get(key, [])]

        return cls(
            network=NetworkSummary.from_dict(data["network"]),
            centrality=ranked("centrality"),
            betweenness=ranked("betweenness"),
            clustering=ranked("clustering"),
            hubs=ranked("hubs"),
            communities=CommunitySummary.from_dict(data.get("communities", {})),
            timestamp=data.get("timestamp", ""),
            statistics={name: dict(stats) for name, stats in data.get("statistics", {}).items()},
            parameters=dict(data.get("parameters", {})),
            diagnostics=dict(data.get("diagnostics", {})),
        )

    @classmethod
    def from_json(cls, text: str) -> NetworkReport:
        return cls.from_dict(json.loads(text))
