"""
Path Finder

Depth-bounded breadth-first shortest-path search over the reference
relation. Used by the betweenness sampler.

The depth cap is a hard cutoff: a pair whose shortest connection needs
more than ``max_depth`` hops is reported as unconnected.
"""

from collections import deque
from typing import Dict, List, Optional

from versenet.domain.models.graph import VerseGraph
from versenet.domain.services.checkpoints import require_positive

DEFAULT_MAX_DEPTH = 6


def shortest_path(
    source_id: str,
    target_id: str,
    graph: VerseGraph,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Optional[List[str]]:
    """
    Find the first shortest path from ``source_id`` to ``target_id``.

    Args:
        source_id: Start verse id
        target_id: Goal verse id
        graph: Graph to search
        max_depth: Maximum number of hops

    Returns:
        Verse ids from source to target (inclusive), or None when either
        end is unknown or no path exists within ``max_depth`` hops.
    """
    require_positive("max_depth", max_depth)

    if source_id not in graph or target_id not in graph:
        return None
    if source_id == target_id:
        return [source_id]

    parents: Dict[str, Optional[str]] = {source_id: None}
    queue = deque([(source_id, 0)])

    while queue:
        current, depth = queue.popleft()
        if depth == max_depth:
            continue
        for neighbor_id in graph.neighbors_of(current):
            if neighbor_id in parents or neighbor_id not in graph:
                continue
            parents[neighbor_id] = current
            if neighbor_id == target_id:
                return _unwind(parents, target_id)
            queue.append((neighbor_id, depth + 1))

    return None


def _unwind(parents: Dict[str, Optional[str]], target_id: str) -> List[str]:
    path = []
    node: Optional[str] = target_id
    while node is not None:
        path.append(node)
        node = parents[node]
    path.reverse()
    return path


class PathFinder:
    """Shortest-path search with a configured depth cap."""

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH):
        self.max_depth = require_positive("max_depth", max_depth)

    def shortest_path(self, source_id: str, target_id: str, graph: VerseGraph) -> Optional[List[str]]:
        return shortest_path(source_id, target_id, graph, self.max_depth)

    def distance(self, source_id: str, target_id: str, graph: VerseGraph) -> Optional[int]:
        """Hop count of the shortest path, or None."""
        path = self.shortest_path(source_id, target_id, graph)
        return len(path) - 1 if path is not None else None
