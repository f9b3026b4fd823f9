"""
Domain Services Package

Analytics engines over an immutable VerseGraph. Every engine returns new
score records and leaves the graph untouched.
"""

from .path_finder import PathFinder, shortest_path, DEFAULT_MAX_DEPTH
from .centrality import CentralityEngine, SamplingRun, DEFAULT_SAMPLE_SIZE
from .clustering import ClusteringEngine, neighbor_connections, DEFAULT_HUB_COUNT
from .community import CommunityDetector, most_frequent_label, DEFAULT_ITERATIONS, DEFAULT_MIN_SIZE
from .checkpoints import ProgressCallback

__all__ = [
    "PathFinder",
    "shortest_path",
    "CentralityEngine",
    "SamplingRun",
    "ClusteringEngine",
    "neighbor_connections",
    "CommunityDetector",
    "most_frequent_label",
    "ProgressCallback",
    "DEFAULT_MAX_DEPTH",
    "DEFAULT_SAMPLE_SIZE",
    "DEFAULT_HUB_COUNT",
    "DEFAULT_ITERATIONS",
    "DEFAULT_MIN_SIZE",
]
