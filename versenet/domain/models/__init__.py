"""
Domain Models Package

Pure domain entities with no infrastructure dependencies.
Re-exports all domain models for convenient imports.
"""

# Graph model
from .graph import Verse, VerseGraph, build_graph

# Per-algorithm results
from .scores import (
    NodeScore, RankedScores, HubRanking,
    Community, CommunityPartition, summarize_scores,
)

# Composite report
from .report import (
    NetworkReport, NetworkSummary, RankedVerse, TopVerse,
    CommunityEntry, CommunitySummary,
)

__all__ = [
    "Verse",
    "VerseGraph",
    "build_graph",
    "NodeScore",
    "RankedScores",
    "HubRanking",
    "Community",
    "CommunityPartition",
    "summarize_scores",
    "NetworkReport",
    "NetworkSummary",
    "RankedVerse",
    "TopVerse",
    "CommunityEntry",
    "CommunitySummary",
]
