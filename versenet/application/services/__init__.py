"""
Application Services Package
"""

from .statistics_service import (
    StatisticsService,
    StatisticsCache,
    compute_network_summary,
    compute_reciprocity,
)
from .display_service import DisplayService, Colors

__all__ = [
    "StatisticsService",
    "StatisticsCache",
    "compute_network_summary",
    "compute_reciprocity",
    "DisplayService",
    "Colors",
]
