"""
Persistence Adapters Package

Verse repository implementations and dataset parsing.
"""

from .dataset import graph_from_dataset, graph_to_dataset, verse_from_record
from .json_repository import JsonVerseRepository
from .memory_repository import InMemoryVerseRepository

__all__ = [
    "graph_from_dataset",
    "graph_to_dataset",
    "verse_from_record",
    "JsonVerseRepository",
    "InMemoryVerseRepository",
]
