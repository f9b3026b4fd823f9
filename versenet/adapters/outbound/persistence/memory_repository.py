"""
In-Memory Verse Repository Adapter

Implements IVerseRepository using in-memory storage for testing.
"""

import copy
from typing import Any, Dict, Optional

from versenet.application.ports.verse_repository import IVerseRepository
from versenet.domain.models import VerseGraph

from .dataset import graph_from_dataset


class InMemoryVerseRepository(IVerseRepository):
    """
    In-memory adapter implementing IVerseRepository.

    Useful for testing without a dataset file.
    """

    def __init__(self, data: Optional[Dict[str, Any]] = None) -> None:
        self.data: Dict[str, Any] = copy.deepcopy(data) if data else {}
        self._graph: Optional[VerseGraph] = None

    def save_dataset(self, data: Dict[str, Any], clear: bool = False) -> None:
        """Store raw dataset records; the next load rebuilds the graph."""
        if clear:
            self.data = copy.deepcopy(data)
        else:
            self.data.update(copy.deepcopy(data))
        self._graph = None

    def load_graph(self) -> VerseGraph:
        if self._graph is None:
            self._graph = graph_from_dataset(self.data)
        return self._graph

    def close(self) -> None:
        """No-op for in-memory repository."""
        pass
