"""
JSON Verse Repository Adapter

Implements IVerseRepository over the merged cross-reference JSON file.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from versenet.application.ports.verse_repository import IVerseRepository
from versenet.domain.exceptions import DatasetError
from versenet.domain.models import VerseGraph

from .dataset import graph_from_dataset


class JsonVerseRepository(IVerseRepository):
    """
    JSON file adapter implementing IVerseRepository.

    The graph is parsed once and reused; ``reload()`` drops it so the next
    ``load_graph()`` reads the file again.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._graph: Optional[VerseGraph] = None
        self.logger = logging.getLogger(__name__)

    def load_graph(self) -> VerseGraph:
        if self._graph is None:
            self._graph = self._read()
        return self._graph

    def reload(self) -> VerseGraph:
        self._graph = None
        return self.load_graph()

    def close(self) -> None:
        self._graph = None

    def _read(self) -> VerseGraph:
        if not self.path.exists():
            raise DatasetError(f"Verse data file not found: {self.path}")
        self.logger.info(f"Loading verse data from {self.path}")
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise DatasetError(f"Invalid JSON in {self.path}: {e}") from e

        graph = graph_from_dataset(data)
        stats = graph.describe()
        self.logger.info(
            f"Loaded {stats['verse_count']} verses, {stats['reference_count']} references "
            f"across {stats['group_count']} books"
        )
        return graph
