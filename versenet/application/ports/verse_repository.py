"""
Verse Repository Port

Interface defining the contract for loading the verse network.
"""

from abc import ABC, abstractmethod

from versenet.domain.models import VerseGraph


class IVerseRepository(ABC):
    """
    Outbound port for verse data.

    Defines the contract for loading the cross-reference graph
    regardless of the underlying source (JSON file, in-memory, etc.).
    """

    @abstractmethod
    def load_graph(self) -> VerseGraph:
        """
        Load the verse graph.

        Returns:
            VerseGraph with verses sorted by numeric id
        """
        pass

    @abstractmethod
    def close(self) -> None:
        """Release any held resources."""
        pass
