"""
Verse Graph Domain Models

Verses are vertices; each verse carries the ordered ids of the verses it
cross-references. Edges are never materialized as objects: neighbor ids
are resolved lazily through the graph's id index, and ids that are not
part of the graph are skipped by every consumer.
"""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple, Any


@dataclass(frozen=True)
class Verse:
    """Domain entity representing a verse (vertex)."""
    id: str
    label: str
    group: str = ""
    neighbor_ids: Tuple[str, ...] = ()
    degree: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "neighbor_ids", tuple(self.neighbor_ids))
        object.__setattr__(self, "degree", len(self.neighbor_ids))

    @cached_property
    def _reference_set(self) -> FrozenSet[str]:
        return frozenset(self.neighbor_ids)

    def references(self, other_id: str) -> bool:
        """True if this verse lists ``other_id`` among its references."""
        return other_id in self._reference_set

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "group": self.group,
            "neighbor_ids": list(self.neighbor_ids),
            "degree": self.degree,
        }


class VerseGraph:
    """
    Immutable collection of verses with O(1) id lookup.

    The verse order given at construction is preserved; it is the
    tie-break order for every ranking computed over the graph.
    """

    def __init__(self, verses: Iterable[Verse]):
        self._verses: Tuple[Verse, ...] = tuple(verses)
        self._index: Dict[str, Verse] = {}
        self._positions: Dict[str, int] = {}
        for position, verse in enumerate(self._verses):
            if verse.id in self._index:
                raise ValueError(f"Duplicate verse id '{verse.id}'")
            self._index[verse.id] = verse
            self._positions[verse.id] = position

    def __len__(self) -> int:
        return len(self._verses)

    def __iter__(self) -> Iterator[Verse]:
        return iter(self._verses)

    def __contains__(self, verse_id: object) -> bool:
        return verse_id in self._index

    def __repr__(self) -> str:
        return f"VerseGraph(verses={len(self._verses)}, references={self.total_degree})"

    @property
    def verses(self) -> Tuple[Verse, ...]:
        return self._verses

    @property
    def ids(self) -> List[str]:
        return [v.id for v in self._verses]

    @property
    def total_degree(self) -> int:
        return sum(v.degree for v in self._verses)

    @property
    def max_degree(self) -> int:
        return max((v.degree for v in self._verses), default=0)

    # -- lookups ---------------------------------------------------------------

    def resolve(self, verse_id: str) -> Optional[Verse]:
        """Return the verse for ``verse_id`` or None if it is not in the graph."""
        return self._index.get(verse_id)

    def neighbors_of(self, verse_id: str) -> Tuple[str, ...]:
        """Neighbor ids of a verse; empty for unknown ids."""
        verse = self._index.get(verse_id)
        return verse.neighbor_ids if verse is not None else ()

    def resolved_neighbors(self, verse_id: str) -> List[Verse]:
        """Neighbor verses present in the graph, in reference order."""
        index = self._index
        return [index[n] for n in self.neighbors_of(verse_id) if n in index]

    def position_of(self, verse_id: str) -> int:
        return self._positions[verse_id]

    def find_by_reference(self, reference: str) -> Optional[Verse]:
        """
        Find a verse by its reference text (e.g. "gen 1 1").

        An exact (case-insensitive) label match wins; otherwise the first
        verse whose label contains the normalized text is returned.
        """
        normalized = " ".join(reference.upper().split())
        if not normalized:
            return None
        for verse in self._verses:
            if verse.label.upper() == normalized:
                return verse
        for verse in self._verses:
            if normalized in verse.label.upper():
                return verse
        return None

    def groups(self) -> List[str]:
        """Distinct groups in first-seen order."""
        return list(dict.fromkeys(v.group for v in self._verses))

    def describe(self) -> Dict[str, int]:
        return {
            "verse_count": len(self._verses),
            "reference_count": self.total_degree,
            "group_count": len(self.groups()),
        }


def build_graph(verses: Iterable[Verse]) -> VerseGraph:
    """Build a VerseGraph with its id index (O(N))."""
    return VerseGraph(verses)
