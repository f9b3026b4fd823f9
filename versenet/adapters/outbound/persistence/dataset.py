"""
Verse dataset parsing.

Dataset format (merged_bible_references.json):

    {
        "1001001": {"v": "GEN 1 1", "r": {"23001001": 12, "43001001": 40}},
        ...
    }

``v`` is the verse reference, ``r`` maps referenced verse ids to a
weight (weights are not used by the analytics). The group of a verse is
its book, the first token of the reference.
"""

from typing import Any, Dict, List, Mapping, Tuple

from versenet.domain.exceptions import DatasetError
from versenet.domain.models import Verse, VerseGraph, build_graph


def _id_sort_key(verse_id: str) -> Tuple[int, int, str]:
    try:
        return (0, int(verse_id), verse_id)
    except ValueError:
        return (1, 0, verse_id)


def verse_from_record(verse_id: str, record: Mapping[str, Any]) -> Verse:
    """Build a Verse from one dataset record."""
    if not isinstance(record, Mapping):
        raise DatasetError(f"Record for verse '{verse_id}' must be an object")
    label = str(record.get("v", verse_id))
    refs = record.get("r") or {}
    if not isinstance(refs, Mapping):
        raise DatasetError(f"References of verse '{verse_id}' must be an object")
    tokens = label.split()
    return Verse(
        id=str(verse_id),
        label=label,
        group=tokens[0] if tokens else "",
        neighbor_ids=tuple(str(ref_id) for ref_id in refs.keys()),
    )


def graph_from_dataset(data: Mapping[str, Any]) -> VerseGraph:
    """
    Reshape the raw dataset into a VerseGraph.

    Verses are ordered by numeric id (the circular layout order);
    non-numeric ids follow, sorted as strings.
    """
    if not isinstance(data, Mapping):
        raise DatasetError(f"Dataset must be a JSON object, got {type(data).__name__}")
    verses: List[Verse] = [verse_from_record(str(k), v) for k, v in data.items()]
    verses.sort(key=lambda v: _id_sort_key(v.id))
    return build_graph(verses)


def graph_to_dataset(graph: VerseGraph) -> Dict[str, Dict[str, Any]]:
    """Inverse of graph_from_dataset (reference weights become 1)."""
    return {
        v.id: {"v": v.label, "r": {ref_id: 1 for ref_id in v.neighbor_ids}}
        for v in graph
    }
