"""
NetworkX / GraphML Exporter Adapter

Converts a VerseGraph to a NetworkX DiGraph for external tools (Gephi,
yEd, Cytoscape). Only references that resolve to verses of the graph
become edges.
"""

import logging
from pathlib import Path
from typing import Mapping, Optional, Union

import networkx as nx

from versenet.domain.models import CommunityPartition, RankedScores, VerseGraph


def to_networkx(
    graph: VerseGraph,
    scores: Optional[Mapping[str, RankedScores]] = None,
    partition: Optional[CommunityPartition] = None,
) -> nx.DiGraph:
    """
    Convert a verse graph to a NetworkX DiGraph.

    Args:
        graph: Verse graph
        scores: Optional attribute name -> RankedScores to attach per node
        partition: Optional community partition; adds a ``community`` attribute

    Returns:
        DiGraph with label, group and degree node attributes
    """
    G = nx.DiGraph()

    for verse in graph:
        G.add_node(verse.id, label=verse.label, group=verse.group, degree=verse.degree)

    for verse in graph:
        for ref_id in verse.neighbor_ids:
            if ref_id in graph:
                G.add_edge(verse.id, ref_id)

    for name, ranked in (scores or {}).items():
        nx.set_node_attributes(G, ranked.as_dict(), name)

    if partition is not None:
        nx.set_node_attributes(G, partition.labels, "community")

    return G


class GraphMLExporter:
    """Writes verse graphs as GraphML."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def export_graphml(
        self,
        graph: VerseGraph,
        output_path: Union[str, Path],
        scores: Optional[Mapping[str, RankedScores]] = None,
        partition: Optional[CommunityPartition] = None,
    ) -> str:
        self.logger.info(f"Exporting to GraphML: {output_path}")
        G = to_networkx(graph, scores=scores, partition=partition)
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        nx.write_graphml(G, str(path))
        return str(path)
