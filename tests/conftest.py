"""
Test Configuration and Fixtures
================================

Shared pytest fixtures for the verse network analytics.

Usage:
    pytest tests/                    # Run all tests
    pytest tests/ -v                 # Verbose output
    pytest tests/ -m "not slow"      # Skip slow tests
"""

import json
from datetime import datetime
from typing import Dict, List

import networkx as nx
import pytest

from versenet.domain.models import Verse, VerseGraph, build_graph


def make_graph(adjacency: Dict[str, List[str]], groups: Dict[str, str] = None) -> VerseGraph:
    """Build a graph from an adjacency mapping, labels derived from ids."""
    groups = groups or {}
    return build_graph(
        Verse(id=node_id, label=f"{groups.get(node_id, 'TST')} 1 {node_id}",
              group=groups.get(node_id, "TST"), neighbor_ids=tuple(refs))
        for node_id, refs in adjacency.items()
    )


def graph_from_networkx(G: nx.Graph) -> VerseGraph:
    """Symmetric verse graph mirroring an undirected NetworkX graph."""
    return build_graph(
        Verse(id=str(n), label=f"TST 1 {n}", group="TST",
              neighbor_ids=tuple(str(m) for m in sorted(G.neighbors(n))))
        for n in sorted(G.nodes())
    )


# =============================================================================
# Graph Fixtures
# =============================================================================

@pytest.fixture
def chain_graph() -> VerseGraph:
    """A <-> B <-> C <-> D"""
    return make_graph({
        "A": ["B"],
        "B": ["A", "C"],
        "C": ["B", "D"],
        "D": ["C"],
    })


@pytest.fixture
def complete_graph() -> VerseGraph:
    """Fully connected 4-node graph."""
    ids = ["A", "B", "C", "D"]
    return make_graph({i: [j for j in ids if j != i] for i in ids})


@pytest.fixture
def star_graph() -> VerseGraph:
    """Center S referenced by and referencing four leaves."""
    leaves = ["L1", "L2", "L3", "L4"]
    adjacency = {"S": leaves}
    adjacency.update({leaf: ["S"] for leaf in leaves})
    return make_graph(adjacency)


@pytest.fixture
def two_cliques_graph() -> VerseGraph:
    """Two disjoint 4-cliques plus an isolated verse and a connected pair."""
    left = ["1", "2", "3", "4"]
    right = ["5", "6", "7", "8"]
    adjacency = {}
    for clique in (left, right):
        for i in clique:
            adjacency[i] = [j for j in clique if j != i]
    adjacency["9"] = []
    adjacency["10"] = ["11"]
    adjacency["11"] = ["10"]
    groups = {i: "GEN" for i in left}
    groups.update({i: "JOH" for i in right})
    return make_graph(adjacency, groups)


@pytest.fixture
def dangling_graph() -> VerseGraph:
    """Graph whose verses reference ids that are not part of it."""
    return make_graph({
        "A": ["B", "X1"],
        "B": ["A", "C", "X2"],
        "C": ["B", "X3", "X4"],
    })


@pytest.fixture
def empty_graph() -> VerseGraph:
    return build_graph([])


@pytest.fixture
def random_graph() -> VerseGraph:
    """Seeded sparse random graph with symmetric references."""
    return graph_from_networkx(nx.gnp_random_graph(40, 0.12, seed=7))


@pytest.fixture
def fixed_clock():
    return lambda: datetime(2024, 1, 1, 12, 0, 0)


# =============================================================================
# Dataset Fixtures
# =============================================================================

@pytest.fixture
def sample_dataset() -> Dict:
    """Dataset in the merged_bible_references.json format."""
    return {
        "43001001": {"v": "JOH 1 1", "r": {"1001001": 50, "62001001": 30, "43001014": 20}},
        "1001001": {"v": "GEN 1 1", "r": {"43001001": 50, "19033006": 12, "58011003": 9}},
        "19033006": {"v": "PSA 33 6", "r": {"1001001": 12, "58011003": 4}},
        "58011003": {"v": "HEB 11 3", "r": {"1001001": 9, "19033006": 4}},
        "62001001": {"v": "1JO 1 1", "r": {"43001001": 30}},
        "43001014": {"v": "JOH 1 14", "r": {"43001001": 20, "99999999": 1}},
        "1001002": {"v": "GEN 1 2"},
    }


@pytest.fixture
def dataset_file(tmp_path, sample_dataset):
    path = tmp_path / "refs.json"
    path.write_text(json.dumps(sample_dataset), encoding="utf-8")
    return path
