import networkx as nx
import pytest

from pmcim.graphs import build_influence_graph
from pmcim.influence import Sampler


def star_graph(n_leaves: int, prob: float = 1.0) -> nx.DiGraph:
    return build_influence_graph((0, leaf, prob) for leaf in range(1, n_leaves + 1))


def random_influence_graph(n: int, p: float, edge_prob: float, seed: int) -> nx.DiGraph:
    G = nx.gnp_random_graph(n=n, p=p, seed=seed, directed=True)
    H = build_influence_graph((u, v, edge_prob) for u, v in G.edges())
    H.add_nodes_from(G.nodes())
    return H


@pytest.fixture
def sampler():
    return Sampler("expected")


@pytest.fixture
def star():
    return star_graph(6)


@pytest.fixture
def pivot_graph():
    # x -> h -> {d1, d2}: h has the largest out-degree, x is its only ancestor
    return build_influence_graph(
        [("x", "h", 1.0), ("h", "d1", 1.0), ("h", "d2", 1.0)]
    )


@pytest.fixture
def cyclic_graph():
    # 0 -> 1 -> 2 -> 0 is one SCC, 2 -> 3 -> 4 hangs off it
    return build_influence_graph(
        [(0, 1, 1.0), (1, 2, 1.0), (2, 0, 1.0), (2, 3, 1.0), (3, 4, 1.0)]
    )
