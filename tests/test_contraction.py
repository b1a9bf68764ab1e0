import random

import networkx as nx

from pmcim.evaluators.contraction import contract_live_graph, select_pivot
from pmcim.graphs import build_influence_graph

from conftest import random_influence_graph, star_graph


def _components(contraction):
    return {frozenset(m) for m in contraction.members.values()}


def test_partition_covers_every_node(sampler):
    G = random_influence_graph(n=60, p=0.08, edge_prob=0.4, seed=3)
    for i in range(5):
        c = contract_live_graph(G, sampler, random.Random(i))

        assert set(c.component_of) == set(G.nodes())
        union = set()
        for comp_id, members in c.members.items():
            assert not (union & members)
            union |= members
            for node in members:
                assert c.component_of[node] == comp_id
        assert union == set(G.nodes())
        assert set(c.dag.nodes()) == set(c.members)


def test_certain_edges_match_networkx_scc(sampler):
    G = random_influence_graph(n=80, p=0.04, edge_prob=1.0, seed=11)
    c = contract_live_graph(G, sampler, random.Random(0))

    expected = {frozenset(s) for s in nx.strongly_connected_components(G)}
    assert _components(c) == expected


def test_cycle_is_contracted(sampler, cyclic_graph):
    c = contract_live_graph(cyclic_graph, sampler, random.Random(0))

    assert c.component_of[0] == c.component_of[1] == c.component_of[2]
    assert len({c.component_of[n] for n in (0, 3, 4)}) == 3
    assert c.dag.number_of_nodes() == 3

    cycle = c.component_of[0]
    assert c.dag.has_edge(cycle, c.component_of[3])
    assert c.dag.has_edge(c.component_of[3], c.component_of[4])


def test_zero_probability_edges_are_never_live(sampler):
    G = build_influence_graph([(0, 1, 0.0), (1, 0, 0.0), (1, 2, 0.0)])
    c = contract_live_graph(G, sampler, random.Random(0))

    assert c.dag.number_of_nodes() == 3
    assert c.dag.number_of_edges() == 0


def test_reduced_graph_is_acyclic(sampler):
    G = random_influence_graph(n=120, p=0.05, edge_prob=0.5, seed=5)
    for keep_all in (False, True):
        for i in range(5):
            c = contract_live_graph(G, sampler, random.Random(i), keep_all_live_edges=keep_all)
            assert nx.is_directed_acyclic_graph(c.dag)


def test_full_condensation_matches_networkx(sampler):
    G = random_influence_graph(n=80, p=0.05, edge_prob=1.0, seed=2)
    c = contract_live_graph(G, sampler, random.Random(0), keep_all_live_edges=True)

    assert c.dag.number_of_edges() == nx.condensation(G).number_of_edges()


def test_spanning_structure_is_subset_of_condensation(sampler):
    G = random_influence_graph(n=80, p=0.05, edge_prob=1.0, seed=2)
    tree = contract_live_graph(G, sampler, random.Random(0))
    full = contract_live_graph(G, sampler, random.Random(0), keep_all_live_edges=True)

    assert tree.component_of == full.component_of
    assert set(tree.dag.edges()) <= set(full.dag.edges())


def test_deep_path_does_not_recurse(sampler):
    n = 5000
    G = build_influence_graph((i, i + 1, 1.0) for i in range(n - 1))
    c = contract_live_graph(G, sampler, random.Random(0))

    assert c.dag.number_of_nodes() == n
    assert c.dag.number_of_edges() == n - 1


def test_long_cycle_is_one_component(sampler):
    n = 3000
    G = build_influence_graph((i, (i + 1) % n, 1.0) for i in range(n))
    c = contract_live_graph(G, sampler, random.Random(0))

    assert len(c.members) == 1
    assert c.dag.number_of_nodes() == 1


def test_activated_nodes_are_left_out_of_members(sampler):
    G = star_graph(4)
    c = contract_live_graph(G, sampler, random.Random(0), activated={0, 2})

    assert set(c.component_of) == set(G.nodes())
    assert c.members[c.component_of[0]] == set()
    assert c.members[c.component_of[2]] == set()
    assert c.members[c.component_of[1]] == {1}


def test_same_rng_seed_gives_same_contraction(sampler):
    G = random_influence_graph(n=50, p=0.1, edge_prob=0.3, seed=9)
    a = contract_live_graph(G, sampler, random.Random(42))
    b = contract_live_graph(G, sampler, random.Random(42))

    assert a.component_of == b.component_of
    assert set(a.dag.edges()) == set(b.dag.edges())


def test_pivot_is_max_out_degree(sampler):
    G = star_graph(5)
    c = contract_live_graph(G, sampler, random.Random(0))

    assert select_pivot(c.dag) == c.component_of[0]


def test_pivot_ties_pick_first_node():
    dag = nx.DiGraph()
    dag.add_nodes_from([0, 1, 2, 3])
    dag.add_edge(1, 0)
    dag.add_edge(2, 3)

    assert select_pivot(dag) == 1


def test_pivot_of_empty_dag_is_none():
    assert select_pivot(nx.DiGraph()) is None
