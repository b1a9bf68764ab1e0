import random

import pytest

from pmcim.diffusion import estimate_spread, run_ic_diffusion
from pmcim.graphs import build_influence_graph

from conftest import star_graph


def test_certain_edges_activate_everything_reachable(sampler):
    G = build_influence_graph([(0, 1, 1.0), (1, 2, 1.0), (3, 4, 1.0)])
    res = run_ic_diffusion(G, {0}, sampler, rng=random.Random(0))

    assert res.all_activated == {0, 1, 2}
    assert res.activated_by_step == [{0}, {1}, {2}]


def test_zero_probability_stops_at_seeds(sampler):
    G = star_graph(4, prob=0.0)
    res = run_ic_diffusion(G, {0}, sampler, rng=random.Random(0))
    assert res.num_activated() == 1


def test_max_steps_limits_cascade(sampler):
    G = build_influence_graph([(0, 1, 1.0), (1, 2, 1.0)])
    res = run_ic_diffusion(G, {0}, sampler, rng=random.Random(0), max_steps=1)
    assert res.all_activated == {0, 1}


def test_activated_nodes_block_and_are_not_counted(sampler):
    G = build_influence_graph([(0, 1, 1.0), (1, 2, 1.0)])
    res = run_ic_diffusion(G, {0}, sampler, rng=random.Random(0), activated={1})
    assert res.all_activated == {0}


def test_estimate_spread_on_star(sampler):
    G = star_graph(5)
    est = estimate_spread(G, [0], sampler, num_runs=10, base_seed=1)
    assert est.mean == pytest.approx(6.0)
    assert est.std == pytest.approx(0.0)
    assert est.num_runs == 10


def test_estimate_spread_is_reproducible(sampler):
    G = star_graph(20, prob=0.3)
    a = estimate_spread(G, [0], sampler, num_runs=50, base_seed=3)
    b = estimate_spread(G, [0], sampler, num_runs=50, base_seed=3)
    assert a == b
    assert 1.0 <= a.mean <= 21.0


def test_estimate_spread_rejects_zero_runs(sampler):
    with pytest.raises(ValueError):
        estimate_spread(star_graph(2), [0], sampler, num_runs=0)
