# src/pmcim/diffusion/independent_cascade.py

"""
Independent Cascade (IC) diffusion on a directed influence graph.

Used to score a seed set after selection:
- run_ic_diffusion: one cascade
- estimate_spread: Monte Carlo estimate of the expected spread
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Set
import random

import networkx as nx
import numpy as np

from pmcim.influence import DIST_ATTR, Sampler


class DiffusionResult:
    """
    Container for the result of a single diffusion run.

    Attributes:
        activated_by_step: list of sets, where activated_by_step[t]
            is the set of nodes newly activated at step t (t=0 is the seeds).
        all_activated: set of all nodes activated by this run.
    """

    def __init__(self, activated_by_step: List[Set[Any]]):
        self.activated_by_step: List[Set[Any]] = activated_by_step
        all_nodes: Set[Any] = set()
        for s in activated_by_step:
            all_nodes |= s
        self.all_activated: Set[Any] = all_nodes

    def num_activated(self) -> int:
        """Total number of activated nodes."""
        return len(self.all_activated)


def run_ic_diffusion(
    graph: nx.DiGraph,
    seed_set: Iterable[Any],
    sampler: Sampler,
    rng: Optional[random.Random] = None,
    activated: Iterable[Any] = (),
    max_steps: Optional[int] = None,
) -> DiffusionResult:
    """
    Run one Independent Cascade simulation.

    Model:
        - seed_set is active at step 0.
        - Each node activated at step t gets one chance to activate each
          inactive out-neighbour v, succeeding with the probability the
          sampler draws from the edge's distribution.
        - Nodes in `activated` were activated by earlier campaigns: they are
          never re-activated and never counted.

    Args:
        graph: Directed influence graph (edges carry DIST_ATTR).
        seed_set: Initial active nodes.
        sampler: Sampler turning edge distributions into probabilities.
        rng: Optional random.Random instance for reproducibility.
        activated: Nodes that cannot be activated again.
        max_steps: Optional max number of steps. If None, run until no change.
    """
    if rng is None:
        rng = random.Random()

    blocked: Set[Any] = set(activated)
    seeds = {s for s in seed_set if s not in blocked}

    activated_by_step: List[Set[Any]] = [set(seeds)]
    ever_active: Set[Any] = set(seeds)

    step = 0
    while True:
        if max_steps is not None and step >= max_steps:
            break

        frontier = activated_by_step[-1]
        if not frontier:
            break

        newly_active: Set[Any] = set()
        for u in frontier:
            for v in graph.successors(u):
                if v in ever_active or v in blocked or v in newly_active:
                    continue
                p_uv = sampler.draw(graph[u][v][DIST_ATTR], rng)
                if rng.random() < p_uv:
                    newly_active.add(v)

        if not newly_active:
            break

        activated_by_step.append(newly_active)
        ever_active |= newly_active
        step += 1

    return DiffusionResult(activated_by_step)


@dataclass
class SpreadEstimate:
    """
    Monte Carlo estimate of the expected spread of one seed set.

    Attributes:
        mean: average number of activated nodes over all runs.
        std: standard deviation of that number.
        num_runs: number of simulated cascades.
    """

    mean: float
    std: float
    num_runs: int


def estimate_spread(
    graph: nx.DiGraph,
    seed_set: Iterable[Any],
    sampler: Sampler,
    num_runs: int = 100,
    base_seed: Optional[int] = None,
    activated: Iterable[Any] = (),
    max_steps: Optional[int] = None,
) -> SpreadEstimate:
    """
    Estimate the expected spread of seed_set via Monte Carlo.

    Run i uses random.Random(base_seed + i), so a fixed base_seed gives a
    reproducible estimate.
    """
    if num_runs < 1:
        raise ValueError(f"num_runs must be positive, got {num_runs}.")

    seed_set = list(seed_set)
    activated = set(activated)

    spreads = np.empty(num_runs, dtype=float)
    for i in range(num_runs):
        rng = random.Random(None if base_seed is None else base_seed + i)
        res = run_ic_diffusion(
            graph=graph,
            seed_set=seed_set,
            sampler=sampler,
            rng=rng,
            activated=activated,
            max_steps=max_steps,
        )
        spreads[i] = res.num_activated()

    return SpreadEstimate(
        mean=float(spreads.mean()),
        std=float(spreads.std()),
        num_runs=num_runs,
    )
