from typing import Any, Iterable, Set

import networkx as nx

from pmcim.influence import Sampler


class Evaluator:
    """
    Common interface of seed-selection evaluators.

    select() returns at most k seeds for the influence graph, never picking a
    node from `activated`.
    """

    def select(
        self,
        graph: nx.DiGraph,
        sampler: Sampler,
        activated: Iterable[Any],
        k: int,
    ) -> Set[Any]:
        raise NotImplementedError
