# src/pmcim/evaluators/contraction.py

"""
Live-edge sampling fused with SCC contraction.

contract_live_graph runs Tarjan's algorithm on the influence graph, but an
edge (u, v) is only followed when a uniform draw beats the probability the
sampler gives for it in this round. Only edges the traversal actually
reaches are ever sampled. The strongly connected components of the live
sample are then contracted into a DAG over component ids.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple
import random

import networkx as nx

from pmcim.influence import DIST_ATTR, Sampler, SingleInfluence


@dataclass
class Contraction:
    """
    One round's contracted live-edge sample.

    Attributes:
        component_of: original node -> component id.
        members: component id -> original nodes in it (activated nodes excluded).
        dag: acyclic nx.DiGraph over component ids; every edge is certain.
    """

    component_of: Dict[Any, int]
    members: Dict[int, Set[Any]]
    dag: nx.DiGraph


def contract_live_graph(
    graph: nx.DiGraph,
    sampler: Sampler,
    rng: random.Random,
    activated: Iterable[Any] = (),
    keep_all_live_edges: bool = False,
) -> Contraction:
    """
    Sample one live-edge graph and contract its SCCs.

    The DFS uses an explicit work stack of (node, successor iterator) frames,
    so discovery order and lowlink updates are the same as the recursive
    formulation while deep graphs do not hit the recursion limit.

    Args:
        graph: Directed influence graph (edges carry DIST_ATTR).
        sampler: Sampler giving the live probability of each edge.
        rng: Random source for this round.
        activated: Nodes kept in the traversal but left out of `members`.
        keep_all_live_edges: If False, the DAG only holds the DFS tree links
            between components (a spanning structure). If True, every live
            edge between two components becomes a DAG edge.

    Returns:
        Contraction with component ids 0..c-1 in SCC emission order.
    """
    blocked: Set[Any] = set(activated)

    index: Dict[Any, int] = {}
    lowlink: Dict[Any, int] = {}
    pred: Dict[Any, Any] = {}
    stack: List[Any] = []
    on_stack: Set[Any] = set()
    live_edges: List[Tuple[Any, Any]] = []

    component_of: Dict[Any, int] = {}
    members: Dict[int, Set[Any]] = {}
    cur_index = 0
    num_components = 0

    for root in graph.nodes():
        if root in index:
            continue

        pred[root] = root
        index[root] = lowlink[root] = cur_index
        cur_index += 1
        stack.append(root)
        on_stack.add(root)
        work = [(root, iter(graph.successors(root)))]

        while work:
            node, neighbours = work[-1]

            child: Optional[Any] = None
            for target in neighbours:
                p_live = sampler.draw(graph[node][target][DIST_ATTR], rng)
                if rng.random() >= p_live:
                    continue
                if keep_all_live_edges:
                    live_edges.append((node, target))
                if target not in index:
                    child = target
                    break
                if target in on_stack:
                    lowlink[node] = min(lowlink[node], index[target])

            if child is not None:
                pred[child] = node
                index[child] = lowlink[child] = cur_index
                cur_index += 1
                stack.append(child)
                on_stack.add(child)
                work.append((child, iter(graph.successors(child))))
                continue

            # all live out-edges of node explored
            work.pop()
            if lowlink[node] == index[node]:
                component: Set[Any] = set()
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component_of[member] = num_components
                    if member not in blocked:
                        component.add(member)
                    if member == node:
                        break
                members[num_components] = component
                num_components += 1

            if work:
                parent = work[-1][0]
                lowlink[parent] = min(lowlink[parent], lowlink[node])

    dag = nx.DiGraph()
    dag.add_nodes_from(range(num_components))

    if keep_all_live_edges:
        links: Iterable[Tuple[Any, Any]] = live_edges
    else:
        links = ((parent, node) for node, parent in pred.items())

    for u, v in links:
        cu, cv = component_of[u], component_of[v]
        if cu != cv and not dag.has_edge(cu, cv):
            dag.add_edge(cu, cv, **{DIST_ATTR: SingleInfluence(1.0)})

    return Contraction(component_of=component_of, members=members, dag=dag)


def select_pivot(dag: nx.DiGraph) -> Optional[int]:
    """Component with the largest out-degree; the first one wins ties."""
    pivot: Optional[int] = None
    best = -1
    for node in dag.nodes():
        degree = dag.out_degree(node)
        if degree > best:
            pivot, best = node, degree
    return pivot
