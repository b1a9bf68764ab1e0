import os
from typing import Any, Iterable, Optional, Tuple

import networkx as nx

from pmcim.influence import DIST_ATTR, BetaInfluence, SingleInfluence


def build_influence_graph(
    edges: Iterable[Tuple[Any, Any, float]],
    prior: Optional[Tuple[float, float]] = None,
) -> nx.DiGraph:
    """
    Build a directed influence graph from (src, tgt, prob) triples.

    Args:
        edges: Iterable of (u, v, p) with p in [0, 1].
        prior: Optional (alpha, beta) pseudo-counts. When given, each edge gets a
               BetaInfluence centred on p with alpha + beta observations worth of
               confidence; otherwise a SingleInfluence(p).

    Returns:
        nx.DiGraph whose edges carry their distribution under DIST_ATTR.
    """
    G = nx.DiGraph()
    for u, v, p in edges:
        p = float(p)
        if p < 0.0 or p > 1.0:
            raise ValueError(f"Edge ({u}, {v}) has probability {p} outside [0, 1].")

        if prior is None:
            dist = SingleInfluence(p)
        else:
            strength = float(prior[0]) + float(prior[1])
            # keep both parameters strictly positive at p = 0 or p = 1
            p_clamped = min(max(p, 1e-6), 1.0 - 1e-6)
            dist = BetaInfluence(p_clamped * strength, (1.0 - p_clamped) * strength)

        G.add_edge(u, v, **{DIST_ATTR: dist})
    return G


def read_graph(path: str, prior: Optional[Tuple[float, float]] = None) -> nx.DiGraph:
    if not os.path.exists(path):
        raise FileNotFoundError(f"Graph file not found: {path}")

    # src tgt prob, one edge per line
    raw = nx.read_edgelist(
        path,
        nodetype=int,
        data=(("p", float),),
        create_using=nx.DiGraph,
    )
    return build_influence_graph(
        ((u, v, data["p"]) for u, v, data in raw.edges(data=True)),
        prior=prior,
    )
