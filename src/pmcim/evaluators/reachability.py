from collections import deque
from typing import Any, Collection, Optional, Set

import networkx as nx


def _bfs(
    dag: nx.DiGraph,
    source: Any,
    targets: Optional[Collection[Any]] = None,
    blocked: Collection[Any] = (),
) -> Set[Any]:
    """
    Forward BFS from source over dag.

    Collect mode (targets is None): return every node reachable from source,
    source itself excluded. Nodes in `blocked` are neither collected nor
    expanded.

    Existence mode: stop at the first reachable node in `targets` and return
    {source}; return an empty set when none is reachable.
    """
    if source not in dag:
        return set()

    found: Set[Any] = set()
    visited: Set[Any] = {source}
    queue = deque([source])

    while queue:
        cur = queue.popleft()
        for neigh in dag.successors(cur):
            if neigh in visited:
                continue
            visited.add(neigh)
            if neigh in blocked:
                continue
            if targets is None:
                found.add(neigh)
            elif neigh in targets:
                return {source}
            queue.append(neigh)

    return found


def reachable(dag: nx.DiGraph, source: Any, blocked: Collection[Any] = ()) -> Set[Any]:
    """Nodes forward-reachable from source (source excluded)."""
    return _bfs(dag, source, blocked=blocked)


def reaches_any(dag: nx.DiGraph, source: Any, targets: Collection[Any]) -> Set[Any]:
    """{source} if some node of targets is reachable from source, else an empty set."""
    return _bfs(dag, source, targets=targets)


def ancestors_of(dag: nx.DiGraph, pivot: Any, descendants: Collection[Any]) -> Set[Any]:
    """
    Nodes that can reach pivot, skipping pivot itself and its descendants
    (a DAG node below the pivot can never reach it).
    """
    ancestors: Set[Any] = set()
    for node in dag.nodes():
        if node == pivot or node in descendants:
            continue
        ancestors |= reaches_any(dag, node, (pivot,))
    return ancestors
