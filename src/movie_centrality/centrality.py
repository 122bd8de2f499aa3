"""
Betweenness and closeness centrality over the movie similarity graph.

Betweenness follows Brandes' algorithm on hop counts and keeps the
undivided convention: every unordered pair is counted once from each
endpoint, so undirected scores are twice the textbook value.
Closeness uses weighted shortest paths but normalizes by the node count
of the whole graph, not of the component being scored.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable

import numpy as np
from scipy.sparse.csgraph import dijkstra
from tqdm import tqdm

from .config import CLOSENESS_CHUNK_SIZE
from .graph import SimilarityGraph

logger = logging.getLogger(__name__)


def _accumulate_source(graph: SimilarityGraph, source: int) -> dict[int, float]:
    """Dependencies of every node on ``source`` (one Brandes iteration)."""
    sigma: dict[int, float] = {source: 1.0}
    distance: dict[int, int] = {source: 0}
    predecessors: dict[int, list[int]] = {source: []}
    order: list[int] = []

    queue = deque([source])
    while queue:
        v = queue.popleft()
        order.append(v)
        for w in graph.neighbors(v):
            if w not in distance:
                distance[w] = distance[v] + 1
                sigma[w] = 0.0
                predecessors[w] = []
                queue.append(w)
            if distance[w] == distance[v] + 1:
                sigma[w] += sigma[v]
                predecessors[w].append(v)

    delta = dict.fromkeys(order, 0.0)
    for w in reversed(order):
        for v in predecessors[w]:
            delta[v] += (sigma[v] / sigma[w]) * (1.0 + delta[w])
    del delta[source]
    return delta


def betweenness_centrality(graph: SimilarityGraph, show_progress: bool = False) -> np.ndarray:
    """
    Unnormalized betweenness for every node, indexed by movie id.

    Edge weights are ignored. The returned array has one slot per id in the
    node table; isolated nodes and vacant slots score 0.0. O(V * E).
    """
    betweenness = np.zeros(graph.capacity, dtype=float)
    sources = graph.nodes()
    for source in tqdm(sources, desc="Betweenness", disable=not show_progress):
        for node_id, dependency in _accumulate_source(graph, source).items():
            betweenness[node_id] += dependency
    return betweenness


def closeness_centrality(
    graph: SimilarityGraph,
    component: Iterable[int],
    chunk_size: int = CLOSENESS_CHUNK_SIZE,
) -> dict[int, float]:
    """
    Closeness for the nodes of ``component`` using weighted shortest paths.

    closeness(v) = (N - 1) / sum of finite distances from v, where N is the
    node count of the whole graph. Nodes whose distance sum is zero are left
    out of the result. Sources are solved ``chunk_size`` at a time, so only a
    ``chunk_size x N`` distance block is held in memory.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    n = graph.node_count
    if n == 0:
        return {}

    matrix, ids = graph.to_sparse()
    position = {int(node_id): pos for pos, node_id in enumerate(ids)}
    members = [node_id for node_id in component if node_id in position]
    if not members:
        return {}

    closeness: dict[int, float] = {}
    for start in range(0, len(members), chunk_size):
        chunk = members[start:start + chunk_size]
        distances = np.atleast_2d(
            dijkstra(matrix, directed=False, indices=[position[m] for m in chunk])
        )
        totals = np.where(np.isfinite(distances), distances, 0.0).sum(axis=1)
        for node_id, total in zip(chunk, totals):
            if total > 0:
                closeness[node_id] = (n - 1.0) / float(total)
    logger.debug(f"Computed closeness for {len(closeness)} of {len(members)} component nodes")
    return closeness
