from __future__ import annotations

import logging
from typing import Sequence

from scipy.sparse.csgraph import connected_components as _csgraph_components

from .graph import SimilarityGraph

logger = logging.getLogger(__name__)


def connected_components(graph: SimilarityGraph) -> list[list[int]]:
    """
    Partition node ids into connected groups.

    Uses strong connectivity on the symmetric adjacency, which is plain
    connectivity for an undirected graph. Groups follow scipy's label order;
    members are in ascending id order.
    """
    if graph.node_count == 0:
        return []

    matrix, ids = graph.to_sparse()
    n_components, labels = _csgraph_components(matrix, directed=True, connection="strong")

    groups: list[list[int]] = [[] for _ in range(n_components)]
    for node_id, label in zip(ids, labels):
        groups[label].append(int(node_id))
    logger.debug(f"Found {n_components} connected components")
    return groups


def find_largest_component(components: Sequence[Sequence[int]]) -> int:
    """Index of the largest group; ties keep the lowest index, empty input gives 0."""
    largest_index = 0
    max_size = 0
    for index, component in enumerate(components):
        if len(component) > max_size:
            max_size = len(component)
            largest_index = index
    return largest_index


def largest_component(components: Sequence[Sequence[int]]) -> list[int]:
    if not components:
        return []
    return list(components[find_largest_component(components)])
