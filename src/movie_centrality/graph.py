from __future__ import annotations

import logging
from typing import Iterator, Mapping, Sequence

import numpy as np
from scipy import sparse

from .aggregation import lookup_weight
from .config import DEFAULT_EDGE_WEIGHT, DEFAULT_EDGE_WEIGHT_SOURCE, EDGE_WEIGHT_SOURCES, PAIR_WARNING_THRESHOLD
from .data import Movie

logger = logging.getLogger(__name__)


class NodeTable:
    """
    Identifier-indexed node store.

    Slot position equals the movie id, so ids can be used directly as node
    references. Capacity only grows through :meth:`extend`; placing a movie
    whose id lies outside the table is rejected rather than resizing.
    """

    def __init__(self, capacity: int = 0):
        self._slots: list[Movie | None] = []
        self._count = 0
        self.extend(capacity)

    @property
    def capacity(self) -> int:
        return len(self._slots)

    def __len__(self) -> int:
        return self._count

    def __contains__(self, node_id: int) -> bool:
        return 0 <= node_id < len(self._slots) and self._slots[node_id] is not None

    def extend(self, capacity: int) -> None:
        if capacity > len(self._slots):
            self._slots.extend([None] * (capacity - len(self._slots)))

    def place(self, movie: Movie) -> bool:
        """Store ``movie`` in the slot matching its id; False if invalid or taken."""
        node_id = movie.movie_id
        if not 0 <= node_id < len(self._slots):
            return False
        if self._slots[node_id] is not None:
            return False
        self._slots[node_id] = movie
        self._count += 1
        return True

    def get(self, node_id: int) -> Movie | None:
        if node_id in self:
            return self._slots[node_id]
        return None

    def ids(self) -> list[int]:
        """Occupied slots in ascending order."""
        return [idx for idx, movie in enumerate(self._slots) if movie is not None]


class SimilarityGraph:
    """Undirected, simple, weighted graph over an identifier-indexed node table."""

    def __init__(self, capacity: int = 0):
        self.nodes_table = NodeTable(capacity)
        self._adjacency: dict[int, dict[int, float]] = {}
        self._edge_count = 0

    # Node helpers -----------------------------------------------------
    @property
    def capacity(self) -> int:
        return self.nodes_table.capacity

    @property
    def node_count(self) -> int:
        return len(self.nodes_table)

    def add_node(self, movie: Movie) -> bool:
        if not self.nodes_table.place(movie):
            return False
        self._adjacency[movie.movie_id] = {}
        return True

    def has_node(self, node_id: int) -> bool:
        return node_id in self.nodes_table

    def movie(self, node_id: int) -> Movie | None:
        return self.nodes_table.get(node_id)

    def nodes(self) -> list[int]:
        return self.nodes_table.ids()

    # Edge helpers -----------------------------------------------------
    @property
    def edge_count(self) -> int:
        return self._edge_count

    def add_edge(self, u: int, v: int, weight: float) -> bool:
        """Add an undirected edge; no-op for missing nodes, self loops or repeats."""
        if u == v or not (self.has_node(u) and self.has_node(v)):
            return False
        if v in self._adjacency[u]:
            return False
        self._adjacency[u][v] = weight
        self._adjacency[v][u] = weight
        self._edge_count += 1
        return True

    def neighbors(self, node_id: int) -> list[int]:
        return list(self._adjacency.get(node_id, {}))

    def weight(self, u: int, v: int) -> float | None:
        return self._adjacency.get(u, {}).get(v)

    def edges(self) -> Iterator[tuple[int, int, float]]:
        """Each undirected edge once, as (low id, high id, weight)."""
        for u in sorted(self._adjacency):
            for v, weight in self._adjacency[u].items():
                if u < v:
                    yield u, v, weight

    def to_sparse(self) -> tuple[sparse.csr_matrix, np.ndarray]:
        """
        Symmetric CSR adjacency over compact positions.

        Returns the matrix and the array mapping position -> node id.
        """
        ids = np.array(self.nodes(), dtype=np.int64)
        position = {int(node_id): pos for pos, node_id in enumerate(ids)}
        rows: list[int] = []
        cols: list[int] = []
        data: list[float] = []
        for u, v, weight in self.edges():
            rows.extend((position[u], position[v]))
            cols.extend((position[v], position[u]))
            data.extend((weight, weight))
        n = len(ids)
        matrix = sparse.csr_matrix((data, (rows, cols)), shape=(n, n), dtype=float)
        return matrix, ids


def _pair_weight(
    first: float,
    second: float,
    edge_weight_source: str,
) -> float:
    if edge_weight_source == "min":
        return min(first, second)
    return first


def build_similarity_graph(
    movies: Sequence[Movie],
    genre_ratings: Mapping[str, float],
    edge_weight_source: str = DEFAULT_EDGE_WEIGHT_SOURCE,
    default_weight: float = DEFAULT_EDGE_WEIGHT,
) -> SimilarityGraph:
    """
    Build the movie similarity graph.

    Every unordered pair (i < j in input order) is considered once. With
    ``edge_weight_source="first"`` the weight comes from the genre key of the
    first movie of the pair only, so the result depends on input order for
    movies with different genres. ``"min"`` uses the smaller of both movies'
    weights. An edge is added when the weight is strictly positive and both
    ids name existing nodes.

    Pair enumeration is O(n^2); practical up to low tens of thousands of movies.
    """
    if edge_weight_source not in EDGE_WEIGHT_SOURCES:
        raise ValueError(f"Unknown edge_weight_source '{edge_weight_source}'")

    if len(movies) > PAIR_WARNING_THRESHOLD:
        logger.warning(
            f"{len(movies)} movies exceeds {PAIR_WARNING_THRESHOLD}; "
            "quadratic pair enumeration may be slow."
        )

    valid_ids = [m.movie_id for m in movies if m.movie_id >= 0]
    graph = SimilarityGraph(capacity=max(valid_ids) + 1 if valid_ids else 0)

    for movie in movies:
        if movie.movie_id < 0:
            logger.warning(f"Skipping movie '{movie.title}' with invalid id {movie.movie_id}")
            continue
        if not graph.add_node(movie):
            logger.warning(f"Duplicate movie id {movie.movie_id}; keeping first entry")

    weights = [lookup_weight(genre_ratings, m.genres, default=default_weight) for m in movies]

    for i, movie1 in enumerate(movies):
        if edge_weight_source == "first" and weights[i] <= 0:
            continue
        for j in range(i + 1, len(movies)):
            weight = _pair_weight(weights[i], weights[j], edge_weight_source)
            if weight > 0:
                graph.add_edge(movie1.movie_id, movies[j].movie_id, weight)

    logger.debug(f"Built graph with {graph.node_count} nodes and {graph.edge_count} edges")
    return graph
