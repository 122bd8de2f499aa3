from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field
from typing import Generic, Iterable, Mapping, Sequence, TypeVar

from .config import DEFAULT_CLOSENESS_SCORE
from .data import Movie
from .graph import SimilarityGraph

logger = logging.getLogger(__name__)

T = TypeVar('T')


class BoundedMinHeap(Generic[T]):
    """
    Fixed-capacity min-heap that keeps the highest-scoring items.

    Tie policy: a candidate only displaces the current minimum when its score
    is strictly greater, so among equal scores the first-seen items stay.
    When a minimum has to go, the most recently inserted of the tied minima
    is evicted first. Draining orders equal scores by insertion.
    """

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError("capacity must be non-negative")
        self.capacity = capacity
        self._heap: list[tuple[float, int, T]] = []
        self._seq = 0

    def __len__(self) -> int:
        return len(self._heap)

    def peek_min(self) -> float | None:
        return self._heap[0][0] if self._heap else None

    def push(self, score: float, item: T) -> bool:
        """Offer an item; returns True if it was kept."""
        if self.capacity == 0:
            return False
        entry = (score, -self._seq, item)
        self._seq += 1
        if len(self._heap) < self.capacity:
            heapq.heappush(self._heap, entry)
            return True
        if score > self._heap[0][0]:
            heapq.heapreplace(self._heap, entry)
            return True
        return False

    def drain(self) -> list[tuple[float, T]]:
        """Remove and return all entries, highest score first."""
        ordered = sorted(self._heap, key=lambda e: (-e[0], -e[1]))
        self._heap = []
        return [(score, item) for score, _, item in ordered]


@dataclass
class RankedItem:
    rank: int
    node_id: int
    movie: Movie | None
    score: float


@dataclass
class CentralityReport:
    top_n: int
    betweenness: list[RankedItem] = field(default_factory=list)
    closeness: list[RankedItem] = field(default_factory=list)


def top_n(scores: Iterable[tuple[int, float]], n: int) -> list[tuple[int, float]]:
    """Top ``n`` (node, score) pairs, highest first; first-seen wins ties."""
    heap: BoundedMinHeap[int] = BoundedMinHeap(n)
    for node_id, score in scores:
        heap.push(score, node_id)
    return [(node_id, score) for score, node_id in heap.drain()]


def _ranked(graph: SimilarityGraph, pairs: list[tuple[int, float]]) -> list[RankedItem]:
    return [
        RankedItem(rank=i, node_id=node_id, movie=graph.movie(node_id), score=score)
        for i, (node_id, score) in enumerate(pairs, 1)
    ]


def rank_by_betweenness(
    graph: SimilarityGraph,
    betweenness: Sequence[float],
    n: int,
) -> list[RankedItem]:
    pairs = top_n(((node_id, float(betweenness[node_id])) for node_id in graph.nodes()), n)
    return _ranked(graph, pairs)


def rank_by_closeness(
    graph: SimilarityGraph,
    closeness: Mapping[int, float],
    n: int,
    default: float = DEFAULT_CLOSENESS_SCORE,
) -> list[RankedItem]:
    """Nodes without a closeness value rank with ``default``."""
    pairs = top_n(((node_id, closeness.get(node_id, default)) for node_id in graph.nodes()), n)
    return _ranked(graph, pairs)


def analyze_top_movies(
    graph: SimilarityGraph,
    betweenness: Sequence[float],
    closeness: Mapping[int, float],
    n: int,
    default_closeness: float = DEFAULT_CLOSENESS_SCORE,
) -> CentralityReport:
    return CentralityReport(
        top_n=n,
        betweenness=rank_by_betweenness(graph, betweenness, n),
        closeness=rank_by_closeness(graph, closeness, n, default=default_closeness),
    )
