from dataclasses import dataclass

from .config import (
    DEFAULT_CLOSENESS_SCORE,
    DEFAULT_EDGE_WEIGHT,
    DEFAULT_EDGE_WEIGHT_SOURCE,
    DEFAULT_TOP_N,
    EDGE_WEIGHT_SOURCES,
)


@dataclass
class GraphConfig:
    """
    Configuration for similarity graph construction and centrality reporting.

    Defaults weight each pair by its first movie; ``edge_weight_source="min"`` is
    the symmetric variant that consults both movies of a pair.
    """

    # Which movie(s) of a pair supply the edge weight ("first" or "min")
    edge_weight_source: str = DEFAULT_EDGE_WEIGHT_SOURCE

    # Weight used when a genre key has no aggregated rating
    default_weight: float = DEFAULT_EDGE_WEIGHT

    # Score used for movies without a closeness value when ranking
    default_closeness: float = DEFAULT_CLOSENESS_SCORE

    # Number of movies per ranked list
    top_n: int = DEFAULT_TOP_N

    # tqdm progress bar over betweenness sources
    show_progress: bool = False

    def __post_init__(self) -> None:
        # Validate eagerly so mistakes fail fast.
        self.validate()

    def validate(self) -> None:
        if self.edge_weight_source not in EDGE_WEIGHT_SOURCES:
            raise ValueError(
                f"edge_weight_source must be one of {', '.join(EDGE_WEIGHT_SOURCES)}"
            )
        if self.default_weight < 0:
            raise ValueError("default_weight must be non-negative")
        if self.default_closeness < 0:
            raise ValueError("default_closeness must be non-negative")
        if self.top_n < 0:
            raise ValueError("top_n must be non-negative")
