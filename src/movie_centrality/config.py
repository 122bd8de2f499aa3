"""
Configuration constants for the movie centrality analysis.

This module centralizes the default paths and tunables used by the pipeline.
Values can be overridden via environment variables.
"""
import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def _get_float_env(key: str, default: float, min_val: float = 0) -> float:
    """
    Safely parse float from environment variable with validation.

    Args:
        key: Environment variable name
        default: Default value if not set or invalid
        min_val: Minimum allowed value

    Returns:
        Validated float value
    """
    try:
        val = float(os.environ.get(key, default))
        if val < min_val:
            logger.warning(f"{key}={val} is below minimum {min_val}, using {min_val}")
            return min_val
        return val
    except ValueError:
        logger.warning(f"Invalid {key}='{os.environ.get(key)}', using default {default}")
        return default


def _get_int_env(key: str, default: int, min_val: int = 1) -> int:
    """
    Safely parse integer from environment variable with validation.

    Args:
        key: Environment variable name
        default: Default value if not set or invalid
        min_val: Minimum allowed value

    Returns:
        Validated integer value
    """
    try:
        val = int(os.environ.get(key, default))
        if val < min_val:
            logger.warning(f"{key}={val} is below minimum {min_val}, using {min_val}")
            return min_val
        return val
    except ValueError:
        logger.warning(f"Invalid {key}='{os.environ.get(key)}', using default {default}")
        return default


# Input files (MovieLens layout)
MOVIES_PATH = Path(os.environ.get("MOVIE_CENTRALITY_MOVIES", "data/movies.csv"))
RATINGS_PATH = Path(os.environ.get("MOVIE_CENTRALITY_RATINGS", "data/ratings.csv"))

# CSV format
GENRE_SEPARATOR = "|"     # Genres column in movies.csv
GENRE_KEY_JOINER = ","    # Joiner for the sorted genre-combination key

# Graph construction
DEFAULT_EDGE_WEIGHT = 0.0  # Weight used when a genre key has no aggregated rating
EDGE_WEIGHT_SOURCES = ("first", "min")
DEFAULT_EDGE_WEIGHT_SOURCE = "first"

# Pair enumeration is quadratic; warn above this many movies
PAIR_WARNING_THRESHOLD = _get_int_env("MOVIE_CENTRALITY_PAIR_WARNING", 20000, min_val=1)

# Reporting
DEFAULT_TOP_N = _get_int_env("MOVIE_CENTRALITY_TOP_N", 10, min_val=1)
DEFAULT_CLOSENESS_SCORE = _get_float_env("MOVIE_CENTRALITY_CLOSENESS_DEFAULT", 0.0, min_val=0.0)

# Closeness solves this many Dijkstra sources per batch (bounds the distance block)
CLOSENESS_CHUNK_SIZE = _get_int_env("MOVIE_CENTRALITY_CLOSENESS_CHUNK", 256, min_val=1)
