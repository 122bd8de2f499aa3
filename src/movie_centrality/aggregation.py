from __future__ import annotations

import logging
from collections import defaultdict
from pathlib import Path
from typing import Iterable, Mapping, Sequence

from .config import DEFAULT_EDGE_WEIGHT, GENRE_KEY_JOINER
from .data import Movie, Rating, read_ratings

logger = logging.getLogger(__name__)


def genres_key(genres: Iterable[str]) -> str:
    """Canonical genre-combination key: sorted labels joined with a comma."""
    return GENRE_KEY_JOINER.join(sorted(genres))


def build_genre_index(movies: Iterable[Movie]) -> dict[int, tuple[str, ...]]:
    """Map movie id to its genres. Later duplicates overwrite earlier ones."""
    return {movie.movie_id: movie.genres for movie in movies}


def aggregate_genre_ratings(
    ratings: Iterable[Rating],
    genre_index: Mapping[int, Sequence[str]],
) -> dict[str, float]:
    """
    Sum rating scores per genre.

    Every rating credits its full score to each genre of the rated movie.
    Ratings for movies missing from ``genre_index`` are skipped.
    """
    totals: dict[str, float] = defaultdict(float)
    skipped = 0
    for rating in ratings:
        genres = genre_index.get(rating.movie_id)
        if genres is None:
            skipped += 1
            continue
        for genre in genres:
            totals[genre] += rating.rating

    if skipped:
        logger.debug(f"Skipped {skipped} ratings for unknown movies")
    return dict(totals)


def lookup_weight(
    weights: Mapping[str, float],
    genres: Iterable[str],
    default: float = DEFAULT_EDGE_WEIGHT,
) -> float:
    """Aggregated weight for a movie's genre-combination key, or ``default``."""
    return weights.get(genres_key(genres), default)


def load_genre_ratings(
    path: str | Path,
    genre_index: Mapping[int, Sequence[str]],
) -> dict[str, float]:
    """Read a ratings file and aggregate it per genre."""
    return aggregate_genre_ratings(read_ratings(path), genre_index)
