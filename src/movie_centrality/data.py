"""
CSV loaders for the MovieLens-style movies and ratings files.

Loaders return fully parsed records; any unreadable file or unparsable field
raises :class:`DataLoadError` so the analysis never runs on partial data.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import pandas as pd

from .config import GENRE_SEPARATOR

logger = logging.getLogger(__name__)

MOVIE_COLUMNS = ("movieId", "title", "genres")
RATING_COLUMNS = ("userId", "movieId", "rating", "timestamp")


class DataLoadError(RuntimeError):
    """Raised when an input file is missing or holds an unparsable record."""

    def __init__(self, path: str | Path, message: str):
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")


@dataclass(frozen=True)
class Movie:
    movie_id: int
    title: str
    genres: tuple[str, ...]


@dataclass(frozen=True)
class Rating:
    user_id: int
    movie_id: int
    rating: float
    timestamp: int


def parse_genres(raw: str) -> tuple[str, ...]:
    """Split a pipe-delimited genres field into labels."""
    return tuple(raw.split(GENRE_SEPARATOR))


def _read_frame(
    path: str | Path,
    columns: tuple[str, ...],
    required: tuple[str, ...] = (),
) -> pd.DataFrame:
    """Read a CSV as strings; rows with an empty required field are rejected."""
    try:
        frame = pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
    except FileNotFoundError as exc:
        raise DataLoadError(path, "file not found") from exc
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        raise DataLoadError(path, f"could not parse CSV ({exc})") from exc

    frame.columns = [str(c).strip() for c in frame.columns]
    missing = [c for c in columns if c not in frame.columns]
    if missing:
        raise DataLoadError(path, f"missing columns: {', '.join(missing)}")

    if required and len(frame):
        empty = frame[list(required)].fillna("").eq("").any(axis=1)
        if empty.any():
            row_number = int(empty.to_numpy().argmax()) + 2  # header is line 1
            raise DataLoadError(path, f"line {row_number}: missing field")
    return frame


def _parse_column(
    frame: pd.DataFrame,
    column: str,
    parser: Callable[[str], int | float],
    path: str | Path,
) -> list:
    values = []
    for row_number, raw in enumerate(frame[column], start=2):  # header is line 1
        try:
            values.append(parser(raw.strip()))
        except ValueError as exc:
            raise DataLoadError(path, f"line {row_number}: invalid {column} {raw!r}") from exc
    return values


def read_movies(path: str | Path) -> list[Movie]:
    """Load movies in file order."""
    frame = _read_frame(path, MOVIE_COLUMNS, required=("movieId", "genres"))
    ids = _parse_column(frame, "movieId", int, path)
    movies = [
        Movie(movie_id=movie_id, title=title, genres=parse_genres(genres))
        for movie_id, title, genres in zip(ids, frame["title"], frame["genres"])
    ]
    logger.debug(f"Loaded {len(movies)} movies from {path}")
    return movies


def read_ratings(path: str | Path) -> list[Rating]:
    """Load ratings; surrounding whitespace in fields is ignored."""
    frame = _read_frame(path, RATING_COLUMNS, required=RATING_COLUMNS)
    ratings = [
        Rating(user_id=user_id, movie_id=movie_id, rating=rating, timestamp=timestamp)
        for user_id, movie_id, rating, timestamp in zip(
            _parse_column(frame, "userId", int, path),
            _parse_column(frame, "movieId", int, path),
            _parse_column(frame, "rating", float, path),
            _parse_column(frame, "timestamp", int, path),
        )
    ]
    logger.debug(f"Loaded {len(ratings)} ratings from {path}")
    return ratings
