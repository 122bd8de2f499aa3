import importlib
import sys
from pathlib import Path

import pytest

# Ensure the package under test is importable without installation
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from movie_centrality.data import Movie  # noqa: E402
from movie_centrality.graph import SimilarityGraph  # noqa: E402


@pytest.fixture
def fresh_config(monkeypatch):
    """
    Reload config so environment overrides take effect, restoring it afterwards.
    """
    import movie_centrality.config as config

    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


@pytest.fixture
def write_csv(tmp_path):
    """Write rows (header first) to a CSV file under tmp_path."""

    def _write(name: str, lines: list[str]) -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n")
        return path

    return _write


@pytest.fixture
def sample_files(write_csv):
    movies = write_csv(
        "movies.csv",
        [
            "movieId,title,genres",
            "0,Toy Story (1995),Animation",
            "1,Jumanji (1995),Animation",
            "2,Heat (1995),Action|Crime",
            "3,Casino (1995),Animation",
            '4,"American President, The (1995)",Romance',
        ],
    )
    ratings = write_csv(
        "ratings.csv",
        [
            "userId,movieId,rating,timestamp",
            "1,0,4.0,964982703",
            "1,1, 3.5 ,964981247",
            "2,2,5.0,964982224",
            "2,99,1.0,964982224",
        ],
    )
    return movies, ratings


def make_movie(movie_id: int, genres=("Drama",), title: str | None = None) -> Movie:
    return Movie(movie_id=movie_id, title=title or f"Movie {movie_id}", genres=tuple(genres))


def make_graph(n_nodes: int, edges) -> SimilarityGraph:
    """Graph with ids 0..n_nodes-1 and the given (u, v) or (u, v, weight) edges."""
    graph = SimilarityGraph(capacity=n_nodes)
    for node_id in range(n_nodes):
        graph.add_node(make_movie(node_id))
    for edge in edges:
        u, v = edge[0], edge[1]
        weight = edge[2] if len(edge) > 2 else 1.0
        graph.add_edge(u, v, weight)
    return graph


def path_graph(k: int) -> SimilarityGraph:
    return make_graph(k, [(i, i + 1) for i in range(k - 1)])
