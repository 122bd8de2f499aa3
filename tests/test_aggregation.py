import random

from movie_centrality.aggregation import (
    aggregate_genre_ratings,
    build_genre_index,
    genres_key,
    load_genre_ratings,
    lookup_weight,
)
from movie_centrality.data import Rating, read_movies

from conftest import make_movie


def _rating(movie_id: int, score: float) -> Rating:
    return Rating(user_id=1, movie_id=movie_id, rating=score, timestamp=0)


def test_genres_key_is_sorted_and_comma_joined():
    assert genres_key(["Drama", "Action", "Crime"]) == "Action,Crime,Drama"
    assert genres_key(("Comedy",)) == "Comedy"
    assert genres_key([]) == ""


def test_rating_credits_every_genre_in_full():
    index = {1: ("Action", "Crime"), 2: ("Action",)}
    ratings = [_rating(1, 4.0), _rating(2, 2.5)]

    totals = aggregate_genre_ratings(ratings, index)

    assert totals == {"Action": 6.5, "Crime": 4.0}


def test_unknown_movies_are_skipped():
    index = {1: ("Drama",)}

    totals = aggregate_genre_ratings([_rating(1, 3.0), _rating(42, 5.0)], index)

    assert totals == {"Drama": 3.0}


def test_aggregation_is_order_independent():
    index = {i: ("Drama", "Comedy") if i % 2 else ("Horror",) for i in range(10)}
    ratings = [_rating(i % 10, 0.5 * (i % 7 + 1)) for i in range(50)]
    shuffled = list(ratings)
    random.Random(7).shuffle(shuffled)

    assert aggregate_genre_ratings(ratings, index) == aggregate_genre_ratings(shuffled, index)


def test_build_genre_index_maps_ids():
    movies = [make_movie(3, ("Drama",)), make_movie(8, ("Comedy", "Romance"))]

    assert build_genre_index(movies) == {3: ("Drama",), 8: ("Comedy", "Romance")}


def test_lookup_weight_uses_combination_key_and_explicit_default():
    weights = {"Action": 10.0, "Action,Crime": 3.0}

    assert lookup_weight(weights, ["Crime", "Action"]) == 3.0
    assert lookup_weight(weights, ["Action"]) == 10.0
    assert lookup_weight(weights, ["Drama"]) == 0.0
    assert lookup_weight(weights, ["Drama"], default=-1.0) == -1.0


def test_load_genre_ratings_reads_and_aggregates(sample_files):
    movies_path, ratings_path = sample_files
    index = build_genre_index(read_movies(movies_path))

    totals = load_genre_ratings(ratings_path, index)

    assert totals == {"Animation": 7.5, "Action": 5.0, "Crime": 5.0}
