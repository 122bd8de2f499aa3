import argparse
import json
import logging
import sys

from .aggregation import build_genre_index, load_genre_ratings
from .centrality import betweenness_centrality, closeness_centrality
from .components import connected_components, find_largest_component, largest_component
from .config import DEFAULT_EDGE_WEIGHT_SOURCE, DEFAULT_TOP_N, EDGE_WEIGHT_SOURCES, MOVIES_PATH, RATINGS_PATH
from .data import DataLoadError, read_movies
from .graph import SimilarityGraph, build_similarity_graph
from .graph_config import GraphConfig
from .ranking import CentralityReport, RankedItem, analyze_top_movies

logger = logging.getLogger(__name__)


def _config_from_args(args: argparse.Namespace) -> GraphConfig:
    return GraphConfig(
        edge_weight_source=getattr(args, 'edge_weight_source', DEFAULT_EDGE_WEIGHT_SOURCE),
        top_n=getattr(args, 'top', DEFAULT_TOP_N),
        show_progress=getattr(args, 'progress', False),
    )


def _load_graph(args: argparse.Namespace, config: GraphConfig) -> SimilarityGraph:
    """Read both input files and build the similarity graph."""
    movies = read_movies(args.movies)
    genre_ratings = load_genre_ratings(args.ratings, build_genre_index(movies))
    logger.debug(f"Aggregated ratings for {len(genre_ratings)} genres")
    return build_similarity_graph(
        movies,
        genre_ratings,
        edge_weight_source=config.edge_weight_source,
        default_weight=config.default_weight,
    )


def _ranked_to_dict(item: RankedItem) -> dict:
    movie = item.movie
    return {
        "rank": item.rank,
        "movie_id": item.node_id,
        "title": movie.title if movie else None,
        "genres": list(movie.genres) if movie else [],
        "score": item.score,
    }


def _output_report(report: CentralityReport, output_format: str = 'text') -> None:
    """Log both ranked lists in the requested format."""
    if output_format == 'json':
        logger.info(json.dumps({
            "top_n": report.top_n,
            "betweenness": [_ranked_to_dict(r) for r in report.betweenness],
            "closeness": [_ranked_to_dict(r) for r in report.closeness],
        }, indent=2))
        return

    sections = [
        ("betweenness", report.betweenness),
        ("closeness", report.closeness),
    ]
    for metric, items in sections:
        logger.info(f"\nTop {report.top_n} movies by {metric} centrality:")
        for r in items:
            title = r.movie.title if r.movie else f"#{r.node_id}"
            genres = list(r.movie.genres) if r.movie else []
            logger.info(f"{r.rank}. {title} - Genres: {genres}, {metric} centrality: {r.score}")


def cmd_analyze(args: argparse.Namespace) -> None:
    """Build the graph and report the most central movies."""
    config = _config_from_args(args)
    graph = _load_graph(args, config)

    logger.info(f"Number of nodes in the graph: {graph.node_count}")
    logger.info(f"Number of edges in the graph: {graph.edge_count}")

    components = connected_components(graph)
    largest = largest_component(components)

    betweenness = betweenness_centrality(graph, show_progress=config.show_progress)
    closeness = closeness_centrality(graph, largest)

    report = analyze_top_movies(
        graph, betweenness, closeness, config.top_n,
        default_closeness=config.default_closeness,
    )
    _output_report(report, getattr(args, 'format', 'text'))


def cmd_stats(args: argparse.Namespace) -> None:
    """Show graph size and component structure."""
    config = _config_from_args(args)
    graph = _load_graph(args, config)
    components = connected_components(graph)

    logger.info("\nGraph Statistics:")
    logger.info(f"  Nodes: {graph.node_count}")
    logger.info(f"  Edges: {graph.edge_count}")
    logger.info(f"  Components: {len(components)}")
    if components:
        index = find_largest_component(components)
        logger.info(f"  Largest component: #{index} with {len(components[index])} movies")


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {value}")
    return number


def _add_input_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--movies", default=str(MOVIES_PATH),
                        help=f"Movies CSV (default: {MOVIES_PATH})")
    parser.add_argument("--ratings", default=str(RATINGS_PATH),
                        help=f"Ratings CSV (default: {RATINGS_PATH})")
    parser.add_argument("--edge-weight-source", choices=list(EDGE_WEIGHT_SOURCES), default=DEFAULT_EDGE_WEIGHT_SOURCE,
                        help="Weight edges from the first movie of each pair (default) or the min of both")


def main():
    parser = argparse.ArgumentParser(description="Movie similarity graph centrality")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # Analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Rank movies by betweenness and closeness")
    _add_input_args(analyze_parser)
    analyze_parser.add_argument("--top", type=_non_negative_int, default=DEFAULT_TOP_N,
                                help=f"Movies per ranked list (default: {DEFAULT_TOP_N})")
    analyze_parser.add_argument("--format", choices=['text', 'json'], default='text',
                                help="Output format")
    analyze_parser.add_argument("--progress", action="store_true",
                                help="Show a progress bar while computing betweenness")
    analyze_parser.set_defaults(func=cmd_analyze)

    # Stats command
    stats_parser = subparsers.add_parser("stats", help="Show graph statistics")
    _add_input_args(stats_parser)
    stats_parser.set_defaults(func=cmd_stats)

    args = parser.parse_args()

    # Configure logging based on verbosity
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        args.func(args)
    except DataLoadError as exc:
        logger.error(f"Failed to load data: {exc}")
        sys.exit(1)
