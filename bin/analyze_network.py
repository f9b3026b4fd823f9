#!/usr/bin/env python3
"""
Verse Network Analysis CLI

Computes network statistics over the Bible cross-reference graph:
verses are nodes, cross-references are edges.

Pipeline:
    1. Degree Centrality      → most connected verses
    2. Betweenness (sampled)  → bridge verses
    3. Clustering Coefficient → tightly-knit neighborhoods
    4. Hubs                   → high degree + low clustering
    5. Communities            → label propagation clusters

Usage:
    python bin/analyze_network.py --data merged_bible_references.json
    python bin/analyze_network.py --seed 42 --output output/stats.json
    python bin/analyze_network.py --path "GEN 1 1" "JOH 1 1"
    python bin/analyze_network.py --verse "JOH 3 16"
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import argparse
import dataclasses
import json
import logging
from typing import List, Optional

from versenet.application.container import Container
from versenet.config.settings import Settings


# ---------------------------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with clear grouping."""
    parser = argparse.ArgumentParser(
        prog="analyze_network",
        description="Network statistics for the Bible cross-reference graph.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  %(prog)s --data refs.json                  Analyze and display statistics
  %(prog)s --seed 42 -o stats.json           Reproducible run exported to JSON
  %(prog)s --graphml network.graphml         Export the graph with scores
  %(prog)s --path "GEN 1 1" "JOH 1 1"        Shortest reference path
  %(prog)s --verse "JOH 3 16"                Cross-references of one verse
""",
    )

    parser.add_argument("--data", "-d", metavar="FILE",
                        help="Verse cross-reference JSON (default: $VERSENET_DATA_FILE)")

    # --- Analysis parameters ---
    params = parser.add_argument_group("Analysis parameters")
    params.add_argument("--sample-size", type=int, help="Betweenness sample pairs (default: 200)")
    params.add_argument("--max-depth", type=int, help="Maximum path length in hops (default: 6)")
    params.add_argument("--iterations", type=int, help="Label propagation iterations (default: 5)")
    params.add_argument("--hubs", type=int, dest="hub_count", help="Number of hubs to flag (default: 30)")
    params.add_argument("--top", type=int, dest="top_n", help="Rows per ranking (default: 20)")
    params.add_argument("--seed", type=int, help="Random seed for reproducible results")

    # --- Path query ---
    parser.add_argument("--path", nargs=2, metavar=("FROM", "TO"),
                        help="Show the shortest path between two verse references and exit")
    parser.add_argument("--verse", metavar="REF",
                        help="Show the cross-references of one verse and exit")

    # --- Output ---
    output = parser.add_argument_group("Output")
    output.add_argument("--output", "-o", metavar="FILE", help="Export statistics to JSON file")
    output.add_argument("--graphml", metavar="FILE", help="Export graph with scores to GraphML")
    output.add_argument("--json", action="store_true", help="Print statistics as JSON to stdout")
    output.add_argument("--quiet", "-q", action="store_true", help="Suppress console display")
    output.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


def settings_from_args(args: argparse.Namespace, base: Optional[Settings] = None) -> Settings:
    """Overlay CLI flags on environment settings."""
    settings = base or Settings.from_env()
    overrides = {
        "data_file": args.data,
        "sample_size": args.sample_size,
        "max_depth": args.max_depth,
        "iterations": args.iterations,
        "hub_count": args.hub_count,
        "top_n": args.top_n,
        "seed": args.seed,
    }
    return dataclasses.replace(settings, **{k: v for k, v in overrides.items() if v is not None})


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def run_path_query(container: Container, args: argparse.Namespace) -> int:
    graph = container.verse_repository().load_graph()
    display = container.display_service()
    source_ref, target_ref = args.path

    source = graph.find_by_reference(source_ref)
    target = graph.find_by_reference(target_ref)
    for ref, verse in ((source_ref, source), (target_ref, target)):
        if verse is None:
            raise ValueError(f"Verse not found: {ref}")

    finder = container.path_finder()
    path = finder.shortest_path(source.id, target.id, graph)
    if args.json:
        labels = [graph.resolve(i).label for i in path] if path else None
        print(json.dumps({"from": source.label, "to": target.label, "path": labels}, indent=2))
    else:
        display.display_path(graph, path, source.label, target.label, finder.max_depth)
    return 0


def run_verse_query(container: Container, args: argparse.Namespace) -> int:
    graph = container.verse_repository().load_graph()
    verse = graph.find_by_reference(args.verse)
    if verse is None:
        raise ValueError(f"Verse not found: {args.verse}")

    if args.json:
        references = [v.label for v in graph.resolved_neighbors(verse.id)]
        print(json.dumps({
            "verse": verse.label,
            "book": verse.group,
            "refCount": verse.degree,
            "references": references,
        }, indent=2))
    else:
        container.display_service().display_verse(graph, verse)
    return 0


def run_statistics(container: Container, args: argparse.Namespace) -> int:
    graph = container.verse_repository().load_graph()
    service = container.statistics_service()
    display = container.display_service()

    def progress(phase: str, current: int, total: int) -> None:
        logging.getLogger("analyze_network").debug(f"{phase}: {current}/{total}")

    report = service.compute(graph, progress_callback=progress)

    if args.output:
        container.report_exporter().export_json(report, args.output)
        if not args.quiet:
            print(display.colored(f"\n✓ Statistics exported to: {args.output}", display.Colors.GREEN))

    if args.graphml:
        scores = {
            "degree_centrality": service.degree_centrality(graph),
            "betweenness": service.betweenness_centrality(graph),
            "clustering": service.clustering_coefficients(graph),
            "hub_score": service.hubs(graph).scores,
        }
        container.graphml_exporter().export_graphml(
            graph, args.graphml, scores=scores, partition=service.communities(graph),
        )
        if not args.quiet:
            print(display.colored(f"✓ Graph exported to: {args.graphml}", display.Colors.GREEN))

    if args.json:
        print(report.to_json())
    elif not args.quiet:
        display.display_report(report)
    return 0


# ---------------------------------------------------------------------------
# Entry Point
# ---------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Logging setup
    log_level = (
        logging.DEBUG if args.verbose
        else logging.WARNING if args.quiet or args.json
        else logging.INFO
    )
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    container = None
    try:
        container = Container(settings=settings_from_args(args))
        if args.path:
            return run_path_query(container, args)
        if args.verse:
            return run_verse_query(container, args)
        return run_statistics(container, args)

    except Exception as exc:
        display = Container().display_service()
        print(display.colored(f"Error: {exc}", display.Colors.RED), file=sys.stderr)
        if args.verbose:
            logging.exception("Analysis failed")
        return 1

    finally:
        if container is not None:
            container.close()


if __name__ == "__main__":
    sys.exit(main())
