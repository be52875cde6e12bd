#!/usr/bin/env python3
"""
Garden Knowledge Graph - command line entry point

Seeds the SQLite garden graph and runs plant suitability lookups against it.
Results are printed to stdout as JSON.
"""

import argparse
import json
import sys

from garden_graph.config import settings
from garden_graph.data import GardenDataset
from garden_graph.errors import GraphStoreError
from garden_graph.graph import GraphCsvExporter, GraphSeeder, PlantQueryEngine, SQLiteGraphStore
from garden_graph.utils.logger import app_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Garden Knowledge Graph")
    parser.add_argument("--db", default=settings.graph_db_path, help="Path to the SQLite graph file")
    sub = parser.add_subparsers(dest="command", required=True)

    seed = sub.add_parser("seed", help="Load a dataset into the graph")
    seed.add_argument("--dataset", help="JSON dataset file (defaults to the built-in Irish dataset)")
    seed.add_argument("--reset", action="store_true", help="Clear the graph before seeding")

    query = sub.add_parser("query", help="Find plants by soil, sun exposure and season")
    query.add_argument("--soil-type")
    query.add_argument("--sun-exposure")
    query.add_argument("--season")
    query.add_argument("--fallback", action="store_true", help="Relax conditions when nothing matches")

    neighbors = sub.add_parser("neighbors", help="List 1-hop outgoing neighbors of a node")
    neighbors.add_argument("node_id")

    plant = sub.add_parser("plant", help="Show a plant with its soils, seasons and companions")
    plant.add_argument("plant_id")

    sub.add_parser("stats", help="Show node and relationship counts")

    export = sub.add_parser("export", help="Export nodes and relationships to CSV")
    export.add_argument("--output-dir", default=settings.export_dir)

    return parser


def run_command(args: argparse.Namespace, store: SQLiteGraphStore):
    """Execute one CLI command and return a JSON-serializable result."""
    engine = PlantQueryEngine(store)

    if args.command == "seed":
        if args.reset:
            store.clear_database()
        dataset = GardenDataset.from_json_file(args.dataset) if args.dataset else None
        return GraphSeeder(store).seed(dataset).to_dict()

    if args.command == "query":
        if args.fallback:
            return engine.find_plants_with_fallback(
                soil_type=args.soil_type, sun_exposure=args.sun_exposure, season=args.season
            ).to_dict()
        plants = engine.find_plants_by_suitability(
            soil_type=args.soil_type, sun_exposure=args.sun_exposure, season=args.season
        )
        return [plant.to_dict() for plant in plants]

    if args.command == "neighbors":
        return [neighbor.to_dict() for neighbor in store.get_outgoing_neighbors(args.node_id)]

    if args.command == "plant":
        profile = engine.get_plant_profile(args.plant_id)
        return profile.to_dict() if profile else None

    if args.command == "stats":
        return store.get_database_stats()

    if args.command == "export":
        files = GraphCsvExporter(store).export(args.output_dir)
        return {"files": [str(path) for path in files]}

    raise ValueError(f"Unknown command: {args.command}")


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    args = build_parser().parse_args(argv)
    logger = app_logger.bind(component="cli")

    try:
        with SQLiteGraphStore(args.db) as store:
            result = run_command(args, store)
    except (GraphStoreError, OSError, ValueError) as e:
        logger.error(f"Command {args.command} failed: {e}")
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
