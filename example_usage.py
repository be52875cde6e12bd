#!/usr/bin/env python3
"""
Example usage script for the Garden Knowledge Graph

Seeds an in-memory graph with the built-in Irish dataset and runs a few
recommendation queries without starting the API server.
"""

import json

from garden_graph.graph import GraphSeeder, PlantQueryEngine, SQLiteGraphStore
from garden_graph.utils.logger import app_logger


def show(title: str, payload):
    print(f"\n{title}")
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def main():
    logger = app_logger.bind(component="demo")

    with SQLiteGraphStore(":memory:") as store:
        report = GraphSeeder(store).seed()
        logger.info(f"Seeded {report.total_nodes} nodes and {report.total_edges} edges")

        engine = PlantQueryEngine(store)

        plants = engine.find_plants_by_suitability(soil_type="brown-earth", season="spring")
        show("Brown earth, spring:", [plant.to_dict() for plant in plants])

        plants = engine.find_plants_by_suitability(soil_type="peat", sun_exposure="full-sun")
        show("Peat, full sun:", [plant.to_dict() for plant in plants])

        result = engine.find_plants_with_fallback(soil_type="peat", season="winter")
        show("Peat, winter (with fallback):", result.to_dict())

        profile = engine.get_plant_profile("kale")
        show("Kale profile:", profile.to_dict())


if __name__ == "__main__":
    main()
