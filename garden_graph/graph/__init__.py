"""
Graph module for storing, seeding and querying the garden knowledge graph.
"""

from .sqlite_graph_store import SQLiteGraphStore
from .query_engine import PlantQueryEngine
from .seeder import GraphSeeder, SeedReport
from .exporter import GraphCsvExporter

__all__ = [
    'SQLiteGraphStore',
    'PlantQueryEngine',
    'GraphSeeder',
    'SeedReport',
    'GraphCsvExporter',
]
