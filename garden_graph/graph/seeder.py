from typing import List, Dict, Any, Optional
from dataclasses import dataclass, field

from ..data import GardenDataset, load_default_dataset
from ..types import EntityType, RelationType
from ..utils.logger import app_logger
from .sqlite_graph_store import SQLiteGraphStore


@dataclass
class SeedReport:
    """Summary of one seeding run."""
    nodes_written: Dict[str, int] = field(default_factory=dict)
    edges_written: Dict[str, int] = field(default_factory=dict)
    dangling_references: List[str] = field(default_factory=list)

    def count_node(self, node_type: EntityType):
        self.nodes_written[node_type.value] = self.nodes_written.get(node_type.value, 0) + 1

    def count_edge(self, edge_type: RelationType):
        self.edges_written[edge_type.value] = self.edges_written.get(edge_type.value, 0) + 1

    @property
    def total_nodes(self) -> int:
        return sum(self.nodes_written.values())

    @property
    def total_edges(self) -> int:
        return sum(self.edges_written.values())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "nodes_written": self.nodes_written,
            "edges_written": self.edges_written,
            "total_nodes": self.total_nodes,
            "total_edges": self.total_edges,
            "dangling_references": self.dangling_references,
        }


class GraphSeeder:
    """Loads a garden dataset into the graph store.

    Reference nodes (seasons, soil types, sun exposures) are written before the
    plants and their edges. Every write is an upsert, so seeding the same
    dataset twice leaves the graph unchanged. Edges removed from a dataset are
    not deleted from an existing graph.
    """

    def __init__(self, store: SQLiteGraphStore):
        self.logger = app_logger.bind(component="graph_seeder")
        self.store = store

    def seed(self, dataset: Optional[GardenDataset] = None) -> SeedReport:
        """Upsert every entity and relationship of `dataset` (default: built-in dataset)."""
        if dataset is None:
            dataset = load_default_dataset()

        self.logger.info("Seeding knowledge graph...")
        report = SeedReport()
        known_ids = dataset.reference_ids()

        for season in dataset.seasons:
            self.store.upsert_node(season.id, EntityType.SEASON, season.model_dump(exclude={"id"}))
            report.count_node(EntityType.SEASON)

        for soil in dataset.soil_types:
            self.store.upsert_node(soil.id, EntityType.SOIL_TYPE, soil.model_dump(exclude={"id"}))
            report.count_node(EntityType.SOIL_TYPE)

        for sun in dataset.sun_exposures:
            self.store.upsert_node(sun.id, EntityType.SUN_EXPOSURE, sun.model_dump(exclude={"id"}))
            report.count_node(EntityType.SUN_EXPOSURE)

        for plant in dataset.plants:
            self.store.upsert_node(plant.id, EntityType.PLANT, plant.node_properties())
            report.count_node(EntityType.PLANT)

            targets = [(soil_id, RelationType.THRIVES_IN) for soil_id in plant.suitable_soils]
            if plant.sun_needs:
                targets.append((plant.sun_needs, RelationType.NEEDS))
            targets.extend((season_id, RelationType.GROWS_BEST_IN) for season_id in plant.growing_seasons)
            targets.extend((companion_id, RelationType.GROWS_WELL_WITH) for companion_id in plant.companion_plants)

            for target_id, relation in targets:
                self._link(plant.id, target_id, relation, known_ids, report)

        self.logger.info(
            f"Knowledge graph seeding complete: {report.total_nodes} nodes, "
            f"{report.total_edges} edges, {len(report.dangling_references)} dangling references"
        )
        return report

    def _link(self, source: str, target: str, relation: RelationType, known_ids: set, report: SeedReport):
        edge = self.store.upsert_edge(source, target, relation)
        report.count_edge(relation)

        if target not in known_ids and self.store.get_node(target) is None:
            report.dangling_references.append(edge.id)
            self.logger.warning(f"Edge {edge.id} points to unknown node '{target}'")
