import json
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from garden_graph.data import GardenDataset, PlantRecord, load_default_dataset
from garden_graph.graph import GraphSeeder, PlantQueryEngine, SQLiteGraphStore
from garden_graph.types import EntityType, RelationType


class TestGraphSeeder:
    """Test loading datasets into the graph."""

    def test_seed_default_dataset(self, store: SQLiteGraphStore):
        report = GraphSeeder(store).seed()

        assert report.nodes_written == {"Season": 4, "SoilType": 4, "SunExposure": 3, "Plant": 4}
        assert report.edges_written == {
            "THRIVES_IN": 8,
            "NEEDS": 4,
            "GROWS_BEST_IN": 6,
            "GROWS_WELL_WITH": 6,
        }
        assert store.count_nodes() == 15
        assert store.count_edges() == 24

    def test_plant_node_properties(self, seeded_store: SQLiteGraphStore):
        """Test relationship lists become edges, not properties."""
        cabbage = seeded_store.get_node("cabbage")

        assert cabbage.type == EntityType.PLANT.value
        assert cabbage.properties["latin_name"] == "Brassica oleracea var. capitata"
        assert cabbage.properties["sustainability_rating"] == 4
        assert "suitable_soils" not in cabbage.properties
        assert "companion_plants" not in cabbage.properties

    def test_reference_node_properties(self, seeded_store: SQLiteGraphStore):
        spring = seeded_store.get_node("spring")
        assert spring.properties["months"] == ["March", "April", "May"]
        assert spring.properties["temperatures"] == {"min": 5, "max": 15}

        full_sun = seeded_store.get_node("full-sun")
        assert full_sun.properties == {"name": "Full Sun", "hours_of_sun": "6+ hours"}

    def test_seed_is_idempotent(self, seeded_store: SQLiteGraphStore):
        """Test seeding twice leaves the graph unchanged."""
        before_nodes = sorted((n.id, n.type, json.dumps(n.properties, sort_keys=True))
                              for n in seeded_store.get_all_nodes())
        before_edges = sorted(e.id for e in seeded_store.get_all_edges())

        GraphSeeder(seeded_store).seed()

        after_nodes = sorted((n.id, n.type, json.dumps(n.properties, sort_keys=True))
                             for n in seeded_store.get_all_nodes())
        after_edges = sorted(e.id for e in seeded_store.get_all_edges())
        assert after_nodes == before_nodes
        assert after_edges == before_edges

    def test_dangling_companions_are_reported(self, store: SQLiteGraphStore):
        report = GraphSeeder(store).seed()

        assert sorted(report.dangling_references) == [
            "cabbage-GROWS_WELL_WITH-mint",
            "cabbage-GROWS_WELL_WITH-thyme",
            "kale-GROWS_WELL_WITH-beetroot",
            "kale-GROWS_WELL_WITH-onion",
            "potato-GROWS_WELL_WITH-horseradish",
            "potato-GROWS_WELL_WITH-marigold",
        ]
        assert store.get_edge("cabbage", "thyme", RelationType.GROWS_WELL_WITH) is not None

    def test_companion_in_catalog_is_not_dangling(self, store: SQLiteGraphStore):
        dataset = GardenDataset(plants=[
            PlantRecord(id="carrot", name="Carrot", companion_plants=["onion"]),
            PlantRecord(id="onion", name="Onion", companion_plants=["carrot"]),
        ])

        report = GraphSeeder(store).seed(dataset)

        assert report.dangling_references == []
        companions = PlantQueryEngine(store).find_companions("carrot")
        assert [plant.id for plant in companions] == ["onion"]

    def test_stale_edges_survive_reseed(self, store: SQLiteGraphStore):
        """Test edges removed from the dataset are kept (no stale-edge cleanup)."""
        dataset = load_default_dataset()
        GraphSeeder(store).seed(dataset)

        trimmed = dataset.model_copy(deep=True)
        trimmed.plants[0].suitable_soils = ["loam"]
        GraphSeeder(store).seed(trimmed)

        assert store.get_edge("cabbage", "brown-earth", RelationType.THRIVES_IN) is not None

    def test_dataset_from_json_file(self, store: SQLiteGraphStore, tmp_path: Path):
        """Test JSON datasets accept camelCase keys."""
        dataset_file = tmp_path / "garden.json"
        dataset_file.write_text(json.dumps({
            "seasons": [{"id": "summer", "name": "Summer", "months": ["June"]}],
            "soilTypes": [{"id": "chalk", "name": "Chalk", "drainage": "Free"}],
            "sunExposures": [{"id": "full-sun", "name": "Full Sun", "hoursOfSun": "6+ hours"}],
            "plants": [{
                "id": "lavender",
                "name": "Lavender",
                "latinName": "Lavandula angustifolia",
                "suitableSoils": ["chalk"],
                "sunNeeds": "full-sun",
                "growingSeasons": ["summer"],
            }],
        }), encoding="utf-8")

        report = GraphSeeder(store).seed(GardenDataset.from_json_file(str(dataset_file)))

        assert report.total_nodes == 4
        assert report.total_edges == 3
        plants = PlantQueryEngine(store).find_plants_by_suitability(
            soil_type="chalk", sun_exposure="full-sun", season="summer"
        )
        assert [plant.id for plant in plants] == ["lavender"]
        assert plants[0].properties["latin_name"] == "Lavandula angustifolia"

    def test_report_to_dict(self, store: SQLiteGraphStore):
        data = GraphSeeder(store).seed().to_dict()

        assert data["total_nodes"] == 15
        assert data["total_edges"] == 24
        assert len(data["dangling_references"]) == 6
