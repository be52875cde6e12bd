import pytest
from typing import Generator, Dict, Any
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from garden_graph.graph import GraphSeeder, PlantQueryEngine, SQLiteGraphStore
from garden_graph.types import EntityType, RelationType


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    """Path of a fresh graph database file."""
    return str(tmp_path / "graph" / "garden-knowledge.sqlite")


@pytest.fixture
def store(db_path: str) -> Generator[SQLiteGraphStore, None, None]:
    """Open an empty graph store for testing."""
    with SQLiteGraphStore(db_path) as graph_store:
        yield graph_store


@pytest.fixture
def seeded_store(store: SQLiteGraphStore) -> SQLiteGraphStore:
    """Graph store loaded with the built-in dataset."""
    GraphSeeder(store).seed()
    return store


@pytest.fixture
def engine(seeded_store: SQLiteGraphStore) -> PlantQueryEngine:
    return PlantQueryEngine(seeded_store)


@pytest.fixture
def peat_store(store: SQLiteGraphStore) -> SQLiteGraphStore:
    """Two peat plants that differ only in sun exposure."""
    store.upsert_node("peat", EntityType.SOIL_TYPE, {"name": "Peat"})
    store.upsert_node("full-sun", EntityType.SUN_EXPOSURE, {"name": "Full Sun"})
    store.upsert_node("partial-shade", EntityType.SUN_EXPOSURE, {"name": "Partial Shade"})

    store.upsert_node("p1", EntityType.PLANT, {"name": "Plant One"})
    store.upsert_edge("p1", "peat", RelationType.THRIVES_IN)
    store.upsert_edge("p1", "full-sun", RelationType.NEEDS)

    store.upsert_node("p2", EntityType.PLANT, {"name": "Plant Two"})
    store.upsert_edge("p2", "peat", RelationType.THRIVES_IN)
    store.upsert_edge("p2", "partial-shade", RelationType.NEEDS)
    return store


@pytest.fixture
def sample_properties() -> Dict[str, Any]:
    """Properties with scalars, arrays and nested objects."""
    return {
        "name": "Spring",
        "months": ["March", "April", "May"],
        "temperatures": {"min": 5, "max": 15},
        "rainfall": "Moderate",
        "frost_risk": True,
        "average_sun_hours": 4.5,
        "notes": None,
    }
