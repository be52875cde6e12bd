import csv
import json
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from garden_graph.graph import GraphCsvExporter, SQLiteGraphStore
from garden_graph.graph.exporter import flatten_properties


def read_rows(path: Path):
    with path.open("r", encoding="utf-8", newline="") as handle:
        return list(csv.DictReader(handle))


class TestGraphCsvExporter:
    """Test CSV export of the graph."""

    def test_flatten_properties(self):
        flat = flatten_properties({
            "name": "Spring",
            "temperatures": {"min": 5, "max": 15},
            "months": ["March", "April"],
        })

        assert flat == {
            "name": "Spring",
            "temperatures_min": 5,
            "temperatures_max": 15,
            "months": json.dumps(["March", "April"]),
        }

    def test_export_files(self, seeded_store: SQLiteGraphStore, tmp_path: Path):
        files = GraphCsvExporter(seeded_store).export(str(tmp_path / "exports"))

        names = sorted(path.name for path in files)
        assert names == [
            "nodes_Plant.csv",
            "nodes_Season.csv",
            "nodes_SoilType.csv",
            "nodes_SunExposure.csv",
            "relationships_GROWS_BEST_IN.csv",
            "relationships_GROWS_WELL_WITH.csv",
            "relationships_NEEDS.csv",
            "relationships_THRIVES_IN.csv",
        ]

    def test_export_rows(self, seeded_store: SQLiteGraphStore, tmp_path: Path):
        GraphCsvExporter(seeded_store).export(str(tmp_path))

        seasons = {row["id"]: row for row in read_rows(tmp_path / "nodes_Season.csv")}
        assert set(seasons) == {"spring", "summer", "autumn", "winter"}
        assert seasons["winter"]["temperatures_min"] == "0"
        assert json.loads(seasons["spring"]["months"]) == ["March", "April", "May"]

        needs = read_rows(tmp_path / "relationships_NEEDS.csv")
        assert len(needs) == 4
        assert list(needs[0].keys())[:3] == ["id", "source", "target"]
        assert {(row["source"], row["target"]) for row in needs} >= {("hawthorn", "partial-shade")}
