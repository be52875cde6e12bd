"""
Export the garden graph to CSV files.

Each node type and each relationship type is written to its own file. Nested
property objects are flattened with `_`-joined keys; lists are written as JSON.
"""
import csv
import json
from pathlib import Path
from typing import List, Dict, Any

from ..utils.logger import app_logger
from .sqlite_graph_store import SQLiteGraphStore


def flatten_properties(properties: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flatten nested dicts into a single level for CSV output."""
    flat = {}
    for key, value in properties.items():
        column = f"{prefix}_{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(flatten_properties(value, column))
        elif isinstance(value, list):
            flat[column] = json.dumps(value, ensure_ascii=False)
        else:
            flat[column] = value
    return flat


def _write_csv(path: Path, rows: List[Dict[str, Any]], leading: List[str]) -> Path:
    extra = sorted({key for row in rows for key in row.keys()} - set(leading))
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=leading + extra)
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
    return path


class GraphCsvExporter:
    """Writes nodes_<Type>.csv and relationships_<TYPE>.csv files."""

    def __init__(self, store: SQLiteGraphStore):
        self.logger = app_logger.bind(component="graph_exporter")
        self.store = store

    def export(self, output_dir: str) -> List[Path]:
        """Export every node type and relationship type. Returns the written files."""
        out_path = Path(output_dir)
        out_path.mkdir(parents=True, exist_ok=True)

        nodes_by_type: Dict[str, List[Dict[str, Any]]] = {}
        for node in self.store.get_all_nodes():
            row = {"id": node.id}
            row.update(flatten_properties(node.properties))
            nodes_by_type.setdefault(node.type, []).append(row)

        edges_by_type: Dict[str, List[Dict[str, Any]]] = {}
        for edge in self.store.get_all_edges():
            row = {"id": edge.id, "source": edge.source, "target": edge.target}
            row.update(flatten_properties(edge.properties))
            edges_by_type.setdefault(edge.type, []).append(row)

        written = []
        for node_type in sorted(nodes_by_type):
            rows = nodes_by_type[node_type]
            written.append(_write_csv(out_path / f"nodes_{node_type}.csv", rows, ["id"]))
            self.logger.info(f"Exported {len(rows)} {node_type} nodes")

        for edge_type in sorted(edges_by_type):
            rows = edges_by_type[edge_type]
            written.append(_write_csv(
                out_path / f"relationships_{edge_type}.csv", rows, ["id", "source", "target"]
            ))
            self.logger.info(f"Exported {len(rows)} {edge_type} relationships")

        return written
