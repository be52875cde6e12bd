from typing import List, Dict, Any, Optional, Iterable, Mapping, Union
import datetime
import json
import sqlite3
from pathlib import Path

from ..errors import DataCorruptionError, EdgeConflictError, SerializationError, StoreClosedError
from ..types import (
    EdgeCondition,
    EntityType,
    GraphEdge,
    GraphNode,
    Neighbor,
    RelationType,
    make_edge_id,
    type_value,
)
from ..utils.logger import app_logger


SCHEMA = """
CREATE TABLE IF NOT EXISTS nodes (
  id TEXT PRIMARY KEY,
  type TEXT NOT NULL,
  properties TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS edges (
  id TEXT PRIMARY KEY,
  source TEXT NOT NULL,
  target TEXT NOT NULL,
  type TEXT NOT NULL,
  properties TEXT NOT NULL DEFAULT '{}',
  UNIQUE(source, type, target)
);

CREATE INDEX IF NOT EXISTS idx_nodes_type ON nodes(type);
CREATE INDEX IF NOT EXISTS idx_edges_source ON edges(source);
CREATE INDEX IF NOT EXISTS idx_edges_target ON edges(target);
CREATE INDEX IF NOT EXISTS idx_edges_type ON edges(type);
"""

NodeTypeArg = Union[EntityType, str]
EdgeTypeArg = Union[RelationType, str]


class UndecodableText(bytes):
    """Raw value of a TEXT column that is not valid UTF-8."""


def _decode_text(raw: bytes):
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return UndecodableText(raw)


class SQLiteGraphStore:
    """SQLite-backed node/edge store.

    Nodes and edges live in two tables of a single database file. Properties are
    kept as JSON text. Edges may reference nodes that do not exist; every read
    that follows an edge joins on the target node, so dangling edges are never
    returned.
    """

    def __init__(self, db_path: str = "data/garden-knowledge.sqlite"):
        self.logger = app_logger.bind(component="graph_store")
        self.db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None

    def __enter__(self) -> "SQLiteGraphStore":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> "SQLiteGraphStore":
        """Open the database, creating the file and schema if absent."""
        if self._conn is not None:
            return self

        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        # The API's sync handlers run on FastAPI's threadpool; SQLite serializes statements.
        self._conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        # Invalid UTF-8 must surface as DataCorruptionError with the row id, not on fetch.
        self._conn.text_factory = _decode_text
        self._conn.executescript(SCHEMA)
        self._conn.commit()
        self.logger.info(f"Opened graph store at {self.db_path}")
        return self

    def close(self):
        """Close the database handle."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            self.logger.info(f"Closed graph store at {self.db_path}")

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreClosedError(f"Graph store {self.db_path} is not open")
        return self._conn

    def _encode(self, entity_id: str, properties: Optional[Mapping[str, Any]]) -> str:
        if properties is None:
            properties = {}
        elif not isinstance(properties, Mapping):
            reason = f"properties must be a mapping, got {type(properties).__name__}"
            self.logger.error(f"Error serializing properties of {entity_id}: {reason}")
            raise SerializationError(entity_id, reason)

        try:
            return json.dumps(dict(properties), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            self.logger.error(f"Error serializing properties of {entity_id}: {e}")
            raise SerializationError(entity_id, str(e)) from e

    def _corrupted(self, entity_id: str, reason: str) -> DataCorruptionError:
        self.logger.error(f"Corrupted properties for {entity_id}: {reason}")
        return DataCorruptionError(entity_id, reason)

    def _decode(self, entity_id: str, raw: Optional[str]) -> Dict[str, Any]:
        if raw is None:
            return {}
        if isinstance(raw, bytes):
            raise self._corrupted(entity_id, "properties are not valid UTF-8")
        try:
            properties = json.loads(raw)
        except json.JSONDecodeError as e:
            raise self._corrupted(entity_id, str(e)) from e
        if not isinstance(properties, dict):
            raise self._corrupted(entity_id, f"expected a JSON object, got {type(properties).__name__}")
        return properties

    def _row_to_node(self, row: sqlite3.Row) -> GraphNode:
        return GraphNode(
            id=row["id"],
            type=row["type"],
            properties=self._decode(row["id"], row["properties"]),
        )

    def _row_to_edge(self, row: sqlite3.Row) -> GraphEdge:
        return GraphEdge(
            id=row["id"],
            source=row["source"],
            target=row["target"],
            type=row["type"],
            properties=self._decode(row["id"], row["properties"]),
        )

    def upsert_node(self, node_id: str, node_type: NodeTypeArg, properties: Dict[str, Any]) -> GraphNode:
        """Create or replace a node."""
        node_type = type_value(node_type)
        encoded = self._encode(node_id, properties)

        conn = self._connection()
        conn.execute(
            "INSERT OR REPLACE INTO nodes (id, type, properties) VALUES (?, ?, ?)",
            (node_id, node_type, encoded),
        )
        conn.commit()
        self.logger.debug(f"Upserted {node_type} node {node_id}")

        return GraphNode(id=node_id, type=node_type, properties=json.loads(encoded))

    def upsert_edge(self, source: str, target: str, edge_type: EdgeTypeArg,
                    properties: Optional[Dict[str, Any]] = None) -> GraphEdge:
        """Create an edge, or replace the properties of the existing (source, type, target) edge.

        Raises EdgeConflictError when the edge id is already held by a different
        (source, type, target), as with ("a", "b-NEEDS-c") and ("a-NEEDS-b", "c").
        """
        edge_type = type_value(edge_type)
        edge_id = make_edge_id(source, edge_type, target)
        encoded = self._encode(edge_id, properties)

        conn = self._connection()
        cursor = conn.execute(
            """
            INSERT INTO edges (id, source, target, type, properties)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET properties = excluded.properties
            WHERE edges.source = excluded.source
              AND edges.target = excluded.target
              AND edges.type = excluded.type
            """,
            (edge_id, source, target, edge_type, encoded),
        )
        conn.commit()
        if cursor.rowcount == 0:
            self.logger.error(f"Edge id {edge_id} already belongs to another edge")
            raise EdgeConflictError(edge_id, source, target, edge_type)
        self.logger.debug(f"Upserted edge {edge_id}")

        return GraphEdge(
            id=edge_id,
            source=source,
            target=target,
            type=edge_type,
            properties=json.loads(encoded),
        )

    def get_node(self, node_id: str) -> Optional[GraphNode]:
        """Get a node by id, or None if it does not exist."""
        row = self._connection().execute(
            "SELECT id, type, properties FROM nodes WHERE id = ?", (node_id,)
        ).fetchone()
        if row is None:
            return None
        return self._row_to_node(row)

    def get_edge(self, source: str, target: str, edge_type: EdgeTypeArg) -> Optional[GraphEdge]:
        """Get the edge (source, type, target), or None if it does not exist."""
        row = self._connection().execute(
            "SELECT id, source, target, type, properties FROM edges WHERE id = ?",
            (make_edge_id(source, edge_type, target),),
        ).fetchone()
        if row is None:
            return None
        return self._row_to_edge(row)

    def get_nodes_by_type(self, node_type: NodeTypeArg) -> List[GraphNode]:
        """Get all nodes of one type."""
        rows = self._connection().execute(
            "SELECT id, type, properties FROM nodes WHERE type = ?", (type_value(node_type),)
        ).fetchall()
        return [self._row_to_node(row) for row in rows]

    def get_outgoing_neighbors(self, node_id: str) -> List[Neighbor]:
        """Get the nodes reachable through one outgoing edge of `node_id`."""
        rows = self._connection().execute(
            """
            SELECT n.id, n.type, n.properties,
                   e.id AS edge_id, e.type AS edge_type, e.properties AS edge_properties
            FROM edges e
            JOIN nodes n ON e.target = n.id
            WHERE e.source = ?
            """,
            (node_id,),
        ).fetchall()

        return [
            Neighbor(
                node=self._row_to_node(row),
                edge_type=row["edge_type"],
                edge_properties=self._decode(row["edge_id"], row["edge_properties"]),
            )
            for row in rows
        ]

    def find_nodes_with_edges(self, node_type: NodeTypeArg,
                              conditions: Iterable[EdgeCondition]) -> List[GraphNode]:
        """Get nodes of `node_type` that satisfy every edge condition.

        A condition holds when the node has an outgoing edge of the condition's
        relation to an existing node with the given id and type.
        """
        query = "SELECT DISTINCT p.id, p.type, p.properties FROM nodes p WHERE p.type = ?"
        params: List[Any] = [type_value(node_type)]

        for condition in conditions:
            query += """
              AND EXISTS (
                SELECT 1 FROM edges e
                JOIN nodes t ON e.target = t.id
                WHERE e.source = p.id
                  AND e.type = ?
                  AND t.type = ?
                  AND t.id = ?
              )"""
            params.extend([
                type_value(condition.relation),
                type_value(condition.target_type),
                condition.target_id,
            ])

        rows = self._connection().execute(query, params).fetchall()
        return [self._row_to_node(row) for row in rows]

    def get_all_nodes(self) -> List[GraphNode]:
        """Get all nodes in the graph."""
        rows = self._connection().execute("SELECT id, type, properties FROM nodes").fetchall()
        return [self._row_to_node(row) for row in rows]

    def get_all_edges(self) -> List[GraphEdge]:
        """Get all edges in the graph, dangling ones included."""
        rows = self._connection().execute(
            "SELECT id, source, target, type, properties FROM edges"
        ).fetchall()
        return [self._row_to_edge(row) for row in rows]

    def count_nodes(self) -> int:
        return self._connection().execute("SELECT COUNT(*) FROM nodes").fetchone()[0]

    def count_edges(self) -> int:
        return self._connection().execute("SELECT COUNT(*) FROM edges").fetchone()[0]

    def get_database_stats(self) -> Dict[str, Any]:
        """Get node counts by type and edge counts by relation."""
        conn = self._connection()
        node_counts = {
            row["type"]: row["total"]
            for row in conn.execute("SELECT type, COUNT(*) AS total FROM nodes GROUP BY type")
        }
        rel_counts = {
            row["type"]: row["total"]
            for row in conn.execute("SELECT type, COUNT(*) AS total FROM edges GROUP BY type")
        }
        dangling = conn.execute(
            "SELECT COUNT(*) FROM edges e LEFT JOIN nodes n ON e.target = n.id WHERE n.id IS NULL"
        ).fetchone()[0]

        return {
            "nodes": node_counts,
            "relationships": rel_counts,
            "total_nodes": sum(node_counts.values()),
            "total_relationships": sum(rel_counts.values()),
            "dangling_relationships": dangling,
        }

    def get_graph_data(self) -> Dict[str, Any]:
        """Get the complete graph data for visualization."""
        return {
            "nodes": [node.to_dict() for node in self.get_all_nodes()],
            "edges": [edge.to_dict() for edge in self.get_all_edges()],
            "metadata": {
                "db_path": self.db_path,
                "exported_at": datetime.datetime.now().isoformat(),
            },
        }

    def clear_database(self):
        """Remove every node and edge."""
        conn = self._connection()
        conn.execute("DELETE FROM edges")
        conn.execute("DELETE FROM nodes")
        conn.commit()
        self.logger.info(f"Cleared all data from graph store {self.db_path}")
