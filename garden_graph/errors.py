"""Exceptions raised by the graph store."""


class GraphStoreError(Exception):
    """Base class for graph store failures."""


class SerializationError(GraphStoreError):
    """Properties of a node or edge could not be encoded as JSON."""

    def __init__(self, entity_id: str, reason: str):
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(f"Cannot serialize properties of '{entity_id}': {reason}")


class DataCorruptionError(GraphStoreError):
    """A stored properties blob could not be decoded."""

    def __init__(self, entity_id: str, reason: str):
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(f"Corrupted properties stored for '{entity_id}': {reason}")


class StoreClosedError(GraphStoreError):
    """The store was used before open() or after close()."""


class EdgeConflictError(GraphStoreError):
    """An edge id is already held by an edge with a different source, type or target."""

    def __init__(self, edge_id: str, source: str, target: str, edge_type: str):
        self.edge_id = edge_id
        self.source = source
        self.target = target
        self.edge_type = edge_type
        super().__init__(
            f"Edge id '{edge_id}' for ({source})-[{edge_type}]->({target}) is held by another edge"
        )
