from typing import List, Dict, Any, Optional, Tuple
from dataclasses import dataclass, field
from enum import Enum


class EntityType(str, Enum):
    """Node type enumeration."""
    PLANT = "Plant"
    SOIL_TYPE = "SoilType"
    SUN_EXPOSURE = "SunExposure"
    SEASON = "Season"


class RelationType(str, Enum):
    """Edge type enumeration."""
    THRIVES_IN = "THRIVES_IN"
    NEEDS = "NEEDS"
    GROWS_BEST_IN = "GROWS_BEST_IN"
    GROWS_WELL_WITH = "GROWS_WELL_WITH"


class SuitabilityFilter(str, Enum):
    """Optional conditions accepted by the plant suitability query."""
    SOIL_TYPE = "soil_type"
    SUN_EXPOSURE = "sun_exposure"
    SEASON = "season"


# Every filter must have an entry here.
SUITABILITY_RULES: Dict[SuitabilityFilter, Tuple[RelationType, EntityType]] = {
    SuitabilityFilter.SOIL_TYPE: (RelationType.THRIVES_IN, EntityType.SOIL_TYPE),
    SuitabilityFilter.SUN_EXPOSURE: (RelationType.NEEDS, EntityType.SUN_EXPOSURE),
    SuitabilityFilter.SEASON: (RelationType.GROWS_BEST_IN, EntityType.SEASON),
}

REFERENCE_ENTITY_TYPES = (EntityType.SOIL_TYPE, EntityType.SUN_EXPOSURE, EntityType.SEASON)


def type_value(value: Any) -> str:
    """Return the stored string form of an entity or relation type."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def make_edge_id(source: str, edge_type: Any, target: str) -> str:
    """Derive the deterministic id of the edge (source, type, target)."""
    return f"{source}-{type_value(edge_type)}-{target}"


@dataclass
class GraphNode:
    """Represents a node in the garden graph."""
    id: str
    type: str
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "type": self.type,
            "properties": self.properties,
        }


@dataclass
class GraphEdge:
    """Represents a directed, labeled edge in the garden graph."""
    id: str
    source: str
    target: str
    type: str
    properties: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "type": self.type,
            "properties": self.properties,
        }


@dataclass
class Neighbor:
    """A node reached through one outgoing edge."""
    node: GraphNode
    edge_type: str
    edge_properties: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "node": self.node.to_dict(),
            "edge_type": self.edge_type,
            "edge_properties": self.edge_properties,
        }


@dataclass(frozen=True)
class EdgeCondition:
    """Requires an outgoing `relation` edge to the node `target_id` of type `target_type`."""
    relation: str
    target_type: str
    target_id: str


@dataclass
class PlantMatch:
    """A plant returned by a suitability query."""
    id: str
    properties: Dict[str, Any]

    @classmethod
    def from_node(cls, node: GraphNode) -> "PlantMatch":
        return cls(id=node.id, properties=node.properties)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {"id": self.id, "properties": self.properties}


@dataclass(frozen=True)
class SuitabilityCriteria:
    """Filter values for a plant suitability query. Empty values impose no constraint."""
    soil_type: Optional[str] = None
    sun_exposure: Optional[str] = None
    season: Optional[str] = None

    def __post_init__(self):
        for suitability_filter in SuitabilityFilter:
            if not getattr(self, suitability_filter.value):
                object.__setattr__(self, suitability_filter.value, None)

    def active_filters(self) -> Dict[SuitabilityFilter, str]:
        """Supplied (non-empty) filters keyed by filter."""
        active = {}
        for suitability_filter in SuitabilityFilter:
            value = getattr(self, suitability_filter.value)
            if value:
                active[suitability_filter] = value
        return active

    def without(self, *filters: SuitabilityFilter) -> "SuitabilityCriteria":
        """Copy of these criteria with the given filters removed."""
        values = {f.value: getattr(self, f.value) for f in SuitabilityFilter}
        for suitability_filter in filters:
            values[suitability_filter.value] = None
        return SuitabilityCriteria(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "soil_type": self.soil_type,
            "sun_exposure": self.sun_exposure,
            "season": self.season,
        }


@dataclass
class FallbackAttempt:
    """One query run while relaxing criteria."""
    attempt: int
    criteria: SuitabilityCriteria
    result_count: int
    description: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "attempt": self.attempt,
            "criteria": self.criteria.to_dict(),
            "result_count": self.result_count,
            "description": self.description,
        }


@dataclass
class FallbackResult:
    """Outcome of a suitability query with progressive relaxation."""
    plants: List[PlantMatch]
    original_criteria: SuitabilityCriteria
    criteria_used: SuitabilityCriteria
    fallback_used: bool
    attempts: List[FallbackAttempt]

    @property
    def success(self) -> bool:
        return len(self.plants) > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "plants": [plant.to_dict() for plant in self.plants],
            "original_criteria": self.original_criteria.to_dict(),
            "criteria_used": self.criteria_used.to_dict(),
            "fallback_used": self.fallback_used,
            "attempts": [attempt.to_dict() for attempt in self.attempts],
        }


@dataclass
class PlantProfile:
    """A plant together with its reference entities and companions."""
    plant: GraphNode
    soil_types: List[GraphNode] = field(default_factory=list)
    sun_exposures: List[GraphNode] = field(default_factory=list)
    seasons: List[GraphNode] = field(default_factory=list)
    companions: List[GraphNode] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "plant": self.plant.to_dict(),
            "soil_types": [node.to_dict() for node in self.soil_types],
            "sun_exposures": [node.to_dict() for node in self.sun_exposures],
            "seasons": [node.to_dict() for node in self.seasons],
            "companions": [node.to_dict() for node in self.companions],
        }
