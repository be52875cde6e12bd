from typing import List, Optional, Tuple

from ..types import (
    REFERENCE_ENTITY_TYPES,
    SUITABILITY_RULES,
    EdgeCondition,
    EntityType,
    FallbackAttempt,
    FallbackResult,
    GraphNode,
    PlantMatch,
    PlantProfile,
    RelationType,
    SuitabilityCriteria,
    SuitabilityFilter,
    type_value,
)
from ..utils.logger import app_logger
from .sqlite_graph_store import SQLiteGraphStore


SOIL = SuitabilityFilter.SOIL_TYPE
SUN = SuitabilityFilter.SUN_EXPOSURE
SEASON = SuitabilityFilter.SEASON

# (filters removed, description), tried in order until a query matches.
FALLBACK_STRATEGIES: List[Tuple[Tuple[SuitabilityFilter, ...], str]] = [
    ((SOIL,), "Removed soil type constraint"),
    ((SUN,), "Removed sun exposure constraint"),
    ((SEASON,), "Removed season constraint"),
    ((SOIL, SUN), "Kept only season constraint"),
    ((SUN, SEASON), "Kept only soil type constraint"),
    ((SOIL, SEASON), "Kept only sun exposure constraint"),
    ((SOIL, SUN, SEASON), "Removed all constraints"),
]

PROFILE_GROUPS = {
    RelationType.THRIVES_IN.value: ("soil_types", EntityType.SOIL_TYPE.value),
    RelationType.NEEDS.value: ("sun_exposures", EntityType.SUN_EXPOSURE.value),
    RelationType.GROWS_BEST_IN.value: ("seasons", EntityType.SEASON.value),
    RelationType.GROWS_WELL_WITH.value: ("companions", EntityType.PLANT.value),
}


class PlantQueryEngine:
    """Read-only plant lookups over the garden graph."""

    def __init__(self, store: SQLiteGraphStore):
        self.logger = app_logger.bind(component="query_engine")
        self.store = store

    def find_plants_by_suitability(self, soil_type: Optional[str] = None,
                                   sun_exposure: Optional[str] = None,
                                   season: Optional[str] = None) -> List[PlantMatch]:
        """Find plants satisfying every supplied condition.

        Each filter requires an outgoing edge to the reference node with the
        given id (see SUITABILITY_RULES). Omitted or empty filters impose no
        constraint; with no filters every plant is returned. A value that names
        no existing reference node matches nothing.
        """
        criteria = SuitabilityCriteria(soil_type=soil_type, sun_exposure=sun_exposure, season=season)
        return self.find_plants(criteria)

    def find_plants(self, criteria: SuitabilityCriteria) -> List[PlantMatch]:
        """Find plants matching a SuitabilityCriteria."""
        conditions = []
        for suitability_filter, value in criteria.active_filters().items():
            relation, target_type = SUITABILITY_RULES[suitability_filter]
            conditions.append(EdgeCondition(
                relation=relation.value,
                target_type=target_type.value,
                target_id=value,
            ))

        nodes = self.store.find_nodes_with_edges(EntityType.PLANT, conditions)
        self.logger.debug(f"Suitability query {criteria.to_dict()} matched {len(nodes)} plants")
        return [PlantMatch.from_node(node) for node in nodes]

    def find_plants_with_fallback(self, soil_type: Optional[str] = None,
                                  sun_exposure: Optional[str] = None,
                                  season: Optional[str] = None) -> FallbackResult:
        """Find plants, relaxing conditions one step at a time while nothing matches."""
        original = SuitabilityCriteria(soil_type=soil_type, sun_exposure=sun_exposure, season=season)

        current = original
        plants = self.find_plants(current)
        attempts = [FallbackAttempt(1, current, len(plants), "Original criteria")]
        tried = {current}

        if not plants:
            for removed, description in FALLBACK_STRATEGIES:
                candidate = original.without(*removed)
                if candidate in tried:
                    continue
                tried.add(candidate)

                current = candidate
                plants = self.find_plants(current)
                attempts.append(FallbackAttempt(len(attempts) + 1, current, len(plants), description))
                self.logger.info(f"Fallback attempt {len(attempts)}: {description} -> {len(plants)} plants")
                if plants:
                    break

        return FallbackResult(
            plants=plants,
            original_criteria=original,
            criteria_used=current,
            fallback_used=bool(plants) and len(attempts) > 1,
            attempts=attempts,
        )

    def get_plant_profile(self, plant_id: str) -> Optional[PlantProfile]:
        """Get a plant with its soils, sun exposures, seasons and companions."""
        plant = self.store.get_node(plant_id)
        if plant is None or plant.type != EntityType.PLANT.value:
            return None

        profile = PlantProfile(plant=plant)
        for neighbor in self.store.get_outgoing_neighbors(plant_id):
            group = PROFILE_GROUPS.get(neighbor.edge_type)
            if group is None:
                continue
            attribute, expected_type = group
            if neighbor.node.type == expected_type:
                getattr(profile, attribute).append(neighbor.node)

        return profile

    def find_companions(self, plant_id: str) -> List[PlantMatch]:
        """Plants that grow well with `plant_id`. Companions missing from the graph are skipped."""
        profile = self.get_plant_profile(plant_id)
        if profile is None:
            return []
        return [PlantMatch.from_node(node) for node in profile.companions]

    def list_reference_entities(self, entity_type) -> List[GraphNode]:
        """List the soil types, sun exposures or seasons usable as filter values."""
        value = type_value(entity_type)
        if value not in {t.value for t in REFERENCE_ENTITY_TYPES}:
            raise ValueError(f"{value} is not a reference entity type")
        return self.store.get_nodes_by_type(value)
