"""
Seed dataset models for the garden graph.
"""
import json
from pathlib import Path
from typing import List, Dict, Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class SeedRecord(BaseModel):
    """Base for dataset records. Accepts snake_case or camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str


class SeasonRecord(SeedRecord):
    name: str
    months: List[str] = Field(default_factory=list)
    temperatures: Dict[str, Union[int, float]] = Field(default_factory=dict)
    rainfall: Optional[str] = None


class SoilTypeRecord(SeedRecord):
    name: str
    description: str = ""
    ph: Optional[str] = None
    texture: Optional[str] = None
    nutrients: Optional[str] = None
    drainage: Optional[str] = None


class SunExposureRecord(SeedRecord):
    name: str
    hours_of_sun: Optional[str] = None


class PlantRecord(SeedRecord):
    """A catalog plant with its cross-references by id."""
    name: str
    latin_name: Optional[str] = None
    description: str = ""
    water_needs: Optional[str] = None
    image_url: Optional[str] = None
    native_to_ireland: bool = False
    sustainability_rating: Optional[int] = None
    suitable_soils: List[str] = Field(default_factory=list)
    sun_needs: Optional[str] = None
    growing_seasons: List[str] = Field(default_factory=list)
    companion_plants: List[str] = Field(default_factory=list)

    def node_properties(self) -> Dict[str, Any]:
        """Properties stored on the Plant node; relationships become edges."""
        return self.model_dump(
            exclude={"id", "suitable_soils", "sun_needs", "growing_seasons", "companion_plants"}
        )


class GardenDataset(BaseModel):
    """Hand-authored catalogs used to seed the graph."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    seasons: List[SeasonRecord] = Field(default_factory=list)
    soil_types: List[SoilTypeRecord] = Field(default_factory=list)
    sun_exposures: List[SunExposureRecord] = Field(default_factory=list)
    plants: List[PlantRecord] = Field(default_factory=list)

    @classmethod
    def from_json_file(cls, path: str) -> "GardenDataset":
        """Load a dataset from a JSON file with the same shape as this model."""
        with open(Path(path), "r", encoding="utf-8") as f:
            return cls.model_validate(json.load(f))

    def reference_ids(self) -> set:
        """Ids of all nodes this dataset creates."""
        ids = {record.id for record in self.seasons}
        ids.update(record.id for record in self.soil_types)
        ids.update(record.id for record in self.sun_exposures)
        ids.update(record.id for record in self.plants)
        return ids
