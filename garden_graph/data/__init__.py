"""
Seed datasets for the garden graph.
"""

from .records import (
    GardenDataset,
    PlantRecord,
    SeasonRecord,
    SoilTypeRecord,
    SunExposureRecord,
)
from .irish_garden import load_default_dataset

__all__ = [
    'GardenDataset',
    'PlantRecord',
    'SeasonRecord',
    'SoilTypeRecord',
    'SunExposureRecord',
    'load_default_dataset',
]
