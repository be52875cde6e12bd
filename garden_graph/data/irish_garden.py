"""
Built-in Irish garden dataset.
"""
from .records import (
    GardenDataset,
    PlantRecord,
    SeasonRecord,
    SoilTypeRecord,
    SunExposureRecord,
)


SEASONS = [
    SeasonRecord(
        id="spring",
        name="Spring",
        months=["March", "April", "May"],
        temperatures={"min": 5, "max": 15},
        rainfall="Moderate",
    ),
    SeasonRecord(
        id="summer",
        name="Summer",
        months=["June", "July", "August"],
        temperatures={"min": 10, "max": 20},
        rainfall="Low",
    ),
    SeasonRecord(
        id="autumn",
        name="Autumn",
        months=["September", "October", "November"],
        temperatures={"min": 5, "max": 15},
        rainfall="High",
    ),
    SeasonRecord(
        id="winter",
        name="Winter",
        months=["December", "January", "February"],
        temperatures={"min": 0, "max": 10},
        rainfall="High",
    ),
]

SOIL_TYPES = [
    SoilTypeRecord(
        id="brown-earth",
        name="Brown Earth",
        description="Fertile soils common in the Midlands region",
        ph="6.0-7.0",
        texture="Loamy",
        nutrients="High",
        drainage="Good",
    ),
    SoilTypeRecord(
        id="grey-brown-podzolic",
        name="Grey-Brown Podzolic",
        description="Good agricultural soils in east and south",
        ph="5.5-6.5",
        texture="Clay loam",
        nutrients="Medium",
        drainage="Moderate",
    ),
    SoilTypeRecord(
        id="peat",
        name="Peat",
        description="Acidic, organic-rich soils common in boglands",
        ph="4.0-5.5",
        texture="Organic",
        nutrients="Low",
        drainage="Poor",
    ),
    SoilTypeRecord(
        id="loam",
        name="Loam",
        description="Ideal garden soil with balanced properties",
        ph="6.0-7.0",
        texture="Loamy",
        nutrients="High",
        drainage="Excellent",
    ),
]

SUN_EXPOSURES = [
    SunExposureRecord(id="full-sun", name="Full Sun", hours_of_sun="6+ hours"),
    SunExposureRecord(id="partial-shade", name="Partial Shade", hours_of_sun="3-6 hours"),
    SunExposureRecord(id="full-shade", name="Full Shade", hours_of_sun="Less than 3 hours"),
]

# Companions are referenced by id and need not be in the catalog.
PLANTS = [
    PlantRecord(
        id="cabbage",
        name="Cabbage",
        latin_name="Brassica oleracea var. capitata",
        description="Hardy vegetable that grows well in cool Irish conditions",
        water_needs="Medium",
        image_url="/images/plants/cabbage.jpg",
        native_to_ireland=False,
        sustainability_rating=4,
        suitable_soils=["brown-earth", "loam"],
        sun_needs="full-sun",
        growing_seasons=["spring", "autumn"],
        companion_plants=["thyme", "mint"],
    ),
    PlantRecord(
        id="potato",
        name="Potato",
        latin_name="Solanum tuberosum",
        description="Staple Irish crop that grows well in most soil types",
        water_needs="Medium",
        image_url="/images/plants/potato.jpg",
        native_to_ireland=False,
        sustainability_rating=4,
        suitable_soils=["brown-earth", "peat"],
        sun_needs="full-sun",
        growing_seasons=["spring"],
        companion_plants=["horseradish", "marigold"],
    ),
    PlantRecord(
        id="hawthorn",
        name="Hawthorn",
        latin_name="Crataegus monogyna",
        description="Native Irish tree with white flowers and red berries",
        water_needs="Low",
        image_url="/images/plants/hawthorn.jpg",
        native_to_ireland=True,
        sustainability_rating=5,
        suitable_soils=["brown-earth", "grey-brown-podzolic"],
        sun_needs="partial-shade",
        growing_seasons=["spring"],
        companion_plants=[],
    ),
    PlantRecord(
        id="kale",
        name="Kale",
        latin_name="Brassica oleracea var. sabellica",
        description="Hardy leafy green that withstands cold Irish winters",
        water_needs="Medium",
        image_url="/images/plants/kale.jpg",
        native_to_ireland=False,
        sustainability_rating=5,
        suitable_soils=["brown-earth", "loam"],
        sun_needs="full-sun",
        growing_seasons=["autumn", "winter"],
        companion_plants=["onion", "beetroot"],
    ),
]


def load_default_dataset() -> GardenDataset:
    """Return the built-in Irish garden dataset."""
    return GardenDataset(
        seasons=SEASONS,
        soil_types=SOIL_TYPES,
        sun_exposures=SUN_EXPOSURES,
        plants=PLANTS,
    )
