"""
Soil texture, chemistry and fertility proxies from reflectance ratios.

Clay and sand are derived independently from the SWIR1/SWIR2 ratio and silt
takes the remainder. When clay + sand already exceeds 100 the silt fraction
is floored at 0 and the three fractions are not renormalised, so the total
can exceed 100.
"""

from typing import NamedTuple, Dict

from ..data.scenes import Location
from ..processing.indices import clamp, safe_ratio, normalized_difference, round_half_up

PH_OPTIMAL = 6.75

SOIL_TYPES = {
    "Clay": "Heavy clay soil with good nutrient retention but poor drainage",
    "Sand": "Sandy soil with good drainage but low nutrient retention",
    "Silt": "Silty soil with good water retention and moderate drainage",
    "Clay Loam": "Well-balanced soil with good structure and fertility",
    "Sandy Loam": "Good drainage with reasonable nutrient retention",
    "Loam": "Ideal soil type with balanced properties",
}

FERTILITY_DESCRIPTIONS = {
    "high": "Highly fertile soil suitable for most crops",
    "medium": "Moderately fertile soil with some improvement potential",
    "low": "Low fertility soil requiring amendments",
}


class Fertility(NamedTuple):
    score: int
    level: str
    description: str


class CompositionResult(NamedTuple):
    clay: float
    sand: float
    silt: float
    organic_matter: float
    iron_oxide: float
    ph: float
    soil_type: str
    description: str
    fertility: Fertility


def estimate_ph(bands: Dict[str, float], location: Location) -> float:
    """Neutral baseline shifted by the SWIR1/Red contrast and latitude."""
    ph = 7.0
    ph += normalized_difference(bands.get("swir1"), bands.get("red")) * 2

    # Northern soils lean acidic, tropical soils slightly alkaline
    if location.lat > 50:
        ph -= 0.5
    if abs(location.lat) < 23.5:
        ph += 0.3

    return clamp(round_half_up(ph, 1), 4.0, 9.0)


def classify_soil_type(clay: float, sand: float, silt: float) -> str:
    """First match wins: Clay, Sand, Silt, Clay Loam, Sandy Loam, Loam."""
    if clay > 40:
        return "Clay"
    elif sand > 70:
        return "Sand"
    elif silt > 40:
        return "Silt"
    elif clay > 25 and sand > 25:
        return "Clay Loam"
    elif sand > 50:
        return "Sandy Loam"
    else:
        return "Loam"


def assess_fertility(organic_matter: float, ph: float, clay: float, sand: float) -> Fertility:
    score = 50.0
    score += organic_matter * 5
    score += 20 - abs(ph - PH_OPTIMAL) * 10

    # Balanced texture
    if 20 < clay < 50 and 20 < sand < 60:
        score += 15

    score = clamp(score, 0, 100)

    if score > 75:
        level = "high"
    elif score > 50:
        level = "medium"
    else:
        level = "low"

    return Fertility(score=int(round_half_up(score)), level=level, description=FERTILITY_DESCRIPTIONS[level])


def estimate_composition(bands: Dict[str, float], location: Location) -> CompositionResult:
    red = bands.get("red", 0.0)
    swir1 = bands.get("swir1", 0.0)

    swir_ratio = safe_ratio(bands.get("swir1"), bands.get("swir2"))
    iron_ratio = safe_ratio(bands.get("red"), bands.get("blue"))

    clay = clamp(swir_ratio * 40, 0, 100)
    sand = clamp((2 - swir_ratio) * 30, 0, 100)
    silt = max(0.0, 100 - clay - sand)

    organic_matter = clamp((1 - (red + swir1) / 2) * 8, 0, 15)
    iron_oxide = clamp((iron_ratio - 1) * 15, 0, 10)
    ph = estimate_ph(bands, location)

    soil_type = classify_soil_type(clay, sand, silt)

    return CompositionResult(
        clay=clay,
        sand=sand,
        silt=silt,
        organic_matter=organic_matter,
        iron_oxide=iron_oxide,
        ph=ph,
        soil_type=soil_type,
        description=SOIL_TYPES[soil_type],
        fertility=assess_fertility(organic_matter, ph, clay, sand),
    )
