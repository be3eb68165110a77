from .moisture import estimate_moisture, classify_moisture, MoistureResult
from .composition import (
    estimate_composition,
    estimate_ph,
    classify_soil_type,
    assess_fertility,
    CompositionResult,
    Fertility
)
from .temperature import estimate_temperature, TemperatureResult, TemperatureFactors
from .confidence import score_confidence, confidence_from_factors, scene_age_days
from .recommendations import (
    generate_recommendations,
    get_season,
    get_seasonal_advice,
    Recommendation,
    Rule,
    RULES
)
