"""
Soil condition inference entry point.

analyze_soil() is a pure function of its arguments: it performs no I/O,
keeps no state between calls and reads no environment. Callers that want
environment-driven thresholds build an EngineConfig with load_config() and
pass it in.
"""

import logging
from datetime import datetime, date, timezone
from typing import NamedTuple, Sequence, Optional, List, Any

from .config import EngineConfig
from .data.scenes import Scene, Location, normalize_bands
from .processing.indices import SpectralIndices, compute_indices
from .processing.selection import select_best_scene
from .analysis.moisture import MoistureResult, estimate_moisture
from .analysis.composition import CompositionResult, estimate_composition
from .analysis.temperature import TemperatureResult, estimate_temperature
from .analysis.confidence import score_confidence
from .analysis.recommendations import Recommendation, generate_recommendations

logger = logging.getLogger(__name__)


class SoilAnalysisResult(NamedTuple):
    scene_used: str
    analysis_date: datetime
    moisture: MoistureResult
    composition: CompositionResult
    temperature: TemperatureResult
    indices: SpectralIndices
    confidence: str
    recommendations: List[Recommendation]


def analyze_soil(
    scenes: Sequence[Scene],
    location: Location,
    now: Optional[datetime] = None,
    config: Optional[EngineConfig] = None,
) -> SoilAnalysisResult:
    """
    Runs the full inference for one location.

    Args:
        scenes: Candidate scenes (at least one).
        location: Analysed point.
        now: Reference time for scene age and seasonal advice. Defaults to
             the current UTC time.
        config: Engine thresholds. Defaults to EngineConfig().

    Returns:
        SoilAnalysisResult for the selected scene.

    Raises:
        NoDataError: if scenes is empty. No partial result is produced.
    """
    if config is None:
        config = EngineConfig()
    if now is None:
        now = datetime.now(timezone.utc)

    best = select_best_scene(scenes, max_cloud_cover=config.max_cloud_cover)
    bands = normalize_bands(best.bands)

    indices = compute_indices(bands, soil_brightness=config.soil_brightness)
    moisture = estimate_moisture(bands, indices, location)
    composition = estimate_composition(bands, location)
    temperature = estimate_temperature(bands, location, best.captured_at)
    recommendations = generate_recommendations(moisture, composition, indices, location, on_date=now.date())
    confidence = score_confidence(best, scenes, now=now, config=config)

    logger.debug(
        "Analysed scene %s: moisture=%.1f%% soil=%s confidence=%s (%d recommendations)",
        best.id, moisture.percentage, composition.soil_type, confidence, len(recommendations),
    )

    return SoilAnalysisResult(
        scene_used=best.id,
        analysis_date=now,
        moisture=moisture,
        composition=composition,
        temperature=temperature,
        indices=indices,
        confidence=confidence,
        recommendations=recommendations,
    )


def as_dict(value: Any) -> Any:
    """Recursively converts result tuples into JSON-ready dicts and lists."""
    if hasattr(value, "_asdict"):
        return {k: as_dict(v) for k, v in value._asdict().items()}
    if isinstance(value, dict):
        return {k: as_dict(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [as_dict(v) for v in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value
