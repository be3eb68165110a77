from datetime import datetime, timezone
from typing import Optional, Sequence

from ..config import EngineConfig
from ..data.scenes import Scene
from ..processing.indices import clamp

CONFIDENCE_LEVELS = ("low", "medium", "high")


def scene_age_days(captured_at: datetime, now: datetime) -> float:
    """Days between capture and now; naive datetimes are read as UTC."""
    if captured_at.tzinfo is None:
        captured_at = captured_at.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now - captured_at).total_seconds() / 86400


def confidence_score(cloud_cover: float, scene_count: int, age_days: float,
                     config: Optional[EngineConfig] = None) -> float:
    if config is None:
        config = EngineConfig()

    score = 100.0
    score -= cloud_cover * 2

    if scene_count < config.min_scene_count:
        score -= 20

    # Penalties stack: an old scene loses both
    if age_days > config.stale_after_days:
        score -= 10
    if age_days > config.very_stale_after_days:
        score -= 20

    return clamp(score, 10, 100)


def confidence_from_factors(cloud_cover: float, scene_count: int, age_days: float,
                            config: Optional[EngineConfig] = None) -> str:
    """Maps (cloud cover, scene count, scene age) to low / medium / high."""
    score = confidence_score(cloud_cover, scene_count, age_days, config)
    if score > 80:
        return "high"
    elif score > 60:
        return "medium"
    else:
        return "low"


def score_confidence(chosen: Scene, all_scenes: Sequence[Scene], now: Optional[datetime] = None,
                     config: Optional[EngineConfig] = None) -> str:
    if now is None:
        now = datetime.now(timezone.utc)
    age = scene_age_days(chosen.captured_at, now)
    return confidence_from_factors(chosen.cloud_cover, len(all_scenes), age, config)
