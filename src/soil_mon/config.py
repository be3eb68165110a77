import os
from typing import NamedTuple, Optional, Mapping

from .errors import InvalidInputError

# Configuration
DEFAULT_MAX_CLOUD_COVER = 20.0
DEFAULT_MIN_SCENE_COUNT = 2
DEFAULT_STALE_AFTER_DAYS = 30
DEFAULT_VERY_STALE_AFTER_DAYS = 90
SOIL_BRIGHTNESS_L = 0.5


class EngineConfig(NamedTuple):
    max_cloud_cover: Optional[float] = DEFAULT_MAX_CLOUD_COVER
    min_scene_count: int = DEFAULT_MIN_SCENE_COUNT
    stale_after_days: float = DEFAULT_STALE_AFTER_DAYS
    very_stale_after_days: float = DEFAULT_VERY_STALE_AFTER_DAYS
    soil_brightness: float = SOIL_BRIGHTNESS_L


def _read_number(environ, key, default, cast):
    raw = environ.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise InvalidInputError(f"{key} must be a number, got {raw!r}")


def load_config(environ: Optional[Mapping[str, str]] = None) -> EngineConfig:
    """
    Builds an EngineConfig from environment variables.

    Recognised variables:
        SOIL_MON_MAX_CLOUD_COVER: preferred upper cloud cover limit (percent).
            "none" disables the limit.
        SOIL_MON_MIN_SCENES: scene count below which confidence is reduced.
        SOIL_MON_STALE_DAYS / SOIL_MON_VERY_STALE_DAYS: scene age penalties.

    The engine itself never reads the environment; callers build the config
    once and pass it to analyze_soil().
    """
    if environ is None:
        environ = os.environ

    raw_cloud = environ.get("SOIL_MON_MAX_CLOUD_COVER", "")
    if raw_cloud.strip().lower() == "none":
        max_cloud = None
    else:
        max_cloud = _read_number(environ, "SOIL_MON_MAX_CLOUD_COVER", DEFAULT_MAX_CLOUD_COVER, float)
        if not 0 <= max_cloud <= 100:
            raise InvalidInputError("SOIL_MON_MAX_CLOUD_COVER must be between 0 and 100")

    config = EngineConfig(
        max_cloud_cover=max_cloud,
        min_scene_count=_read_number(environ, "SOIL_MON_MIN_SCENES", DEFAULT_MIN_SCENE_COUNT, int),
        stale_after_days=_read_number(environ, "SOIL_MON_STALE_DAYS", DEFAULT_STALE_AFTER_DAYS, float),
        very_stale_after_days=_read_number(
            environ, "SOIL_MON_VERY_STALE_DAYS", DEFAULT_VERY_STALE_AFTER_DAYS, float
        ),
    )

    if config.min_scene_count < 1:
        raise InvalidInputError("SOIL_MON_MIN_SCENES must be at least 1")
    if config.very_stale_after_days < config.stale_after_days:
        raise InvalidInputError("SOIL_MON_VERY_STALE_DAYS must not be less than SOIL_MON_STALE_DAYS")
    return config
