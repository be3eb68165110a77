import logging
from datetime import timezone
from typing import Optional, Sequence

from ..data.scenes import Scene
from ..errors import NoDataError

logger = logging.getLogger(__name__)


def _timestamp(scene: Scene) -> float:
    captured = scene.captured_at
    if captured.tzinfo is None:
        captured = captured.replace(tzinfo=timezone.utc)
    return captured.timestamp()


def _rank(scene: Scene):
    # Lowest cloud cover first, newest capture breaks ties
    return (scene.cloud_cover, -_timestamp(scene))


def select_best_scene(scenes: Sequence[Scene], max_cloud_cover: Optional[float] = None) -> Scene:
    """
    Picks the scene to analyse from a list of candidates.

    Scenes are ranked by cloud cover, then by capture time (most recent wins).
    max_cloud_cover does not exclude anything: when even the best scene is
    above the limit it is still returned as a best-effort choice and a
    warning is logged.

    Raises:
        NoDataError: if scenes is empty.
    """
    if not scenes:
        raise NoDataError("No satellite data available for analysis")

    best = min(scenes, key=_rank)

    if max_cloud_cover is not None and best.cloud_cover > max_cloud_cover:
        logger.warning(
            "No scene within %.0f%% cloud cover; using best available %s (%.1f%%)",
            max_cloud_cover, best.id, best.cloud_cover,
        )

    logger.debug("Using scene %s (%.1f%% cloud cover)", best.id, best.cloud_cover)
    return best
