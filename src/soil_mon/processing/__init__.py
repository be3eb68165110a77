from .indices import (
    SpectralIndices,
    compute_indices,
    clamp,
    safe_div,
    safe_ratio,
    round_half_up,
    normalized_difference,
)
from .selection import select_best_scene
