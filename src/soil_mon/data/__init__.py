"""
Scene records and data-acquisition helpers for soil_mon.

This module provides:
- Scene / Location records, band aliases and input validation (scenes.py)
- Seeded synthetic scenes for missing imagery (synthetic.py)
"""

from .scenes import (
    Scene,
    Location,
    BAND_ALIASES,
    REQUIRED_BANDS,
    normalize_bands,
    validate_bands,
    validate_coordinates,
    validate_date_range,
    parse_scene,
    summarize_scenes,
    get_bbox,
)
from .synthetic import generate_mock_scenes

__all__ = [
    # scenes
    'Scene',
    'Location',
    'BAND_ALIASES',
    'REQUIRED_BANDS',
    'normalize_bands',
    'validate_bands',
    'validate_coordinates',
    'validate_date_range',
    'parse_scene',
    'summarize_scenes',
    'get_bbox',
    # synthetic
    'generate_mock_scenes',
]
