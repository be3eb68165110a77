"""Soil condition inference from multispectral satellite reflectance."""

from .config import EngineConfig, load_config
from .errors import NoDataError, InvalidInputError
from .data.scenes import Scene, Location
from .engine import analyze_soil, as_dict, SoilAnalysisResult

__all__ = [
    'EngineConfig',
    'load_config',
    'NoDataError',
    'InvalidInputError',
    'Scene',
    'Location',
    'analyze_soil',
    'as_dict',
    'SoilAnalysisResult',
]
