"""
Core module: Configuration, logging, and exception handling.
"""

from .config import Config, config
from .exceptions import (
    AnomalyDetectionError,
    ConfigError,
    ModelLoadError,
    ShapeMismatchError,
)

__all__ = [
    "Config",
    "config",
    "AnomalyDetectionError",
    "ConfigError",
    "ModelLoadError",
    "ShapeMismatchError",
]
