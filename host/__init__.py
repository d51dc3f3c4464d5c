"""
Host collaborator for the sensor anomaly detector.

Stands in for the UI and platform sensor layer: loads per-channel models,
feeds accelerometer and keystroke events, and tracks status text.
"""

from .channels import default_movement_config, default_typing_config, load_config_or_default
from .monitor import SensorMonitor

__all__ = [
    "SensorMonitor",
    "default_movement_config",
    "default_typing_config",
    "load_config_or_default",
]
