"""
Per-channel model configuration for the host.

The core loads configs strictly. The host may choose to run a channel on
built-in defaults when its config cannot be loaded; that degraded mode is
explicit, logged, and reported to the caller.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from src.anomaly import ModelConfig, ScalerParams, load_model_config
from src.core.exceptions import ConfigError
from src.data.features import FeatureMode

logger = logging.getLogger(__name__)


def default_movement_config() -> ModelConfig:
    """
    Raw accelerometer channel: each xyz reading is one sequence step.

    Readings are scaled from [-20, 20] m/s^2 and clipped to [0, 1], the
    range the movement model was trained on.
    """
    return ModelConfig(
        sequence_length=15,
        window_size=1,
        num_features=3,
        anomaly_threshold=0.031,
        scaler=ScalerParams.from_range(minimum=[-20.0, -20.0, -20.0], data_range=[40.0, 40.0, 40.0]),
        feature_mode=FeatureMode.PASSTHROUGH,
        clamp_output_to_unit_range=True,
    )


def default_typing_config(latency_divisor: float = 2000.0) -> ModelConfig:
    """Keystroke channel: one latency (ms) per step, divided by latency_divisor."""
    return ModelConfig(
        sequence_length=10,
        window_size=1,
        num_features=1,
        anomaly_threshold=0.015,
        scaler=ScalerParams(minimum=[0.0], scale=[1.0 / latency_divisor]),
        feature_mode=FeatureMode.PASSTHROUGH,
    )


def load_config_or_default(
    path: Optional[Path], default: ModelConfig, channel: str
) -> Tuple[ModelConfig, bool]:
    """
    Load a channel config, falling back to defaults in degraded mode.

    Returns:
        (config, degraded) where degraded is True if defaults were used
    """
    if path is None:
        logger.warning("No config path for %s channel; running on default values (degraded mode)", channel)
        return default, True

    try:
        return load_model_config(path), False
    except ConfigError as exc:
        logger.warning(
            "Error loading %s config from %s, using default values (degraded mode): %s",
            channel,
            path,
            exc,
        )
        return default, True
