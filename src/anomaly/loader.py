"""
Strict model configuration loading.

Reads the JSON document exported next to a trained model and validates it
into a ModelConfig. Any missing or malformed field is a ConfigError; there
is no silent default here. Fallback policies belong to the caller
(see host/channels.py).

Scaler parameters may be spelled scaler_min/scaler_scale (scale already
inverted) or scaler_data_min/scaler_data_range (raw fitted range). The
second spelling matches what the movement training export writes, but that
export carries only sequence_length and anomaly_threshold: window_size,
num_features and feature_mode must be added to it (1, 3 and "passthrough"
for the raw xyz model) before it loads here.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from pydantic import ValidationError

from src.core.exceptions import ConfigError

from .schema import ModelConfig, ScalerParams

logger = logging.getLogger(__name__)

ConfigSource = Union[str, Path, Mapping[str, Any]]

REQUIRED_KEYS = ("sequence_length", "window_size", "num_features", "anomaly_threshold")

# Scaler key spellings; the data_min/data_range pair needs REQUIRED_KEYS added
MIN_KEYS = ("scaler_min", "scaler_data_min")
SCALE_KEYS = ("scaler_scale",)
RANGE_KEYS = ("scaler_range", "scaler_data_range")


def load_model_config(source: ConfigSource) -> ModelConfig:
    """
    Load and validate a model configuration.

    Args:
        source: Path to a JSON file, a JSON string, or a parsed mapping

    Returns:
        Validated, immutable ModelConfig

    Raises:
        ConfigError: If the document cannot be read or fails validation
    """
    data = _read_source(source)

    missing = [key for key in REQUIRED_KEYS if key not in data]
    if missing:
        raise ConfigError(f"Model config missing required keys: {', '.join(missing)}")

    try:
        scaler = _scaler_from(data)
        config = ModelConfig(
            sequence_length=data["sequence_length"],
            window_size=data["window_size"],
            num_features=data["num_features"],
            anomaly_threshold=data["anomaly_threshold"],
            scaler=scaler,
            feature_mode=data.get("feature_mode", "window_stats"),
            clamp_output_to_unit_range=data.get("clamp_output_to_unit_range", False),
        )
    except (ValidationError, ValueError, TypeError) as exc:
        raise ConfigError(f"Invalid model config: {exc}") from exc

    logger.info(
        "Loaded model config: sequence_length=%d window_size=%d num_features=%d threshold=%g",
        config.sequence_length,
        config.window_size,
        config.num_features,
        config.anomaly_threshold,
    )
    return config


def _read_source(source: ConfigSource) -> Dict[str, Any]:
    if isinstance(source, Mapping):
        return dict(source)

    if isinstance(source, str) and source.lstrip().startswith("{"):
        text = source
        origin = "<string>"
    else:
        path = Path(source)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Cannot read model config {path}: {exc}") from exc
        origin = str(path)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Malformed JSON in model config {origin}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Model config {origin} must be a JSON object")
    return data


def _pick(data: Mapping[str, Any], keys: tuple) -> Any:
    present = [k for k in keys if k in data]
    if len(present) > 1:
        raise ConfigError(f"Ambiguous model config: both {present[0]} and {present[1]} given")
    return data[present[0]] if present else None


def _scaler_from(data: Mapping[str, Any]) -> ScalerParams:
    minimum = _pick(data, MIN_KEYS)
    if minimum is None:
        raise ConfigError("Model config missing required key: scaler_min")

    scale = _pick(data, SCALE_KEYS)
    data_range = _pick(data, RANGE_KEYS)
    if scale is not None and data_range is not None:
        raise ConfigError("Model config must give either scaler_scale or scaler_range, not both")
    if scale is None and data_range is None:
        raise ConfigError("Model config missing required key: scaler_scale or scaler_range")

    if data_range is not None:
        return ScalerParams.from_range(minimum=list(minimum), data_range=list(data_range))
    return ScalerParams(minimum=list(minimum), scale=list(scale))
