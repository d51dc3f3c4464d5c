"""
Schema definitions for reconstruction-based anomaly detection.

ModelConfig carries the hyperparameters a model was trained with; it is
loaded once per channel and never mutated. AnomalyResult is the value
returned for every prediction.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.data.buffer import required_buffer_size
from src.data.features import FeatureMode


class DetectorState(str, Enum):
    """Lifecycle of a detector instance."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    FAILED = "failed"


class ScalerParams(BaseModel):
    """
    Per-feature scaler parameters.

    Fields:
    - minimum: fitted data minimum per feature
    - scale: multiplier per feature (1 / fitted data range)
    """

    model_config = ConfigDict(frozen=True)

    minimum: List[float] = Field(min_length=1)
    scale: List[float] = Field(min_length=1)

    @field_validator("minimum", "scale")
    @classmethod
    def _finite(cls, values: List[float]) -> List[float]:
        if not all(math.isfinite(v) for v in values):
            raise ValueError("scaler values must be finite")
        return values

    @model_validator(mode="after")
    def _same_length(self) -> "ScalerParams":
        if len(self.minimum) != len(self.scale):
            raise ValueError(
                f"scaler minimum has {len(self.minimum)} entries but scale has {len(self.scale)}"
            )
        return self

    @classmethod
    def from_range(cls, minimum: List[float], data_range: List[float]) -> "ScalerParams":
        """Build from a fitted data range; scale is stored as its reciprocal."""
        if any(r == 0 for r in data_range):
            raise ValueError("scaler range entries must be non-zero")
        return cls(minimum=minimum, scale=[1.0 / r for r in data_range])


class ModelConfig(BaseModel):
    """
    Hyperparameters of one trained sequence autoencoder.

    Fields:
    - sequence_length: feature vectors per model input
    - window_size: raw samples per feature window (1 for pass-through)
    - num_features: length of each feature vector
    - anomaly_threshold: MAE above which a sequence is anomalous
    - scaler: per-feature scaler parameters
    - feature_mode: window statistics or raw pass-through
    - clamp_output_to_unit_range: clip scaled features to [0, 1]
    """

    model_config = ConfigDict(frozen=True)

    sequence_length: int = Field(ge=1)
    window_size: int = Field(ge=1)
    num_features: int = Field(ge=1)
    anomaly_threshold: float
    scaler: ScalerParams
    feature_mode: FeatureMode = FeatureMode.WINDOW_STATS
    clamp_output_to_unit_range: bool = False

    @field_validator("anomaly_threshold")
    @classmethod
    def _finite_threshold(cls, value: float) -> float:
        if not math.isfinite(value):
            raise ValueError("anomaly_threshold must be finite")
        return value

    @model_validator(mode="after")
    def _consistent(self) -> "ModelConfig":
        if self.feature_mode == FeatureMode.WINDOW_STATS:
            if self.window_size < 2:
                raise ValueError("window_size must be >= 2 for window statistics")
            if self.num_features % 2 != 0:
                raise ValueError(
                    f"num_features must be even (means then stds), got {self.num_features}"
                )
        elif self.window_size != 1:
            raise ValueError("window_size must be 1 for pass-through channels")

        if len(self.scaler.minimum) != self.num_features:
            raise ValueError(
                f"scaler has {len(self.scaler.minimum)} entries, expected {self.num_features}"
            )
        return self

    @property
    def num_axes(self) -> int:
        if self.feature_mode == FeatureMode.PASSTHROUGH:
            return self.num_features
        return self.num_features // 2

    @property
    def required_buffer_size(self) -> int:
        return required_buffer_size(self.window_size, self.sequence_length)


class AnomalyResult(BaseModel):
    """
    Verdict for one full feature sequence.

    Fields:
    - is_anomaly: error_score > anomaly_threshold
    - error_score: mean absolute reconstruction error
    - channel: name of the detector that produced it (optional)
    """

    model_config = ConfigDict(frozen=True)

    is_anomaly: bool
    error_score: float = Field(ge=0.0)
    channel: Optional[str] = None
