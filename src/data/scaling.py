"""
Per-feature affine scaling.

Applies the scaler fitted during training: scaled = (value - min) * scale.
Some channels were trained on values clipped to [0, 1]; that clipping is a
per-channel flag, never applied implicitly.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from src.core.exceptions import ShapeMismatchError


@dataclass(frozen=True, eq=False)
class FeatureScaler:
    """
    Min-max style scaler over a fixed number of features.

    minimum and scale are parallel arrays; scale is the reciprocal of the
    fitted data range.
    """

    minimum: np.ndarray
    scale: np.ndarray
    clamp_output_to_unit_range: bool = False

    @classmethod
    def from_params(cls, minimum, scale, clamp_output_to_unit_range: bool = False) -> "FeatureScaler":
        minimum = np.array(minimum, dtype=np.float64)
        scale = np.array(scale, dtype=np.float64)
        if minimum.shape != scale.shape or minimum.ndim != 1:
            raise ShapeMismatchError(
                f"Scaler arrays must be 1-D and equal length, got {minimum.shape} and {scale.shape}"
            )
        minimum.setflags(write=False)
        scale.setflags(write=False)
        return cls(minimum=minimum, scale=scale, clamp_output_to_unit_range=clamp_output_to_unit_range)

    @property
    def num_features(self) -> int:
        return int(self.minimum.shape[0])

    def transform(self, vector: np.ndarray) -> np.ndarray:
        """Scale one feature vector; returns a new array."""
        vector = np.asarray(vector, dtype=np.float64)
        if vector.shape != self.minimum.shape:
            raise ShapeMismatchError(
                f"Expected {self.num_features} features, got shape {vector.shape}"
            )
        return self._apply(vector)

    def transform_sequence(self, sequence: np.ndarray) -> np.ndarray:
        """Scale every vector of a (sequence_length, num_features) sequence."""
        sequence = np.asarray(sequence, dtype=np.float64)
        if sequence.ndim != 2 or sequence.shape[1] != self.num_features:
            raise ShapeMismatchError(
                f"Expected (n, {self.num_features}) sequence, got shape {sequence.shape}"
            )
        return self._apply(sequence)

    def _apply(self, values: np.ndarray) -> np.ndarray:
        scaled = (values - self.minimum) * self.scale
        if self.clamp_output_to_unit_range:
            scaled = np.clip(scaled, 0.0, 1.0)
        return scaled
