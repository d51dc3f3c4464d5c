"""
Reconstruction-error scoring.

The anomaly signal is the mean absolute difference between the scaled
input sequence and the model's reconstruction, averaged over every
(step, feature) cell.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from src.core.exceptions import ShapeMismatchError

from .schema import AnomalyResult


def reconstruction_error(scaled_input: np.ndarray, reconstructed: np.ndarray) -> float:
    """
    Flattened mean absolute error.

    Denominator is sequence_length * num_features. Symmetric in its
    arguments and 0.0 for an exact reconstruction.
    """
    a = np.asarray(scaled_input, dtype=np.float64)
    b = np.asarray(reconstructed, dtype=np.float64)
    if a.shape != b.shape:
        raise ShapeMismatchError(f"Cannot compare shapes {a.shape} and {b.shape}")
    if a.size == 0:
        raise ShapeMismatchError("Cannot score an empty sequence")
    return float(np.abs(a - b).sum() / a.size)


@dataclass
class AnomalyScorer:
    """
    Compares reconstruction error to a calibrated threshold.

    Strictly greater than the threshold is anomalous; equal is normal.
    """

    threshold: float
    channel: Optional[str] = None

    def score(self, scaled_input: np.ndarray, reconstructed: np.ndarray) -> AnomalyResult:
        error = reconstruction_error(scaled_input, reconstructed)
        return AnomalyResult(
            is_anomaly=error > self.threshold,
            error_score=error,
            channel=self.channel,
        )
