"""
Feature extraction from raw sample windows.

Converts windows of raw sensor samples into fixed-length feature vectors
and slides the window across the sample buffer to build the feature
sequence consumed by the sequence autoencoder.

Design:
- Features must match the offline training pipeline exactly: per-axis
  mean, then per-axis sample standard deviation (ddof=1, as pandas .std())
- Feature order is fixed: all means first, then all stds, in axis order
- Windows overlap and advance by exactly one raw sample
- No scaling here (see src/data/scaling.py)
"""

from enum import Enum
from typing import List

import numpy as np

from src.core.exceptions import ShapeMismatchError

AXIS_NAMES = ("x", "y", "z")


class FeatureMode(str, Enum):
    """
    How a channel turns raw samples into model features.
    
    WINDOW_STATS: mean and sample std per axis over window_size samples
    PASSTHROUGH: the raw sample itself is the feature vector (window_size=1)
    """
    WINDOW_STATS = "window_stats"
    PASSTHROUGH = "passthrough"


def axis_name(index: int) -> str:
    """Name of an axis: x, y, z, then axis_3, axis_4, ..."""
    return AXIS_NAMES[index] if index < len(AXIS_NAMES) else f"axis_{index}"


def feature_names(num_axes: int, mode: FeatureMode = FeatureMode.WINDOW_STATS) -> List[str]:
    """
    Ordered feature names for a channel.
    
    Args:
        num_axes: Number of axes per raw sample
        mode: Feature mode of the channel
    
    Returns:
        e.g. [mean_x, mean_y, mean_z, std_x, std_y, std_z] for 3 axes
    """
    axes = [axis_name(i) for i in range(num_axes)]
    if mode == FeatureMode.PASSTHROUGH:
        return axes
    return [f"mean_{a}" for a in axes] + [f"std_{a}" for a in axes]


def extract_window_features(window: np.ndarray) -> np.ndarray:
    """
    Compute mean and sample standard deviation per axis.
    
    Args:
        window: (window_size, num_axes) array of raw samples, oldest first
    
    Returns:
        1-D float64 array [mean_0..mean_k, std_0..std_k]
    
    Notes:
        - std uses the n-1 denominator (Bessel's correction); the anomaly
          threshold was calibrated on that statistic
        - a single-sample window has std 0.0
    """
    window = np.asarray(window, dtype=np.float64)
    if window.ndim != 2 or window.shape[0] == 0:
        raise ShapeMismatchError(
            f"Window must be a non-empty (samples, axes) array, got shape {window.shape}"
        )
    
    n = window.shape[0]
    means = window.sum(axis=0) / n
    
    if n > 1:
        squared = ((window - means) ** 2).sum(axis=0)
        stds = np.sqrt(squared / (n - 1))
    else:
        stds = np.zeros(window.shape[1], dtype=np.float64)
    
    return np.concatenate([means, stds])


def extract_passthrough_features(window: np.ndarray) -> np.ndarray:
    """
    Feature vector of a one-sample window: the sample values themselves.
    """
    window = np.asarray(window, dtype=np.float64)
    if window.ndim != 2 or window.shape[0] != 1:
        raise ShapeMismatchError(
            f"Pass-through window must hold exactly one sample, got shape {window.shape}"
        )
    return window[0].copy()


def build_feature_sequence(
    samples: np.ndarray,
    window_size: int,
    sequence_length: int,
    mode: FeatureMode = FeatureMode.WINDOW_STATS,
) -> np.ndarray:
    """
    Slide the feature window across a full buffer snapshot.
    
    The i-th feature vector is computed from samples[i : i + window_size],
    so sequence_length overlapping windows are drawn from exactly
    window_size + sequence_length - 1 samples.
    
    Args:
        samples: (window_size + sequence_length - 1, num_axes) array
        window_size: Raw samples per window
        sequence_length: Feature vectors per sequence
        mode: Feature mode of the channel
    
    Returns:
        (sequence_length, num_features) float64 array
    
    Raises:
        ShapeMismatchError: If the sample count does not match the sizing
    """
    samples = np.asarray(samples, dtype=np.float64)
    expected = window_size + sequence_length - 1
    if samples.ndim != 2 or samples.shape[0] != expected:
        raise ShapeMismatchError(
            f"Need {expected} samples for window_size={window_size}, "
            f"sequence_length={sequence_length}; got shape {samples.shape}"
        )
    
    extract = (
        extract_passthrough_features
        if mode == FeatureMode.PASSTHROUGH
        else extract_window_features
    )
    
    vectors = [
        extract(samples[i:i + window_size])
        for i in range(sequence_length)
    ]
    return np.stack(vectors)
