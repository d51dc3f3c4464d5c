"""
Offline reference feature pipeline.

Reproduces the training-side feature engineering over a recorded frame of
raw samples using pandas rolling windows. The streaming path in
src/data/features.py must agree with this output window for window.

Design rationale:
- pandas .rolling().std() uses ddof=1, the statistic the model saw
- Rows before the first full window are dropped, as the training script did
- Column order matches feature_names(): means first, then stds
"""

from typing import Sequence

import numpy as np
import pandas as pd

from src.core.exceptions import ShapeMismatchError
from src.data.features import FeatureMode, feature_names


def rolling_window_features(
    frame: pd.DataFrame,
    window_size: int,
    axes: Sequence[str] = ("x", "y", "z"),
) -> pd.DataFrame:
    """
    Rolling mean and sample std per axis.
    
    Args:
        frame: Raw samples, one row per reading, one column per axis
        window_size: Samples per window
        axes: Axis columns in feature order
    
    Returns:
        DataFrame with one row per complete window, columns
        mean_<axis>... then std_<axis>...; row i covers frame rows
        [i, i + window_size)
    
    Raises:
        ValueError: If an axis column is missing
    """
    missing = [a for a in axes if a not in frame.columns]
    if missing:
        raise ValueError(f"Missing axis columns: {missing}")
    
    values = frame[list(axes)].astype("float64")
    rolling = values.rolling(window=window_size)
    means = rolling.mean()
    stds = rolling.std()
    
    features = pd.concat([means, stds], axis=1)
    features.columns = feature_names(len(axes), FeatureMode.WINDOW_STATS)
    
    # First window_size - 1 rows are incomplete windows
    features = features.iloc[window_size - 1:]
    return features.reset_index(drop=True)


def feature_sequences(features: pd.DataFrame, sequence_length: int) -> np.ndarray:
    """
    Stack consecutive feature rows into overlapping model sequences.
    
    Args:
        features: Output of rolling_window_features (or any feature frame)
        sequence_length: Feature vectors per sequence
    
    Returns:
        (num_sequences, sequence_length, num_features) float64 array; sequence
        j holds feature rows [j, j + sequence_length)
    
    Raises:
        ShapeMismatchError: If there are fewer rows than sequence_length
    """
    matrix = features.to_numpy(dtype=np.float64)
    count = matrix.shape[0] - sequence_length + 1
    if count < 1:
        raise ShapeMismatchError(
            f"Need at least {sequence_length} feature rows, got {matrix.shape[0]}"
        )
    return np.stack([matrix[j:j + sequence_length] for j in range(count)])
