"""
Data module: raw samples, buffering, feature extraction, and scaling.

Responsible for converting raw sensor readings into the scaled feature
sequences the reconstruction model consumes. Pipeline:

    Raw readings (accelerometer xyz / keystroke latency)
        ↓
    Sliding buffer (src/data/buffer.py) → window_size + sequence_length - 1 samples
        ↓
    Feature extraction (src/data/features.py) → feature sequence
        ↓
    Scaling (src/data/scaling.py) → model input
        ↓
    Ready for inference and scoring (src/anomaly)
"""

from src.data.buffer import SampleBuffer, required_buffer_size
from src.data.features import (
    FeatureMode,
    build_feature_sequence,
    extract_passthrough_features,
    extract_window_features,
    feature_names,
)
from src.data.keystrokes import KeystrokeLatencyTracker
from src.data.scaling import FeatureScaler
from src.data.schema import RawSample

__all__ = [
    # Schema
    "RawSample",
    
    # Buffering
    "SampleBuffer",
    "required_buffer_size",
    
    # Features
    "FeatureMode",
    "extract_window_features",
    "extract_passthrough_features",
    "build_feature_sequence",
    "feature_names",
    
    # Scaling
    "FeatureScaler",
    
    # Keystrokes
    "KeystrokeLatencyTracker",
]
