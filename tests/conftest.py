"""
Pytest configuration and shared fixtures.

Provides model configurations, fake reconstruction models, and sample
streams for unit and integration tests.
"""

import numpy as np
import pytest

from src.anomaly.schema import ModelConfig, ScalerParams
from src.data.features import FeatureMode


@pytest.fixture
def single_axis_config() -> ModelConfig:
    """
    Fixture for the single-axis scenario: window 3, sequence 2, mean/std only.
    
    Identity scaler so features reach the model unchanged.
    """
    return ModelConfig(
        sequence_length=2,
        window_size=3,
        num_features=2,
        anomaly_threshold=0.1,
        scaler=ScalerParams(minimum=[0.0, 0.0], scale=[1.0, 1.0]),
    )


@pytest.fixture
def accel_config() -> ModelConfig:
    """3-axis accelerometer channel with window statistics."""
    return ModelConfig(
        sequence_length=4,
        window_size=5,
        num_features=6,
        anomaly_threshold=0.05,
        scaler=ScalerParams(
            minimum=[-20.0, -20.0, -20.0, 0.0, 0.0, 0.0],
            scale=[1 / 40.0, 1 / 40.0, 1 / 40.0, 0.1, 0.1, 0.1],
        ),
    )


@pytest.fixture
def passthrough_config() -> ModelConfig:
    return ModelConfig(
        sequence_length=3,
        window_size=1,
        num_features=3,
        anomaly_threshold=0.031,
        scaler=ScalerParams.from_range(minimum=[-20.0] * 3, data_range=[40.0] * 3),
        feature_mode=FeatureMode.PASSTHROUGH,
        clamp_output_to_unit_range=True,
    )


@pytest.fixture
def config_document() -> dict:
    """Model config document as exported alongside a trained model."""
    return {
        "sequence_length": 20,
        "window_size": 10,
        "num_features": 6,
        "anomaly_threshold": 0.042,
        "scaler_min": [-12.0, -12.0, -3.0, 0.0, 0.0, 0.0],
        "scaler_scale": [0.04, 0.04, 0.05, 0.2, 0.2, 0.25],
    }


@pytest.fixture
def walking_stream() -> np.ndarray:
    """Deterministic 3-axis accelerometer stream (200 readings)."""
    t = np.arange(200, dtype=np.float64)
    return np.column_stack([
        2.0 * np.sin(t / 5.0),
        1.5 * np.cos(t / 7.0),
        9.81 + 0.3 * np.sin(t / 3.0),
    ])


def pytest_configure(config):
    """
    Pytest hook for custom configuration.
    
    Registers custom markers used throughout tests.
    """
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running (deferred CI)"
    )
