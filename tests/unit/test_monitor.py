"""
Unit tests for the host sensor monitor.
"""

import json

import numpy as np
import torch

from host.channels import default_movement_config, default_typing_config
from host.monitor import SensorMonitor
from src.anomaly.detector import AnomalyDetector
from src.anomaly.schema import DetectorState
from src.core.config import ChannelAssets, EngineSettings
from src.data.features import FeatureMode


class _EchoModel:
    def infer(self, tensor):
        return np.array(tensor, copy=True)


class _ConstantModel:
    def __init__(self, value):
        self.value = value

    def infer(self, tensor):
        return np.full_like(tensor, self.value)


class _WindowedEcho(torch.nn.Module):
    def forward(self, x: torch.Tensor) -> torch.Tensor:
        assert x.shape[-1] == 6, "windowed model expects 6 features"
        return x.clone()


def _detector(name, config, model):
    detector = AnomalyDetector(channel=name)
    detector.initialize(config, lambda: model)
    return detector


def _monitor(movement_model, typing_model, accelerometer=None) -> SensorMonitor:
    if accelerometer is None:
        accelerometer = AnomalyDetector(channel="accelerometer")
    return SensorMonitor(
        accelerometer=accelerometer,
        movement=_detector("movement", default_movement_config(), movement_model),
        typing=_detector("typing", default_typing_config(), typing_model),
    )


def _windowed_assets(tmp_path, config_document) -> ChannelAssets:
    config_path = tmp_path / "model_config.json"
    config_path.write_text(json.dumps(config_document))
    model_path = tmp_path / "sensor_anomaly_model.pt"
    torch.jit.script(_WindowedEcho()).save(str(model_path))
    return ChannelAssets(config_path=config_path, model_path=model_path)


def _windowed_document() -> dict:
    return {
        "sequence_length": 4,
        "window_size": 5,
        "num_features": 6,
        "anomaly_threshold": 0.05,
        "scaler_min": [-20.0, -20.0, -20.0, 0.0, 0.0, 0.0],
        "scaler_scale": [0.025, 0.025, 0.025, 0.1, 0.1, 0.1],
    }


def test_initial_status():
    monitor = _monitor(_EchoModel(), _EchoModel())
    assert monitor.status_text() == (
        "Accelerometer: Unavailable\nMovement: Normal\nTyping: Pending..."
    )


def test_movement_status_follows_results():
    monitor = _monitor(_ConstantModel(0.0), _EchoModel())

    results = [monitor.on_accelerometer(0.0, 0.0, 9.81) for _ in range(15)]

    assert results[:14] == [[]] * 14
    assert len(results[14]) == 1
    assert results[14][0].channel == "movement"
    assert results[14][0].is_anomaly is True
    assert "MOVEMENT ANOMALY!" in monitor.status_text()


def test_accelerometer_reading_feeds_both_channels(accel_config, walking_stream):
    accelerometer = _detector("accelerometer", accel_config, _EchoModel())
    monitor = _monitor(_EchoModel(), _EchoModel(), accelerometer=accelerometer)

    results = [monitor.on_accelerometer(*row) for row in walking_stream[:15]]

    # accelerometer needs 5 + 4 - 1 = 8 readings, movement needs 15
    assert [len(r) for r in results] == [0] * 7 + [1] * 7 + [2]
    assert [r.channel for r in results[14]] == ["accelerometer", "movement"]
    assert monitor.status_text().startswith("Accelerometer: Normal\nMovement: Normal")


def test_typing_normal_after_sequence():
    monitor = _monitor(_EchoModel(), _EchoModel())

    results = [monitor.on_key_press(t) for t in range(0, 1200, 100)]

    # first press records time, next 10 fill the sequence
    assert results[:10] == [None] * 10
    assert results[10].is_anomaly is False
    assert results[10].channel == "typing"
    assert monitor.status_text().endswith("Typing: Normal")


def test_text_changes_feed_typing_channel():
    monitor = _monitor(_EchoModel(), _ConstantModel(1.0))

    result = None
    for t in range(11):
        result = monitor.on_text_changed(removed=0, added=1, timestamp_ms=t * 150.0)
        monitor.on_text_changed(removed=1, added=0, timestamp_ms=t * 150.0 + 10)

    assert result is not None
    assert result.is_anomaly is True
    assert "TYPING ANOMALY!" in monitor.status_text()


def test_windowed_accelerometer_channel_from_assets(tmp_path, walking_stream):
    monitor = SensorMonitor.from_assets(
        accelerometer=_windowed_assets(tmp_path, _windowed_document()),
        movement=ChannelAssets(config_path=None, model_path=None),
        keystrokes=ChannelAssets(config_path=None, model_path=None),
        engine=EngineSettings(),
    )

    try:
        assert monitor.accelerometer.is_initialized
        assert monitor.accelerometer.config.feature_mode == FeatureMode.WINDOW_STATS
        assert monitor.accelerometer.config.num_features == 6
        assert "accelerometer" not in monitor.degraded

        results = [r for row in walking_stream[:40] for r in monitor.on_accelerometer(*row)]

        assert len(results) == 40 - 8 + 1
        assert all(r.channel == "accelerometer" and r.error_score == 0.0 for r in results)
    finally:
        monitor.close()


def test_broken_accelerometer_config_has_no_fallback(tmp_path, walking_stream):
    document = _windowed_document()
    document["scaler_min"] = [0.0] * 5

    monitor = SensorMonitor.from_assets(
        accelerometer=_windowed_assets(tmp_path, document),
        movement=ChannelAssets(config_path=None, model_path=None),
        keystrokes=ChannelAssets(config_path=None, model_path=None),
        engine=EngineSettings(),
    )

    try:
        assert monitor.accelerometer.state == DetectorState.FAILED
        assert monitor.accelerometer.config is None
        assert "accelerometer" not in monitor.degraded
        assert monitor.engines == []
        assert all(monitor.on_accelerometer(*row) == [] for row in walking_stream[:40])
        assert monitor.status_text().startswith("Accelerometer: Unavailable")
    finally:
        monitor.close()


def test_missing_assets_leave_channels_unavailable(tmp_path):
    monitor = SensorMonitor.from_assets(
        accelerometer=ChannelAssets(config_path=None, model_path=None),
        movement=ChannelAssets(config_path=None, model_path=tmp_path / "missing.pt"),
        keystrokes=ChannelAssets(config_path=tmp_path / "missing.json", model_path=None),
        engine=EngineSettings(),
    )

    assert monitor.degraded == ["movement", "typing"]
    assert not monitor.accelerometer.is_initialized
    assert not monitor.movement.is_initialized
    assert not monitor.typing.is_initialized
    assert monitor.on_accelerometer(0.0, 0.0, 9.8) == []
    assert monitor.status_text() == (
        "Accelerometer: Unavailable\nMovement: Unavailable\nTyping: Unavailable"
    )
    monitor.close()
