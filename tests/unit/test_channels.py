"""
Unit tests for host channel defaults and degraded-mode loading.
"""

import json
import logging

import pytest

from host.channels import default_movement_config, default_typing_config, load_config_or_default
from src.data.features import FeatureMode


def test_movement_defaults():
    cfg = default_movement_config()

    assert cfg.sequence_length == 15
    assert cfg.required_buffer_size == 15
    assert cfg.feature_mode == FeatureMode.PASSTHROUGH
    assert cfg.clamp_output_to_unit_range is True
    assert cfg.scaler.scale == pytest.approx([0.025, 0.025, 0.025])
    assert cfg.anomaly_threshold == pytest.approx(0.031)


def test_typing_defaults_scale_latency():
    cfg = default_typing_config(latency_divisor=2000.0)

    assert cfg.num_features == 1
    assert cfg.sequence_length == 10
    assert cfg.scaler.scale == [1.0 / 2000.0]
    assert cfg.clamp_output_to_unit_range is False


def test_valid_file_is_not_degraded(tmp_path, config_document):
    path = tmp_path / "model_config.json"
    path.write_text(json.dumps(config_document))

    cfg, degraded = load_config_or_default(path, default_movement_config(), "movement")

    assert degraded is False
    assert cfg.window_size == 10


def test_broken_file_falls_back_with_warning(tmp_path, caplog):
    path = tmp_path / "model_config.json"
    path.write_text(json.dumps({"sequence_length": 15}))
    default = default_movement_config()

    with caplog.at_level(logging.WARNING, logger="host.channels"):
        cfg, degraded = load_config_or_default(path, default, "movement")

    assert degraded is True
    assert cfg is default
    assert "degraded mode" in caplog.text


def test_missing_path_falls_back():
    default = default_typing_config()
    cfg, degraded = load_config_or_default(None, default, "typing")
    assert degraded is True
    assert cfg is default
