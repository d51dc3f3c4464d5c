"""
Sensor monitor: the host side of the detectors.

Owns one detector per channel plus the engines behind them, turns UI events
into raw samples, and keeps a status line per channel. Results are returned
synchronously; how and where they are displayed is up to the caller.

Channels:
- accelerometer: windowed mean/std model, config loaded strictly
- movement: raw xyz model, may fall back to built-in defaults
- typing: keystroke latency model, may fall back to built-in defaults
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Dict, List, Optional, Union

from inference import EngineConfig, TorchScriptEngine
from src.anomaly import AnomalyDetector, AnomalyResult, ModelConfig
from src.core.config import ChannelAssets, EngineSettings
from src.core.exceptions import ModelLoadError
from src.data import KeystrokeLatencyTracker, RawSample

from .channels import default_movement_config, default_typing_config, load_config_or_default

logger = logging.getLogger(__name__)

ACCELEROMETER = "accelerometer"
MOVEMENT = "movement"
TYPING = "typing"

CHANNELS = (ACCELEROMETER, MOVEMENT, TYPING)

_STATUS_TEXT = {
    ACCELEROMETER: {
        "pending": "Accelerometer: Pending...",
        "normal": "Accelerometer: Normal",
        "anomaly": "ACCELEROMETER ANOMALY!",
    },
    MOVEMENT: {"pending": "Movement: Normal", "normal": "Movement: Normal", "anomaly": "MOVEMENT ANOMALY!"},
    TYPING: {"pending": "Typing: Pending...", "normal": "Typing: Normal", "anomaly": "TYPING ANOMALY!"},
}


def status_line(channel: str, result: Optional[AnomalyResult], available: bool = True) -> str:
    if not available:
        return f"{channel.capitalize()}: Unavailable"
    texts = _STATUS_TEXT[channel]
    if result is None:
        return texts["pending"]
    return texts["anomaly"] if result.is_anomaly else texts["normal"]


@dataclass
class SensorMonitor:
    """
    Accelerometer, movement and typing anomaly monitor.

    - accelerometer and movement detectors both consume accelerometer readings.
    - typing detector consumes inter-key latencies.
    - degraded lists channels running on default configuration.
    """

    accelerometer: AnomalyDetector
    movement: AnomalyDetector
    typing: AnomalyDetector
    engines: List[TorchScriptEngine] = field(default_factory=list)
    degraded: List[str] = field(default_factory=list)
    latency_tracker: KeystrokeLatencyTracker = field(default_factory=KeystrokeLatencyTracker)

    def __post_init__(self) -> None:
        self._status: Dict[str, str] = {
            name: status_line(name, None, self._detector(name).is_initialized)
            for name in CHANNELS
        }

    @classmethod
    def from_assets(
        cls,
        accelerometer: ChannelAssets,
        movement: ChannelAssets,
        keystrokes: ChannelAssets,
        engine: EngineSettings,
        latency_divisor: float = 2000.0,
    ) -> "SensorMonitor":
        """
        Load every channel from disk; a channel that fails stays unavailable.

        The accelerometer channel has no defaults: a broken config leaves it
        FAILED rather than pairing its model with another model's config.
        """
        engines: List[TorchScriptEngine] = []
        degraded: List[str] = []
        detectors: Dict[str, AnomalyDetector] = {}

        accel_source: Union[Path, ModelConfig, None] = accelerometer.config_path
        detectors[ACCELEROMETER] = _build_detector(ACCELEROMETER, accel_source, accelerometer, engine, engines)

        for name, assets, default in (
            (MOVEMENT, movement, default_movement_config()),
            (TYPING, keystrokes, default_typing_config(latency_divisor)),
        ):
            model_config, is_degraded = load_config_or_default(assets.config_path, default, name)
            if is_degraded:
                degraded.append(name)
            detectors[name] = _build_detector(name, model_config, assets, engine, engines)

        return cls(
            accelerometer=detectors[ACCELEROMETER],
            movement=detectors[MOVEMENT],
            typing=detectors[TYPING],
            engines=engines,
            degraded=degraded,
        )

    def on_accelerometer(
        self, x: float, y: float, z: float, timestamp_ms: Optional[float] = None
    ) -> List[AnomalyResult]:
        """Feed one reading to both accelerometer-driven channels."""
        sample = RawSample.xyz(x, y, z, timestamp_ms=timestamp_ms)
        results = []
        for name in (ACCELEROMETER, MOVEMENT):
            result = self._detector(name).add_reading(sample)
            if result is not None:
                self._status[name] = status_line(name, result)
                results.append(result)
        return results

    def on_key_press(self, timestamp_ms: float) -> Optional[AnomalyResult]:
        sample = self.latency_tracker.record_key_press(timestamp_ms)
        return self._add_latency(sample)

    def on_text_changed(self, removed: int, added: int, timestamp_ms: float) -> Optional[AnomalyResult]:
        sample = self.latency_tracker.on_text_changed(removed, added, timestamp_ms)
        return self._add_latency(sample)

    def status_text(self) -> str:
        return "\n".join(self._status[name] for name in CHANNELS)

    def close(self) -> None:
        for engine in self.engines:
            engine.close()
        self.engines = []

    def _detector(self, name: str) -> AnomalyDetector:
        return getattr(self, name)

    def _add_latency(self, sample: Optional[RawSample]) -> Optional[AnomalyResult]:
        if sample is None:
            return None
        result = self.typing.add_reading(sample)
        if result is not None:
            self._status[TYPING] = status_line(TYPING, result)
        return result


def _build_detector(
    name: str,
    config_source: Union[Path, ModelConfig, None],
    assets: ChannelAssets,
    engine_settings: EngineSettings,
    engines: List[TorchScriptEngine],
) -> AnomalyDetector:
    detector = AnomalyDetector(channel=name)
    if config_source is None:
        logger.error("No config path configured for %s channel", name)
        # An empty document fails strict loading, leaving the detector FAILED
        detector.initialize({}, _unavailable(ModelLoadError, f"No model loaded for {name} channel"))
        return detector
    if assets.model_path is None:
        logger.error("No model path configured for %s channel", name)
        detector.initialize(config_source, _unavailable(ModelLoadError, f"No model configured for {name} channel"))
        return detector

    engine = TorchScriptEngine(
        EngineConfig(
            model_path=assets.model_path,
            device=engine_settings.device,
            num_threads=engine_settings.num_threads,
        )
    )
    if detector.initialize(config_source, engine.load):
        engines.append(engine)
    return detector


def _unavailable(error, message: str):
    def loader():
        raise error(message)

    return loader
