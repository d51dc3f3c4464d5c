"""
Streaming anomaly detector.

Wires the sliding buffer, feature extraction, scaling, inference and
scoring into one per-channel pipeline:

    raw sample -> SampleBuffer -> (full?) -> feature sequence
        -> scaler -> InferenceAdapter -> AnomalyScorer -> AnomalyResult

Initialization failures leave the detector permanently FAILED; per-sample
processing never raises, it returns None instead.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from src.core.exceptions import ConfigError, ModelLoadError
from src.data.buffer import SampleBuffer
from src.data.features import build_feature_sequence
from src.data.scaling import FeatureScaler
from src.data.schema import RawSample

from .inference import TENSOR_DTYPE, InferenceAdapter, ReconstructionModel
from .loader import ConfigSource, load_model_config
from .schema import AnomalyResult, DetectorState, ModelConfig
from .scoring import AnomalyScorer

logger = logging.getLogger(__name__)

ModelLoader = Callable[[], ReconstructionModel]


class AnomalyDetector:
    """
    Reconstruction-error anomaly detector for one sensor channel.

    Notes:
    - Returns None for every reading until the buffer holds
      window_size + sequence_length - 1 samples, then one result per reading.
    - Holds a borrowed reference to the model; the caller closes it.
    - Not thread safe; one producer feeds readings.
    """

    def __init__(self, channel: str = "accelerometer") -> None:
        self.channel = channel
        self._state = DetectorState.UNINITIALIZED
        self._config: Optional[ModelConfig] = None
        self._buffer: Optional[SampleBuffer] = None
        self._scaler: Optional[FeatureScaler] = None
        self._adapter: Optional[InferenceAdapter] = None
        self._scorer: Optional[AnomalyScorer] = None

    @property
    def state(self) -> DetectorState:
        return self._state

    @property
    def is_initialized(self) -> bool:
        return self._state == DetectorState.INITIALIZED

    @property
    def config(self) -> Optional[ModelConfig]:
        return self._config

    @property
    def required_buffer_size(self) -> int:
        return self._config.required_buffer_size if self._config else 0

    @property
    def buffered(self) -> int:
        return len(self._buffer) if self._buffer is not None else 0

    def initialize(self, config_source: ConfigSource | ModelConfig, model_loader: ModelLoader) -> bool:
        """
        Load configuration and model. Must be called once before use.

        Args:
            config_source: ModelConfig, or anything load_model_config accepts
            model_loader: Zero-argument callable returning a loaded model;
                raises ModelLoadError on failure

        Returns:
            True if the detector is ready, False if it is (now) FAILED
        """
        if self._state != DetectorState.UNINITIALIZED:
            logger.warning(
                "Detector %s already %s; create a new detector to re-initialize",
                self.channel,
                self._state.value,
            )
            return self.is_initialized

        try:
            if isinstance(config_source, ModelConfig):
                config = config_source
            else:
                config = load_model_config(config_source)
            model = model_loader()
        except (ConfigError, ModelLoadError) as exc:
            logger.error("Detector %s failed to initialize: %s", self.channel, exc)
            self._state = DetectorState.FAILED
            return False
        except Exception as exc:
            logger.exception("Detector %s failed to initialize (unexpected error): %s", self.channel, exc)
            self._state = DetectorState.FAILED
            return False

        self._configure(config, model)
        self._state = DetectorState.INITIALIZED
        logger.info(
            "Detector %s initialized (buffer=%d samples, axes=%d)",
            self.channel,
            config.required_buffer_size,
            config.num_axes,
        )
        return True

    def add_reading(self, sample: RawSample) -> Optional[AnomalyResult]:
        """
        Add a reading and predict once the buffer is full.

        Returns:
            AnomalyResult if a prediction was made, otherwise None
        """
        if self._state != DetectorState.INITIALIZED:
            return None

        try:
            self._buffer.push(sample)
            if not self._buffer.is_full():
                return None
            return self._predict()
        except Exception as exc:
            logger.exception("Detector %s dropped a reading: %s", self.channel, exc)
            return None

    def _configure(self, config: ModelConfig, model: ReconstructionModel) -> None:
        self._config = config
        self._buffer = SampleBuffer(capacity=config.required_buffer_size, num_axes=config.num_axes)
        self._scaler = FeatureScaler.from_params(
            config.scaler.minimum,
            config.scaler.scale,
            clamp_output_to_unit_range=config.clamp_output_to_unit_range,
        )
        self._adapter = InferenceAdapter(
            model=model,
            sequence_length=config.sequence_length,
            num_features=config.num_features,
        )
        self._scorer = AnomalyScorer(threshold=config.anomaly_threshold, channel=self.channel)

    def _predict(self) -> AnomalyResult:
        config = self._config
        sequence = build_feature_sequence(
            self._buffer.snapshot(),
            window_size=config.window_size,
            sequence_length=config.sequence_length,
            mode=config.feature_mode,
        )
        # Score against exactly what the model saw
        scaled = self._scaler.transform_sequence(sequence).astype(TENSOR_DTYPE)
        reconstructed = self._adapter.reconstruct(scaled)
        result = self._scorer.score(scaled, reconstructed)
        logger.debug(
            "Detector %s: error=%.6f anomaly=%s", self.channel, result.error_score, result.is_anomaly
        )
        return result
