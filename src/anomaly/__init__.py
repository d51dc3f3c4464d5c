"""
Anomaly module: reconstruction-error anomaly detection.

Implements strict config loading, the inference tensor contract, MAE
scoring, and the streaming per-channel detector.
"""

from .detector import AnomalyDetector
from .inference import InferenceAdapter, ReconstructionModel
from .loader import load_model_config
from .schema import AnomalyResult, DetectorState, ModelConfig, ScalerParams
from .scoring import AnomalyScorer, reconstruction_error

__all__ = [
	"AnomalyDetector",
	"AnomalyResult",
	"AnomalyScorer",
	"DetectorState",
	"InferenceAdapter",
	"ModelConfig",
	"ReconstructionModel",
	"ScalerParams",
	"load_model_config",
	"reconstruction_error",
]
