"""
Custom exceptions for the sensor anomaly detector.

These exceptions provide clear error semantics across the system.
Use them to distinguish between configuration problems, model loading
problems, and broken shape invariants inside the pipeline.
"""


class AnomalyDetectionError(Exception):
    """Base exception for anomaly detection failures."""
    pass


class ConfigError(AnomalyDetectionError):
    """Raised when model configuration is missing, malformed, or inconsistent."""
    pass


class ModelLoadError(AnomalyDetectionError):
    """Raised when the inference engine cannot load the model asset."""
    pass


class ShapeMismatchError(AnomalyDetectionError):
    """
    Raised when a window, sequence, or tensor has the wrong shape.

    Indicates a programming fault in buffer sizing, not bad user input.
    """
    pass
