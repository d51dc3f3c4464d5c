"""
Inference engines for the reconstruction model.

Local-only model loading and synchronous execution.
"""

from .config import EngineConfig
from .torch_engine import TorchScriptEngine

__all__ = [
    "EngineConfig",
    "TorchScriptEngine",
]
