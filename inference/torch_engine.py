"""
TorchScript reconstruction engine.

Offline-only: loads a serialized autoencoder from a local file and runs it
synchronously, one [1, sequence_length, num_features] tensor at a time.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional

import numpy as np
import torch

from src.core.exceptions import ModelLoadError

from .config import EngineConfig

logger = logging.getLogger(__name__)


@dataclass
class TorchScriptEngine:
    """
    Local TorchScript model wrapper.

    Implements the ReconstructionModel protocol. The engine owns the loaded
    module; detectors only borrow it.
    """

    config: EngineConfig
    _module: Optional[torch.jit.ScriptModule] = None

    @property
    def is_loaded(self) -> bool:
        return self._module is not None

    def load(self) -> "TorchScriptEngine":
        if self._module is not None:
            return self

        path = self.config.model_path
        if not path.is_file():
            raise ModelLoadError(f"Model asset not found: {path}")

        logger.info("Loading TorchScript model from %s (device=%s)", path, self.config.device)
        try:
            torch.set_num_threads(self.config.num_threads)
            module = torch.jit.load(str(path), map_location=self.config.device)
        except (RuntimeError, ValueError) as exc:
            raise ModelLoadError(f"Failed to load model {path}: {exc}") from exc

        module.eval()
        self._module = module
        logger.info("Model loaded successfully")
        return self

    def infer(self, tensor: np.ndarray) -> np.ndarray:
        if self._module is None:
            raise ModelLoadError("Model is not loaded")

        inputs = torch.from_numpy(np.ascontiguousarray(tensor, dtype=np.float32))
        inputs = inputs.to(self.config.device)
        with torch.inference_mode():
            outputs = self._module(inputs)
        return outputs.detach().to("cpu").numpy().astype(np.float32, copy=True)

    def close(self) -> None:
        if self._module is not None:
            logger.info("Releasing model %s", self.config.model_path)
        self._module = None
