"""
Configuration for local model inference.

All settings are deterministic and safe for offline use.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    """
    Configuration for a TorchScript reconstruction model.

    Notes:
    - model_path must point to a local file (no remote fetch).
    - device defaults to CPU; on-device deployments have no GPU.
    - num_threads caps intra-op parallelism.
    """

    model_path: Path = Field(..., description="Local filesystem path to the TorchScript model")
    device: str = Field("cpu", description="torch device string")
    num_threads: int = Field(1, ge=1)
