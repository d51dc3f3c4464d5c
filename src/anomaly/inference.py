"""
Inference adapter: the tensor contract with the reconstruction model.

The model sees a [1, sequence_length, num_features] tensor of native-endian
float32 values, row-major, and returns a tensor with the same number of
values holding the reconstructed sequence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import numpy as np

from src.core.exceptions import ShapeMismatchError

TENSOR_DTYPE = np.dtype("=f4")


@runtime_checkable
class ReconstructionModel(Protocol):
    """Anything that maps an input tensor to its reconstruction synchronously."""

    def infer(self, tensor: np.ndarray) -> np.ndarray: ...


@dataclass
class InferenceAdapter:
    """
    Marshals scaled feature sequences in and out of a ReconstructionModel.

    The model is borrowed, not owned: loading and closing it is the
    caller's job. Each call allocates its own input and output arrays, so
    nothing the model holds on to can alias a later prediction.
    """

    model: ReconstructionModel
    sequence_length: int
    num_features: int

    @property
    def input_shape(self) -> tuple:
        return (1, self.sequence_length, self.num_features)

    def to_tensor(self, scaled_sequence: np.ndarray) -> np.ndarray:
        scaled_sequence = np.asarray(scaled_sequence)
        if scaled_sequence.shape != (self.sequence_length, self.num_features):
            raise ShapeMismatchError(
                f"Expected sequence shape {(self.sequence_length, self.num_features)}, "
                f"got {scaled_sequence.shape}"
            )
        tensor = np.empty(self.input_shape, dtype=TENSOR_DTYPE, order="C")
        tensor[0] = scaled_sequence
        return tensor

    def reconstruct(self, scaled_sequence: np.ndarray) -> np.ndarray:
        """
        Run the model on one scaled sequence.

        Returns:
            Owned (sequence_length, num_features) float32 array

        Raises:
            ShapeMismatchError: If input or model output has the wrong size
        """
        tensor = self.to_tensor(scaled_sequence)
        output = np.asarray(self.model.infer(tensor))

        expected = self.sequence_length * self.num_features
        if output.size != expected:
            raise ShapeMismatchError(
                f"Model returned {output.size} values (shape {output.shape}), expected {expected}"
            )
        return output.astype(TENSOR_DTYPE, copy=True).reshape(
            self.sequence_length, self.num_features
        )
