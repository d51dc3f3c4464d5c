"""
Unit tests for the feature scaler.
"""

import numpy as np
import pytest

from src.core.exceptions import ShapeMismatchError
from src.data.scaling import FeatureScaler


def _scaler(clamp: bool = False) -> FeatureScaler:
    return FeatureScaler.from_params([1.0, -2.0], [0.5, 0.25], clamp_output_to_unit_range=clamp)


@pytest.mark.parametrize(
    "vector,expected",
    [
        ([3.0, 2.0], [1.0, 1.0]),
        ([1.0, -2.0], [0.0, 0.0]),
        ([0.0, -6.0], [-0.5, -1.0]),
        ([5.0, 10.0], [2.0, 3.0]),
    ],
)
def test_min_scale_formula(vector, expected):
    assert _scaler().transform(np.array(vector)).tolist() == expected


def test_clamping_only_when_flag_set():
    clamped = _scaler(clamp=True)

    assert clamped.transform(np.array([0.0, -6.0])).tolist() == [0.0, 0.0]
    assert clamped.transform(np.array([5.0, 10.0])).tolist() == [1.0, 1.0]
    assert clamped.transform(np.array([2.0, 0.0])).tolist() == [0.5, 0.5]


def test_scaling_is_affine_per_feature():
    scaler = _scaler()
    v = np.array([4.0, 6.0])

    doubled = scaler.transform(2 * v)
    single = scaler.transform(v)

    # (2v - m) * s - (v - m) * s == v * s
    np.testing.assert_allclose(doubled - single, v * scaler.scale)


def test_transform_sequence_scales_each_row():
    scaler = _scaler()
    sequence = np.array([[3.0, 2.0], [1.0, -2.0], [5.0, 10.0]])

    scaled = scaler.transform_sequence(sequence)

    assert scaled.tolist() == [[1.0, 1.0], [0.0, 0.0], [2.0, 3.0]]
    assert sequence.tolist() == [[3.0, 2.0], [1.0, -2.0], [5.0, 10.0]]


def test_transform_rejects_wrong_length():
    with pytest.raises(ShapeMismatchError):
        _scaler().transform(np.array([1.0, 2.0, 3.0]))

    with pytest.raises(ShapeMismatchError):
        _scaler().transform_sequence(np.ones((2, 3)))


def test_scaler_params_are_read_only():
    scaler = _scaler()
    with pytest.raises(ValueError):
        scaler.minimum[0] = 5.0


def test_mismatched_params_rejected():
    with pytest.raises(ShapeMismatchError):
        FeatureScaler.from_params([0.0, 0.0], [1.0])
