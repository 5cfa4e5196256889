"""Tests for the vector operations used by the optimizers."""

import numpy as np
import pytest
import torch

from gradopt import vector as vec


@pytest.fixture(params=["numpy", "torch"])
def make(request):
    if request.param == "numpy":
        return lambda values: np.array(values, dtype=float)
    return lambda values: torch.tensor(values, dtype=torch.float64)


def test_copy_is_independent(make):
    v = make([1.0, 2.0])
    c = vec.copy(v)
    vec.add_scaled(c, make([1.0, 1.0]), 1.0)
    assert vec.as_array(v).tolist() == [1.0, 2.0]
    assert vec.as_array(c).tolist() == [2.0, 3.0]


def test_add_scaled_in_place(make):
    v = make([1.0, -1.0])
    original = v
    vec.add_scaled(v, make([2.0, 4.0]), 0.5)
    assert v is original
    assert vec.as_array(v).tolist() == [2.0, 1.0]


def test_scale_and_assign(make):
    v = make([1.0, 2.0])
    vec.scale_(v, 3.0)
    assert vec.as_array(v).tolist() == [3.0, 6.0]
    vec.assign(v, make([0.0, -1.0]))
    assert vec.as_array(v).tolist() == [0.0, -1.0]


def test_dot_and_norm(make):
    a = make([3.0, 4.0])
    b = make([1.0, 2.0])
    assert vec.dot(a, b) == 11.0
    assert vec.two_norm(a) == 5.0
    assert isinstance(vec.dot(a, b), float)


def test_different_uses_absolute_tolerance(make):
    a = make([1.0, 2.0])
    assert not vec.different(a, make([1.00005, 2.0]), 1e-4)
    assert vec.different(a, make([1.0, 2.001]), 1e-4)


def test_contains_nonfinite(make):
    assert not vec.contains_nonfinite(make([0.0, 1.0]))
    assert vec.contains_nonfinite(make([0.0, float("nan")]))
    assert vec.contains_nonfinite(make([float("inf"), 1.0]))


def test_dimensions_match(make):
    assert vec.dimensions_match(make([1.0, 2.0]), make([0.0, 0.0]))
    assert not vec.dimensions_match(make([1.0, 2.0]), make([0.0, 0.0, 0.0]))


def test_shape_mismatch_raises(make):
    with pytest.raises(ValueError, match="shapes do not match"):
        vec.add_scaled(make([1.0, 2.0]), make([1.0]), 1.0)


def test_zeros_like(make):
    z = vec.zeros_like(make([1.0, 2.0, 3.0]))
    assert vec.as_array(z).tolist() == [0.0, 0.0, 0.0]


def test_mixed_kinds_raise():
    with pytest.raises(TypeError, match="Cannot mix"):
        vec.dot(np.ones(2), torch.ones(2, dtype=torch.float64))


def test_non_float_vectors_raise():
    with pytest.raises(TypeError):
        vec.copy(np.array([1, 2]))
    with pytest.raises(TypeError):
        vec.copy(torch.tensor([1, 2]))
    with pytest.raises(TypeError, match="Unsupported vector type"):
        vec.copy([1.0, 2.0])


def test_as_array_flattens_torch_tensor():
    t = torch.arange(4, dtype=torch.float32).reshape(2, 2)
    arr = vec.as_array(t)
    assert arr.dtype == np.float64
    assert arr.tolist() == [0.0, 1.0, 2.0, 3.0]


def test_add_scaled_on_parameter_does_not_track_gradients():
    p = torch.nn.Parameter(torch.zeros(2, dtype=torch.float64))
    vec.add_scaled(p, torch.ones(2, dtype=torch.float64), 0.5)
    assert p.grad is None
    assert p.detach().tolist() == [0.5, 0.5]
