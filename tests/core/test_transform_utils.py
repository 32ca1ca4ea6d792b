from __future__ import annotations

import math

import numpy as np
import pytest

from engine.core.errors import InvalidTransformError
from engine.core.transform_utils import (
    _apply_homogeneous_numpy,
    apply_transform,
    as_points,
    rotation_only,
)
from tests._utils.matrices import homogeneous, rigid, rot_z


def test_apply_transform_rotate_then_translate(kernel: bool) -> None:
    # 単一点 (1,0,0) を Z 軸 90° 回転 → +(1,0,0) 移動。期待: (1,1,0)
    m = homogeneous(rot_z(math.pi / 2), translation=(1.0, 0.0, 0.0))
    out = apply_transform(m, np.array([[1.0, 0.0, 0.0]]))
    assert out.shape == (1, 3)
    assert np.allclose(out, [[1.0, 1.0, 0.0]])


def test_apply_transform_identity_returns_new_float64_array(kernel: bool) -> None:
    pts = np.array([[1, 2, 3], [4, 5, 6]], dtype=np.int32)
    out = apply_transform(np.eye(4), pts)
    assert out.dtype == np.float64
    assert out is not pts
    assert np.array_equal(out, pts.astype(np.float64))


def test_apply_transform_does_not_mutate_input(kernel: bool) -> None:
    pts = np.array([[1.0, 2.0, 3.0]])
    before = pts.copy()
    apply_transform(rigid(0.1, 0.2, 0.3, (5.0, 6.0, 7.0)), pts)
    assert np.array_equal(pts, before)


def test_apply_transform_empty(kernel: bool) -> None:
    out = apply_transform(rigid(0.1, 0.2, 0.3, (1.0, 1.0, 1.0)), np.empty((0, 3)))
    assert out.shape == (0, 3)


def test_apply_transform_single_vector_keeps_shape(kernel: bool) -> None:
    out = apply_transform(homogeneous(translation=(1.0, 2.0, 3.0)), [0.0, 0.0, 0.0])
    assert out.shape == (3,)
    assert np.allclose(out, [1.0, 2.0, 3.0])


def test_apply_transform_accepts_nested_lists(kernel: bool) -> None:
    m = [[1, 0, 0, 1], [0, 1, 0, 2], [0, 0, 1, 3], [0, 0, 0, 1]]
    out = apply_transform(m, [[0, 0, 0], [1, 1, 1]])
    assert isinstance(out, np.ndarray)
    assert np.array_equal(out, [[1.0, 2.0, 3.0], [2.0, 3.0, 4.0]])


def test_apply_transform_ignores_bottom_row() -> None:
    # 同次列は捨てるだけで w による除算はしない
    m = homogeneous(translation=(1.0, 0.0, 0.0))
    m[3] = [0.0, 0.0, 0.0, 2.0]
    out = apply_transform(m, np.array([[1.0, 1.0, 1.0]]))
    assert np.allclose(out, [[2.0, 1.0, 1.0]])


def test_kernels_agree() -> None:
    pts = np.random.uniform(-100.0, 100.0, size=(257, 3))
    m = rigid(0.3, -1.2, 2.5, (10.0, -3.0, 7.5))
    m[:3, :3] *= 1.7
    from engine.core.transform_utils import _apply_homogeneous_njit

    a = _apply_homogeneous_njit(np.ascontiguousarray(pts), np.ascontiguousarray(m))
    b = _apply_homogeneous_numpy(pts, m)
    np.testing.assert_allclose(a, b, rtol=1e-12, atol=1e-9)


@pytest.mark.parametrize("bad", [np.zeros((2, 2)), np.zeros((4, 3, 1)), np.zeros(4)])
def test_as_points_invalid_shape_raises(bad: np.ndarray) -> None:
    with pytest.raises(ValueError):
        as_points(bad)


def test_apply_transform_requires_4x4() -> None:
    with pytest.raises(InvalidTransformError, match="expected shape"):
        apply_transform(np.eye(3), np.zeros((1, 3)))


def test_rotation_only_drops_translation() -> None:
    m = rigid(0.4, 0.5, 0.6, (10.0, 20.0, 30.0))
    r = rotation_only(m)
    assert np.array_equal(r[:3, :3], m[:3, :3])
    assert np.array_equal(r[:3, 3], [0.0, 0.0, 0.0])
    assert np.array_equal(r[3], [0.0, 0.0, 0.0, 1.0])
