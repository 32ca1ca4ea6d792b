import numpy as np
import pytest

hypothesis = pytest.importorskip("hypothesis", reason="hypothesis is a dev optional dependency")
from hypothesis import given, settings, strategies as st  # type: ignore

from api import apply_transform, rotation_only, transform_geometry
from tests._utils.matrices import rigid, rigid_inverse

angles = st.floats(-np.pi, np.pi)
offsets = st.floats(-100, 100)


def _points():
    return np.array([[0, 0, 0], [1, 2, -1], [30, -40, 50], [-7, 8, 9]], dtype=np.float64)


@settings(deadline=None)
@given(ax=angles, ay=angles, az=angles, tx=offsets, ty=offsets, tz=offsets)
def test_inverse_round_trip(ax, ay, az, tx, ty, tz):
    m = rigid(ax, ay, az, (tx, ty, tz))
    rec = {"pos": _points(), "label": ["a", "b", "c", "d"], "r": 1.0, "o": [[0.0, 0.0, 0.0]]}
    back = transform_geometry(rigid_inverse(m), transform_geometry(m, rec))
    np.testing.assert_allclose(back["pos"], rec["pos"], atol=1e-8)


@settings(deadline=None)
@given(
    ax=angles, ay=angles, az=angles,
    t1=st.tuples(offsets, offsets, offsets), t2=st.tuples(offsets, offsets, offsets),
)
def test_orientation_ignores_translation(ax, ay, az, t1, t2):
    ori = _points()
    a = apply_transform(rotation_only(rigid(ax, ay, az, t1)), ori)
    b = apply_transform(rotation_only(rigid(ax, ay, az, t2)), ori)
    np.testing.assert_array_equal(a, b)


@settings(deadline=None)
@given(ax=angles, ay=angles, az=angles, tx=offsets, ty=offsets, tz=offsets)
def test_rigid_transform_preserves_distances(ax, ay, az, tx, ty, tz):
    pts = _points()
    out = apply_transform(rigid(ax, ay, az, (tx, ty, tz)), pts)
    d0 = np.linalg.norm(pts[:, None, :] - pts[None, :, :], axis=-1)
    d1 = np.linalg.norm(out[:, None, :] - out[None, :, :], axis=-1)
    np.testing.assert_allclose(d0, d1, atol=1e-9)
