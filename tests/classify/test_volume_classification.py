from __future__ import annotations

import numpy as np
import pytest

from engine.classify import classify_volume_type
from engine.core.classification import VolumeType


@pytest.mark.parametrize(
    "name, expected",
    [
        ("singlesphere", VolumeType.SINGLE_SPHERE),
        ("concentricspheres", VolumeType.CONCENTRIC_SPHERES),
        ("localspheres", VolumeType.LOCAL_SPHERES),
        ("singleshell", VolumeType.SINGLE_SHELL),
        ("dipoli", VolumeType.BEM),
        ("OpenMEEG", VolumeType.BEM),
        ("infinite", VolumeType.INFINITE),
    ],
)
def test_type_name_lookup(name: str, expected: VolumeType) -> None:
    assert classify_volume_type({"type": name}) is expected


def test_single_sphere(sphere_vol) -> None:
    assert classify_volume_type(sphere_vol) is VolumeType.SINGLE_SPHERE


def test_concentric_spheres() -> None:
    vol = {"r": [70.0, 80.0, 90.0], "o": [0.0, 0.0, 40.0]}
    assert classify_volume_type(vol) is VolumeType.CONCENTRIC_SPHERES


def test_local_spheres() -> None:
    vol = {"r": np.full(4, 85.0), "o": np.zeros((4, 3))}
    assert classify_volume_type(vol) is VolumeType.LOCAL_SPHERES


def test_sphere_count_mismatch_is_unknown() -> None:
    vol = {"r": np.full(4, 85.0), "o": np.zeros((3, 3))}
    assert classify_volume_type(vol) is VolumeType.UNKNOWN


def test_single_shell_from_bnd() -> None:
    vol = {"bnd": {"pnt": np.zeros((4, 3)), "tri": np.array([[0, 1, 2]])}}
    assert classify_volume_type(vol) is VolumeType.SINGLE_SHELL


def test_bem_from_bnd_and_mat(bem_vol) -> None:
    vol = {k: v for k, v in bem_vol.items() if k != "type"}
    assert classify_volume_type(vol) is VolumeType.BEM


def test_boundary_mesh_itself_is_not_a_volume(bem_vol) -> None:
    assert classify_volume_type(bem_vol["bnd"][0]) is VolumeType.UNKNOWN


def test_headshape_is_not_a_volume(headshape) -> None:
    assert classify_volume_type(headshape) is VolumeType.UNKNOWN
