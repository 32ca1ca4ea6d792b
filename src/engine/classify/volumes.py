"""
どこで: `engine.classify.volumes`
何を: レコードが体積導体モデル（球/シェル/BEM）かを推定する。
なぜ: 体積導体には剛体変換のみを許すため。
"""

from __future__ import annotations

from typing import Any, Mapping

import numpy as np

from engine.core.classification import VolumeType

VOLUME_TYPE_NAMES: dict[str, VolumeType] = {
    "infinite": VolumeType.INFINITE,
    "singlesphere": VolumeType.SINGLE_SPHERE,
    "concentricspheres": VolumeType.CONCENTRIC_SPHERES,
    "localspheres": VolumeType.LOCAL_SPHERES,
    "singleshell": VolumeType.SINGLE_SHELL,
    "bem": VolumeType.BEM,
    "dipoli": VolumeType.BEM,
    "openmeeg": VolumeType.BEM,
    "bemcp": VolumeType.BEM,
    "asa": VolumeType.BEM,
}


def _sphere_type(r: Any, o: Any) -> VolumeType:
    radii = np.atleast_1d(np.asarray(r, dtype=np.float64)).ravel()
    origins = np.atleast_2d(np.asarray(o, dtype=np.float64))
    if radii.size == 1:
        return VolumeType.SINGLE_SPHERE
    if origins.shape[0] == 1:
        return VolumeType.CONCENTRIC_SPHERES
    if origins.shape[0] == radii.size:
        return VolumeType.LOCAL_SPHERES
    return VolumeType.UNKNOWN


def classify_volume_type(record: Mapping[str, Any]) -> VolumeType:
    """体積導体種別を推定（認識できなければ `VolumeType.UNKNOWN`）。

    - 文字列 `type` が既知名ならその種別
    - `r` と `o` があれば球モデル（半径数と中心数で単一/同心/局所を判別）
    - `bnd` があれば、`mat` の有無と境界数でシングルシェルか BEM
    """
    kind = record.get("type")
    if isinstance(kind, str):
        tag = VOLUME_TYPE_NAMES.get(kind.strip().lower())
        if tag is not None:
            return tag

    if "r" in record and "o" in record:
        return _sphere_type(record["r"], record["o"])

    if "bnd" in record:
        bnd = record["bnd"]
        n_bnd = len(bnd) if isinstance(bnd, (list, tuple)) else 1
        if "mat" not in record and n_bnd == 1:
            return VolumeType.SINGLE_SHELL
        return VolumeType.BEM

    return VolumeType.UNKNOWN


__all__ = ["classify_volume_type", "VOLUME_TYPE_NAMES"]
