"""
どこで: `engine.core.validate`
何を: 同次変換行列の形式検査と、対象オブジェクトの種別に応じた剛体性/一様スケール検査。
なぜ: センサ配列や体積導体に物理的に許されない変換を、書き換え前に確実に棄却するため。

剛体性の要否（優先順位つき）:
- センサでも体積導体でもない      -> 検査しない
- 体積導体のみ / 両方に該当       -> 剛体性が必要
- センサのみ                      -> MEG 系のときだけ剛体性が必要

剛体性が不要なセンサ配列（EEG など）でも、設定 `CHECK_UNIFORM_SCALING` が有効なら
非一様スケール/せん断は棄却する（大域的な単位換算のための一様スケールのみ許す）。
この検査の許容誤差は `UNIFORM_SCALING_RTOL`（相対）で、剛体判定の eps 基準とは別。
"""

from __future__ import annotations

import logging

import numpy as np

from common import settings
from common.types import Matrix4

from .classification import Classification
from .errors import InvalidTransformError, NonRigidTransformError, NonUniformScalingError

logger = logging.getLogger(__name__)

_HOMOGENEOUS_ROW = np.array([0.0, 0.0, 0.0, 1.0])


def _eps_for(dtype: np.dtype) -> float:
    # 浮動小数型ならその eps、整数などは float64 の eps
    if np.issubdtype(dtype, np.floating):
        return float(np.finfo(dtype).eps)
    return float(np.finfo(np.float64).eps)


def check_homogeneous(transform: Matrix4) -> np.ndarray:
    """形式検査を行い、float64 の 4x4 配列を返す。

    例外:
    - InvalidTransformError: 4x4 でない、非有限値を含む、最下行が [0, 0, 0, 1] と厳密一致しない。
    """
    try:
        raw = np.asarray(transform)
        m = raw.astype(np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidTransformError(f"invalid transformation matrix: {exc}") from exc
    if m.shape != (4, 4):
        raise InvalidTransformError(
            f"invalid transformation matrix: expected shape (4, 4), got {m.shape}"
        )
    if not np.all(np.isfinite(m)):
        raise InvalidTransformError("invalid transformation matrix: contains non-finite values")
    if np.any(m[3] != _HOMOGENEOUS_ROW):
        raise InvalidTransformError(
            f"invalid transformation matrix: last row must be [0, 0, 0, 1], got {m[3].tolist()}"
        )
    return m


def uniform_scaling_tolerance() -> float:
    """一様スケール判定の相対許容誤差（`UNIFORM_SCALING_RTOL`）。"""
    return settings.get().UNIFORM_SCALING_RTOL


def rigid_tolerance(dtype: np.dtype = np.dtype(np.float64)) -> float:
    """剛体判定の許容誤差（`RIGID_EPS_FACTOR` × eps）。"""
    return settings.get().RIGID_EPS_FACTOR * _eps_for(dtype)


def requires_rigid(is_sensor: bool, is_meg_sensor: bool, is_volume_conductor: bool) -> bool:
    """分類結果から剛体性の要否を決める。"""
    if is_volume_conductor:
        # 体積導体のみ、またはセンサ兼体積導体
        return True
    if is_sensor:
        return bool(is_meg_sensor)
    return False


def check_rigid(m: np.ndarray, tolerance: float) -> None:
    """回転ブロックの行列式が 1 から `tolerance` 以内であることを検査。"""
    det = float(np.linalg.det(m[:3, :3]))
    if abs(det - 1.0) > tolerance:
        logger.warning("rejecting non-rigid transform: det(R)=%.17g", det)
        raise NonRigidTransformError(det, tolerance)


def check_uniform_scaling(m: np.ndarray, tolerance: float) -> None:
    """回転ブロックが「一様スケール × 直交行列」であることを検査。

    `R^T R = c^2 I` を相対誤差 `tolerance` で確認する。
    """
    r = m[:3, :3]
    gram = r.T @ r
    c2 = float(np.trace(gram)) / 3.0
    if c2 <= 0.0:
        logger.warning("rejecting degenerate transform: zero rotation block")
        raise NonUniformScalingError(float(np.max(np.abs(gram))), 0.0)
    deviation = float(np.max(np.abs(gram - c2 * np.eye(3))))
    if deviation > tolerance * c2:
        logger.warning("rejecting non-uniform scaling: deviation=%.3e", deviation)
        raise NonUniformScalingError(deviation, tolerance * c2)


def validate(
    transform: Matrix4,
    is_sensor: bool,
    is_meg_sensor: bool,
    is_volume_conductor: bool,
) -> bool:
    """変換行列を検査し、剛体性が要求されたかを返す。

    Parameters
    ----------
    transform : array-like, shape (4, 4)
        同次変換行列。
    is_sensor, is_meg_sensor, is_volume_conductor : bool
        対象オブジェクトの分類結果。

    Returns
    -------
    bool
        剛体性を要求した（かつ満たした）なら True。

    例外:
    - InvalidTransformError: 形式不正（分類に関係なく常に検査）。
    - NonRigidTransformError: 剛体性が必要なのに |det(R) - 1| が許容誤差を超える。
    - NonUniformScalingError: 剛体性不要のセンサ配列で非一様スケール/せん断を含む。
    """
    m = check_homogeneous(transform)
    tol = rigid_tolerance(np.asarray(transform).dtype)

    rigid = requires_rigid(is_sensor, is_meg_sensor, is_volume_conductor)
    if rigid:
        check_rigid(m, tol)
    elif is_sensor and settings.get().CHECK_UNIFORM_SCALING:
        check_uniform_scaling(m, uniform_scaling_tolerance())
    return rigid


def validate_for(transform: Matrix4, classification: Classification) -> bool:
    """`Classification` を受け取る `validate()` の糖衣。"""
    rigid = validate(
        transform,
        classification.is_sensor,
        classification.is_meg_sensor,
        classification.is_volume_conductor,
    )
    logger.debug(
        "sensor=%s volume=%s rigid=%s",
        classification.sensor.value,
        classification.volume.value,
        rigid,
    )
    return rigid


__all__ = [
    "check_homogeneous",
    "rigid_tolerance",
    "uniform_scaling_tolerance",
    "requires_rigid",
    "check_rigid",
    "check_uniform_scaling",
    "validate",
    "validate_for",
]
