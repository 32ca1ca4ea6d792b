"""
エンジン層の同次変換ユーティリティ関数群。

基本方針:
- 点群 (N, 3) に 4x4 同次変換行列を適用する `apply_transform()` を主用途とする。
- 方向ベクトル用に、平行移動成分を落とした `rotation_only()` を提供する。
- ここでは行列の妥当性（最下行や剛体性）は検査しない。検査は `engine.core.validate` の責務。
"""

from __future__ import annotations

import numpy as np
from numba import njit  # type: ignore[attr-defined]

from common import settings
from common.types import Matrix4, Points

from .errors import InvalidTransformError


@njit(cache=True)
def _apply_homogeneous_njit(points: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """頂点ごとに `[x, y, z, 1] @ M.T` の先頭 3 成分を計算します。"""
    n = points.shape[0]
    out = np.empty((n, 3), dtype=np.float64)
    for i in range(n):
        x = points[i, 0]
        y = points[i, 1]
        z = points[i, 2]
        for r in range(3):
            out[i, r] = matrix[r, 0] * x + matrix[r, 1] * y + matrix[r, 2] * z + matrix[r, 3]
    return out


def _apply_homogeneous_numpy(points: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    # 同次座標 1 を付与 (N, 4) -> 右から M^T -> 同次列を捨てる
    augmented = np.hstack([points, np.ones((points.shape[0], 1), dtype=np.float64)])
    return (augmented @ matrix.T)[:, :3]


def as_matrix4(matrix: Matrix4) -> np.ndarray:
    """4x4 の float64 配列へ正規化（形状のみ検査）。

    例外:
    - InvalidTransformError: 4x4 でない（`validate.check_homogeneous` と同じ型）。
    """
    m = np.asarray(matrix, dtype=np.float64)
    if m.shape != (4, 4):
        raise InvalidTransformError(
            f"invalid transformation matrix: expected shape (4, 4), got {m.shape}"
        )
    return m


def as_points(points: Points) -> np.ndarray:
    """(N, 3) の float64 配列へ正規化。

    1 次元入力は長さが 3 の倍数であれば (N, 3) に整形する。
    """
    arr = np.asarray(points, dtype=np.float64)
    if arr.ndim == 1:
        if arr.size % 3 != 0:
            raise ValueError(
                "1次元入力の長さは3の倍数である必要があります（(x, y, z) の並び）"
            )
        return arr.reshape(-1, 3)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"座標配列の形状が不正です: {arr.shape}")
    return arr


def apply_transform(matrix: Matrix4, points: Points) -> np.ndarray:
    """同次変換を点群へ適用（純関数）。

    Parameters
    ----------
    matrix : array-like, shape (4, 4)
        同次変換行列。最下行は使用しない（同次列は捨てる）。
    points : array-like, shape (N, 3) or (3*k,)
        点群または方向ベクトル群。

    Returns
    -------
    np.ndarray
        変換後の float64 配列。入力と同じ形状（1 次元入力は 1 次元のまま）。

    Notes
    -----
    `settings.USE_NUMBA` が True なら numba カーネル、False なら numpy の行列積を使う。
    どちらも結果は同一（浮動小数誤差の範囲）。
    """
    m = as_matrix4(matrix)
    raw = np.asarray(points)
    pts = as_points(raw)

    if pts.shape[0] == 0:
        out = np.empty((0, 3), dtype=np.float64)
    elif settings.get().USE_NUMBA:
        out = _apply_homogeneous_njit(np.ascontiguousarray(pts), np.ascontiguousarray(m))
    else:
        out = _apply_homogeneous_numpy(pts, m)

    if raw.ndim == 1:
        return out.reshape(-1)
    return out


def rotation_only(matrix: Matrix4) -> np.ndarray:
    """左上 3x3 ブロックのみを単位行列に埋め込んだ 4x4 行列（平行移動 0）。"""
    m = as_matrix4(matrix)
    rotation = np.eye(4, dtype=np.float64)
    rotation[:3, :3] = m[:3, :3]
    return rotation


__all__ = [
    "apply_transform",
    "rotation_only",
    "as_matrix4",
    "as_points",
]
