"""
どこで: `common` の型定義。
何を: Matrix4/Points などの軽量エイリアス（組込みジェネリックで記述）。
なぜ: 依存の少ない場所に配置して循環と分散定義を避けるため。
"""

from __future__ import annotations

from numpy.typing import ArrayLike

# 4x4 同次変換行列として受け付ける値（ndarray またはネストしたシーケンス）
Matrix4 = ArrayLike

# (N, 3) の点群/方向ベクトル（ndarray またはネストしたシーケンス）
Points = ArrayLike


__all__ = ["Matrix4", "Points"]
