"""
どこで: `engine.core.errors`
何を: 変換行列の検証失敗を表す例外階層。
なぜ: 形式不正（同次行）と剛体違反を呼び出し側で区別できるようにするため。

いずれも `ValueError` 派生。検証はフィールドの書き換えより前に行うため、
送出時に部分的に変換されたレコードが返ることはない。
"""

from __future__ import annotations


class TransformError(ValueError):
    """変換行列が対象オブジェクトに適用できない場合の基底例外。"""


class InvalidTransformError(TransformError):
    """4x4 でない・非有限値を含む・最下行が [0, 0, 0, 1] でない。"""


class NonRigidTransformError(TransformError):
    """剛体変換が必要な対象に対し、回転ブロックの行列式が 1 から外れている。"""

    def __init__(self, determinant: float, tolerance: float) -> None:
        self.determinant = float(determinant)
        self.tolerance = float(tolerance)
        super().__init__(
            "only a rigid body transformation without rescaling is allowed: "
            f"|det(R) - 1| = {abs(self.determinant - 1.0):.3e} exceeds {self.tolerance:.3e}"
        )


class NonUniformScalingError(TransformError):
    """センサ配列に対し、非一様スケール（またはせん断）を含む変換が与えられた。"""

    def __init__(self, deviation: float, tolerance: float) -> None:
        self.deviation = float(deviation)
        self.tolerance = float(tolerance)
        super().__init__(
            "non-uniform scaling is not allowed for sensor arrays: "
            f"max |R^T R - c^2 I| = {self.deviation:.3e} exceeds {self.tolerance:.3e}"
        )


__all__ = [
    "TransformError",
    "InvalidTransformError",
    "NonRigidTransformError",
    "NonUniformScalingError",
]
