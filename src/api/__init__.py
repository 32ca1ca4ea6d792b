"""
どこで: `api` 入口（高レベル公開 API）。
何を: `transform_geometry` と、レコード型・点変換・検査・分類・例外を再輸出。
なぜ: 利用者が単一名前空間から検査付きの幾何変換を完結できるようにするため。

Usage:
    import numpy as np
    from api import transform_geometry

    T = np.eye(4)
    T[:3, 3] = (10.0, 0.0, 0.0)
    headmodel = {"type": "singlesphere", "o": [[0.0, 0.0, 40.0]], "r": 90.0}
    moved = transform_geometry(T, headmodel)
"""

from engine.classify import DefaultClassifier
from engine.core.classification import (
    Classification,
    Classifier,
    SensorType,
    VolumeType,
)
from engine.core.errors import (
    InvalidTransformError,
    NonRigidTransformError,
    NonUniformScalingError,
    TransformError,
)
from engine.core.record import FIELD_POLICIES, FieldPolicy, GeometricRecord
from engine.core.transform_utils import apply_transform, rotation_only
from engine.core.validate import validate

from .geometry import transform_geometry

__all__ = [
    # メインAPI
    "transform_geometry",
    # レコード
    "GeometricRecord",
    "FieldPolicy",
    "FIELD_POLICIES",
    # 低レベル
    "apply_transform",
    "rotation_only",
    "validate",
    # 分類
    "Classifier",
    "Classification",
    "DefaultClassifier",
    "SensorType",
    "VolumeType",
    # 例外
    "TransformError",
    "InvalidTransformError",
    "NonRigidTransformError",
    "NonUniformScalingError",
]

__version__ = "2026.10"
