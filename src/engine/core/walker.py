"""
どこで: `engine.core.walker`
何を: レコードのフィールドをポリシー表に従って走査し、変換済みの新しいレコードを返す。
なぜ: 位置/方向/入れ子の各フィールドに正しい変換だけを当て、それ以外を素通しするため。

手順（1 レコードあたり）:
1) 分類器でセンサ種別/体積導体種別を得る
2) 種別に応じて行列を検査（書き換え前）
3) フィールドを元の順に走査し、ポリシーごとに置換
   - fid/bnd の各要素は同じ行列で再帰し、分類と検査も要素ごとにやり直す
   - fid の要素は目印点（nas/lpa/rpa など）でありセンサ配列ではない。
     分類器がセンサと判定しても、センサ種別は UNKNOWN として検査する
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping

import numpy as np

from common.types import Matrix4

from .classification import Classification, Classifier, SensorType, classify
from .record import FieldPolicy, GeometricRecord, policy_of
from .transform_utils import apply_transform, rotation_only
from .validate import validate_for

logger = logging.getLogger(__name__)

# 要素が目印点の集合として扱われる RECURSE フィールド
LANDMARK_FIELDS = frozenset({"fid"})


def transform_record(
    transform: Matrix4,
    record: GeometricRecord | Mapping[str, Any],
    classifier: Classifier,
) -> GeometricRecord | dict[str, Any]:
    """同次変換をレコードへ適用（純関数）。

    Parameters
    ----------
    transform : array-like, shape (4, 4)
        同次変換行列。
    record : GeometricRecord or Mapping
        入力レコード。変更されない。
    classifier : Classifier
        センサ/体積導体の種別判定。

    Returns
    -------
    GeometricRecord or dict
        入力が `GeometricRecord` なら `GeometricRecord`、それ以外の Mapping なら dict。
        フィールド集合と順序は入力と同じで、該当ポリシーの値のみ置き換わる。
    """
    return _transform(transform, record, classifier, landmarks=False)


def _classify_landmarks(classification: Classification) -> Classification:
    if not classification.is_sensor:
        return classification
    logger.debug(
        "landmark record classified as %s; validated as non-sensor",
        classification.sensor.value,
    )
    return replace(classification, sensor=SensorType.UNKNOWN)


def _transform(
    transform: Matrix4,
    record: GeometricRecord | Mapping[str, Any],
    classifier: Classifier,
    *,
    landmarks: bool,
) -> GeometricRecord | dict[str, Any]:
    rec = GeometricRecord.from_mapping(record)

    classification = classify(rec, classifier)
    if landmarks:
        classification = _classify_landmarks(classification)
    validate_for(transform, classification)

    matrix = np.asarray(transform, dtype=np.float64)
    rotation = rotation_only(matrix)

    updates: dict[str, Any] = {}
    for name, value in rec.items():
        policy = policy_of(name)
        if policy is FieldPolicy.TRANSLATE_ROTATE:
            updates[name] = apply_transform(matrix, value)
        elif policy is FieldPolicy.ROTATE_ONLY:
            updates[name] = apply_transform(rotation, value)
        elif policy is FieldPolicy.RECURSE:
            updates[name] = _transform_children(transform, name, value, classifier)

    out = rec.with_fields(updates)
    if isinstance(record, GeometricRecord):
        return out
    return dict(out.fields)


def _transform_children(
    transform: Matrix4, name: str, value: Any, classifier: Classifier
) -> Any:
    """fid/bnd の値（単一レコード、またはレコードの list/tuple）を再帰変換。"""
    if isinstance(value, Mapping):
        return _transform(transform, value, classifier, landmarks=name in LANDMARK_FIELDS)
    if isinstance(value, (list, tuple)):
        return type(value)(_transform_child(transform, name, v, classifier) for v in value)
    logger.warning("field %r is not a record or a sequence of records; left unchanged", name)
    return value


def _transform_child(transform: Matrix4, name: str, value: Any, classifier: Classifier) -> Any:
    if isinstance(value, Mapping):
        return _transform(transform, value, classifier, landmarks=name in LANDMARK_FIELDS)
    logger.warning("element of field %r is not a record; left unchanged", name)
    return value


__all__ = ["transform_record", "LANDMARK_FIELDS"]
