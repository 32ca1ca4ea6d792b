"""
どこで: `api.geometry`（高レベル公開 API）。
何を: `transform_geometry(transform, input)` を提供し、既定の分類器を差し込む。
なぜ: 利用者が分類器や走査の詳細を意識せずに、検査付きの同次変換を 1 呼び出しで行えるようにするため。
"""

from __future__ import annotations

from typing import Any, Mapping, overload

from common.types import Matrix4
from engine.classify import DefaultClassifier
from engine.core.classification import Classifier
from engine.core.record import GeometricRecord
from engine.core.walker import transform_record

_DEFAULT_CLASSIFIER = DefaultClassifier()


@overload
def transform_geometry(
    transform: Matrix4, input: GeometricRecord, *, classifier: Classifier | None = ...
) -> GeometricRecord: ...


@overload
def transform_geometry(
    transform: Matrix4, input: Mapping[str, Any], *, classifier: Classifier | None = ...
) -> dict[str, Any]: ...


def transform_geometry(
    transform: Matrix4,
    input: GeometricRecord | Mapping[str, Any],
    *,
    classifier: Classifier | None = None,
) -> GeometricRecord | dict[str, Any]:
    """幾何情報を持つレコードに同次変換を適用する。

    対象:
    - 体積導体（メッシュ、メッシュ集合、単一球、複数球）
    - センサ配列（EEG 電極、MEG グラジオメータ/磁力計）
    - ヘッドシェイプ、ソースモデル（位置と任意の向き）

    変換行列の単位は対象と同じである前提。MEG センサ配列と体積導体には剛体変換
    （回転＋平行移動）のみを許す。EEG など MEG 以外のセンサ配列には一様スケールを許す。

    Parameters
    ----------
    transform : array-like, shape (4, 4)
        同次変換行列。最下行は厳密に [0, 0, 0, 1]。
    input : GeometricRecord or Mapping
        入力レコード。変更されない。
    classifier : Classifier, optional
        種別判定の差し替え。省略時は `DefaultClassifier`。

    Returns
    -------
    GeometricRecord or dict
        入力と同じ種類の新しいレコード。

    Raises
    ------
    InvalidTransformError
        行列の形式が不正。
    NonRigidTransformError
        剛体変換が必要な対象に非剛体変換を与えた。
    NonUniformScalingError
        センサ配列に非一様スケールを与えた（設定で無効化可能）。
    """
    if classifier is None:
        classifier = _DEFAULT_CLASSIFIER
    return transform_record(transform, input, classifier)


__all__ = ["transform_geometry"]
