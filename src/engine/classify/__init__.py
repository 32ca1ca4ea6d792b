"""
どこで: `engine.classify` サブパッケージ。
何を: 既定の分類器 `DefaultClassifier`（センサ/体積導体の構造ヒューリスティクス）。
なぜ: `engine.core.classification.Classifier` の標準実装を、差し替え可能な形で提供するため。
"""

from __future__ import annotations

from typing import Any, Mapping

from engine.core.classification import SensorType, VolumeType

from .sensors import classify_sensor_type
from .volumes import classify_volume_type


class DefaultClassifier:
    """`classify_sensor_type` / `classify_volume_type` に委譲する分類器。"""

    def sensor_type(self, record: Mapping[str, Any]) -> SensorType:
        return classify_sensor_type(record)

    def volume_type(self, record: Mapping[str, Any]) -> VolumeType:
        return classify_volume_type(record)


__all__ = ["DefaultClassifier", "classify_sensor_type", "classify_volume_type"]
