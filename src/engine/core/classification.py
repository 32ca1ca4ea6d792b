"""
どこで: `engine.core.classification`
何を: センサ種別/体積導体種別のタグ（Enum）と、分類器プロトコル `Classifier`。
なぜ: 検証ルールの分岐を文字列の番兵値ではなく明示的な `UNKNOWN` 付き列挙で扱うため。

具体的な判定ヒューリスティクスは `engine.classify` が提供する。ここでは型のみを定義し、
`engine.core` から上位層への依存を作らない。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Protocol, runtime_checkable


class SensorType(Enum):
    UNKNOWN = "unknown"
    EEG = "eeg"
    MEG_MAGNETOMETER = "meg_magnetometer"
    MEG_AXIAL = "meg_axial"
    MEG_PLANAR = "meg_planar"
    MEG_MIXED = "meg_mixed"

    @property
    def is_known(self) -> bool:
        return self is not SensorType.UNKNOWN

    @property
    def is_meg(self) -> bool:
        """MEG 系（磁力計/グラジオメータ/混在）なら True。"""
        return self.value.startswith("meg")


class VolumeType(Enum):
    UNKNOWN = "unknown"
    INFINITE = "infinite"
    SINGLE_SPHERE = "single_sphere"
    CONCENTRIC_SPHERES = "concentric_spheres"
    LOCAL_SPHERES = "local_spheres"
    SINGLE_SHELL = "single_shell"
    BEM = "bem"

    @property
    def is_known(self) -> bool:
        return self is not VolumeType.UNKNOWN


@runtime_checkable
class Classifier(Protocol):
    """レコードを受け取り、センサ種別と体積導体種別を返す協調者。

    どちらも認識できない形状には `UNKNOWN` を返すこと。
    """

    def sensor_type(self, record: Mapping[str, Any]) -> SensorType: ...

    def volume_type(self, record: Mapping[str, Any]) -> VolumeType: ...


@dataclass(frozen=True, slots=True)
class Classification:
    """1 レコード分の分類結果。"""

    sensor: SensorType = SensorType.UNKNOWN
    volume: VolumeType = VolumeType.UNKNOWN

    @property
    def is_sensor(self) -> bool:
        return self.sensor.is_known

    @property
    def is_meg_sensor(self) -> bool:
        return self.sensor.is_meg

    @property
    def is_volume_conductor(self) -> bool:
        return self.volume.is_known


def classify(record: Mapping[str, Any], classifier: Classifier) -> Classification:
    """`classifier` の 2 つの判定をまとめて `Classification` にする。"""
    return Classification(
        sensor=classifier.sensor_type(record),
        volume=classifier.volume_type(record),
    )


__all__ = [
    "SensorType",
    "VolumeType",
    "Classifier",
    "Classification",
    "classify",
]
