"""
どこで: `engine.classify.sensors`
何を: レコードがセンサ配列か、どの系統（EEG / MEG 磁力計・グラジオメータ）かを推定する。
なぜ: 変換検査で MEG 系だけに剛体性を要求するため。

判定順:
1) 文字列 `type` フィールドが既知名なら、その種別
2) `elecpos` があれば EEG
3) `label` がすべて目印点名（nas/lpa/rpa など）なら UNKNOWN
4) `label` と位置（coilpos/pnt/pos/chanpos）があり
   - コイル向き（coilori/ori）が無ければ EEG
   - あればコイル数/チャネル数から MEG の下位種別
5) それ以外は UNKNOWN（ヘッドシェイプや素のメッシュなど）
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

import numpy as np

from engine.core.classification import SensorType

logger = logging.getLogger(__name__)

_POSITION_FIELDS = ("coilpos", "pnt", "pos", "chanpos")
_ORIENTATION_FIELDS = ("coilori", "ori")

# 頭部の解剖学的目印点（小文字）
FIDUCIAL_LABELS = frozenset({"nas", "nasion", "lpa", "rpa", "ini", "inion", "lhj", "rhj"})

# 既知のシステム名（小文字）
SENSOR_TYPE_NAMES: dict[str, SensorType] = {
    # EEG
    "eeg": SensorType.EEG,
    "electrode": SensorType.EEG,
    "eeg1020": SensorType.EEG,
    "eeg1010": SensorType.EEG,
    "eeg1005": SensorType.EEG,
    "biosemi64": SensorType.EEG,
    "biosemi128": SensorType.EEG,
    "biosemi256": SensorType.EEG,
    "egi64": SensorType.EEG,
    "egi128": SensorType.EEG,
    "egi256": SensorType.EEG,
    # MEG
    "meg": SensorType.MEG_MIXED,
    "magnetometer": SensorType.MEG_MAGNETOMETER,
    "itab153": SensorType.MEG_MAGNETOMETER,
    "magnes": SensorType.MEG_MAGNETOMETER,
    "ctf64": SensorType.MEG_AXIAL,
    "ctf151": SensorType.MEG_AXIAL,
    "ctf275": SensorType.MEG_AXIAL,
    "bti148": SensorType.MEG_AXIAL,
    "bti248": SensorType.MEG_AXIAL,
    "4d248": SensorType.MEG_AXIAL,
    "yokogawa160": SensorType.MEG_AXIAL,
    "ctf151_planar": SensorType.MEG_PLANAR,
    "ctf275_planar": SensorType.MEG_PLANAR,
    "bti248_planar": SensorType.MEG_PLANAR,
    "neuromag122": SensorType.MEG_PLANAR,
    "neuromag306": SensorType.MEG_MIXED,
}


def _first_present(record: Mapping[str, Any], names: tuple[str, ...]) -> Any | None:
    for name in names:
        if name in record:
            return record[name]
    return None


def _n_labels(label: Any) -> int:
    if isinstance(label, str):
        return 1
    try:
        return len(label)
    except TypeError:
        return 0


def _is_fiducial_set(label: Any) -> bool:
    names = [label] if isinstance(label, str) else label
    try:
        lowered = [str(n).strip().lower() for n in names]
    except TypeError:
        return False
    return bool(lowered) and all(n in FIDUCIAL_LABELS for n in lowered)


def _gradiometer_kind(pos: np.ndarray, ori: np.ndarray, n_chan: int) -> SensorType:
    """2 コイル/チャネルの配置から軸型か平面型かを決める。

    コイル i と i + n_chan を対とみなし、変位がコイル向きと平行なら軸型。
    """
    disp = pos[n_chan:] - pos[:n_chan]
    dn = np.linalg.norm(disp, axis=1)
    on = np.linalg.norm(ori[:n_chan], axis=1)
    valid = (dn > 0) & (on > 0)
    if not np.any(valid):
        return SensorType.MEG_MIXED
    cos = np.abs(np.sum(disp[valid] * ori[:n_chan][valid], axis=1)) / (dn[valid] * on[valid])
    return SensorType.MEG_AXIAL if float(np.mean(cos)) > 0.5 else SensorType.MEG_PLANAR


def classify_sensor_type(record: Mapping[str, Any]) -> SensorType:
    """センサ種別を推定（認識できなければ `SensorType.UNKNOWN`）。"""
    kind = record.get("type")
    if isinstance(kind, str):
        tag = SENSOR_TYPE_NAMES.get(kind.strip().lower())
        if tag is not None:
            return tag

    if "elecpos" in record:
        return SensorType.EEG
    if "label" not in record:
        return SensorType.UNKNOWN
    if _is_fiducial_set(record["label"]):
        return SensorType.UNKNOWN

    raw_pos = _first_present(record, _POSITION_FIELDS)
    if raw_pos is None:
        return SensorType.UNKNOWN
    raw_ori = _first_present(record, _ORIENTATION_FIELDS)
    if raw_ori is None:
        return SensorType.EEG

    pos = np.atleast_2d(np.asarray(raw_pos, dtype=np.float64))
    ori = np.atleast_2d(np.asarray(raw_ori, dtype=np.float64))
    n_chan = _n_labels(record["label"])
    n_coil = pos.shape[0]
    if n_chan == 0 or ori.shape != pos.shape:
        logger.debug("coil positions/orientations mismatch; treating as generic MEG")
        return SensorType.MEG_MIXED
    if n_coil == n_chan:
        return SensorType.MEG_MAGNETOMETER
    if n_coil == 2 * n_chan:
        return _gradiometer_kind(pos, ori, n_chan)
    return SensorType.MEG_MIXED


__all__ = ["classify_sensor_type", "SENSOR_TYPE_NAMES", "FIDUCIAL_LABELS"]
