"""共通フィクスチャ。

- 乱数シード固定
- 設定（環境変数由来）の後始末
- 小さなセンサ配列/体積導体/ヘッドシェイプ試料
"""

from __future__ import annotations

from typing import Any, Iterator

import numpy as np
import pytest

from common import settings


@pytest.fixture(scope="session", autouse=True)
def np_seed() -> None:
    """NumPy の乱数を固定。"""
    np.random.seed(12345)


@pytest.fixture(autouse=True)
def _reload_settings() -> Iterator[None]:
    """monkeypatch による環境変数の復元後に設定を読み直す。"""
    yield
    settings.reload_from_env()


@pytest.fixture(params=[True, False], ids=["numba", "numpy"])
def kernel(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> bool:
    """点変換カーネルを numba/numpy の双方で走らせる。"""
    monkeypatch.setenv("GEOMXFORM_USE_NUMBA", "1" if request.param else "0")
    settings.reload_from_env()
    return bool(request.param)


@pytest.fixture()
def eeg_elec() -> dict[str, Any]:
    return {
        "label": ["Fz", "Cz", "Pz"],
        "pnt": np.array([[0.0, 60.0, 60.0], [0.0, 0.0, 90.0], [0.0, -60.0, 60.0]]),
        "unit": "mm",
    }


@pytest.fixture()
def meg_grad() -> dict[str, Any]:
    # 2 チャネルの磁力計
    return {
        "label": ["MEG001", "MEG002"],
        "pnt": np.array([[0.0, 0.0, 120.0], [50.0, 0.0, 110.0]]),
        "ori": np.array([[0.0, 0.0, 1.0], [0.4, 0.0, 0.9165151389911680]]),
        "tra": np.eye(2),
        "unit": "mm",
    }


@pytest.fixture()
def sphere_vol() -> dict[str, Any]:
    return {"r": 90.0, "o": np.array([[0.0, 0.0, 40.0]]), "unit": "mm"}


@pytest.fixture()
def bem_vol() -> dict[str, Any]:
    tri = np.array([[0, 1, 2], [0, 2, 3], [0, 3, 1], [1, 3, 2]])
    pnt = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]])
    return {
        "bnd": [{"pnt": pnt, "tri": tri}, {"pnt": 2.0 * pnt, "tri": tri}],
        "cond": [0.33, 0.0042],
        "mat": np.zeros((8, 8)),
        "type": "bem",
    }


@pytest.fixture()
def headshape() -> dict[str, Any]:
    return {
        "pnt": np.random.uniform(-80.0, 80.0, size=(20, 3)),
        "fid": {
            "pnt": np.array([[0.0, 90.0, 0.0], [-70.0, 0.0, 0.0], [70.0, 0.0, 0.0]]),
            "label": ["nas", "lpa", "rpa"],
        },
        "unit": "mm",
    }
