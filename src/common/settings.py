"""
どこで: `common.settings`
何を: 変換検証まわりの設定を型付きで一元管理し、起動時に環境変数から読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。

環境変数:
- `GEOMXFORM_RIGID_EPS_FACTOR`: 剛体判定の許容誤差（eps の倍数）。既定 100。
- `GEOMXFORM_CHECK_UNIFORM_SCALING`: センサ配列への非一様スケール検査。既定 1。
- `GEOMXFORM_UNIFORM_SCALING_RTOL`: 一様スケール検査の相対許容誤差。既定 1e-5。
- `GEOMXFORM_USE_NUMBA`: 点変換カーネルに numba 版を使うか。既定 1。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float

ENV_PREFIX = "GEOMXFORM_"


@dataclass
class _Settings:
    # 検証
    RIGID_EPS_FACTOR: float = 100.0
    CHECK_UNIFORM_SCALING: bool = True
    # 小数 6 桁程度で保存された回転行列を受け入れる精度
    UNIFORM_SCALING_RTOL: float = 1e-5

    # カーネル
    USE_NUMBA: bool = True


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - float は `env_float`（負値は既定値へ戻す）、bool は `env_bool` を使用。
    """
    factor = env_float(f"{ENV_PREFIX}RIGID_EPS_FACTOR", 100.0)
    _settings.RIGID_EPS_FACTOR = factor if factor >= 0.0 else 100.0
    _settings.CHECK_UNIFORM_SCALING = env_bool(f"{ENV_PREFIX}CHECK_UNIFORM_SCALING", True)
    rtol = env_float(f"{ENV_PREFIX}UNIFORM_SCALING_RTOL", 1e-5)
    _settings.UNIFORM_SCALING_RTOL = rtol if rtol >= 0.0 else 1e-5
    _settings.USE_NUMBA = env_bool(f"{ENV_PREFIX}USE_NUMBA", True)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings", "ENV_PREFIX"]
