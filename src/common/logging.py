"""
プロジェクト向けの軽量ロギングユーティリティ。

要点:
- 各モジュールは `logging.getLogger(__name__)` でロガーを取得する（`engine.core.validate` など）。
- アプリ側で設定が無い場合でも、妥当な最小構成を 1 度だけ適用するヘルパーを提供する。
- 変換検証の判断ログは DEBUG、棄却は WARNING で出るため、診断時は `level="DEBUG"` を渡す。
"""

from __future__ import annotations

import logging
from typing import Iterable

# 本プロジェクトのロガー名前空間
PACKAGE_LOGGERS: tuple[str, ...] = ("engine", "api")


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def setup_default_logging(
    level: int | str = "INFO", *, namespaces: Iterable[str] = PACKAGE_LOGGERS
) -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあればフォーマット設定はしない（no-op）
    - `namespaces` のロガーにはレベルのみ常に反映する
    - 上位のランナー/パイプラインから呼び出す想定
    """
    lvl = _resolve_level(level)
    for name in namespaces:
        logging.getLogger(name).setLevel(lvl)

    root = logging.getLogger()
    if root.handlers:
        # Assume the app has configured logging
        return
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


__all__ = ["setup_default_logging", "PACKAGE_LOGGERS"]
