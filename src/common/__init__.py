"""
どこで: `common` パッケージ。
何を: 設定・環境変数パース・ロギング・型エイリアスなどの軽量基盤。
なぜ: engine/api から再利用する共通基盤を分離し、依存の向きを単純化するため。
"""

from .logging import setup_default_logging

__all__ = [
    "setup_default_logging",
]
