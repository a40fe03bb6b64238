"""
どこで: `common` パッケージ。
何を: 型エイリアス・環境変数設定・ロギング初期化の共通基盤。
なぜ: core/render/export から共有する基盤を分離し、依存の向きを単純化するため。
"""

from .logging import setup_default_logging
from .types import Vec, Vec2, Vec3, Vec4

__all__ = [
    "setup_default_logging",
    "Vec",
    "Vec2",
    "Vec3",
    "Vec4",
]
