"""
どこで: `common.settings`
何を: scenedraw の環境変数設定を型付きで一元管理し、起動時に読み込む。
なぜ: 散在しがちなデバッグ/検査フラグの既定値と型を揃え、テストから差し替えやすくするため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str


@dataclass
class _Settings:
    # Vector
    CHECKED_INDEX: bool = False

    # Render
    RENDER_DEBUG: bool = False

    # Raster backend
    CANVAS_DPI: int = 100

    # Logging
    LOG_LEVEL: str = "INFO"


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - `SCD_CHECKED_INDEX`: `vec.at` の範囲検査を明示的に行う。
    - `SCD_RENDER_DEBUG`: 葉ノードごとの描画ログを DEBUG で出す。
    - `SCD_CANVAS_DPI`: matplotlib バックエンドの DPI（下限 1）。
    - `SCD_LOG_LEVEL`: `setup_default_logging` の既定レベル。
    """
    _settings.CHECKED_INDEX = env_bool("SCD_CHECKED_INDEX", False)
    _settings.RENDER_DEBUG = env_bool("SCD_RENDER_DEBUG", False)
    _settings.CANVAS_DPI = env_int("SCD_CANVAS_DPI", 100, min_value=1) or 100
    _settings.LOG_LEVEL = env_str("SCD_LOG_LEVEL", "INFO")


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
