"""
プロジェクト向けの軽量ロギングユーティリティ。

要点:
- 各モジュールは `logging.getLogger(__name__)` でロガーを取得する。
- アプリ/スクリプト側で設定が無い場合に限り、最小構成を 1 度だけ適用する。
- レベル未指定時は `common.settings` の `LOG_LEVEL`（`SCD_LOG_LEVEL`）を使う。
"""

from __future__ import annotations

import logging

from .settings import get as _get_settings

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = _get_settings().LOG_LEVEL
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def setup_default_logging(level: int | str | None = None) -> None:
    """最小限のロギング設定を 1 度だけ適用する。

    - ルートロガーにハンドラが既にあれば何もしない（no-op）
    - `engine.export.image` やスクリプトの入口から呼び出す想定
    """
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(level=_resolve_level(level), format=_FORMAT)


__all__ = ["setup_default_logging"]
