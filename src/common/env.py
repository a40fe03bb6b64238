"""
どこで: `common.env`
何を: 環境変数の軽量パースヘルパ（bool/int/str）。
なぜ: `os.getenv` と不正値ガードを `common.settings` の一箇所へ寄せるため。
"""

from __future__ import annotations

import os
from typing import Optional

_TRUTHY = {"1", "true", "t", "yes", "y", "on"}
_FALSY = {"0", "false", "f", "no", "n", "off"}


def env_bool(name: str, default: bool = False) -> bool:
    """真偽環境変数を取得する。

    受理: 数値（0 以外で True）と true/false 系の語。解釈できない値は既定値。
    """
    raw = os.getenv(name)
    if raw is None:
        return bool(default)
    s = raw.strip().lower()
    if s in _TRUTHY:
        return True
    if s in _FALSY:
        return False
    try:
        return int(s) != 0
    except ValueError:
        return bool(default)


def env_int(
    name: str, default: Optional[int] = None, *, min_value: Optional[int] = None
) -> Optional[int]:
    """整数環境変数を取得する。

    Parameters
    ----------
    name : str
        環境変数名。
    default : Optional[int]
        未設定/不正値のときに返す値。
    min_value : Optional[int]
        下限。指定時は下回った値を下限へ丸める。

    Returns
    -------
    Optional[int]
        取得した整数値、または `default`。
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        val = int(raw.strip())
    except ValueError:
        return default
    if min_value is not None and val < min_value:
        return min_value
    return val


def env_str(name: str, default: str) -> str:
    """文字列環境変数を取得する（空文字は未設定扱い）。"""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


__all__ = ["env_bool", "env_int", "env_str"]
