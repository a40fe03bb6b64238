"""
どこで: `engine.core.vec`（ベクトル代数の最小セット）。
何を: 固定長の数値タプル `Vec` に対する内積 `dot` と添字アクセス `at`。
なぜ: 行列積（`engine.core.mat`）と点表現（`engine.core.shape`）の共通の葉として、
     numpy 配列ではなく不変タプルで点を扱える軽量な入口を提供するため。

不変条件:
- `Vec` は float の不変タプル（長さ 1 以上）。点は長さ 3、同次座標は長さ 4。
- 長さ不一致の `dot` は前提条件違反であり、即座に `ValueError` を送出する。
"""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np

from common.settings import get as _get_settings
from common.types import Vec


def vec(*xs: float) -> Vec:
    """数値列を `Vec`（float タプル）へ正規化する。"""
    if not xs:
        raise ValueError("Vec は少なくとも 1 要素を含む必要があります")
    return tuple(float(x) for x in xs)


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    """内積 Σ aᵢ·bᵢ を返す。

    Raises
    ------
    ValueError
        `len(a) != len(b)` の場合（黙って切り詰めない）。
    """
    if len(a) != len(b):
        raise ValueError(f"dot: 長さが一致しません（{len(a)} != {len(b)}）")
    return float(np.dot(np.asarray(a, dtype=np.float64), np.asarray(b, dtype=np.float64)))


def at(i: int) -> Callable[[Sequence[float]], float]:
    """`v[i]` を取り出す関数を返す（`mat.row` から写像として使う）。

    添字は呼び出し側が保証する前提。`SCD_CHECKED_INDEX` が有効なときのみ
    範囲外を明示メッセージ付きの `IndexError` にする。
    """

    def _at(v: Sequence[float]) -> float:
        if _get_settings().CHECKED_INDEX and not 0 <= i < len(v):
            raise IndexError(f"at({i}): 長さ {len(v)} のベクトルに対して範囲外です")
        return v[i]

    return _at


__all__ = ["Vec", "vec", "dot", "at"]
