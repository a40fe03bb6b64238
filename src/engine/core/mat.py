"""
どこで: `engine.core.mat`（4×4 アフィン行列の代数）。
何を: 行ベクトル規約の行列 `Mat` と、その構築子・転置・積（モノイド）・列取り出し。
なぜ: 描画ツリーの変換累積（`engine.render.interpreter`）を、行列積の結合則と
     単位元 `IDENTITY` だけで表現できるようにするため。

データモデル（不変条件）:
- `Mat` は float64 の 2 次元 `np.ndarray`（読み取り専用）。各行の長さは等しい。
- 点は行ベクトル `(x, y, z, w)` として左から掛ける（`p' = p · M`）。
  そのため平行移動成分は最終行に置かれる。
- 角度はすべて度数法。

積の向き（重要）:
- `concat(x, y)` は通常の行列積 `x · y`。
- `mul(b)(a) == concat(a, b)`。**後から渡す引数が左オペランド**になる。
  変換累積はこの向きに依存しているため、入れ替えてはならない。

直感図（行ベクトル規約）:

    p = [x, y, z, 1]
    p · translate((dx, dy, dz)) = [x + dx, y + dy, z + dz, 1]
    p · rotate_z(90)            = [-y, x, z, 1]
"""

from __future__ import annotations

from functools import reduce
from typing import Callable, Iterable, Sequence

import numpy as np

from common.types import Vec

from .vec import at

MatLike = np.ndarray | Sequence[Sequence[float]]
Mat = np.ndarray


def _freeze(arr: np.ndarray) -> Mat:
    arr.setflags(write=False)
    return arr


def as_mat(m: MatLike) -> Mat:
    """入力を読み取り専用の `Mat` へ正規化する。

    Raises
    ------
    ValueError
        2 次元でない、空、または行の長さが揃っていない（ragged）場合。
    """
    if isinstance(m, np.ndarray):
        arr = np.array(m, dtype=np.float64)
    else:
        rows = [list(r) for r in m]
        if not rows:
            raise ValueError("Mat は少なくとも 1 行を含む必要があります")
        width = len(rows[0])
        if any(len(r) != width for r in rows):
            raise ValueError("Mat の各行は同じ長さである必要があります")
        arr = np.array(rows, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ValueError(f"Mat は空でない 2 次元配列である必要があります: {arr.shape}")
    return _freeze(arr)


def _sin(deg: float) -> float:
    return float(np.sin(np.deg2rad(deg)))


def _cos(deg: float) -> float:
    return float(np.cos(np.deg2rad(deg)))


# ── 構築子 ───────────────────
IDENTITY: Mat = _freeze(np.eye(4, dtype=np.float64))


def translate(v: Sequence[float]) -> Mat:
    """平行移動行列（移動量は最終行）。"""
    return as_mat(
        [
            [1, 0, 0, 0],
            [0, 1, 0, 0],
            [0, 0, 1, 0],
            [v[0], v[1], v[2], 1],
        ]
    )


def scale(v: Sequence[float]) -> Mat:
    """拡大縮小行列（対角に係数）。"""
    return as_mat(
        [
            [v[0], 0, 0, 0],
            [0, v[1], 0, 0],
            [0, 0, v[2], 0],
            [0, 0, 0, 1],
        ]
    )


def rotate_x(angle: float) -> Mat:
    """X 軸回りの回転行列（度）。"""
    c, s = _cos(angle), _sin(angle)
    return as_mat(
        [
            [1, 0, 0, 0],
            [0, c, s, 0],
            [0, -s, c, 0],
            [0, 0, 0, 1],
        ]
    )


def rotate_y(angle: float) -> Mat:
    """Y 軸回りの回転行列（度）。"""
    c, s = _cos(angle), _sin(angle)
    return as_mat(
        [
            [c, 0, -s, 0],
            [0, 1, 0, 0],
            [s, 0, c, 0],
            [0, 0, 0, 1],
        ]
    )


def rotate_z(angle: float) -> Mat:
    """Z 軸回りの回転行列（度）。Z 成分は保存される。"""
    c, s = _cos(angle), _sin(angle)
    return as_mat(
        [
            [c, s, 0, 0],
            [-s, c, 0, 0],
            [0, 0, 1, 0],
            [0, 0, 0, 1],
        ]
    )


def axonometric(phi: float, theta: float) -> Mat:
    """平行投影（軸測投影）行列。

    Parameters
    ----------
    phi : float
        鉛直軸回りの方位角（度）。
    theta : float
        見下ろし角（度）。

    Notes
    -----
    描画開始時の変換として `render(..., transform=axonometric(phi, theta))` のように使う。
    奥行きの破棄は描画時の固定射影が担う。
    """
    cp, sp = _cos(phi), _sin(phi)
    ct, st = _cos(theta), _sin(theta)
    return as_mat(
        [
            [cp, sp * st, -sp * ct, 0],
            [0, ct, st, 0],
            [sp, -cp * st, cp * ct, 0],
            [0, 0, 0, 1],
        ]
    )


# ── 演算 ───────────────────
def row(n: int) -> Callable[[MatLike], Vec]:
    """各行の n 番目成分を集めた `Vec` を返す関数（= n 列目）。

    例: ``row(1)([[1, 2, 3, 4], [5, 6, 7, 8], [9, 10, 11, 12]]) == (2.0, 6.0, 10.0)``
    """
    pick = at(n)

    def _row(m: MatLike) -> Vec:
        return tuple(float(pick(r)) for r in as_mat(m))

    return _row


def transpose(m: MatLike) -> Mat:
    """転置。先頭行の各列添字について `row` を取る（矩形入力が前提）。"""
    mm = as_mat(m)
    return as_mat([row(j)(mm) for j in range(mm.shape[1])])


def concat(x: MatLike, y: MatLike) -> Mat:
    """行列積 `x · y`（モノイド演算）。

    `result[i][j]` は `x` の i 行目と `transpose(y)` の j 行目の内積。

    Raises
    ------
    ValueError
        `x` の列数と `y` の行数が一致しない場合。
    """
    xm = as_mat(x)
    ym = as_mat(y)
    if xm.shape[1] != ym.shape[0]:
        raise ValueError(
            f"concat: 形状が整合しません（{xm.shape} · {ym.shape}）。"
            " 左の列数と右の行数が一致する必要があります"
        )
    yt = transpose(ym)
    return _freeze(np.einsum("ik,jk->ij", xm, yt))


def mul(b: MatLike) -> Callable[[MatLike], Mat]:
    """`mul(b)(a) == concat(a, b)` を返す（後から渡す `a` が左オペランド）。"""

    def _mul(a: MatLike) -> Mat:
        return concat(a, b)

    return _mul


def concat_all(mats: Iterable[MatLike]) -> Mat:
    """`IDENTITY` から左畳み込みで `concat` する。空なら `IDENTITY`。"""
    return reduce(concat, mats, IDENTITY)


__all__ = [
    "Mat",
    "MatLike",
    "IDENTITY",
    "as_mat",
    "translate",
    "scale",
    "rotate_x",
    "rotate_y",
    "rotate_z",
    "axonometric",
    "row",
    "transpose",
    "concat",
    "mul",
    "concat_all",
]
