"""
どこで: `engine.core.shape`（宣言的な形状記述）。
何を: 点列パス `Path` と入れ子の `Composite` からなる形状 `Shape`、その構築子と基本図形。
なぜ: 描画ツリー（`engine.render.drawing`）の葉が参照する幾何を、変換や描画手段から独立した
     純粋な値として記述するため。

データモデル:
- `Path(closed, points)`: `points` は `Vec3` の不変タプル。`closed=True` なら始点へ閉じる。
- `Composite(shapes)`: 子 `Shape` の不変タプル。構築のみで作られるため循環しない。

構築ユーティリティ:
- `path(points)` / `closed(points)` は任意の有限イテラブル（list/tuple/generator/ndarray）を
  空の `Path` から 1 点ずつ追加して畳み込む。

使用例:
    from engine.core.shape import closed, composite, point, polygon

    tri = closed([point(0, 0, 0), point(1, 0, 0), point(0, 1, 0)])
    s = composite([tri, polygon(6, radius=2.0)])
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Sequence

import numpy as np

from common.types import Vec3


@dataclass(frozen=True)
class Path:
    closed: bool
    points: tuple[Vec3, ...]


@dataclass(frozen=True)
class Composite:
    shapes: tuple["Shape", ...]


Shape = Composite | Path

EMPTY_PATH = Path(closed=False, points=())


# ── 構築子 ───────────────────
def point(x: float, y: float, z: float) -> Vec3:
    return (float(x), float(y), float(z))


def _as_point(p: Sequence[float]) -> Vec3:
    return (float(p[0]), float(p[1]), float(p[2]))


def composite(shapes: Iterable[Shape]) -> Composite:
    return Composite(tuple(shapes))


def _fold_points(points: Iterable[Sequence[float]], is_closed: bool) -> Path:
    return reduce(
        lambda acc, p: Path(closed=is_closed, points=acc.points + (_as_point(p),)),
        points,
        Path(closed=is_closed, points=()),
    )


def path(points: Iterable[Sequence[float]]) -> Path:
    """点列を開いたパスへ畳み込む。"""
    return _fold_points(points, False)


def closed(points: Iterable[Sequence[float]]) -> Path:
    """点列を閉じたパスへ畳み込む。"""
    return _fold_points(points, True)


def concat_paths(x: Path, y: Path) -> Path:
    """パスのモノイド演算（点列は連結、`closed` はいずれかが閉なら閉）。単位元は `EMPTY_PATH`。"""
    return Path(closed=x.closed or y.closed, points=x.points + y.points)


# ── 基本図形 ───────────────────
def line(a: Sequence[float], b: Sequence[float]) -> Path:
    """2 点を結ぶ開いた線分。"""
    return path([a, b])


def rect(x: float, y: float, width: float, height: float) -> Path:
    """XY 平面（z=0）上の軸平行な矩形。`(x, y)` は左上角。"""
    return closed(
        [
            point(x, y, 0),
            point(x + width, y, 0),
            point(x + width, y + height, 0),
            point(x, y + height, 0),
        ]
    )


def polygon(n_sides: int = 6, *, radius: float = 0.5, phase: float = 0.0) -> Path:
    """原点中心・半径 `radius` の円に内接する正多角形（XY 平面、閉）。

    引数:
        n_sides: 辺の数（3 未満は 3 に丸める）。
        radius: 外接円の半径。
        phase: 頂点開始角（度数法）。0 で +X 軸上に頂点を置く。
    """
    sides = max(3, int(round(float(n_sides))))
    t = np.linspace(0.0, 2.0 * np.pi, sides, endpoint=False) + np.deg2rad(float(phase))
    xs = np.cos(t) * float(radius)
    ys = np.sin(t) * float(radius)
    return closed(point(x, y, 0.0) for x, y in zip(xs, ys))


def box(width: float = 1.0, height: float = 1.0, depth: float = 1.0) -> Composite:
    """原点中心の直方体ワイヤーフレーム（6 面の閉パス）。"""
    hx, hy, hz = float(width) / 2.0, float(height) / 2.0, float(depth) / 2.0
    v = [
        point(-hx, -hy, -hz),
        point(hx, -hy, -hz),
        point(hx, hy, -hz),
        point(-hx, hy, -hz),
        point(-hx, -hy, hz),
        point(hx, -hy, hz),
        point(hx, hy, hz),
        point(-hx, hy, hz),
    ]
    faces = [
        (0, 1, 2, 3),  # 背面 (z-)
        (4, 5, 6, 7),  # 前面 (z+)
        (0, 1, 5, 4),  # 下面 (y-)
        (3, 2, 6, 7),  # 上面 (y+)
        (0, 3, 7, 4),  # 左面 (x-)
        (1, 2, 6, 5),  # 右面 (x+)
    ]
    return composite(closed(v[i] for i in face) for face in faces)


def grid(nx: int = 10, ny: int = 10, *, size: float = 1.0) -> Composite:
    """原点中心・一辺 `size` の正方形グリッド（垂直線 nx 本 + 水平線 ny 本の開パス）。"""
    half = float(size) / 2.0
    xs = np.linspace(-half, half, max(int(nx), 0))
    ys = np.linspace(-half, half, max(int(ny), 0))
    verticals = [line(point(x, -half, 0), point(x, half, 0)) for x in xs]
    horizontals = [line(point(-half, y, 0), point(half, y, 0)) for y in ys]
    return composite(verticals + horizontals)


__all__ = [
    "Shape",
    "Path",
    "Composite",
    "EMPTY_PATH",
    "point",
    "composite",
    "path",
    "closed",
    "concat_paths",
    "line",
    "rect",
    "polygon",
    "box",
    "grid",
]
