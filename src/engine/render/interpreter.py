"""
どこで: `engine.render.interpreter`（描画ツリーの解釈器）。
何を: `Drawing` を深さ優先・前順で走査し、変換行列を累積しながら `Renderer` へ
     順序付きのパス/スタイルコマンドを発行する。
なぜ: ツリー構築（純粋な値）と描画面への副作用を一箇所で接続し、
     発行順序と状態のスコープ（save/restore）を保証するため。

変換の累積（行ベクトル規約、`T` は親から受け取った累積行列）:
- Many      : 子すべてに同じ `T`（兄弟間で変換は伝播しない）
- Scale     : `T' = T · scale(sx, sy, sz)`
- Translate : `T' = T · translate(dx, dy, dz)`
- Rotate    : `T' = (rotate_y(ay) · rotate_x(ax)) · (T · rotate_z(az))`
  Translate/Scale と構造が異なる（X/Y 回転が累積行列の左に付く）。互換性のため
  この順序を維持する。

葉（Fill/Outline）の座標変換:

    subpath (K,3) --w=1 追加--> (K,4) --· T--> --· VT--> (x, y) を発行
    VT = diag(1, 1, 0, 1)   # 奥行きのみ破棄する正射影

発行されるコマンド（Fill の例）:
    save → set_fill_style → begin_path → move_to → line_to… → fill → restore
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from common.settings import get as _get_settings
from common.types import Vec3
from engine.core import mat
from engine.core.angle import angle
from engine.core.mat import IDENTITY, Mat, MatLike
from engine.core.path3d import Path3D
from engine.core.shape import Composite, Path, Shape
from util.color import to_css

from .canvas import Renderer, fill_path, stroke_path, with_context
from .drawing import Drawing, Fill, Many, Outline, Rotate, Scale, Translate

logger = logging.getLogger(__name__)

# 固定の平行投影行列（奥行きを捨て、w は保存）
VT: Mat = mat.as_mat(
    [
        [1, 0, 0, 0],
        [0, 1, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 0, 1],
    ]
)


def render_shape(shape: Shape) -> Path3D:
    """`Shape` を `Path3D` へ変換する。

    - Composite: 子の結果を順に単純連結する。
    - Path: 空なら空。先頭点へ move_to、残りへ line_to。閉パスなら close_path し、
      close_path が追加した末尾の単点サブパスを取り除く。
    """
    if isinstance(shape, Composite):
        out = Path3D()
        for child in shape.shapes:
            out = out.concat(render_shape(child))
        return out
    if isinstance(shape, Path):
        if not shape.points:
            return Path3D()
        head, *tail = shape.points
        p = Path3D().move_to(head)
        for pt in tail:
            p = p.line_to(pt)
        if shape.closed:
            closed = p.close_path()
            # close_path が実際に閉じた場合だけ単点サブパスが増えている
            if len(closed) > len(p):
                closed = closed.without_last()
            p = closed
        return p
    raise TypeError(f"Shape ではありません: {shape!r}")


def _lift(subpath: Sequence[Vec3]) -> np.ndarray:
    """(K,3) の点列へ w=1 を付けて (K,4) の同次座標行列にする。"""
    pts = np.asarray(subpath, dtype=np.float64).reshape(-1, 3)
    return np.hstack([pts, np.ones((pts.shape[0], 1), dtype=np.float64)])


def to_coords(shape: Shape, transform: MatLike) -> list[Mat]:
    """形状を描画面座標のサブパス行列列へ変換する。

    各要素は (K,4) の行列で、列 0/1 が描画面の x/y、列 2 は常に 0、列 3 は w。
    """
    to_view = mat.mul(VT)
    apply_t = mat.mul(transform)
    return [to_view(apply_t(_lift(sp))) for sp in render_shape(shape) if sp]


def render_subpath(renderer: Renderer, subpath: Mat) -> None:
    """先頭点へ move_to、以降の点へ line_to を発行する（z と w は捨てる）。"""
    if len(subpath) == 0:
        return
    head, tail = subpath[0], subpath[1:]
    renderer.move_to((float(head[0]), float(head[1])))
    for p in tail:
        renderer.line_to((float(p[0]), float(p[1])))


def _render_subpaths(renderer: Renderer, coords: list[Mat]) -> None:
    for sp in coords:
        render_subpath(renderer, sp)


def _render_fill(renderer: Renderer, d: Fill, t: Mat) -> None:
    coords = to_coords(d.shape, t)
    with with_context(renderer):
        if d.style.color is not None:
            renderer.set_fill_style(to_css(d.style.color))
        fill_path(renderer, lambda: _render_subpaths(renderer, coords))


def _render_outline(renderer: Renderer, d: Outline, t: Mat) -> None:
    coords = to_coords(d.shape, t)
    with with_context(renderer):
        if d.style.color is not None:
            renderer.set_stroke_style(to_css(d.style.color))
        if d.style.line_width is not None:
            renderer.set_line_width(d.style.line_width)
        stroke_path(renderer, lambda: _render_subpaths(renderer, coords))


def _go(renderer: Renderer, t: Mat, d: Drawing, stats: dict[str, int]) -> None:
    if isinstance(d, Many):
        for child in d.drawings:
            _go(renderer, t, child, stats)
    elif isinstance(d, Scale):
        _go(renderer, mat.mul(mat.scale([d.scale_x, d.scale_y, d.scale_z]))(t), d.drawing, stats)
    elif isinstance(d, Translate):
        t2 = mat.mul(mat.translate([d.translate_x, d.translate_y, d.translate_z]))(t)
        _go(renderer, t2, d.drawing, stats)
    elif isinstance(d, Rotate):
        t2 = mat.concat(
            mat.mul(mat.rotate_x(angle(d.rotate_x)))(mat.rotate_y(angle(d.rotate_y))),
            mat.mul(mat.rotate_z(angle(d.rotate_z)))(t),
        )
        _go(renderer, t2, d.drawing, stats)
    elif isinstance(d, Fill):
        stats["leaves"] += 1
        if _get_settings().RENDER_DEBUG:
            logger.debug("fill: shape=%s color=%s", type(d.shape).__name__, d.style.color)
        _render_fill(renderer, d, t)
    elif isinstance(d, Outline):
        stats["leaves"] += 1
        if _get_settings().RENDER_DEBUG:
            logger.debug(
                "outline: shape=%s color=%s width=%s",
                type(d.shape).__name__,
                d.style.color,
                d.style.line_width,
            )
        _render_outline(renderer, d, t)
    else:
        raise TypeError(f"Drawing ではありません: {d!r}")


def render(drawing: Drawing, renderer: Renderer, transform: MatLike = IDENTITY) -> None:
    """描画ツリーを `renderer` へ発行する。

    Parameters
    ----------
    drawing : Drawing
        描画ツリー。
    renderer : Renderer
        コマンドの発行先。描画中は呼び出し側が排他的に所有すること。
    transform : MatLike, default IDENTITY
        開始時の累積変換（例: `mat.axonometric(phi, theta)`）。

    Notes
    -----
    描画面の例外はそのまま伝播する。途中まで発行されたコマンドは取り消さない。
    """
    stats = {"leaves": 0}
    _go(renderer, mat.as_mat(transform), drawing, stats)
    logger.debug("render: %d leaves", stats["leaves"])


__all__ = ["VT", "render_shape", "to_coords", "render_subpath", "render"]
