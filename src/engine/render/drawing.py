"""
どこで: `engine.render.drawing`（描画ツリーのモデル）。
何を: 再帰的な描画ツリー `Drawing`（Fill/Outline/Many/Translate/Rotate/Scale）と、
     そのモノイド（`EMPTY`/`concat`）、スタイル `FillStyle`/`OutlineStyle` の合成。
なぜ: 「何を描くか」を一度だけ構築する不変の値として記述し、「どう描くか」は
     解釈器（`engine.render.interpreter`）に委ねるため。

ツリーの合成:
- `concat(Many([a, b]), Many([c])) == Many([a, b, c])`（Many 同士は子を連結）
- 片側だけが Many なら、もう片側を 1 要素として前後に追加
- どちらも Many でなければ `Many([x, y])` で包む
- 単位元は `EMPTY == Many([])`

スタイルの合成:
- フィールドごとに「左が定義済みなら左、そうでなければ右」（先勝ち）。

使用例:
    from engine.core.angle import degrees
    from engine.core.shape import rect
    from engine.render import drawing as D
    from util.color import RED

    d = D.concat(
        D.fill(rect(0, 0, 10, 10), D.fill_style(RED)),
        D.rotate(degrees(0), degrees(0), degrees(45), D.outline(rect(0, 0, 10, 10), D.line_width(2))),
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Optional

from engine.core.angle import Angle
from engine.core.shape import Shape
from util.color import Color


# ── スタイル ───────────────────
@dataclass(frozen=True)
class FillStyle:
    color: Optional[Color] = None


@dataclass(frozen=True)
class OutlineStyle:
    color: Optional[Color] = None
    line_width: Optional[float] = None


EMPTY_FILL_STYLE = FillStyle()
EMPTY_OUTLINE_STYLE = OutlineStyle()


def _first(x, y):
    return x if x is not None else y


def combine_fill_style(x: FillStyle, y: FillStyle) -> FillStyle:
    """フィールドごとの先勝ち合成。単位元は `EMPTY_FILL_STYLE`。"""
    return FillStyle(color=_first(x.color, y.color))


def combine_outline_style(x: OutlineStyle, y: OutlineStyle) -> OutlineStyle:
    """フィールドごとの先勝ち合成。単位元は `EMPTY_OUTLINE_STYLE`。"""
    return OutlineStyle(
        color=_first(x.color, y.color),
        line_width=_first(x.line_width, y.line_width),
    )


def fill_style(color: Color) -> FillStyle:
    return FillStyle(color=color)


def outline_color(color: Color) -> OutlineStyle:
    return OutlineStyle(color=color)


def line_width(width: float) -> OutlineStyle:
    return OutlineStyle(line_width=float(width))


# ── ツリー ───────────────────
@dataclass(frozen=True)
class Fill:
    shape: Shape
    style: FillStyle


@dataclass(frozen=True)
class Outline:
    shape: Shape
    style: OutlineStyle


@dataclass(frozen=True)
class Many:
    drawings: tuple["Drawing", ...]


@dataclass(frozen=True)
class Translate:
    translate_x: float
    translate_y: float
    translate_z: float
    drawing: "Drawing"


@dataclass(frozen=True)
class Rotate:
    rotate_x: Angle
    rotate_y: Angle
    rotate_z: Angle
    drawing: "Drawing"


@dataclass(frozen=True)
class Scale:
    scale_x: float
    scale_y: float
    scale_z: float
    drawing: "Drawing"


Drawing = Fill | Outline | Many | Translate | Rotate | Scale


def fill(shape: Shape, style: FillStyle = EMPTY_FILL_STYLE) -> Fill:
    return Fill(shape, style)


def outline(shape: Shape, style: OutlineStyle = EMPTY_OUTLINE_STYLE) -> Outline:
    return Outline(shape, style)


def many(drawings: Iterable[Drawing]) -> Many:
    return Many(tuple(drawings))


def translate(translate_x: float, translate_y: float, translate_z: float, drawing: Drawing) -> Translate:
    return Translate(float(translate_x), float(translate_y), float(translate_z), drawing)


def rotate(rotate_x: Angle, rotate_y: Angle, rotate_z: Angle, drawing: Drawing) -> Rotate:
    return Rotate(rotate_x, rotate_y, rotate_z, drawing)


def scale(scale_x: float, scale_y: float, scale_z: float, drawing: Drawing) -> Scale:
    return Scale(float(scale_x), float(scale_y), float(scale_z), drawing)


# ── モノイド ───────────────────
EMPTY = Many(())


def concat(x: Drawing, y: Drawing) -> Many:
    """描画ツリーの結合（結合則を満たし、`EMPTY` が単位元）。"""
    if isinstance(x, Many) and isinstance(y, Many):
        return Many(x.drawings + y.drawings)
    if isinstance(x, Many):
        return Many(x.drawings + (y,))
    if isinstance(y, Many):
        return Many((x,) + y.drawings)
    return Many((x, y))


def concat_all(drawings: Iterable[Drawing]) -> Drawing:
    """`EMPTY` から左畳み込みで `concat` する。"""
    return reduce(concat, drawings, EMPTY)


__all__ = [
    "Drawing",
    "Fill",
    "Outline",
    "Many",
    "Translate",
    "Rotate",
    "Scale",
    "FillStyle",
    "OutlineStyle",
    "EMPTY",
    "EMPTY_FILL_STYLE",
    "EMPTY_OUTLINE_STYLE",
    "fill",
    "outline",
    "many",
    "translate",
    "rotate",
    "scale",
    "fill_style",
    "outline_color",
    "line_width",
    "combine_fill_style",
    "combine_outline_style",
    "concat",
    "concat_all",
]
