"""
どこで: `util.color`。
何を: 色値 `Color`（RGBA 0–1）と、色指定の正規化（Hex, RGBA 0–1, RGBA 0–255, HSLA）、
     描画面が受け付けるスタイル文字列への変換 `to_css`。
なぜ: 描画ツリーのスタイルと Renderer の境界で、同一の受理仕様とエラーメッセージを提供するため。
"""

from __future__ import annotations

import colorsys
from dataclasses import dataclass
from typing import Sequence


def _clamp01(x: float) -> float:
    return 0.0 if x < 0.0 else 1.0 if x > 1.0 else float(x)


def parse_hex_color_str(s: str) -> tuple[float, float, float, float]:
    """Hex 文字列から RGBA(0–1) を返す。

    受理形式: "#RRGGBB", "#RRGGBBAA", "0xRRGGBB", "0xRRGGBBAA", "RRGGBB", "RRGGBBAA"。
    大文字/小文字は不問。
    """
    t = s.strip()
    if t.startswith("#"):
        t = t[1:]
    elif t.lower().startswith("0x"):
        t = t[2:]
    if len(t) not in (6, 8):
        raise ValueError(f"invalid hex color length: '{s}' (expected RRGGBB or RRGGBBAA)")
    try:
        channels = [int(t[i : i + 2], 16) for i in range(0, len(t), 2)]
    except ValueError as e:
        raise ValueError(f"invalid hex color: '{s}'") from e
    if len(channels) == 3:
        channels.append(255)
    r, g, b, a = channels
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def normalize_color(value: object) -> tuple[float, float, float, float]:
    """色を RGBA(0–1) へ正規化する。

    - 受理: `Color`, Hex 文字列, (r,g,b[,a]) （全要素が 0–1 ならそのまま、それ以外は 0–255）
    - 返値: (r,g,b,a) （0–1）
    """
    if isinstance(value, Color):
        return value.rgba
    if isinstance(value, str):
        return parse_hex_color_str(value)
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"unsupported color type: {type(value)!r}")
    if len(value) not in (3, 4):
        raise ValueError("color tuple/list must be length 3 or 4")
    try:
        channels = [float(c) for c in value]
    except (TypeError, ValueError) as e:
        raise ValueError(f"invalid color tuple/list: {value!r}") from e
    if len(channels) == 3:
        channels.append(1.0)
    if all(0.0 <= c <= 1.0 for c in channels):
        r, g, b, a = channels
        return (r, g, b, a)
    # 0–255 とみなし、整数丸め → 0–1 へスケール
    if len(value) == 3:
        channels[3] = 255.0
    r8, g8, b8, a8 = (max(0, min(255, int(round(c)))) for c in channels)
    return (r8 / 255.0, g8 / 255.0, b8 / 255.0, a8 / 255.0)


def to_u8_rgba(value: object) -> tuple[int, int, int, int]:
    """色を RGBA(0–255) へ変換する。"""
    r, g, b, a = normalize_color(value)
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)), int(round(a * 255)))


@dataclass(frozen=True)
class Color:
    """RGBA（各成分 0–1）の不変な色値。"""

    r: float
    g: float
    b: float
    a: float = 1.0

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            object.__setattr__(self, name, _clamp01(float(getattr(self, name))))

    @property
    def rgba(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    @classmethod
    def of(cls, value: object) -> "Color":
        """Hex 文字列やタプルなど `normalize_color` が受理する任意の指定から生成する。"""
        return cls(*normalize_color(value))


def rgb(r: int, g: int, b: int) -> Color:
    """0–255 の RGB から不透明色を作る。"""
    return rgba(r, g, b, 1.0)


def rgba(r: int, g: int, b: int, a: float) -> Color:
    """0–255 の RGB と 0–1 のアルファから色を作る。"""
    return Color(r / 255.0, g / 255.0, b / 255.0, a)


def hsla(h: float, s: float, l: float, a: float = 1.0) -> Color:  # noqa: E741
    """HSLA（色相は度、彩度/明度/アルファは 0–1）から色を作る。"""
    r, g, b = colorsys.hls_to_rgb((float(h) % 360.0) / 360.0, _clamp01(l), _clamp01(s))
    return Color(r, g, b, a)


def to_css(color: Color | str | Sequence[float]) -> str:
    """描画面へ渡すスタイル文字列を返す。

    不透明なら ``#rrggbb``、半透明なら ``#rrggbbaa``（CSS/matplotlib の双方が受理）。
    """
    r, g, b, a = to_u8_rgba(color)
    if a == 255:
        return f"#{r:02x}{g:02x}{b:02x}"
    return f"#{r:02x}{g:02x}{b:02x}{a:02x}"


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
RED = Color(1.0, 0.0, 0.0)
GREEN = Color(0.0, 1.0, 0.0)
BLUE = Color(0.0, 0.0, 1.0)


__all__ = [
    "Color",
    "parse_hex_color_str",
    "normalize_color",
    "to_u8_rgba",
    "rgb",
    "rgba",
    "hsla",
    "to_css",
    "BLACK",
    "WHITE",
    "RED",
    "GREEN",
    "BLUE",
]
