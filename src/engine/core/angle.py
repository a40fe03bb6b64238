"""
どこで: `engine.core.angle`。
何を: 度/ラジアンのタグ付き角度 `Angle` と、度数への正規化 `angle()`。
なぜ: `Rotate` ノードが単位を取り違えずに角度を受け取り、行列構築子（度）へ渡せるようにするため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Degrees:
    degrees: float


@dataclass(frozen=True)
class Radians:
    radians: float


Angle = Degrees | Radians


def degrees(value: float) -> Degrees:
    return Degrees(float(value))


def radians(value: float) -> Radians:
    return Radians(float(value))


def angle(a: Angle) -> float:
    """角度を度数で返す（`rad·180/π`）。"""
    if isinstance(a, Radians):
        return a.radians * (180.0 / math.pi)
    if isinstance(a, Degrees):
        return a.degrees
    raise TypeError(f"Angle ではありません: {a!r}")


__all__ = ["Angle", "Degrees", "Radians", "degrees", "radians", "angle"]
