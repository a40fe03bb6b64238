"""
どこで: `engine.render.canvas`（描画面との境界）。
何を: 解釈器が消費する 2D 描画面の能力 `Renderer`（Protocol）、その記録実装
     `RecordingRenderer`、および save/restore・パス塗り/線描の小さな合成子。
なぜ: 実際の描画面（matplotlib 等）に依存せずに、解釈器が発行するコマンド列を
     型で固定し、テストでは順序付きログとして観測できるようにするため。

契約:
- 各メソッドは順序付きの副作用コマンド。戻り値は見ない。
- 点は描画面座標の `(x, y)`。
- 描画面の失敗は例外としてそのまま伝播する（再試行しない）。
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Literal, Optional, Protocol, TypeVar

from common.types import Vec2

FillRule = Literal["nonzero", "evenodd"]

T = TypeVar("T")


class Renderer(Protocol):
    """解釈器が要求する 2D 描画面の最小インターフェース。"""

    def begin_path(self) -> None:
        """現在のパスを破棄して新しいパスを開始する。"""

    def move_to(self, point: Vec2) -> None:
        """新しいサブパスを `point` から開始する。"""

    def line_to(self, point: Vec2) -> None:
        """現在のサブパスを `point` まで直線で延ばす。"""

    def close_path(self) -> None:
        """現在のサブパスを始点へ閉じる。"""

    def fill(self, rule: Optional[FillRule] = None) -> None:
        """現在のパスを塗りつぶす。"""

    def stroke(self) -> None:
        """現在のパスを線描する。"""

    def save(self) -> None:
        """描画状態（スタイル）をスタックへ退避する。"""

    def restore(self) -> None:
        """直近に退避した描画状態を復元する。"""

    def set_fill_style(self, style: str) -> None:
        """塗り色（CSS 色文字列）を設定する。"""

    def set_stroke_style(self, style: str) -> None:
        """線色（CSS 色文字列）を設定する。"""

    def set_line_width(self, width: float) -> None:
        """線幅を設定する。"""


@dataclass(frozen=True)
class Command:
    """記録された 1 コマンド。"""

    name: str
    args: tuple[Any, ...] = ()


@dataclass
class RecordingRenderer:
    """発行されたコマンドを順に `commands` へ記録する `Renderer`。

    テストやデバッグで、描画結果ではなくコマンド列そのものを観測するために使う。
    """

    commands: list[Command] = field(default_factory=list)

    def _record(self, name: str, *args: Any) -> None:
        self.commands.append(Command(name, args))

    def begin_path(self) -> None:
        self._record("begin_path")

    def move_to(self, point: Vec2) -> None:
        self._record("move_to", (float(point[0]), float(point[1])))

    def line_to(self, point: Vec2) -> None:
        self._record("line_to", (float(point[0]), float(point[1])))

    def close_path(self) -> None:
        self._record("close_path")

    def fill(self, rule: Optional[FillRule] = None) -> None:
        if rule is None:
            self._record("fill")
        else:
            self._record("fill", rule)

    def stroke(self) -> None:
        self._record("stroke")

    def save(self) -> None:
        self._record("save")

    def restore(self) -> None:
        self._record("restore")

    def set_fill_style(self, style: str) -> None:
        self._record("set_fill_style", style)

    def set_stroke_style(self, style: str) -> None:
        self._record("set_stroke_style", style)

    def set_line_width(self, width: float) -> None:
        self._record("set_line_width", float(width))

    # ── 観測用の小道具 ─────────────
    @property
    def names(self) -> list[str]:
        """コマンド名のみの列。"""
        return [c.name for c in self.commands]

    def clear(self) -> None:
        self.commands.clear()


# ── 合成子 ───────────────────
@contextmanager
def with_context(renderer: Renderer) -> Iterator[Renderer]:
    """本体を save/restore で囲む。

    本体が例外で抜けた場合は restore を発行せずにそのまま伝播する
    （失敗した描画は再開不能で、描画面の後始末は呼び出し側の責務）。
    """
    renderer.save()
    yield renderer
    renderer.restore()


def fill_path(renderer: Renderer, body: Callable[[], T], rule: Optional[FillRule] = None) -> T:
    """begin_path → body → fill を発行し、body の戻り値を返す。"""
    renderer.begin_path()
    result = body()
    renderer.fill(rule)
    return result


def stroke_path(renderer: Renderer, body: Callable[[], T]) -> T:
    """begin_path → body → stroke を発行し、body の戻り値を返す。"""
    renderer.begin_path()
    result = body()
    renderer.stroke()
    return result


__all__ = [
    "Renderer",
    "FillRule",
    "Command",
    "RecordingRenderer",
    "with_context",
    "fill_path",
    "stroke_path",
]
