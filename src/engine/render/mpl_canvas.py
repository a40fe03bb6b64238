"""
どこで: `engine.render.mpl_canvas`。
何を: matplotlib（Agg）上にラスタライズする `Renderer` 実装 `MatplotlibRenderer`。
なぜ: 解釈器が発行する Canvas 風コマンド（パス構築・スタイル・save/restore）を、
     ヘッドレス環境でも PNG や配列として得られる描画面へ写すため。

座標系:
- 描画面座標（原点は左上、y は下向き、単位は px）。Axes の y 軸を反転して合わせる。
- 線幅は px 指定。matplotlib の pt へは `px * 72 / dpi` で換算する。

状態:
- 塗り色/線色/線幅は save/restore でスタックに退避・復元する（Canvas 2D と同じ）。
- 現在のパスは begin_path で破棄され、fill/stroke では破棄されない。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path as FsPath
from typing import Optional

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.patches import PathPatch
from matplotlib.path import Path as MplPath

from common.settings import get as _get_settings
from common.types import Vec2

from .canvas import FillRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _State:
    fill_style: str = "#000000"
    stroke_style: str = "#000000"
    line_width: float = 1.0


def _split_rings(vertices: list[Vec2], codes: list[int]) -> list[tuple[list[Vec2], bool]]:
    """頂点/コード列をサブパス単位の (点列, 閉じているか) に分ける。"""
    rings: list[tuple[list[Vec2], bool]] = []
    for v, code in zip(vertices, codes):
        if code == MplPath.MOVETO or not rings:
            rings.append(([v], False))
        elif code == MplPath.CLOSEPOLY:
            rings[-1] = (rings[-1][0], True)
        else:
            rings[-1][0].append(v)
    return rings


def _signed_area(ring: list[Vec2]) -> float:
    pts = np.asarray(ring, dtype=np.float64)
    x, y = pts[:, 0], pts[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))


def _evenodd_as_nonzero(vertices: list[Vec2], codes: list[int]) -> MplPath:
    """偶奇規則の塗りを、非ゼロ規則で同じ結果になる向きへ揃えたパスにする。

    各リングの入れ子の深さ（始点を内包する他リングの数）が偶数なら正の向き、
    奇数なら負の向きにする。
    """
    rings = _split_rings(vertices, codes)
    polygons = [MplPath(np.asarray(r, dtype=np.float64)) if len(r) >= 3 else None for r, _ in rings]

    out_vertices: list[Vec2] = []
    out_codes: list[int] = []
    for i, (ring, is_closed) in enumerate(rings):
        if polygons[i] is not None:
            depth = sum(
                1 for j, poly in enumerate(polygons) if j != i and poly is not None and poly.contains_point(ring[0])
            )
            if (_signed_area(ring) > 0) != (depth % 2 == 0):
                ring = ring[::-1]
        out_vertices.extend(ring)
        out_codes.extend([MplPath.MOVETO] + [MplPath.LINETO] * (len(ring) - 1))
        if is_closed:
            out_vertices.append(ring[0])
            out_codes.append(MplPath.CLOSEPOLY)
    return MplPath(np.asarray(out_vertices, dtype=np.float64), out_codes)


class MatplotlibRenderer:
    """matplotlib の Figure を描画面とする `Renderer`。

    Parameters
    ----------
    width, height : int
        描画面の大きさ（px）。
    dpi : int | None
        解像度。None なら `common.settings` の `CANVAS_DPI`。
    background : str
        背景色（CSS/matplotlib 色文字列）。
    """

    def __init__(
        self,
        width: int,
        height: int,
        *,
        dpi: int | None = None,
        background: str = "#ffffff",
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("描画面の大きさが不正です（width/height <= 0）")
        self.width = int(width)
        self.height = int(height)
        self.dpi = int(dpi) if dpi is not None else int(_get_settings().CANVAS_DPI)
        self.background = background

        self.figure = Figure(figsize=(self.width / self.dpi, self.height / self.dpi), dpi=self.dpi)
        self.figure.patch.set_facecolor(background)
        self._canvas = FigureCanvasAgg(self.figure)
        self.ax = self.figure.add_axes((0.0, 0.0, 1.0, 1.0))
        self.ax.set_xlim(0, self.width)
        self.ax.set_ylim(self.height, 0)
        self.ax.set_aspect("equal", adjustable="box")
        self.ax.axis("off")

        self._state = _State()
        self._stack: list[_State] = []
        self._vertices: list[Vec2] = []
        self._codes: list[int] = []
        self._subpath_start: Optional[Vec2] = None
        self._n_patches = 0

    # ── パス構築 ───────────────────
    def begin_path(self) -> None:
        self._vertices = []
        self._codes = []
        self._subpath_start = None

    def move_to(self, point: Vec2) -> None:
        p = (float(point[0]), float(point[1]))
        self._vertices.append(p)
        self._codes.append(MplPath.MOVETO)
        self._subpath_start = p

    def line_to(self, point: Vec2) -> None:
        if self._subpath_start is None:
            # Canvas 2D と同じく、サブパスが無ければ move_to として扱う
            self.move_to(point)
            return
        self._vertices.append((float(point[0]), float(point[1])))
        self._codes.append(MplPath.LINETO)

    def close_path(self) -> None:
        if self._subpath_start is None:
            return
        self._vertices.append(self._subpath_start)
        self._codes.append(MplPath.CLOSEPOLY)

    def _current_path(self, rule: Optional[FillRule] = None) -> Optional[MplPath]:
        if not self._vertices:
            return None
        if rule == "evenodd":
            return _evenodd_as_nonzero(self._vertices, self._codes)
        return MplPath(np.asarray(self._vertices, dtype=np.float64), list(self._codes))

    # ── 描画 ───────────────────
    def fill(self, rule: Optional[FillRule] = None) -> None:
        """現在のパスを塗る。

        Agg は非ゼロ巻き数規則で塗るため、`"evenodd"` では各リングの向きを
        入れ子の深さに応じて交互に揃えてから塗る（自己交差の無いリングで一致）。
        """
        path = self._current_path(rule)
        if path is None:
            return
        patch = PathPatch(path, facecolor=self._state.fill_style, edgecolor="none", linewidth=0)
        self.ax.add_patch(patch)
        self._n_patches += 1

    def stroke(self) -> None:
        path = self._current_path()
        if path is None:
            return
        patch = PathPatch(
            path,
            fill=False,
            edgecolor=self._state.stroke_style,
            linewidth=self._state.line_width * 72.0 / self.dpi,
            capstyle="butt",
            joinstyle="miter",
        )
        self.ax.add_patch(patch)
        self._n_patches += 1

    # ── 状態 ───────────────────
    def save(self) -> None:
        self._stack.append(self._state)

    def restore(self) -> None:
        # Canvas 2D と同じく、空スタックでの restore は無視する
        if self._stack:
            self._state = self._stack.pop()

    def set_fill_style(self, style: str) -> None:
        self._state = replace(self._state, fill_style=style)

    def set_stroke_style(self, style: str) -> None:
        self._state = replace(self._state, stroke_style=style)

    def set_line_width(self, width: float) -> None:
        w = float(width)
        # Canvas 2D と同じく、0 以下/非有限の線幅は無視する
        if np.isfinite(w) and w > 0:
            self._state = replace(self._state, line_width=w)

    # ── 出力 ───────────────────
    @property
    def n_patches(self) -> int:
        """これまでに追加した塗り/線のパッチ数。"""
        return self._n_patches

    def to_array(self) -> np.ndarray:
        """描画結果を (H, W, 4) uint8 の RGBA 配列で返す。"""
        self._canvas.draw()
        return np.asarray(self._canvas.buffer_rgba()).copy()

    def save_png(self, path: str | FsPath) -> FsPath:
        """描画結果を PNG として保存し、保存先を返す。"""
        out = FsPath(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        self.figure.savefig(str(out), dpi=self.dpi, facecolor=self.background)
        logger.info("saved png: %s (%dx%d, %d patches)", out, self.width, self.height, self._n_patches)
        return out

    def close(self) -> None:
        """Figure の内容を解放する。"""
        self.figure.clear()

    def __enter__(self) -> "MatplotlibRenderer":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


__all__ = ["MatplotlibRenderer"]
