"""
どこで: `api` 入口（高レベル公開 API）。
何を: 代数（vec/mat/angle）・形状（shape/path3d）・描画ツリー（drawing）・描画面（canvas）・
     色（color）と、描画 `render` / 書き出し `save_png` を単一名前空間から再輸出。
なぜ: 利用者が形状記述→ツリー構築→描画/書き出しまでを 1 つの import で完結できるようにするため。

Usage:
    from api import D, S, angle, color, mat, save_png

    cube = S.box(100, 100, 100)
    scene = D.concat(
        D.outline(cube, D.line_width(2)),
        D.rotate(angle.degrees(0), angle.degrees(0), angle.degrees(45), D.fill(S.rect(-20, -20, 40, 40), D.fill_style(color.RED))),
    )
    start = mat.concat(mat.axonometric(30, 20), mat.translate((200, 200, 0)))
    save_png(scene, "out.png", transform=start)
"""

from engine.core import angle, mat, path3d, shape, vec
from engine.core.path3d import Path3D
from engine.export.image import save_png
from engine.render import canvas, drawing, interpreter
from engine.render.canvas import RecordingRenderer, Renderer
from engine.render.interpreter import render
from engine.render.mpl_canvas import MatplotlibRenderer
from util import color

# 短縮名
D = drawing
S = shape

__all__ = [
    # モジュール
    "vec",
    "mat",
    "angle",
    "shape",
    "path3d",
    "drawing",
    "canvas",
    "interpreter",
    "color",
    "D",
    "S",
    # 主要関数/クラス
    "render",
    "save_png",
    "Path3D",
    "Renderer",
    "RecordingRenderer",
    "MatplotlibRenderer",
]

# バージョン情報
__version__ = "0.1.0"
