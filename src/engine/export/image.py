"""
どこで: `engine.export.image`。
何を: 描画ツリーを matplotlib バックエンドでラスタライズし、PNG として保存するラッパ。
なぜ: ワンアクションで描画結果の画像を得られるようにするため。

既定値:
- 寸法/背景色は `configs/default.yaml` の `canvas` 節（無ければ 400x400, 白）。
- 保存先未指定時は `data/screenshot/` にタイムスタンプ名で保存する。
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from engine.core.mat import IDENTITY, MatLike
from engine.render.drawing import Drawing
from engine.render.interpreter import render
from engine.render.mpl_canvas import MatplotlibRenderer
from util.color import to_css
from util.paths import ensure_screenshots_dir, unique_path
from util.utils import load_config

logger = logging.getLogger(__name__)

_DEFAULT_WIDTH = 400
_DEFAULT_HEIGHT = 400
_DEFAULT_BACKGROUND = "#ffffff"


def _canvas_defaults() -> dict[str, Any]:
    cfg = load_config().get("canvas", {})
    if not isinstance(cfg, dict):
        logger.warning("canvas 構成が辞書ではないため無視します: %r", cfg)
        cfg = {}
    background = cfg.get("background", _DEFAULT_BACKGROUND)
    return {
        "width": int(cfg.get("width", _DEFAULT_WIDTH)),
        "height": int(cfg.get("height", _DEFAULT_HEIGHT)),
        "background": to_css(background),
    }


def save_png(
    drawing: Drawing,
    path: Path | str | None = None,
    *,
    width: int | None = None,
    height: int | None = None,
    transform: MatLike = IDENTITY,
    background: str | None = None,
    dpi: int | None = None,
) -> Path:
    """描画ツリーを PNG として保存する。

    Parameters
    ----------
    drawing : Drawing
        描画ツリー。
    path : Path | str | None
        出力先パス。None の場合は既定の `data/screenshot/` にタイムスタンプ名で保存。
    width, height : int | None
        画像の大きさ（px）。None は構成の既定値。
    transform : MatLike, default IDENTITY
        開始時の累積変換（例: `mat.axonometric(30, 20)` と平行移動の合成）。
    background : str | None
        背景色。None は構成の既定値。
    dpi : int | None
        解像度。None は `SCD_CANVAS_DPI`。

    Returns
    -------
    Path
        保存先のファイルパス。

    Raises
    ------
    ValueError
        寸法が 0 以下の場合。
    """
    defaults = _canvas_defaults()
    w = int(width) if width is not None else defaults["width"]
    h = int(height) if height is not None else defaults["height"]
    bg = background if background is not None else defaults["background"]

    if path is None:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        out = unique_path(ensure_screenshots_dir() / f"{ts}_{w}x{h}.png")
    else:
        out = Path(path)

    with MatplotlibRenderer(w, h, dpi=dpi, background=bg) as renderer:
        render(drawing, renderer, transform)
        return renderer.save_png(out)


__all__ = ["save_png"]
