from __future__ import annotations

from api import D, S, angle, color, mat, save_png
from common.logging import setup_default_logging

CANVAS_SIZE = 400


def draw() -> D.Drawing:
    """軸測投影の立方体と、その上で回る四角形。"""
    cube = D.concat(
        D.fill(S.box(120, 120, 120), D.fill_style(color.hsla(210, 0.6, 0.85))),
        D.outline(S.box(120, 120, 120), D.combine_outline_style(D.outline_color(color.BLACK), D.line_width(2))),
    )
    tiles = D.concat_all(
        D.rotate(
            angle.degrees(0),
            angle.degrees(0),
            angle.degrees(15 * i),
            D.translate(0, 0, -60 - 10 * i, D.outline(S.rect(-40, -40, 80, 80), D.outline_color(color.hsla(30 * i, 0.8, 0.5)))),
        )
        for i in range(6)
    )
    return D.concat(cube, tiles)


if __name__ == "__main__":
    setup_default_logging()
    start = mat.concat(mat.axonometric(30, 20), mat.translate((CANVAS_SIZE / 2, CANVAS_SIZE / 2, 0)))
    save_png(draw(), width=CANVAS_SIZE, height=CANVAS_SIZE, transform=start)
