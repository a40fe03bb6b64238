from __future__ import annotations

import logging
import math

import numpy as np
import pytest

from engine.core import mat
from engine.core.angle import degrees, radians
from engine.core.path3d import Path3D
from engine.core.shape import Path, closed, composite, path, point, rect
from engine.render import drawing as D
from engine.render.canvas import Command, RecordingRenderer
from engine.render.interpreter import VT, render, render_shape, render_subpath, to_coords
from util.color import BLUE, RED, to_css


def _points(recorder: RecordingRenderer) -> list[tuple[float, float]]:
    return [c.args[0] for c in recorder.commands if c.name in ("move_to", "line_to")]


def _leaf(*pts: tuple[float, float, float]) -> D.Outline:
    return D.outline(path([point(*p) for p in pts]))


# ── render_shape ───────────────────
def test_render_shape_open_path() -> None:
    p = path([point(0, 0, 0), point(1, 0, 0), point(1, 1, 0)])
    assert render_shape(p) == Path3D.from_subpaths([[(0, 0, 0), (1, 0, 0), (1, 1, 0)]])


def test_render_shape_empty_path() -> None:
    assert render_shape(path([])) == Path3D()
    assert render_shape(closed([])) == Path3D()


def test_render_shape_closed_has_no_phantom_subpath(unit_square: Path) -> None:
    out = render_shape(unit_square)
    assert len(out) == 1
    (sp,) = out.subpaths
    assert sp[0] == sp[-1] == (0.0, 0.0, 0.0)
    assert len(sp) == 5
    # 生の close_path には末尾の単点サブパスが残る
    raw = Path3D().move_to(sp[0]).line_to(sp[1]).line_to(sp[2]).line_to(sp[3]).close_path()
    assert len(raw) == 2
    assert raw.subpaths[-1] == ((0.0, 0.0, 0.0),)


def test_render_shape_closed_degenerate_inputs_keep_one_subpath() -> None:
    a, b = point(0, 0, 0), point(1, 0, 0)
    assert render_shape(closed([a])) == Path3D.from_subpaths([[a]])
    assert render_shape(closed([a, b, a])) == Path3D.from_subpaths([[a, b, a]])


def test_render_shape_skips_non_finite_points() -> None:
    shape = closed([(math.nan, 0, 0), point(0, 0, 0), point(1, 0, 0), (1, math.inf, 0), point(1, 1, 0)])
    assert render_shape(shape) == Path3D.from_subpaths(
        [[(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 0, 0)]]
    )


def test_render_shape_composite_concatenates_in_order(unit_square: Path) -> None:
    seg = path([point(5, 5, 5), point(6, 6, 6)])
    out = render_shape(composite([seg, composite([unit_square]), path([])]))
    assert len(out) == 2
    assert out.subpaths[0] == ((5.0, 5.0, 5.0), (6.0, 6.0, 6.0))
    assert out.subpaths[1][0] == out.subpaths[1][-1]


def test_render_shape_rejects_unknown() -> None:
    with pytest.raises(TypeError):
        render_shape("circle")  # type: ignore[arg-type]


# ── to_coords / render_subpath ───────────────────
def test_projection_drops_depth() -> None:
    np.testing.assert_array_equal(VT, np.diag([1.0, 1.0, 0.0, 1.0]))
    (coords,) = to_coords(path([point(1, 2, 3), point(4, 5, 6)]), mat.IDENTITY)
    np.testing.assert_allclose(coords, [[1, 2, 0, 1], [4, 5, 0, 1]])


def test_render_subpath_emits_move_then_lines(recorder: RecordingRenderer) -> None:
    render_subpath(recorder, np.array([[1.0, 2.0, 0.0, 1.0], [3.0, 4.0, 0.0, 1.0]]))
    render_subpath(recorder, np.empty((0, 4)))
    assert recorder.commands == [
        Command("move_to", ((1.0, 2.0),)),
        Command("line_to", ((3.0, 4.0),)),
    ]


# ── render ───────────────────
def test_render_fill_end_to_end(recorder: RecordingRenderer, unit_square: Path) -> None:
    render(D.fill(unit_square, D.fill_style(RED)), recorder)
    assert recorder.commands == [
        Command("save"),
        Command("set_fill_style", (to_css(RED),)),
        Command("begin_path"),
        Command("move_to", ((0.0, 0.0),)),
        Command("line_to", ((1.0, 0.0),)),
        Command("line_to", ((1.0, 1.0),)),
        Command("line_to", ((0.0, 1.0),)),
        Command("line_to", ((0.0, 0.0),)),
        Command("fill"),
        Command("restore"),
    ]


def test_render_outline_sets_stroke_and_width(recorder: RecordingRenderer, segment: Path) -> None:
    style = D.combine_outline_style(D.outline_color(BLUE), D.line_width(4))
    render(D.outline(segment, style), recorder)
    assert recorder.names == [
        "save",
        "set_stroke_style",
        "set_line_width",
        "begin_path",
        "move_to",
        "line_to",
        "stroke",
        "restore",
    ]
    assert recorder.commands[1].args == ("#0000ff",)
    assert recorder.commands[2].args == (4.0,)


def test_render_without_style_emits_no_style_commands(recorder: RecordingRenderer, segment: Path) -> None:
    render(D.many([D.fill(segment), D.outline(segment)]), recorder)
    assert "set_fill_style" not in recorder.names
    assert "set_stroke_style" not in recorder.names
    assert "set_line_width" not in recorder.names


def test_each_leaf_is_scoped_by_save_restore(recorder: RecordingRenderer, segment: Path) -> None:
    render(D.many([D.fill(segment, D.fill_style(RED)), D.fill(segment), D.outline(segment)]), recorder)
    depth = 0
    for name in recorder.names:
        if name == "save":
            depth += 1
        elif name == "restore":
            depth -= 1
        else:
            assert depth == 1
    assert depth == 0
    assert recorder.names.count("save") == 3


def test_composite_leaf_is_one_path(recorder: RecordingRenderer) -> None:
    shape = composite([rect(0, 0, 1, 1), rect(5, 5, 1, 1)])
    render(D.fill(shape), recorder)
    assert recorder.names.count("begin_path") == 1
    assert recorder.names.count("move_to") == 2
    assert recorder.names.count("fill") == 1


def test_empty_drawing_emits_nothing(recorder: RecordingRenderer) -> None:
    render(D.EMPTY, recorder)
    assert recorder.commands == []


def test_translate_and_scale(recorder: RecordingRenderer) -> None:
    render(D.translate(10, 20, 0, _leaf((0, 0, 0), (1, 0, 0))), recorder)
    render(D.scale(2, 3, 1, _leaf((1, 1, 0))), recorder)
    assert _points(recorder) == [(10.0, 20.0), (11.0, 20.0), (2.0, 3.0)]


def test_transform_accumulation_order(recorder: RecordingRenderer) -> None:
    # T' = T · X（行ベクトル規約）: 外側の変換が先に点へ作用する
    render(D.scale(2, 2, 1, D.translate(1, 0, 0, _leaf((0, 0, 0)))), recorder)
    render(D.translate(1, 0, 0, D.scale(2, 2, 1, _leaf((1, 1, 0)))), recorder)
    assert _points(recorder) == [(1.0, 0.0), (4.0, 2.0)]


def test_siblings_do_not_share_transforms(recorder: RecordingRenderer) -> None:
    leaf = _leaf((1, 1, 0))
    render(D.many([D.translate(5, 5, 0, leaf), leaf, D.scale(3, 3, 3, leaf), leaf]), recorder)
    assert _points(recorder) == [(6.0, 6.0), (1.0, 1.0), (3.0, 3.0), (1.0, 1.0)]


def test_rotate_z(recorder: RecordingRenderer) -> None:
    render(D.rotate(degrees(0), degrees(0), degrees(90), _leaf((1, 0, 0))), recorder)
    render(D.rotate(radians(0), radians(0), radians(math.pi / 2), _leaf((1, 0, 0))), recorder)
    for p in _points(recorder):
        assert p == pytest.approx((0.0, 1.0), abs=1e-12)


def test_rotate_composition_places_xy_rotation_left_of_accumulator(
    recorder: RecordingRenderer,
) -> None:
    # Rotate は T' = (RY·RX)·(T·RZ)。Translate/Scale の T·X とは異なり、X/Y 回転が
    # 累積行列の左に付くため、親の平行移動の「前に」回転が作用する。
    leaf = _leaf((0, 0, 0), (0, 0, 1))
    render(D.translate(0, 1, 0, D.rotate(degrees(90), degrees(0), degrees(0), leaf)), recorder)
    first, second = _points(recorder)
    assert first == pytest.approx((0.0, 1.0), abs=1e-12)
    assert second == pytest.approx((0.0, 0.0), abs=1e-12)
    # T·RX の順であれば先頭点は (0, 0) へ写る
    t_then_rx = mat.concat(mat.translate((0, 1, 0)), mat.rotate_x(90))
    naive = np.array([0.0, 0.0, 0.0, 1.0]) @ t_then_rx
    assert naive[1] == pytest.approx(0.0, abs=1e-12)


def test_rotate_composition_order_with_all_axes(recorder: RecordingRenderer) -> None:
    # 平行移動 + 非一様スケールの開始変換の下で 3 軸すべてを回す
    ax, ay, az = 30.0, 45.0, 60.0
    start = mat.concat(mat.scale((2, 3, 0.5)), mat.translate((5, -7, 11)))
    p = np.array([1.0, 2.0, 3.0, 1.0])
    render(D.rotate(degrees(ax), degrees(ay), degrees(az), _leaf(tuple(p[:3]))), recorder, transform=start)
    (got,) = _points(recorder)

    rx, ry, rz = mat.rotate_x(ax), mat.rotate_y(ay), mat.rotate_z(az)
    expected = p @ mat.concat(mat.concat(ry, rx), mat.concat(start, rz))
    np.testing.assert_allclose(got, expected[:2], atol=1e-9)

    # X/Y の順、または T と RZ の順を入れ替えると別の点になる
    swapped_xy = p @ mat.concat(mat.concat(rx, ry), mat.concat(start, rz))
    swapped_tz = p @ mat.concat(mat.concat(ry, rx), mat.concat(rz, start))
    assert not np.allclose(got, swapped_xy[:2], atol=1e-6)
    assert not np.allclose(got, swapped_tz[:2], atol=1e-6)


def test_starting_transform(recorder: RecordingRenderer) -> None:
    render(_leaf((1, 1, 7)), recorder, transform=mat.translate((5, -5, 0)))
    assert _points(recorder) == [(6.0, -4.0)]


def test_axonometric_starting_transform(recorder: RecordingRenderer) -> None:
    start = mat.axonometric(90, 0)
    render(_leaf((0, 0, 1)), recorder, transform=start)
    # phi=90: z 軸が x 方向へ倒れる
    (p,) = _points(recorder)
    assert p == pytest.approx((1.0, 0.0), abs=1e-12)


def test_render_rejects_unknown_node(recorder: RecordingRenderer) -> None:
    with pytest.raises(TypeError):
        render(D.many(["not a drawing"]), recorder)  # type: ignore[list-item]


class _FailingRenderer(RecordingRenderer):
    def begin_path(self) -> None:
        raise RuntimeError("surface unavailable")


def test_renderer_failure_propagates_without_restore(unit_square: Path) -> None:
    r = _FailingRenderer()
    with pytest.raises(RuntimeError, match="surface unavailable"):
        render(D.many([D.fill(unit_square, D.fill_style(RED)), D.fill(unit_square)]), r)
    assert r.names == ["save", "set_fill_style"]


@pytest.mark.usefixtures("render_debug")
def test_render_debug_logs_leaves(
    recorder: RecordingRenderer, segment: Path, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.DEBUG, logger="engine.render.interpreter"):
        render(D.many([D.fill(segment), D.outline(segment)]), recorder)
    text = caplog.text
    assert "fill:" in text
    assert "outline:" in text
    assert "render: 2 leaves" in text
