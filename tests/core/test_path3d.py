from __future__ import annotations

import math

import pytest

from engine.core.path3d import EMPTY, Path3D, is_point_finite


def _p(*subpaths) -> Path3D:
    return Path3D.from_subpaths(subpaths)


def test_move_to() -> None:
    assert Path3D().move_to((4, 55, 330)) == _p([(4, 55, 330)])
    # 連続した move_to は常に新しいサブパスを追加する（併合しない）
    assert _p([(4, 55, 330)]).move_to((4, 55, 330)) == _p([(4, 55, 330)], [(4, 55, 330)])


def test_line_to() -> None:
    assert Path3D().line_to((4, 55, 330)) == _p([(4, 55, 330)])
    assert _p([(4, 55, 330)]).line_to((3, 5, 10)) == _p([(4, 55, 330), (3, 5, 10)])


def test_line_to_appends_to_last_subpath_only() -> None:
    p = _p([(0, 0, 0), (1, 0, 0)], [(5, 5, 5)]).line_to((6, 6, 6))
    assert p.subpaths == (
        ((0.0, 0.0, 0.0), (1.0, 0.0, 0.0)),
        ((5.0, 5.0, 5.0), (6.0, 6.0, 6.0)),
    )


def test_close_path() -> None:
    p1 = _p([(1, 2, 3), (4, 5, 6)])
    p1 = p1.line_to((7, 8, 9))
    p1 = p1.close_path()
    assert p1 == _p([(1, 2, 3), (4, 5, 6), (7, 8, 9), (1, 2, 3)], [(1, 2, 3)])


def test_close_path_noops() -> None:
    assert Path3D().close_path() == Path3D()
    assert _p([(1, 2, 3)]).close_path() == _p([(1, 2, 3)])
    already = _p([(1, 2, 3), (1, 2, 3)])
    assert already.close_path() == already


def test_close_path_only_looks_at_last_subpath() -> None:
    p = _p([(0, 0, 0), (1, 0, 0)], [(9, 9, 9)])
    assert p.close_path() == p


def test_non_finite_points_are_dropped() -> None:
    base = _p([(0, 0, 0)])
    for bad in [(math.nan, 0, 0), (0, math.inf, 0), (0, 0, -math.inf)]:
        assert base.move_to(bad) is base
        assert base.line_to(bad) is base
    assert Path3D().line_to((math.nan, 1, 2)) == Path3D()


def test_is_point_finite() -> None:
    assert is_point_finite((1.0, 2.0, 3.0))
    assert not is_point_finite((1.0, math.nan, 3.0))


def test_builder_is_persistent() -> None:
    p1 = Path3D().move_to((0, 0, 0)).line_to((1, 0, 0))
    snapshot = p1.subpaths
    p2 = p1.line_to((1, 1, 0))
    p3 = p2.close_path()
    assert p1.subpaths == snapshot
    assert len(p2.subpaths[0]) == 3
    assert len(p3) == 2
    assert p2 != p3


def test_concat_is_plain_subpath_concatenation() -> None:
    a = _p([(0, 0, 0), (1, 0, 0)])
    b = _p([(5, 5, 5)])
    assert (a + b).subpaths == a.subpaths + b.subpaths
    assert a.concat(EMPTY) == a
    assert EMPTY.concat(a) == a


def test_without_last() -> None:
    assert _p([(0, 0, 0)], [(1, 1, 1)]).without_last() == _p([(0, 0, 0)])
    assert Path3D().without_last() == Path3D()


def test_from_subpaths_rejects_empty_subpath() -> None:
    with pytest.raises(ValueError):
        Path3D.from_subpaths([[(0, 0, 0)], []])


def test_value_semantics() -> None:
    a = _p([(0, 0, 0), (1, 2, 3)])
    b = Path3D().move_to((0, 0, 0)).line_to((1, 2, 3))
    assert a == b
    assert hash(a) == hash(b)
    assert list(a) == [((0.0, 0.0, 0.0), (1.0, 2.0, 3.0))]
    assert len(a) == 1
