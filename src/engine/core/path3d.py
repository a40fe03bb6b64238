"""
どこで: `engine.core.path3d`（永続的な 3D サブパス構築器）。
何を: サブパス列 `Path3D` と move/line/close の構築操作。
なぜ: `Shape` を描画コマンドへ落とす前段で、Canvas の moveTo/lineTo/closePath と同じ
     振る舞い（非有限点の無視・閉路の扱い）を純粋な値として再現するため。

データモデル（不変条件）:
- `subpaths: tuple[tuple[Vec3, ...], ...]`。各サブパスは 1 点以上。
- すべての操作は新しい `Path3D` を返す。既存の値は後続の操作で変化しない。

閉路の扱い（`close_path`）:
- 空、最後のサブパスが 1 点以下、または終点と始点が成分ごとに一致 → 何もしない。
- それ以外は最後のサブパスに始点を追加して閉じ、さらに始点 1 点のみの
  サブパスを末尾に追加する（後続の lineTo が閉路点から続くための種）。

直感図:

    [[a, b]] --line_to(c)--> [[a, b, c]] --close_path()--> [[a, b, c, a], [a]]
                                                                       ^^^ 末尾の単点サブパス
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Iterator, Sequence

from common.types import Vec3

SubPath = tuple[Vec3, ...]

logger = logging.getLogger(__name__)


def _as_point(p: Sequence[float]) -> Vec3:
    return (float(p[0]), float(p[1]), float(p[2]))


def is_point_finite(p: Sequence[float]) -> bool:
    """全成分が有限（NaN/±Infinity でない）かを返す。"""
    return all(math.isfinite(float(c)) for c in p)


class Path3D:
    """不変のサブパス列。

    フィールド:
    - `subpaths`: サブパス（`Vec3` の不変タプル）の不変タプル。

    設計意図:
    - `Geometry` と同じく、変換はインスタンスを複製して返す純関数とする。
    - 等価性は内容で判定する（テストや差分比較のため）。
    """

    __slots__ = ("subpaths",)

    subpaths: tuple[SubPath, ...]

    def __init__(self, subpaths: tuple[SubPath, ...] = ()) -> None:
        self.subpaths = subpaths

    # ── ファクトリ ───────────────────
    @classmethod
    def from_subpaths(cls, subpaths: Iterable[Iterable[Sequence[float]]]) -> "Path3D":
        """入れ子の点列を正規化して `Path3D` を生成する。

        Raises
        ------
        ValueError
            空のサブパスを含む場合。
        """
        out: list[SubPath] = []
        for sp in subpaths:
            pts = tuple(_as_point(p) for p in sp)
            if not pts:
                raise ValueError("サブパスは少なくとも 1 点を含む必要があります")
            out.append(pts)
        return cls(tuple(out))

    # ── 構築操作（すべて純粋） ────────
    def move_to(self, p: Sequence[float]) -> "Path3D":
        """新しいサブパス `[p]` を末尾に追加する。`p` が非有限なら自身を返す。"""
        if not is_point_finite(p):
            logger.debug("move_to: 非有限点を無視しました: %r", p)
            return self
        return Path3D(self.subpaths + ((_as_point(p),),))

    def line_to(self, p: Sequence[float]) -> "Path3D":
        """最後のサブパスへ `p` を追加する。サブパスが無ければ `move_to` と同じ。"""
        if not is_point_finite(p):
            logger.debug("line_to: 非有限点を無視しました: %r", p)
            return self
        if not self.subpaths:
            return self.move_to(p)
        last = self.subpaths[-1] + (_as_point(p),)
        return Path3D(self.subpaths[:-1] + (last,))

    def close_path(self) -> "Path3D":
        """最後のサブパスを始点へ閉じ、始点のみの単点サブパスを末尾に追加する。"""
        if not self.subpaths:
            return self
        cur = self.subpaths[-1]
        if len(cur) <= 1:
            return self
        start = cur[0]
        end = cur[-1]
        if end[0] == start[0] and end[1] == start[1] and end[2] == start[2]:
            return self
        return Path3D(self.subpaths[:-1] + (cur + (start,), (start,)))

    def concat(self, other: "Path3D") -> "Path3D":
        """サブパス列の単純連結（move/line の規則は適用しない）。"""
        return Path3D(self.subpaths + other.subpaths)

    def without_last(self) -> "Path3D":
        """末尾のサブパスを取り除いた値を返す。空ならそのまま。"""
        return Path3D(self.subpaths[:-1])

    # 演算子糖衣
    def __add__(self, other: "Path3D") -> "Path3D":
        """糖衣: `concat` のエイリアス。"""
        return self.concat(other)

    def __len__(self) -> int:
        """サブパス本数を返す。"""
        return len(self.subpaths)

    def __iter__(self) -> Iterator[SubPath]:
        return iter(self.subpaths)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path3D):
            return NotImplemented
        return self.subpaths == other.subpaths

    def __hash__(self) -> int:
        return hash(self.subpaths)

    def __repr__(self) -> str:  # pragma: no cover - 表示用
        return f"Path3D({[list(sp) for sp in self.subpaths]!r})"


EMPTY = Path3D()


__all__ = ["Path3D", "SubPath", "EMPTY", "is_point_finite"]
