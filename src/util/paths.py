"""
どこで: `util.paths`。
何を: 画像の保存先ディレクトリの生成と、重複しないファイル名の解決。
なぜ: 書き出し処理（`engine.export.image`）から保存先を簡潔に扱えるようにするため。
"""

from __future__ import annotations

from pathlib import Path

from .utils import _find_project_root


def ensure_screenshots_dir() -> Path:
    """画像出力先 `data/screenshot/` を作成して返す。

    - プロジェクトルート直下に作成する。既存ならそのまま返す。
    - 並行呼び出しに対して `exist_ok=True` で安全。
    """
    root = _find_project_root(Path(__file__).parent)
    out = root / "data" / "screenshot"
    out.mkdir(parents=True, exist_ok=True)
    return out


def unique_path(path: Path) -> Path:
    """`path` が存在すれば `stem-1.suffix`, `stem-2.suffix`, … の空き名を返す。"""
    if not path.exists():
        return path
    i = 1
    while True:
        cand = path.parent / f"{path.stem}-{i}{path.suffix}"
        if not cand.exists():
            return cand
        i += 1


__all__ = ["ensure_screenshots_dir", "unique_path"]
