"""共通フィクスチャ。

- 記録用 Renderer
- 小さな Shape 試料
- 環境変数設定の差し替え
"""

from __future__ import annotations

from typing import Iterator

import pytest

from common import settings
from engine.core.shape import Path, closed, path, point
from engine.render.canvas import RecordingRenderer


@pytest.fixture()
def recorder() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture()
def unit_square() -> Path:
    return closed([point(0, 0, 0), point(1, 0, 0), point(1, 1, 0), point(0, 1, 0)])


@pytest.fixture()
def segment() -> Path:
    return path([point(0, 0, 0), point(1, 0, 0)])


@pytest.fixture()
def checked_index(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("SCD_CHECKED_INDEX", "1")
    settings.reload_from_env()
    yield
    monkeypatch.delenv("SCD_CHECKED_INDEX", raising=False)
    settings.reload_from_env()


@pytest.fixture()
def render_debug(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setenv("SCD_RENDER_DEBUG", "1")
    settings.reload_from_env()
    yield
    monkeypatch.delenv("SCD_RENDER_DEBUG", raising=False)
    settings.reload_from_env()
