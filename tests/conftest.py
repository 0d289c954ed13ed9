#!/usr/bin/env python
"""Pytest fixtures for compilation storyboard project."""
# ruff: noqa: E402

import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from src.compilation.models import BackgroundStyle, Section
from src.compilation.parser import HEADER
from src.infra.config.settings import CompilationSettings
from src.storyboard.models import Origin


@dataclass(frozen=True)
class FakeGlyph:
    """固定尺寸的字形，满足排版与精灵创建所需的接口。"""

    text: str
    path: str
    base_width: float
    base_height: float
    is_empty: bool

    def offset_for(self, origin: Origin) -> tuple[float, float]:
        if origin is Origin.CENTRE:
            return self.base_width / 2, self.base_height / 2
        return 0.0, 0.0


class FakeFont:
    """按字符返回 FakeGlyph 的字形查找函数。"""

    def __init__(
        self,
        widths: dict[str, float] | None = None,
        heights: dict[str, float] | None = None,
        default_width: float = 10.0,
        default_height: float = 20.0,
    ) -> None:
        self.widths = widths or {}
        self.heights = heights or {}
        self.default_width = default_width
        self.default_height = default_height
        self.requested: list[str] = []

    def __call__(self, letter: str) -> FakeGlyph:
        self.requested.append(letter)
        is_empty = letter.isspace()
        return FakeGlyph(
            text=letter,
            path="" if is_empty else f"sb/f/_{ord(letter):04x}.png",
            base_width=self.widths.get(letter, self.default_width),
            base_height=self.heights.get(letter, self.default_height),
            is_empty=is_empty,
        )


@pytest.fixture
def fake_font() -> FakeFont:
    return FakeFont()


@pytest.fixture
def section_factory() -> Callable[..., Section]:
    """创建 Section 的工厂函数。"""

    def _create(
        start_time: int = 1000,
        end_time: int = 5000,
        artist_name: str = "Artist",
        song_name: str = "Song",
        background_id: int = 1,
        background_style: BackgroundStyle = BackgroundStyle.BASE,
    ) -> Section:
        return Section(
            start_time=start_time,
            end_time=end_time,
            artist_name=artist_name,
            song_name=song_name,
            background_id=background_id,
            background_style=background_style,
        )

    return _create


@pytest.fixture
def write_background() -> Callable[[Path, int, int], Path]:
    """在谱面目录下生成 sb/bg/<id>.jpg。"""

    def _write(mapset_path: Path, background_id: int, height: int) -> Path:
        path = mapset_path / "sb" / "bg" / f"{background_id}.jpg"
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", (height * 16 // 9, height), (20, 30, 40)).save(path)
        return path

    return _write


@pytest.fixture
def write_table() -> Callable[[Path, list[str]], Path]:
    """写入带表头的 compilation.txt。"""

    def _write(project_path: Path, rows: list[str]) -> Path:
        path = project_path / "compilation.txt"
        path.write_text("\n".join([HEADER, *rows]) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings_factory(tmp_path: Path) -> Callable[..., CompilationSettings]:
    """创建指向临时目录的配置。"""

    def _create(**kwargs: Any) -> CompilationSettings:
        values: dict[str, Any] = {
            "project_path": tmp_path,
            "mapset_path": tmp_path,
        }
        values.update(kwargs)
        return CompilationSettings(**values)

    return _create


@pytest.fixture
def font_factory() -> type[FakeFont]:
    return FakeFont
