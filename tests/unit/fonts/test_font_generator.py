"""字形纹理生成单元测试。"""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from src.compilation.layout import layout_letters
from src.compilation.models import TextOrigin
from src.fonts.generator import (
    FontDescription,
    FontGenerator,
    FontGlow,
    FontOutline,
    FontShadow,
    GlyphTexture,
)
from src.storyboard.models import Origin

# 不存在的字体名会回退到 Pillow 内置字体，保证测试与系统字体无关
MISSING_FONT = "no-such-font-for-tests"


@pytest.fixture
def generator(tmp_path: Path) -> FontGenerator:
    return FontGenerator(
        directory="sb/f",
        mapset_path=tmp_path,
        description=FontDescription(font_path=MISSING_FONT, font_size=32),
    )


class TestFontGenerator:
    """测试 FontGenerator。"""

    def test_generates_png_for_visible_glyph(self, generator: FontGenerator, tmp_path: Path) -> None:
        """测试可见字形生成 PNG 文件。"""
        texture = generator.get_texture("A")

        assert not texture.is_empty
        assert texture.path == "sb/f/_0041.png"
        with Image.open(tmp_path / texture.path) as image:
            assert image.mode == "RGBA"
            assert image.size == (int(texture.width), int(texture.height))

    def test_whitespace_is_empty_but_has_width(self, generator: FontGenerator, tmp_path: Path) -> None:
        """测试空白字形不生成文件但保留宽度。"""
        texture = generator.get_texture(" ")

        assert texture.is_empty
        assert texture.path == ""
        assert texture.base_width > 0
        assert not (tmp_path / "sb" / "f").exists()

    def test_caches_textures(self, generator: FontGenerator) -> None:
        """测试同一字符只生成一次。"""
        assert generator.get_texture("B") is generator.get_texture("B")
        assert generator("B") is generator.get_texture("B")

    def test_effects_pad_bitmap_not_advance(self, tmp_path: Path) -> None:
        """测试发光、描边与阴影只增加位图留白，不改变排版尺寸。"""
        description = FontDescription(font_path=MISSING_FONT, font_size=32)
        plain = FontGenerator("sb/f", tmp_path / "plain", description)
        styled = FontGenerator(
            "sb/f",
            tmp_path / "styled",
            description,
            glow=FontGlow(radius=3, color="#00FFFF"),
            outline=FontOutline(thickness=2, color="#000000"),
            shadow=FontShadow(thickness=1),
        )

        assert styled.padding == 6
        plain_texture = plain.get_texture("W")
        styled_texture = styled.get_texture("W")
        assert styled_texture.base_width == plain_texture.base_width
        assert styled_texture.base_height == plain_texture.base_height
        assert styled_texture.width == plain_texture.width + 12
        assert styled_texture.height == plain_texture.height + 12
        assert (styled_texture.offset_x, styled_texture.offset_y) == (-6.0, -6.0)
        assert (tmp_path / "styled" / styled_texture.path).exists()

    def test_letter_spacing_ignores_effects(self, tmp_path: Path) -> None:
        """测试开启效果后字母位置与中心点不变。"""
        description = FontDescription(font_path=MISSING_FONT, font_size=32)
        plain = FontGenerator("sb/f", tmp_path / "plain", description)
        styled = FontGenerator(
            "sb/f",
            tmp_path / "styled",
            description,
            glow=FontGlow(radius=10),
            outline=FontOutline(thickness=3),
        )

        def placements(font: FontGenerator) -> list[tuple[float, float, float, float]]:
            return [
                (*p.position, *p.centre)
                for p in layout_letters("AW i", font, TextOrigin.LEFT, (0.0, 0.0), 0.5)
            ]

        assert placements(styled) == placements(plain)


class TestGlyphTexture:
    """测试 GlyphTexture.offset_for。"""

    def test_offsets_without_padding(self) -> None:
        texture = GlyphTexture("A", "sb/f/_0041.png", 20.0, 40.0, 20.0, 40.0, 0.0, 0.0, False)

        assert texture.offset_for(Origin.CENTRE) == (10.0, 20.0)
        assert texture.offset_for(Origin.TOP_LEFT) == (0.0, 0.0)

    def test_centre_is_text_centre_with_padding(self) -> None:
        """测试留白对称时位图中心仍是文字中心。"""
        texture = GlyphTexture("A", "sb/f/_0041.png", 20.0, 40.0, 32.0, 52.0, -6.0, -6.0, False)

        assert texture.offset_for(Origin.CENTRE) == (10.0, 20.0)
        assert texture.offset_for(Origin.TOP_LEFT) == (-6.0, -6.0)
