"""单行文字逐字排版"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Protocol, Tuple

from src.compilation.models import TextOrigin
from src.storyboard.models import Origin

Vector2 = Tuple[float, float]

LETTER_DELAY_MS = 50


class GlyphMetrics(Protocol):
    """字形度量协议"""

    base_width: float
    base_height: float
    is_empty: bool

    def offset_for(self, origin: Origin) -> Tuple[float, float]: ...


GlyphLookup = Callable[[str], GlyphMetrics]


@dataclass(frozen=True)
class LetterPlacement:
    """单个字母的排版结果

    position 为字形左上角，centre 为字形中心（精灵以 Centre 锚点放置）。
    """

    letter: str
    position: Vector2
    centre: Vector2
    delay: int


def measure_line(text: str, glyphs: GlyphLookup, scale: float) -> Tuple[float, float]:
    """计算行宽与行高

    行宽包含空白字形；行高取所有字形中的最大高度。
    """
    width = 0.0
    tallest = 0.0
    for letter in text:
        glyph = glyphs(letter)
        width += glyph.base_width * scale
        tallest = max(tallest, glyph.base_height)
    return width, tallest * scale


def line_origin(anchor: Vector2, width: float, height: float, origin: TextOrigin) -> Vector2:
    """根据对齐方式计算首字母左上角坐标"""
    anchor_x, anchor_y = anchor
    if origin is TextOrigin.CENTRE:
        x = anchor_x - width / 2
    elif origin is TextOrigin.RIGHT:
        x = anchor_x - width
    else:
        x = anchor_x
    return x, anchor_y - height / 2


def layout_letters(
    text: str,
    glyphs: GlyphLookup,
    origin: TextOrigin,
    anchor: Vector2,
    scale: float,
) -> Iterator[LetterPlacement]:
    """从左到右排版，只产出非空字形。

    空白字形不产出，但仍推进 X 坐标与 50ms 的逐字延迟。
    """
    width, height = measure_line(text, glyphs, scale)
    x, y = line_origin(anchor, width, height, origin)
    delay = 0
    for letter in text:
        glyph = glyphs(letter)
        if not glyph.is_empty:
            offset_x, offset_y = glyph.offset_for(Origin.CENTRE)
            centre = (x + offset_x * scale, y + offset_y * scale)
            yield LetterPlacement(letter=letter, position=(x, y), centre=centre, delay=delay)
        x += glyph.base_width * scale
        delay += LETTER_DELAY_MS
