"""逐字排版单元测试。"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from src.compilation.layout import (
    LETTER_DELAY_MS,
    layout_letters,
    line_origin,
    measure_line,
)
from src.compilation.models import TextOrigin

if TYPE_CHECKING:
    from tests.conftest import FakeFont


@pytest.fixture
def ab_font(font_factory: type[FakeFont]) -> FakeFont:
    return font_factory(widths={"A": 10, "B": 12, " ": 5}, heights={"A": 20, "B": 20, " ": 20})


class TestMeasureLine:
    """测试 measure_line 函数。"""

    def test_sums_widths_including_empty_glyphs(self, ab_font: FakeFont) -> None:
        """测试行宽包含空白字形。"""
        width, _ = measure_line("A B", ab_font, 1.0)

        assert width == 27

    def test_applies_scale(self, ab_font: FakeFont) -> None:
        """测试缩放同时作用于宽与高。"""
        assert measure_line("AB", ab_font, 0.5) == (11, 10)

    def test_height_is_tallest_glyph(self, font_factory: type[FakeFont]) -> None:
        """测试行高取最高字形，而非最后一个字形。"""
        font = font_factory(heights={"T": 30, "a": 10})

        _, height = measure_line("Ta", font, 2.0)

        assert height == 60

    def test_width_monotonic_in_length(self, ab_font: FakeFont) -> None:
        """测试行宽随字符串变长单调不减。"""
        text = "AB AB BA"
        widths = [measure_line(text[:n], ab_font, 0.3)[0] for n in range(len(text) + 1)]

        assert widths == sorted(widths)

    def test_empty_text(self, ab_font: FakeFont) -> None:
        """测试空字符串。"""
        assert measure_line("", ab_font, 1.0) == (0, 0)


class TestLineOrigin:
    """测试 line_origin 函数。"""

    def test_centre_is_symmetric_around_anchor(self) -> None:
        """测试 CENTRE 对齐：起点 + 半宽 == 锚点 X。"""
        x, y = line_origin((100.0, 50.0), 37.0, 20.0, TextOrigin.CENTRE)

        assert x + 37.0 / 2 == pytest.approx(100.0)
        assert y == 40.0

    def test_left_and_right(self) -> None:
        """测试 LEFT 与 RIGHT 对齐。"""
        assert line_origin((100.0, 0.0), 40.0, 0.0, TextOrigin.LEFT) == (100.0, 0.0)
        assert line_origin((100.0, 0.0), 40.0, 0.0, TextOrigin.RIGHT) == (60.0, 0.0)


class TestLayoutLetters:
    """测试 layout_letters 函数。"""

    def test_left_origin_example(self, ab_font: FakeFont) -> None:
        """测试 "AB" 左对齐：A 在 0，B 在 10。"""
        placements = list(layout_letters("AB", ab_font, TextOrigin.LEFT, (0.0, 0.0), 1.0))

        assert [p.letter for p in placements] == ["A", "B"]
        assert [p.position[0] for p in placements] == [0, 10]

    def test_right_origin_example(self, ab_font: FakeFont) -> None:
        """测试 "AB" 右对齐：A 在 −22，B 在 −12，B 的右边缘在 0。"""
        placements = list(layout_letters("AB", ab_font, TextOrigin.RIGHT, (0.0, 0.0), 1.0))

        assert [p.position[0] for p in placements] == [-22, -12]
        assert placements[-1].position[0] + 12 == 0

    def test_vertical_centre_on_anchor(self, ab_font: FakeFont) -> None:
        """测试行在锚点处垂直居中。"""
        (placement, _) = layout_letters("AB", ab_font, TextOrigin.LEFT, (0.0, 100.0), 1.0)

        assert placement.position[1] == 90

    def test_centre_is_glyph_midpoint(self, ab_font: FakeFont) -> None:
        """测试精灵中心点为字形中心（含缩放）。"""
        placements = list(layout_letters("AB", ab_font, TextOrigin.LEFT, (0.0, 0.0), 2.0))

        assert placements[1].position == (20, -20)
        assert placements[1].centre == (32, 0)

    def test_skips_whitespace_but_advances(self, ab_font: FakeFont) -> None:
        """测试空白字形不产出但推进位置与延迟。"""
        placements = list(layout_letters("A B", ab_font, TextOrigin.LEFT, (0.0, 0.0), 1.0))

        assert [p.letter for p in placements] == ["A", "B"]
        assert placements[1].position[0] == 15
        assert [p.delay for p in placements] == [0, 2 * LETTER_DELAY_MS]

    def test_delay_increments_per_letter(self, ab_font: FakeFont) -> None:
        """测试每个字符延迟递增 50ms。"""
        placements = list(layout_letters("ABAB", ab_font, TextOrigin.CENTRE, (0.0, 0.0), 1.0))

        assert [p.delay for p in placements] == [0, 50, 100, 150]

    def test_empty_text_yields_nothing(self, ab_font: FakeFont) -> None:
        """测试空字符串产出空序列。"""
        assert list(layout_letters("", ab_font, TextOrigin.LEFT, (0.0, 0.0), 1.0)) == []

    def test_is_lazy(self, ab_font: FakeFont) -> None:
        """测试惰性求值：迭代前不查询字形。"""
        letters = layout_letters("AB", ab_font, TextOrigin.LEFT, (0.0, 0.0), 1.0)

        assert ab_font.requested == []
        next(letters)
        assert ab_font.requested
