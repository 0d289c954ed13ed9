"""合辑 storyboard 模块

根据 compilation.txt 中的片段生成背景、暗角与逐字动画文字。
"""

from src.compilation.models import (
    BackgroundStyle,
    Section,
    TextOrigin,
    TextStyle,
)
from src.compilation.parser import SectionParseError, load_sections, parse_sections

__all__ = [
    "BackgroundStyle",
    "Section",
    "TextOrigin",
    "TextStyle",
    "SectionParseError",
    "load_sections",
    "parse_sections",
]
