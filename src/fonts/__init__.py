"""字形纹理模块"""

from src.fonts.generator import (
    FontDescription,
    FontGenerator,
    FontGlow,
    FontOutline,
    FontShadow,
    GlyphTexture,
)

__all__ = [
    "FontDescription",
    "FontGenerator",
    "FontGlow",
    "FontOutline",
    "FontShadow",
    "GlyphTexture",
]
