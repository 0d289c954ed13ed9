"""字形纹理生成

逐字符将文字光栅化为 PNG（支持发光、描边、阴影），
并提供排版所需的字形度量。
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

import structlog
from PIL import Image, ImageColor, ImageDraw, ImageFilter, ImageFont

from src.storyboard.models import Origin

logger = structlog.get_logger(__name__)

FONT_SEARCH_PATHS = [
    "/usr/share/fonts/truetype/",
    "/usr/share/fonts/",
    "/usr/local/share/fonts/",
    os.path.expanduser("~/.fonts/"),
]

FontType = ImageFont.FreeTypeFont


@dataclass(frozen=True)
class FontDescription:
    font_path: str = "Verdana"
    font_size: int = 70
    color: str = "#FFFFFF"


@dataclass(frozen=True)
class FontGlow:
    radius: int = 0
    color: str = "#FFFFFF"


@dataclass(frozen=True)
class FontOutline:
    thickness: int = 0
    color: str = "#FFFFFF"


@dataclass(frozen=True)
class FontShadow:
    thickness: int = 0
    color: str = "#000000"


@dataclass(frozen=True)
class GlyphTexture:
    """单个字符的纹理

    base_width/base_height 为文字本身的尺寸，用于排版推进；
    width/height 为位图尺寸（含效果留白），offset_x/offset_y 为位图左上角
    相对文字左上角的偏移。空白字形不生成文件，path 为空字符串。
    """

    text: str
    path: str
    base_width: float
    base_height: float
    width: float
    height: float
    offset_x: float
    offset_y: float
    is_empty: bool

    def offset_for(self, origin: Origin) -> Tuple[float, float]:
        """文字左上角到位图指定锚点的偏移"""
        if origin is Origin.CENTRE:
            return self.offset_x + self.width / 2, self.offset_y + self.height / 2
        return self.offset_x, self.offset_y


def _find_font_file(name: str) -> Optional[str]:
    candidates = {name.lower(), f"{name}.ttf".lower(), f"{name}.otf".lower()}
    for search_path in FONT_SEARCH_PATHS:
        if not os.path.isdir(search_path):
            continue
        for root, _, files in os.walk(search_path):
            for file_name in files:
                if file_name.lower() in candidates:
                    return os.path.join(root, file_name)
    return None


def load_font(name: str, size: int) -> FontType:
    """按文件路径或字体名加载字体，找不到时回退到 Pillow 内置字体"""
    path = name if os.path.isfile(name) else _find_font_file(name)
    if path:
        return ImageFont.truetype(path, size)

    try:
        return ImageFont.truetype(name, size)
    except OSError:
        logger.warning("font.fallback_default", font=name, size=size)
        return ImageFont.load_default(size)  # type: ignore[return-value]


def _rgba(color: str) -> Tuple[int, int, int, int]:
    rgb = ImageColor.getrgb(color)
    if len(rgb) == 4:
        return rgb  # type: ignore[return-value]
    return (rgb[0], rgb[1], rgb[2], 255)


@dataclass
class FontGenerator:
    """字形纹理生成器

    纹理写入 <mapset>/<directory>/，按字符缓存。
    """

    directory: str
    mapset_path: Path
    description: FontDescription = field(default_factory=FontDescription)
    glow: FontGlow = field(default_factory=FontGlow)
    outline: FontOutline = field(default_factory=FontOutline)
    shadow: FontShadow = field(default_factory=FontShadow)
    _cache: Dict[str, GlyphTexture] = field(default_factory=dict, init=False, repr=False)
    _font: Optional[FontType] = field(default=None, init=False, repr=False)

    @property
    def font(self) -> FontType:
        if self._font is None:
            self._font = load_font(self.description.font_path, self.description.font_size)
        return self._font

    @property
    def padding(self) -> int:
        return self.glow.radius + self.outline.thickness + self.shadow.thickness

    def get_texture(self, text: str) -> GlyphTexture:
        texture = self._cache.get(text)
        if texture is None:
            texture = self._generate(text)
            self._cache[text] = texture
        return texture

    __call__ = get_texture

    def _generate(self, text: str) -> GlyphTexture:
        font = self.font
        ascent, descent = font.getmetrics()
        padding = self.padding
        base_width = math.ceil(font.getlength(text))
        base_height = ascent + descent
        width = base_width + padding * 2
        height = base_height + padding * 2

        def texture(path: str, is_empty: bool) -> GlyphTexture:
            return GlyphTexture(
                text=text,
                path=path,
                base_width=float(base_width),
                base_height=float(base_height),
                width=float(width),
                height=float(height),
                offset_x=float(-padding),
                offset_y=float(-padding),
                is_empty=is_empty,
            )

        left, top, right, bottom = font.getbbox(text)
        if text.isspace() or right <= left or bottom <= top:
            return texture("", True)

        image = self._render(text, font, (width, height))
        name = "_".join(f"{ord(char):04x}" for char in text)
        relative_path = f"{self.directory}/_{name}.png"
        output_path = self.mapset_path / relative_path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        image.save(output_path)

        logger.debug("font.glyph_generated", text=text, path=relative_path, width=width, height=height)
        return texture(relative_path, False)

    def _render(self, text: str, font: FontType, size: Tuple[int, int]) -> Image.Image:
        padding = self.padding
        origin = (padding, padding)
        image = Image.new("RGBA", size, (0, 0, 0, 0))

        if self.shadow.thickness > 0:
            shadow = Image.new("RGBA", size, (0, 0, 0, 0))
            ImageDraw.Draw(shadow).text(
                (padding + self.shadow.thickness, padding + self.shadow.thickness),
                text,
                font=font,
                fill=_rgba(self.shadow.color),
                stroke_width=self.outline.thickness,
                stroke_fill=_rgba(self.shadow.color),
            )
            image = Image.alpha_composite(image, shadow)

        if self.glow.radius > 0:
            glow = Image.new("RGBA", size, (0, 0, 0, 0))
            ImageDraw.Draw(glow).text(
                origin,
                text,
                font=font,
                fill=_rgba(self.glow.color),
                stroke_width=self.outline.thickness,
                stroke_fill=_rgba(self.glow.color),
            )
            glow = glow.filter(ImageFilter.GaussianBlur(radius=self.glow.radius))
            image = Image.alpha_composite(image, glow)

        ImageDraw.Draw(image).text(
            origin,
            text,
            font=font,
            fill=_rgba(self.description.color),
            stroke_width=self.outline.thickness,
            stroke_fill=_rgba(self.outline.color),
        )
        return image
