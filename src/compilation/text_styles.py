"""逐字文字动画

TEXT_RECIPES 将每种 TextStyle 映射到一个纯函数，函数根据字母位置、
延迟与缩放生成该字母精灵的指令序列。
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple

import structlog

from src.compilation.background import FADE_DURATION_MS, crossfade
from src.compilation.layout import layout_letters
from src.compilation.models import TextOrigin, TextStyle
from src.storyboard.models import Command, Easing, Layer, Sprite

if TYPE_CHECKING:
    from src.fonts.generator import GlyphTexture

logger = structlog.get_logger(__name__)

Vector2 = Tuple[float, float]

SLIDE_DISTANCE = 50
ELASTIC_JITTER = 50

TextRecipe = Callable[[int, int, Vector2, int, float, random.Random], List[Command]]


def _base(
    start: int, end: int, position: Vector2, delay: int, scale: float, rng: random.Random
) -> List[Command]:
    sprite = Sprite("")
    crossfade(sprite, start, end)
    sprite.scale(start, scale)
    return sprite.commands


def _accordion(offset: float) -> TextRecipe:
    def recipe(
        start: int, end: int, position: Vector2, delay: int, scale: float, rng: random.Random
    ) -> List[Command]:
        begin = start + delay
        x = position[0]
        sprite = Sprite("")
        crossfade(sprite, begin, end)
        sprite.move_x(begin, x + offset, begin + FADE_DURATION_MS, x, Easing.OUT_EXPO)
        sprite.scale(start, scale)
        return sprite.commands

    return recipe


def _scale_from(factor: float) -> TextRecipe:
    def recipe(
        start: int, end: int, position: Vector2, delay: int, scale: float, rng: random.Random
    ) -> List[Command]:
        begin = start + delay
        sprite = Sprite("")
        crossfade(sprite, begin, end)
        sprite.scale(begin, scale * factor, begin + FADE_DURATION_MS, scale, Easing.OUT_EXPO)
        return sprite.commands

    return recipe


def _elastic(
    start: int, end: int, position: Vector2, delay: int, scale: float, rng: random.Random
) -> List[Command]:
    begin = start + delay
    y = position[1]
    jitter = rng.randint(-ELASTIC_JITTER, ELASTIC_JITTER)
    sprite = Sprite("")
    crossfade(sprite, begin, end)
    sprite.move_y(begin, y + jitter, begin + FADE_DURATION_MS, y, Easing.OUT_BACK)
    sprite.scale(start, scale)
    return sprite.commands


TEXT_RECIPES: Dict[TextStyle, TextRecipe] = {
    TextStyle.BASE: _base,
    TextStyle.ACCORDION_LEFT: _accordion(SLIDE_DISTANCE),
    TextStyle.ACCORDION_RIGHT: _accordion(-SLIDE_DISTANCE),
    TextStyle.SCALE_DOWN: _scale_from(2),
    TextStyle.SCALE_UP: _scale_from(0),
    TextStyle.ELASTIC: _elastic,
}


def letter_commands(
    start_time: int,
    end_time: int,
    position: Vector2,
    delay: int,
    scale: float,
    style: TextStyle,
    rng: Optional[random.Random] = None,
) -> List[Command]:
    """计算单个字母精灵的指令序列"""
    return TEXT_RECIPES[style](start_time, end_time, position, delay, scale, rng or random.Random())


def animate_text(
    layer: Layer,
    start_time: int,
    end_time: int,
    text: str,
    glyphs: Callable[[str], GlyphTexture],
    position: Vector2,
    scale: float,
    style: TextStyle,
    origin: TextOrigin = TextOrigin.LEFT,
    rng: Optional[random.Random] = None,
) -> List[Sprite]:
    """排版并为每个非空字母创建一个精灵。

    Args:
        layer: 目标图层
        start_time: 片段开始时间（毫秒）
        end_time: 片段结束时间（毫秒）
        text: 单行文字
        glyphs: 字符到字形纹理的查找函数
        position: 锚点
        scale: 文字缩放
        style: 动画样式
        origin: 对齐方式
        rng: ELASTIC 样式使用的随机源

    Returns:
        创建的字母精灵列表
    """
    rng = rng or random.Random()
    sprites = []
    for placement in layout_letters(text, glyphs, origin, position, scale):
        sprite = layer.create_sprite(glyphs(placement.letter).path, position=placement.centre)
        for command in TEXT_RECIPES[style](
            start_time, end_time, placement.centre, placement.delay, scale, rng
        ):
            sprite.add_command(command)
        sprites.append(sprite)

    logger.debug(
        "text.animated",
        text=text,
        style=style.value,
        letter_count=len(sprites),
    )
    return sprites
