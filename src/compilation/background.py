"""背景合成

每个片段一张背景图。各样式的缩放、平移、旋转参数集中在 BACKGROUND_RECIPES 中。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from src.compilation.models import BackgroundStyle, Section
from src.storyboard.models import Command, CommandKind, Easing, Layer, Sprite

REFERENCE_HEIGHT = 480.0
FADE_DURATION_MS = 1000


@dataclass(frozen=True)
class BackgroundRecipe:
    """背景样式参数

    scale_from/scale_to 为相对基础缩放 (480 / 图片高度) 的倍数，
    两者相等时为静态缩放。
    """

    scale_from: float
    scale_to: float
    move: Optional[Tuple[CommandKind, float, float]] = None
    rotate: Optional[Tuple[float, float]] = None


BACKGROUND_RECIPES: Dict[BackgroundStyle, BackgroundRecipe] = {
    BackgroundStyle.BASE: BackgroundRecipe(1.0, 1.0),
    BackgroundStyle.UD: BackgroundRecipe(1.05, 1.05, move=(CommandKind.MOVE_Y, 250, 230)),
    BackgroundStyle.DU: BackgroundRecipe(1.05, 1.05, move=(CommandKind.MOVE_Y, 230, 250)),
    BackgroundStyle.LR: BackgroundRecipe(1.1, 1.1, move=(CommandKind.MOVE_X, 310, 330)),
    BackgroundStyle.RL: BackgroundRecipe(1.1, 1.1, move=(CommandKind.MOVE_X, 330, 310)),
    BackgroundStyle.SU: BackgroundRecipe(1.0, 1.1),
    BackgroundStyle.SD: BackgroundRecipe(1.1, 1.0),
    BackgroundStyle.SUR: BackgroundRecipe(1.1, 1.2, rotate=(0.05, -0.05)),
    BackgroundStyle.SDR: BackgroundRecipe(1.2, 1.1, rotate=(-0.05, 0.05)),
}


def base_scale(image_height: int) -> float:
    """将图片高度缩放到 480 参考高度的比例"""
    if image_height <= 0:
        raise ValueError(f"image height must be positive, got {image_height}")
    return REFERENCE_HEIGHT / image_height


def crossfade(sprite: Sprite, fade_in_time: int, fade_out_time: int) -> None:
    """淡入 [fade_in, fade_in+1000] 0→1，淡出 [fade_out, fade_out+1000] 1→0"""
    sprite.fade(fade_in_time, 0, fade_in_time + FADE_DURATION_MS, 1)
    sprite.fade(fade_out_time, 1, fade_out_time + FADE_DURATION_MS, 0)


def background_commands(section: Section, image_height: int) -> List[Command]:
    """计算片段背景精灵的指令序列。

    Args:
        section: 片段
        image_height: 背景图原始高度（像素）

    Returns:
        缩放、淡入淡出以及样式相关的运动指令
    """
    recipe = BACKGROUND_RECIPES[section.background_style]
    scale = base_scale(image_height)
    start, end = section.start_time, section.end_time
    motion_end = end + FADE_DURATION_MS

    sprite = Sprite(section.background_path)
    if recipe.scale_from == recipe.scale_to:
        sprite.scale(start, scale * recipe.scale_from)
    else:
        sprite.scale(start, scale * recipe.scale_from, motion_end, scale * recipe.scale_to)

    crossfade(sprite, start, end)

    if recipe.move is not None:
        kind, move_from, move_to = recipe.move
        move = sprite.move_x if kind is CommandKind.MOVE_X else sprite.move_y
        move(start, move_from, motion_end, move_to, Easing.IN_OUT_SINE)

    if recipe.rotate is not None:
        rotate_from, rotate_to = recipe.rotate
        sprite.rotate(start, rotate_from, end, rotate_to, Easing.OUT_SINE)

    return sprite.commands


def compose_background(layer: Layer, section: Section, image_height: int) -> Sprite:
    """在图层上创建片段背景精灵"""
    sprite = layer.create_sprite(section.background_path)
    for command in background_commands(section, image_height):
        sprite.add_command(command)
    return sprite
