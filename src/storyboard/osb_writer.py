"""OSB 写入器

将 Storyboard 导出为 osu! 可播放的 .osb 脚本。
"""

from __future__ import annotations

from pathlib import Path
from typing import List

import structlog

from src.storyboard.models import Command, Sprite, Storyboard

logger = structlog.get_logger(__name__)


OSB_LAYER_SECTIONS = [
    "Background",
    "Fail",
    "Pass",
    "Foreground",
    "Overlay",
]


def format_number(value: float, precision: int = 6) -> str:
    """格式化数值，去除多余的零

    Example:
        >>> format_number(0.44444444)
        '0.444444'
        >>> format_number(320.0)
        '320'
    """
    rounded = round(float(value), precision)
    if rounded == int(rounded):
        return str(int(rounded))
    return f"{rounded:.{precision}f}".rstrip("0").rstrip(".")


def format_command(command: Command) -> str:
    """格式化单条指令

    起止时间相同时省略结束时间，起止值相同时省略结束值。
    """
    end_time = "" if command.end_time == command.start_time else str(command.end_time)
    values = format_number(command.start_value)
    if command.end_value != command.start_value:
        values += "," + format_number(command.end_value)
    return (
        f" {command.kind.value},{command.easing.value},{command.start_time},{end_time},{values}"
    )


def format_sprite(sprite: Sprite, osb_layer: str = "Background") -> List[str]:
    x, y = sprite.position
    lines = [
        f'Sprite,{osb_layer},{sprite.origin.value},"{sprite.path}",'
        f"{format_number(x)},{format_number(y)}"
    ]
    lines.extend(format_command(command) for command in sprite.commands)
    return lines


class OsbWriter:
    """OSB 写入器

    所有精灵写入 Background 层，按图层顺序（底部在前）输出。
    """

    def __init__(self, osb_layer: str = "Background") -> None:
        if osb_layer not in OSB_LAYER_SECTIONS:
            raise ValueError(f"Unsupported storyboard layer: {osb_layer}")
        self.osb_layer = osb_layer

    def render(self, storyboard: Storyboard) -> str:
        """渲染为 .osb 文本"""
        lines = ["[Events]", "//Background and Video events"]
        for index, section in enumerate(OSB_LAYER_SECTIONS):
            lines.append(f"//Storyboard Layer {index} ({section})")
            if section != self.osb_layer:
                continue
            for layer in storyboard.layers:
                for sprite in layer.sprites:
                    lines.extend(format_sprite(sprite, self.osb_layer))
        lines.append("//Storyboard Sound Samples")
        return "\n".join(lines) + "\n"

    def write(self, storyboard: Storyboard, output_path: Path) -> Path:
        """写入 .osb 文件

        Args:
            storyboard: storyboard 对象
            output_path: 输出文件路径

        Returns:
            输出文件路径
        """
        content = self.render(storyboard)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")

        logger.info(
            "storyboard.osb_written",
            output=output_path.as_posix(),
            sprite_count=storyboard.sprite_count,
            command_count=storyboard.command_count,
        )
        return output_path
