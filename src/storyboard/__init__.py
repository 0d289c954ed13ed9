"""Storyboard 模块

精灵、图层与动画指令模型，以及 .osb 脚本导出。
"""

from src.storyboard.models import (
    Command,
    CommandKind,
    Easing,
    Layer,
    Origin,
    Sprite,
    Storyboard,
)
from src.storyboard.osb_writer import OsbWriter

__all__ = [
    "Command",
    "CommandKind",
    "Easing",
    "Layer",
    "Origin",
    "Sprite",
    "Storyboard",
    "OsbWriter",
]
