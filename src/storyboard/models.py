"""Storyboard 精灵数据模型

精灵、图层与动画指令（关键帧），最终由 OsbWriter 序列化为 .osb 脚本。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

Vector2 = Tuple[float, float]
CommandValue = float

DEFAULT_POSITION: Vector2 = (320.0, 240.0)


class Easing(Enum):
    """osu! storyboard 缓动曲线，值为脚本中的缓动编号"""

    LINEAR = 0
    OUT_SINE = 16
    IN_OUT_SINE = 17
    OUT_EXPO = 19
    OUT_BACK = 30


class Origin(Enum):
    """精灵锚点"""

    TOP_LEFT = "TopLeft"
    CENTRE = "Centre"


class CommandKind(Enum):
    FADE = "F"
    MOVE_X = "MX"
    MOVE_Y = "MY"
    SCALE = "S"
    ROTATE = "R"


@dataclass(frozen=True)
class Command:
    """单条动画指令（关键帧）"""

    kind: CommandKind
    easing: Easing
    start_time: int
    end_time: int
    start_value: CommandValue
    end_value: CommandValue


@dataclass
class Sprite:
    """图层上的单个精灵及其指令序列"""

    path: str
    origin: Origin = Origin.CENTRE
    position: Vector2 = DEFAULT_POSITION
    commands: List[Command] = field(default_factory=list)

    def add_command(self, command: Command) -> None:
        self.commands.append(command)

    def _add(
        self,
        kind: CommandKind,
        easing: Optional[Easing],
        start_time: int,
        end_time: Optional[int],
        start_value: CommandValue,
        end_value: Optional[CommandValue],
    ) -> None:
        self.commands.append(
            Command(
                kind=kind,
                easing=easing or Easing.LINEAR,
                start_time=start_time,
                end_time=start_time if end_time is None else end_time,
                start_value=start_value,
                end_value=start_value if end_value is None else end_value,
            )
        )

    def fade(
        self,
        start_time: int,
        start_value: float,
        end_time: Optional[int] = None,
        end_value: Optional[float] = None,
        easing: Optional[Easing] = None,
    ) -> None:
        self._add(CommandKind.FADE, easing, start_time, end_time, start_value, end_value)

    def move_x(
        self,
        start_time: int,
        start_value: float,
        end_time: Optional[int] = None,
        end_value: Optional[float] = None,
        easing: Optional[Easing] = None,
    ) -> None:
        self._add(CommandKind.MOVE_X, easing, start_time, end_time, start_value, end_value)

    def move_y(
        self,
        start_time: int,
        start_value: float,
        end_time: Optional[int] = None,
        end_value: Optional[float] = None,
        easing: Optional[Easing] = None,
    ) -> None:
        self._add(CommandKind.MOVE_Y, easing, start_time, end_time, start_value, end_value)

    def scale(
        self,
        start_time: int,
        start_value: float,
        end_time: Optional[int] = None,
        end_value: Optional[float] = None,
        easing: Optional[Easing] = None,
    ) -> None:
        self._add(CommandKind.SCALE, easing, start_time, end_time, start_value, end_value)

    def rotate(
        self,
        start_time: int,
        start_value: float,
        end_time: Optional[int] = None,
        end_value: Optional[float] = None,
        easing: Optional[Easing] = None,
    ) -> None:
        self._add(CommandKind.ROTATE, easing, start_time, end_time, start_value, end_value)

    def commands_of(self, kind: CommandKind) -> List[Command]:
        return [command for command in self.commands if command.kind is kind]


@dataclass
class Layer:
    """命名图层，精灵按创建顺序叠放"""

    name: str
    sprites: List[Sprite] = field(default_factory=list)

    def create_sprite(
        self,
        path: str,
        origin: Origin = Origin.CENTRE,
        position: Vector2 = DEFAULT_POSITION,
    ) -> Sprite:
        sprite = Sprite(path=path, origin=origin, position=position)
        self.sprites.append(sprite)
        return sprite


@dataclass
class Storyboard:
    """完整 storyboard

    图层按创建顺序排列，先创建的位于底部。
    """

    layers: List[Layer] = field(default_factory=list)

    def layer(self, name: str) -> Layer:
        """获取图层，不存在时在顶部新建"""
        for layer in self.layers:
            if layer.name == name:
                return layer
        layer = Layer(name=name)
        self.layers.append(layer)
        return layer

    @property
    def sprite_count(self) -> int:
        return sum(len(layer.sprites) for layer in self.layers)

    @property
    def command_count(self) -> int:
        return sum(len(sprite.commands) for layer in self.layers for sprite in layer.sprites)
