"""合辑数据模型"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class BackgroundStyle(IntEnum):
    """背景运动样式，数值即 compilation.txt 中的序号"""

    BASE = 0
    UD = 1
    DU = 2
    LR = 3
    RL = 4
    SU = 5
    SD = 6
    SUR = 7
    SDR = 8


class TextStyle(str, Enum):
    """逐字动画样式"""

    BASE = "BASE"
    ELASTIC = "ELASTIC"
    ACCORDION_LEFT = "ACCORDION_LEFT"
    ACCORDION_RIGHT = "ACCORDION_RIGHT"
    SCALE_UP = "SCALE_UP"
    SCALE_DOWN = "SCALE_DOWN"


class TextOrigin(str, Enum):
    """单行文字相对锚点的对齐方式"""

    LEFT = "LEFT"
    CENTRE = "CENTRE"
    RIGHT = "RIGHT"


@dataclass(frozen=True)
class Section:
    """合辑片段

    一段时间范围内显示的背景图与艺人/歌曲名。
    """

    start_time: int
    end_time: int
    artist_name: str
    song_name: str
    background_id: int
    background_style: BackgroundStyle

    def __post_init__(self) -> None:
        if self.end_time <= self.start_time:
            raise ValueError(
                f"end_time ({self.end_time}) must be greater than start_time ({self.start_time})"
            )

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    @property
    def background_path(self) -> str:
        """背景图在谱面目录下的相对路径"""
        return f"sb/bg/{self.background_id}.jpg"
