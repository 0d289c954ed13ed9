"""集中化配置管理。"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.compilation.models import TextOrigin, TextStyle


class CompilationSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="COMPILATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 路径：compilation.txt 位于项目目录，图片与 .osb 位于谱面目录
    project_path: Path = Path(".")
    mapset_path: Path = Path(".")
    osb_path: Path | None = None  # 默认 <mapset>/storyboard.osb

    # 前景
    vignette: bool = False
    vignette_url: str = "https://i.imgur.com/jXeKpkk.png"
    http_timeout_s: float = Field(30.0, gt=0)

    # 背景
    base_background: str = "bg.jpg"

    # 文字
    text_color: str = "#FFFFFF"
    text_font: str = "Verdana"
    text_size: int = Field(70, ge=1)
    text_origin: TextOrigin = TextOrigin.LEFT
    artist_name_size: float = Field(0.2, gt=0)
    song_name_size: float = Field(0.3, gt=0)
    artist_style: TextStyle = TextStyle.BASE
    song_style: TextStyle = TextStyle.BASE
    artist_position: tuple[float, float] = (-40.0, 400.0)
    song_position: tuple[float, float] = (-40.0, 420.0)
    additive_glow: bool = False
    glow_radius: int = Field(0, ge=0)
    glow_color: str = "#FFFFFF"
    outline_thickness: int = Field(0, ge=0)
    outline_color: str = "#FFFFFF"
    shadow_thickness: int = Field(0, ge=0)
    shadow_color: str = "#000000"

    # ELASTIC 样式的随机偏移种子，None 表示不固定
    random_seed: int | None = None

    @property
    def section_table_path(self) -> Path:
        return self.project_path / "compilation.txt"

    @property
    def resolved_osb_path(self) -> Path:
        return self.osb_path or self.mapset_path / "storyboard.osb"


@lru_cache()
def get_settings() -> CompilationSettings:
    return CompilationSettings()
