"""合辑 storyboard 生成器

读取 compilation.txt，为每个片段生成背景与艺人/歌曲名文字，
可选地叠加贯穿全程的暗角。
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import Optional

import structlog

from src.compilation.background import compose_background
from src.compilation.models import Section
from src.compilation.parser import load_sections
from src.compilation.text_styles import animate_text
from src.compilation.vignette import VIGNETTE_PATH, compose_vignette, ensure_vignette
from src.fonts.generator import FontDescription, FontGenerator, FontGlow, FontOutline, FontShadow
from src.infra.config.settings import CompilationSettings, get_settings
from src.media.images import read_image_height
from src.storyboard.models import Storyboard
from src.storyboard.osb_writer import OsbWriter

logger = structlog.get_logger(__name__)

# 自底向上的图层顺序
LAYER_ORDER = ["", "BACKGROUND", "VIGNETTE", "TEXT"]
FONT_DIRECTORY = "sb/f"
BACKGROUND_DIRECTORY = "sb/bg"


class CompilationManager:
    """合辑 storyboard 生成器"""

    def __init__(
        self,
        settings: Optional[CompilationSettings] = None,
        font: Optional[FontGenerator] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """初始化生成器

        Args:
            settings: 配置，默认读取环境变量
            font: 字形生成器，默认根据配置创建
            rng: ELASTIC 样式的随机源，默认按 random_seed 创建
        """
        self._settings = settings or get_settings()
        self._font = font or self._create_font()
        self._rng = rng or random.Random(self._settings.random_seed)

    @property
    def mapset_path(self) -> Path:
        return self._settings.mapset_path

    def _create_font(self) -> FontGenerator:
        s = self._settings
        return FontGenerator(
            directory=FONT_DIRECTORY,
            mapset_path=s.mapset_path,
            description=FontDescription(
                font_path=s.text_font,
                font_size=s.text_size,
                color=s.text_color,
            ),
            # 叠加发光模式下不在纹理中烘焙发光
            glow=FontGlow(radius=0 if s.additive_glow else s.glow_radius, color=s.glow_color),
            outline=FontOutline(thickness=s.outline_thickness, color=s.outline_color),
            shadow=FontShadow(thickness=s.shadow_thickness, color=s.shadow_color),
        )

    def load(self) -> tuple[Section, ...]:
        """确保数据文件与背景目录存在并读取片段"""
        table_path = self._settings.section_table_path
        background_dir = self.mapset_path / BACKGROUND_DIRECTORY
        # 首次运行只生成空表，不创建背景目录
        if table_path.exists() and not background_dir.is_dir():
            background_dir.mkdir(parents=True, exist_ok=True)
            logger.info("compilation.background_dir_created", path=background_dir.as_posix())

        return load_sections(table_path)

    def generate(self) -> Storyboard:
        """生成完整 storyboard"""
        s = self._settings
        storyboard = Storyboard()
        for name in LAYER_ORDER:
            storyboard.layer(name)

        # 隐藏谱面自带背景
        storyboard.layer("").create_sprite(s.base_background).fade(0, 0)

        logger.info("compilation.start", project=s.project_path.as_posix(), mapset=s.mapset_path.as_posix())

        sections = self.load()
        logger.info("compilation.sections_added", count=len(sections))

        if s.vignette:
            self._generate_vignette(storyboard, sections)

        for section in sections:
            self._generate_section(storyboard, section)

        logger.info(
            "compilation.generated",
            sections=len(sections),
            sprites=storyboard.sprite_count,
            commands=storyboard.command_count,
        )
        return storyboard

    def _generate_vignette(self, storyboard: Storyboard, sections: tuple[Section, ...]) -> None:
        if not sections:
            logger.warning("compilation.vignette_skipped", reason="no sections")
            return

        ensure_vignette(
            self.mapset_path / VIGNETTE_PATH,
            self._settings.vignette_url,
            timeout=self._settings.http_timeout_s,
        )
        compose_vignette(storyboard.layer("VIGNETTE"), sections)

    def _generate_section(self, storyboard: Storyboard, section: Section) -> None:
        s = self._settings
        image_height = read_image_height(self.mapset_path / section.background_path)
        compose_background(storyboard.layer("BACKGROUND"), section, image_height)

        text_layer = storyboard.layer("TEXT")
        for text, position, scale, style in (
            (section.artist_name, s.artist_position, s.artist_name_size, s.artist_style),
            (section.song_name, s.song_position, s.song_name_size, s.song_style),
        ):
            animate_text(
                text_layer,
                section.start_time,
                section.end_time,
                text,
                self._font,
                position,
                scale,
                style,
                origin=s.text_origin,
                rng=self._rng,
            )

    def run(self, output_path: Optional[Path] = None) -> Path:
        """生成 storyboard 并写入 .osb 文件"""
        storyboard = self.generate()
        return OsbWriter().write(storyboard, output_path or self._settings.resolved_osb_path)
