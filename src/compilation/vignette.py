"""暗角遮罩

贯穿整个合辑的单个前景精灵，素材首次使用时下载并缓存到谱面目录。
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence

import httpx
import structlog

from src.compilation.background import REFERENCE_HEIGHT, crossfade
from src.compilation.models import Section
from src.storyboard.models import Command, Layer, Sprite

logger = structlog.get_logger(__name__)

VIGNETTE_PATH = "sb/v.png"
VIGNETTE_SOURCE_HEIGHT = 1080


def ensure_vignette(
    target: Path,
    url: str,
    *,
    client: Optional[httpx.Client] = None,
    timeout: float = 30.0,
) -> Path:
    """确保暗角素材存在，不存在时下载一次。

    Args:
        target: 本地缓存路径
        url: 素材下载地址
        client: 可注入的 HTTP 客户端
        timeout: 请求超时（秒）

    Raises:
        httpx.HTTPError: 下载失败（不重试）
    """
    if target.exists():
        logger.info("vignette.cached", path=target.as_posix())
        return target

    logger.info("vignette.download", url=url, path=target.as_posix())

    owns_client = client is None
    http = client or httpx.Client(timeout=timeout, follow_redirects=True)
    try:
        resp = http.get(url)
        resp.raise_for_status()
    except httpx.HTTPError as e:
        logger.error("vignette.download_error", url=url, error=str(e))
        raise
    finally:
        if owns_client:
            http.close()

    target.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = target.with_suffix(target.suffix + ".part")
    tmp_path.write_bytes(resp.content)
    tmp_path.replace(target)

    logger.info("vignette.downloaded", path=target.as_posix(), size=len(resp.content))
    return target


def vignette_commands(sections: Sequence[Section]) -> List[Command]:
    """从第一个片段开始到最后一个片段结束，无片段时返回空列表"""
    if not sections:
        return []

    start_time = sections[0].start_time
    sprite = Sprite(VIGNETTE_PATH)
    crossfade(sprite, start_time, sections[-1].end_time)
    sprite.scale(start_time, REFERENCE_HEIGHT / VIGNETTE_SOURCE_HEIGHT)
    return sprite.commands


def compose_vignette(layer: Layer, sections: Sequence[Section]) -> Optional[Sprite]:
    commands = vignette_commands(sections)
    if not commands:
        return None

    sprite = layer.create_sprite(VIGNETTE_PATH)
    for command in commands:
        sprite.add_command(command)
    return sprite
