"""图片资源辅助函数。"""

from __future__ import annotations

from pathlib import Path

import structlog
from PIL import Image

logger = structlog.get_logger(__name__)


class BackgroundImageNotFoundError(FileNotFoundError):
    """片段引用的背景图不存在"""


def read_image_height(path: Path) -> int:
    """读取图片原始高度（像素）。

    Raises:
        BackgroundImageNotFoundError: 文件不存在
        PIL.UnidentifiedImageError: 文件无法解码
    """
    if not path.exists():
        logger.error("background.missing", path=path.as_posix())
        raise BackgroundImageNotFoundError(f"背景图不存在: {path}")

    with Image.open(path) as image:
        return image.height
