#!/usr/bin/env python
"""根据 compilation.txt 生成合辑 storyboard (.osb)。"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# 添加项目根目录到 Python 路径
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import httpx
import structlog

from src.compilation.manager import CompilationManager
from src.infra.config.settings import get_settings
from src.infra.observability.log_config import configure_logging

logger = structlog.get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="生成合辑 storyboard（背景、暗角与逐字文字）")
    parser.add_argument("--project", type=Path, help="compilation.txt 所在目录（默认读取配置）")
    parser.add_argument("--mapset", type=Path, help="谱面目录，背景图位于 sb/bg/<id>.jpg")
    parser.add_argument("-o", "--output", type=Path, help="输出 .osb 路径（默认 <mapset>/storyboard.osb）")
    parser.add_argument("--seed", type=int, help="ELASTIC 样式随机种子")
    parser.add_argument("--vignette", action="store_true", default=None, help="启用暗角")
    parser.add_argument("--log-dir", type=Path, default=Path("logs"), help="日志目录")
    return parser


def main() -> int:
    args = build_parser().parse_args()
    configure_logging(args.log_dir)

    overrides = {
        key: value
        for key, value in {
            "project_path": args.project,
            "mapset_path": args.mapset,
            "osb_path": args.output,
            "random_seed": args.seed,
            "vignette": args.vignette,
        }.items()
        if value is not None
    }
    settings = get_settings().model_copy(update=overrides)

    try:
        output = CompilationManager(settings).run()
    except (OSError, ValueError, httpx.HTTPError):
        logger.exception("compilation.failed")
        return 1

    print(f"Storyboard 已生成：{output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
