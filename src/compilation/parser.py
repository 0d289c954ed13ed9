"""合辑片段表解析模块

compilation.txt 为 `;` 分隔的 UTF-8 文本，首行为固定表头：

    startTime;endTime;artistName;songName;backgroundID;backgroundStyle
    1000;5000;Artist;Song;1;0
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable

import structlog

from src.compilation.models import BackgroundStyle, Section

logger = structlog.get_logger(__name__)

HEADER = "startTime;endTime;artistName;songName;backgroundID;backgroundStyle"
DELIMITER = ";"
FIELD_COUNT = 6

# 仅接受 ASCII 十进制整数
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


class SectionParseError(ValueError):
    """数据行格式错误"""

    def __init__(self, line_no: int, line: str, reason: str) -> None:
        self.line_no = line_no
        self.line = line
        self.reason = reason
        super().__init__(f"line {line_no}: {reason} ({line!r})")


def _parse_int(value: str, column: str, line_no: int, line: str) -> int:
    if not _INTEGER_PATTERN.fullmatch(value.strip()):
        raise SectionParseError(line_no, line, f"{column} is not an integer: {value!r}")
    return int(value)


def parse_line(line: str, line_no: int = 1) -> Section:
    """解析单个数据行。

    Args:
        line: 数据行（不含换行符）
        line_no: 行号（从 1 开始），用于错误信息

    Returns:
        Section 对象

    Raises:
        SectionParseError: 字段数不为 6、整数字段非法或样式序号越界
    """
    fields = line.split(DELIMITER)
    if len(fields) != FIELD_COUNT:
        raise SectionParseError(
            line_no, line, f"expected {FIELD_COUNT} fields, got {len(fields)}"
        )

    start_time = _parse_int(fields[0], "startTime", line_no, line)
    end_time = _parse_int(fields[1], "endTime", line_no, line)
    background_id = _parse_int(fields[4], "backgroundID", line_no, line)
    style_ordinal = _parse_int(fields[5], "backgroundStyle", line_no, line)

    try:
        background_style = BackgroundStyle(style_ordinal)
    except ValueError:
        raise SectionParseError(
            line_no, line, f"unknown backgroundStyle ordinal: {style_ordinal}"
        ) from None

    try:
        return Section(
            start_time=start_time,
            end_time=end_time,
            artist_name=fields[2],
            song_name=fields[3],
            background_id=background_id,
            background_style=background_style,
        )
    except ValueError as exc:
        raise SectionParseError(line_no, line, str(exc)) from exc


def parse_sections(lines: Iterable[str]) -> tuple[Section, ...]:
    """按出现顺序解析片段表，遇到第一行错误即中止。

    表头行与空行会被跳过，不做排序。数据行之间的空行记录警告。
    """
    sections: list[Section] = []
    blank_lines: list[int] = []
    for line_no, raw_line in enumerate(lines, start=1):
        line = raw_line.rstrip("\r\n")
        if not line.strip():
            blank_lines.append(line_no)
            continue
        if line.strip() == HEADER:
            continue
        for blank_no in blank_lines:
            logger.warning("compilation.blank_line_skipped", line_no=blank_no)
        blank_lines.clear()
        sections.append(parse_line(line, line_no))
    return tuple(sections)


def serialize_section(section: Section) -> str:
    """将 Section 序列化为数据行（parse_line 的逆操作）"""
    return DELIMITER.join(
        [
            str(section.start_time),
            str(section.end_time),
            section.artist_name,
            section.song_name,
            str(section.background_id),
            str(int(section.background_style)),
        ]
    )


def serialize_sections(sections: Iterable[Section]) -> str:
    """序列化为带表头的完整表格文本"""
    rows = [HEADER, *(serialize_section(section) for section in sections)]
    return "\n".join(rows) + "\n"


def ensure_section_table(path: Path) -> bool:
    """确保片段表存在。

    Returns:
        文件原本存在时返回 True；不存在时新建仅含表头的文件并返回 False
    """
    if path.exists():
        logger.info("compilation.table_found", path=path.as_posix())
        return True

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(HEADER + "\n", encoding="utf-8")
    logger.info("compilation.table_created", path=path.as_posix())
    return False


def load_sections(path: Path) -> tuple[Section, ...]:
    """读取并解析片段表，文件不存在时新建空表并返回空元组"""
    if not ensure_section_table(path):
        return ()

    # Windows 编辑器保存的文件可能带 BOM
    sections = parse_sections(path.read_text(encoding="utf-8-sig").splitlines())
    logger.info("compilation.sections_loaded", path=path.as_posix(), count=len(sections))
    return sections
