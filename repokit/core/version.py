"""语义版本三元组

Version 为 (major, minor, revision)，按字典序比较。
ver_cmp 返回第一个非零差值（保留差值大小，不归一化为 -1/0/1）。
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from repokit.core.exceptions import InvalidFormatError

# 与 64 位有符号整数解析保持一致: 可选符号 + 十进制数字
_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


@dataclass(frozen=True, order=True)
class Version:
    """版本三元组，构造后不可变"""

    major: int
    minor: int
    revision: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.revision}"


def _parse_part(part: str, raw: str) -> int:
    if not _INT_RE.fullmatch(part):
        raise InvalidFormatError(raw)
    value = int(part, 10)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise InvalidFormatError(raw)
    return value


def parse_version(s: str) -> Version:
    """解析 "major.minor.revision"，必须恰好三段整数

    异常:
        InvalidFormatError: 段数不为 3 或某段不是十进制整数
    """
    parts = s.split(".")
    if len(parts) != 3:
        raise InvalidFormatError(s)
    major, minor, revision = (_parse_part(p, s) for p in parts)
    return Version(major, minor, revision)


def ver_cmp(v1: Version, v2: Version) -> int:
    """按 major → minor → revision 返回第一个非零差值，相等返回 0"""
    for a, b in (
        (v1.major, v2.major),
        (v1.minor, v2.minor),
        (v1.revision, v2.revision),
    ):
        if a != b:
            return a - b
    return 0


TOOL_VERSION = Version(1, 5, 0)
TOOL_VERSION_STR = f"repokit version: {TOOL_VERSION}"


def generated_preamble() -> str:
    """生成文件头注释"""
    return f"/**\n * This file was generated by {TOOL_VERSION_STR}\n */\n\n"
