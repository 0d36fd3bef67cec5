"""文件系统工具: 原子写入 / 原子复制 / 临时仓库目录"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)


def _replace_from_temp(dest: Path, fill: Callable[[int, str], None]) -> None:
    """在目标同目录创建临时文件，由 fill(fd, tmp) 写入后原子替换

    失败时清理临时文件，目标文件保持原样。
    """
    dest.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=str(dest.parent), suffix=".tmp")
    try:
        fill(fd, tmp)
        os.replace(tmp, str(dest))
    except Exception:
        # 只捕获普通异常，不拦截 KeyboardInterrupt/SystemExit
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


def atomic_write(path: Path, content: str) -> None:
    """原子写入文本文件：先写临时文件再 rename"""

    def _fill(fd: int, tmp: str) -> None:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)

    _replace_from_temp(path, _fill)


def atomic_copy(src: Path, dest: Path) -> None:
    """原子复制单个文件，覆盖已存在的目标

    异常:
        OSError: 读取源文件或写入目标失败（目标不会残留半成品）
    """

    def _fill(fd: int, tmp: str) -> None:
        os.close(fd)
        shutil.copyfile(src, tmp)
        shutil.copymode(src, tmp)

    _replace_from_temp(dest, _fill)


def make_temp_repo_dir(prefix: str = "repokit-repo", root: str = "") -> Path:
    """创建唯一命名的临时目录用于下载仓库

    目录不会被自动删除，生命周期归属调用进程。
    """
    tmpdir = tempfile.mkdtemp(prefix=prefix, dir=root or None)
    logger.debug("临时仓库目录: %s", tmpdir)
    return Path(tmpdir)
