"""远程仓库拉取缓存

职责:
- 按 (url, branch) 把仓库 clone 到私有临时目录，每个进程内只 clone 一次
- 去掉版本控制元数据，得到纯文件树
- 从已缓存的仓库中复制单个文件

临时目录不由本模块清理，生命周期归属调用进程。
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import threading
from pathlib import Path

from repokit.core.exceptions import CloneError, CopyError
from repokit.utils.fs import atomic_copy, make_temp_repo_dir
from repokit.utils.net import validate_branch, validate_repo_url
from repokit.utils.shell import CommandExecutor, get_executor

logger = logging.getLogger(__name__)

_VCS_DIR = ".git"


class Downloader:
    """仓库拉取缓存 - 同一 (url, branch) 只 clone 一次

    同一实例可被多线程共享: 同 key 的调用串行化，不同 key 可并行 clone。
    """

    def __init__(
        self,
        executor: CommandExecutor | None = None,
        *,
        git_cmd: str = "",
        tmp_prefix: str = "",
        tmp_root: str | None = None,
        clone_depth: int | None = None,
        clone_timeout: int | None = None,
    ) -> None:
        from repokit.core.config import get_config
        cfg = get_config()
        self.executor = executor or get_executor()
        self.git_cmd = git_cmd or cfg.git_cmd
        self.tmp_prefix = tmp_prefix or cfg.tmp_prefix
        self.tmp_root = cfg.tmp_root if tmp_root is None else tmp_root
        self.clone_depth = cfg.clone_depth if clone_depth is None else clone_depth
        self.clone_timeout = cfg.clone_timeout if clone_timeout is None else clone_timeout

        self.repos: dict[tuple[str, str], Path] = {}
        self._lock = threading.Lock()
        self._key_locks: dict[tuple[str, str], threading.Lock] = {}

    def _key_lock(self, key: tuple[str, str]) -> threading.Lock:
        with self._lock:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = self._key_locks[key] = threading.Lock()
            return lock

    def cached(self, url: str, branch: str) -> Path | None:
        """查询缓存，不触发 clone"""
        with self._lock:
            return self.repos.get((url, branch))

    def get_repo(self, url: str, branch: str) -> Path:
        """返回仓库的本地目录，首次请求时 clone

        缓存命中直接返回，不校验目录是否仍然存在。
        clone 失败时不写入缓存，异常原样抛给调用方。

        异常:
            ValidationError: url / branch 不合法
            CloneError: clone 命令失败、超时或无法执行
        """
        key = (url, branch)
        with self._key_lock(key):
            cached = self.cached(url, branch)
            if cached is not None:
                logger.info("缓存命中: %s@%s -> %s", url, branch, cached)
                return cached

            validate_repo_url(url, context="clone")
            validate_branch(branch)

            try:
                dest = make_temp_repo_dir(self.tmp_prefix, self.tmp_root)
            except OSError as e:
                raise CloneError(url, branch, f"无法创建临时目录: {e}") from e

            try:
                self._git_clone(url, branch, dest)
            except CloneError:
                shutil.rmtree(dest, ignore_errors=True)
                raise

            with self._lock:
                self.repos[key] = dest
            logger.info("仓库就绪: %s@%s -> %s", url, branch, dest)
            return dest

    def _clone_cmd(self, url: str, branch: str, dest: Path) -> list[str]:
        cmd = [self.git_cmd, "clone", "--branch", branch]
        if self.clone_depth > 0:
            cmd += ["--depth", str(self.clone_depth)]
        return [*cmd, "--", url, str(dest)]

    def _git_clone(self, url: str, branch: str, dest: Path) -> None:
        """clone 到 dest 并删除版本控制目录"""
        cmd = self._clone_cmd(url, branch, dest)
        logger.info("  clone: %s", " ".join(cmd))
        try:
            r = self.executor.execute(
                cmd, timeout=self.clone_timeout or None,
            )
        except subprocess.TimeoutExpired as e:
            logger.error("clone 超时 %s@%s (%ss)", url, branch, e.timeout)
            raise CloneError(url, branch, f"超时 ({e.timeout}s)") from e
        except OSError as e:
            logger.error("clone 无法执行 %s@%s: %s", url, branch, e)
            raise CloneError(url, branch, str(e)) from e

        if not r.success:
            logger.error("clone 失败 %s@%s (rc=%d)", url, branch, r.returncode)
            raise CloneError(url, branch, r.output)

        try:
            shutil.rmtree(dest / _VCS_DIR)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise CloneError(url, branch, f"无法删除 {_VCS_DIR}: {e}") from e

    def download_file(
        self, url: str, branch: str, file_path: str, dest_path: str | Path,
    ) -> Path:
        """从缓存的仓库中复制单个文件到 dest_path（覆盖已有文件）

        异常:
            CloneError: 仓库获取失败
            CopyError: 源文件不在仓库中，或目标写入失败
        """
        repo_dir = self.get_repo(url, branch)
        src = repo_dir / file_path
        dest = Path(dest_path)

        root = repo_dir.resolve()
        resolved = src.resolve()
        if resolved != root and root not in resolved.parents:
            raise CopyError(f"文件路径越出仓库目录: {file_path}", path=str(src))
        if not resolved.is_file():
            raise CopyError(f"仓库中不存在文件 {url}@{branch}: {file_path}", path=str(src))

        try:
            atomic_copy(resolved, dest)
        except OSError as e:
            raise CopyError(f"复制失败 {src} -> {dest}: {e}", path=str(dest)) from e
        logger.info("已复制: %s -> %s", file_path, dest)
        return dest
