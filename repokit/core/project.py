"""项目抽象 - 从 project.yml 读取仓库配置

project.yml 示例:

    project:
      name: my-project
      min_version: 1.2.0
    repositories:
      driver-repo:
        url: https://example.com/driver-repo.git
        branch: develop
        path: vendor/drivers

仓库默认安装在 <root>/<repos_dir>/<name>。
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from repokit.core.downloader import Downloader

from repokit.core.exceptions import (
    ConfigError,
    CopyError,
    InvalidFormatError,
    ValidationError,
)
from repokit.core.models import RepoSpec
from repokit.core.registry import YamlRegistry
from repokit.core.version import TOOL_VERSION, Version, parse_version, ver_cmp
from repokit.utils.net import validate_branch, validate_repo_url
from repokit.utils.warn_once import WarningRegistry, get_warning_registry

logger = logging.getLogger(__name__)


class Project(YamlRegistry):
    """项目及其外部仓库"""

    section_key = "repositories"

    def __init__(
        self,
        root: str | Path = ".",
        *,
        project_file: str = "",
        repos_dir: str = "",
        default_branch: str = "",
        warnings: WarningRegistry | None = None,
        required: bool = True,
    ) -> None:
        from repokit.core.config import get_config
        cfg = get_config()
        self.root = Path(root).resolve()
        self.repos_dir = repos_dir or cfg.repos_dir
        self.default_branch = default_branch or cfg.default_branch
        self.warnings = warnings or get_warning_registry()
        super().__init__(self.root / (project_file or cfg.project_file), required=required)

    # ------------------------------------------------------------------
    # RepoLocator
    # ------------------------------------------------------------------

    def path(self) -> str:
        return str(self.root)

    def find_repo_path(self, repo_name: str) -> str:
        """返回仓库绝对路径，未配置的仓库返回空字符串"""
        spec = self.get_repo(repo_name)
        if spec is None:
            return ""
        return str(self._repo_dir(spec))

    # ------------------------------------------------------------------
    # 仓库配置
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        info = self._mapping("project")
        return str(info.get("name", self.root.name))

    def get_repo(self, name: str) -> RepoSpec | None:
        entry = self._get_raw(name)
        if entry is None:
            return None
        branch = str(entry.get("branch") or "")
        if not branch:
            self.warnings.warn(
                "仓库 %s 未指定 branch，使用默认分支 %s", name, self.default_branch,
            )
            branch = self.default_branch
        return RepoSpec(
            name=name,
            url=str(entry.get("url", "")),
            branch=branch,
            path=str(entry.get("path", "")),
        )

    def list_repos(self) -> list[RepoSpec]:
        return [spec for n in self._names() if (spec := self.get_repo(n)) is not None]

    def add_repo(self, spec: RepoSpec) -> dict[str, Any]:
        """登记仓库并写回 project.yml"""
        if not spec.name or "/" in spec.name or "@" in spec.name:
            raise ValidationError(f"无效的仓库名: {spec.name!r}")
        validate_repo_url(spec.url, context=f"repo {spec.name}")
        entry: dict[str, Any] = {"url": spec.url}
        if spec.branch:
            validate_branch(spec.branch)
            entry["branch"] = spec.branch
        if spec.path:
            entry["path"] = spec.path
        self._put(spec.name, entry)
        logger.info("仓库已登记: %s (%s)", spec.name, spec.url)
        return entry

    def remove_repo(self, name: str) -> bool:
        if not self._remove(name):
            return False
        logger.info("仓库已移除: %s", name)
        return True

    def _repo_dir(self, spec: RepoSpec) -> Path:
        if spec.path:
            return self.root / spec.path
        return self.root / self.repos_dir / spec.name

    # ------------------------------------------------------------------
    # 版本要求
    # ------------------------------------------------------------------

    def min_version(self) -> Version | None:
        """项目要求的最低工具版本

        异常:
            ConfigError: project 段不是映射，或 min_version 不是合法的版本三元组
        """
        info = self._mapping("project")
        raw = info.get("min_version")
        if not raw:
            return None
        try:
            return parse_version(str(raw))
        except InvalidFormatError as e:
            raise ConfigError(f"{self.registry_file}: {e}", path=str(self.registry_file)) from e

    def check_version(self, tool_version: Version = TOOL_VERSION) -> bool:
        """工具版本满足项目要求返回 True，否则输出一次性警告"""
        required = self.min_version()
        if required is None or ver_cmp(tool_version, required) >= 0:
            return True
        self.warnings.warn(
            "项目 %s 要求 repokit >= %s，当前版本 %s",
            self.name, required, tool_version,
        )
        return False

    # ------------------------------------------------------------------
    # 安装
    # ------------------------------------------------------------------

    def install_repo(self, name: str, downloader: Downloader) -> Path:
        """经由拉取缓存获取仓库，复制到项目内的仓库目录（已存在则替换）

        异常:
            ValidationError: 仓库未登记
            CloneError: clone 失败
            CopyError: 复制到项目目录失败
        """
        spec = self.get_repo(name)
        if spec is None:
            raise ValidationError(f"仓库未登记: {name}")

        src = downloader.get_repo(spec.url, spec.branch)
        dest = self._repo_dir(spec)
        try:
            if dest.exists():
                shutil.rmtree(dest)
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copytree(src, dest)
        except OSError as e:
            raise CopyError(f"安装仓库失败 {name} -> {dest}: {e}", path=str(dest)) from e
        logger.info("仓库已安装: %s@%s -> %s", name, spec.branch, dest)
        return dest
