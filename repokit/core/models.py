"""核心数据模型

所有核心数据类集中定义，pkgref / project / downloader 统一从此处导入。
"""

from __future__ import annotations

from dataclasses import dataclass


# =========================================================================
# 项目仓库
# =========================================================================


@dataclass
class RepoSpec:
    """项目中配置的外部仓库"""

    name: str
    url: str = ""
    branch: str = ""
    path: str = ""  # 相对项目根目录，空则为 <repos_dir>/<name>


# =========================================================================
# 包引用
# =========================================================================


@dataclass(frozen=True)
class PackageRef:
    """仓库限定的包引用: @repo/path 或 path"""

    repo_name: str
    pkg_path: str

    @classmethod
    def parse(cls, pkg_str: str) -> PackageRef:
        from repokit.core.pkgref import parse_package_string
        repo_name, pkg_path = parse_package_string(pkg_str)
        return cls(repo_name, pkg_path)

    @property
    def is_local(self) -> bool:
        return not self.repo_name

    def __str__(self) -> str:
        from repokit.core.pkgref import build_package_string
        return build_package_string(self.repo_name, self.pkg_path)


@dataclass(frozen=True)
class RepoDesignator:
    """字符串中 @name/ 标记的位置

    start 为 '@' 的绝对位置，end 为其后第一个 '/' 的绝对位置。
    """

    start: int
    end: int
    name: str

    @property
    def length(self) -> int:
        """'/' 相对 start 的偏移"""
        return self.end - self.start
