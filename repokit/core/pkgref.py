"""仓库限定包引用解析

包字符串形式:
    [@repo]<path/to/package>

- parse_package_string / build_package_string: 严格解析与反向构造，格式错误抛异常
- replace_repo_designators: 把字符串中的 @name 替换为仓库相对项目根目录的路径，
  仓库未知或找不到标记时原样返回，不报错
"""

from __future__ import annotations

import logging
from typing import Protocol

from repokit.core.exceptions import InvalidPackageStringError
from repokit.core.models import RepoDesignator

logger = logging.getLogger(__name__)


class RepoLocator(Protocol):
    """提供仓库本地路径的项目抽象"""

    def find_repo_path(self, repo_name: str) -> str:
        """返回仓库绝对路径，未知仓库返回空字符串"""
        ...

    def path(self) -> str:
        """返回项目根目录绝对路径"""
        ...


# =========================================================================
# 包字符串
# =========================================================================

def parse_package_string(pkg_str: str) -> tuple[str, str]:
    """解析包字符串，返回 (仓库名, 包路径)，本地包的仓库名为 ""

    只有第一个 '/' 作为仓库名分隔符，其余属于包路径。

    异常:
        InvalidPackageStringError: 以 '@' 开头但没有包名
    """
    pkg_str = pkg_str.removesuffix("/")

    if not pkg_str.startswith("@"):
        return "", pkg_str

    repo_name, sep, pkg_path = pkg_str[1:].partition("/")
    if not sep:
        raise InvalidPackageStringError(pkg_str)
    return repo_name, pkg_path


def build_package_string(repo_name: str, pkg_path: str) -> str:
    """parse_package_string 的逆操作"""
    if repo_name:
        return f"@{repo_name}/{pkg_path}"
    return pkg_path


# =========================================================================
# 仓库标记定位与替换
# =========================================================================

def locate_repo_designator(s: str, start: int = 0) -> RepoDesignator | None:
    """从 start 起定位第一个 '@'，及其后第一个 '/'

    两者缺一即返回 None（有 '@' 但其后没有 '/' 同样视为未找到）。
    """
    at = s.find("@", start)
    if at == -1:
        return None
    slash = s.find("/", at)
    if slash == -1:
        return None
    return RepoDesignator(start=at, end=slash, name=s[at + 1:slash])


def find_repo_designator(s: str) -> tuple[int, int]:
    """返回 (start, length)，length 为 '/' 相对 start 的偏移；未找到返回 (-1, -1)"""
    designator = locate_repo_designator(s)
    if designator is None:
        return -1, -1
    return designator.start, designator.length


def _relative_repo_path(repo_path: str, project_root: str) -> str:
    """去掉项目根目录前缀及其后的分隔符"""
    prefix = project_root.rstrip("/") + "/"
    return repo_path.removeprefix(prefix)


def _resolve(s: str, designator: RepoDesignator, project: RepoLocator) -> str | None:
    repo_path = project.find_repo_path(designator.name)
    if not repo_path:
        logger.debug("未知仓库，保持原样: @%s", designator.name)
        return None
    rel = _relative_repo_path(repo_path, project.path())
    return s[:designator.start] + rel + s[designator.end:]


def replace_repo_designators(s: str, project: RepoLocator) -> tuple[str, bool]:
    """替换 s 中第一个仓库标记，返回 (结果, 是否替换)

    仅处理一个标记；多个标记请使用 replace_all_repo_designators。
    """
    designator = locate_repo_designator(s)
    if designator is None:
        return s, False

    result = _resolve(s, designator, project)
    if result is None:
        return s, False
    return result, True


def replace_all_repo_designators(s: str, project: RepoLocator) -> tuple[str, int]:
    """从左到右替换全部可解析的仓库标记，返回 (结果, 替换个数)

    无法解析的标记原样保留，扫描从其 '@' 之后继续。
    """
    count = 0
    pos = 0
    while True:
        designator = locate_repo_designator(s, pos)
        if designator is None:
            return s, count

        result = _resolve(s, designator, project)
        if result is None:
            pos = designator.start + 1
            continue

        # 从替换片段之后继续，替换出来的路径本身不再参与解析
        pos = len(result) - (len(s) - designator.end)
        s = result
        count += 1
