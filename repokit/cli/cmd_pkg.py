"""CLI: 包字符串解析与仓库标记替换"""

from __future__ import annotations

import click

from repokit.cli import _friendly_errors
from repokit.core.pkgref import (
    build_package_string,
    parse_package_string,
    replace_all_repo_designators,
    replace_repo_designators,
)
from repokit.core.project import Project


def register(group: click.Group) -> None:
    group.add_command(pkg_group)


@click.group(name="pkg")
def pkg_group() -> None:
    """包字符串工具"""


@pkg_group.command(name="parse")
@click.argument("pkg_str")
def pkg_parse(pkg_str: str) -> None:
    """解析 [@repo]path 形式的包字符串"""
    with _friendly_errors():
        repo_name, pkg_path = parse_package_string(pkg_str)
    click.echo(f"repo={repo_name} path={pkg_path}")


@pkg_group.command(name="build")
@click.argument("pkg_path")
@click.option("--repo", "repo_name", default="", help="仓库名（不指定则为本地包）")
def pkg_build(pkg_path: str, repo_name: str) -> None:
    """由仓库名和包路径构造包字符串"""
    click.echo(build_package_string(repo_name, pkg_path))


@pkg_group.command(name="resolve")
@click.argument("text")
@click.option("--project", "project_dir", default=".", help="项目根目录")
@click.option("--all", "replace_all", is_flag=True, help="替换全部仓库标记")
def pkg_resolve(text: str, project_dir: str, replace_all: bool) -> None:
    """把字符串中的 @repo 替换为相对项目根目录的仓库路径"""
    with _friendly_errors():
        project = Project(project_dir)
    if replace_all:
        result, _ = replace_all_repo_designators(text, project)
    else:
        result, _ = replace_repo_designators(text, project)
    click.echo(result)
