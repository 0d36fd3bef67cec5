"""CLI: 项目仓库管理"""

from __future__ import annotations

import click

from repokit.cli import _friendly_errors
from repokit.core.downloader import Downloader
from repokit.core.models import RepoSpec
from repokit.core.project import Project


def register(group: click.Group) -> None:
    group.add_command(repo_group)


@click.group(name="repo")
def repo_group() -> None:
    """项目仓库管理"""


_project_option = click.option("--project", "project_dir", default=".", help="项目根目录")


@repo_group.command(name="list")
@_project_option
def repo_list(project_dir: str) -> None:
    """列出项目中登记的仓库"""
    with _friendly_errors():
        project = Project(project_dir)
        rows = [(r, project.find_repo_path(r.name)) for r in project.list_repos()]
    if not rows:
        click.echo("没有已登记的仓库。")
        return
    for r, local_path in rows:
        click.echo(f"  {r.name:20s} {r.branch:12s} {r.url}  -> {local_path}")


@repo_group.command(name="add")
@click.argument("name")
@click.argument("url")
@click.option("--branch", default="", help="分支（不指定则使用默认分支）")
@click.option("--path", "repo_path", default="", help="相对项目根目录的安装路径")
@_project_option
def repo_add(name: str, url: str, branch: str, repo_path: str, project_dir: str) -> None:
    """登记仓库到 project.yml"""
    with _friendly_errors():
        project = Project(project_dir, required=False)
        project.add_repo(RepoSpec(name=name, url=url, branch=branch, path=repo_path))
    click.echo(f"仓库已登记: {name}")


@repo_group.command(name="remove")
@click.argument("name")
@_project_option
def repo_remove(name: str, project_dir: str) -> None:
    """从 project.yml 移除仓库"""
    with _friendly_errors():
        removed = Project(project_dir).remove_repo(name)
    if removed:
        click.echo(f"仓库已移除: {name}")
    else:
        click.echo(f"仓库不存在: {name}")


@repo_group.command(name="install")
@click.argument("names", nargs=-1)
@_project_option
def repo_install(names: tuple[str, ...], project_dir: str) -> None:
    """拉取仓库并安装到项目目录（不指定则安装全部）"""
    with _friendly_errors():
        project = Project(project_dir)
        project.check_version()
        downloader = Downloader()
        for name in names or [r.name for r in project.list_repos()]:
            dest = project.install_repo(name, downloader)
            click.echo(f"已安装: {name} -> {dest}")
