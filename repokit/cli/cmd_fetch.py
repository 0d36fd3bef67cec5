"""CLI: 远程仓库拉取"""

from __future__ import annotations

import click

from repokit.cli import _friendly_errors
from repokit.core.config import get_config
from repokit.core.downloader import Downloader


def register(group: click.Group) -> None:
    group.add_command(fetch)
    group.add_command(download)


@click.command()
@click.argument("url")
@click.option("--branch", default="", help="分支（默认取配置 default_branch）")
def fetch(url: str, branch: str) -> None:
    """clone 仓库到临时目录并输出路径"""
    with _friendly_errors():
        path = Downloader().get_repo(url, branch or get_config().default_branch)
    click.echo(str(path))


@click.command()
@click.argument("url")
@click.argument("file_path")
@click.argument("dest")
@click.option("--branch", default="", help="分支（默认取配置 default_branch）")
def download(url: str, file_path: str, dest: str, branch: str) -> None:
    """从远程仓库复制单个文件到 DEST"""
    with _friendly_errors():
        out = Downloader().download_file(
            url, branch or get_config().default_branch, file_path, dest,
        )
    click.echo(f"已保存: {out}")
