"""CLI: 杂项命令（版本、文件头、配置）"""

from __future__ import annotations

import click

from repokit.cli import _friendly_errors
from repokit.core.config import get_config
from repokit.core.version import TOOL_VERSION_STR, generated_preamble, parse_version, ver_cmp
from repokit.utils.yaml_io import dump_yaml


def register(group: click.Group) -> None:
    group.add_command(version_group)
    group.add_command(preamble)
    group.add_command(config_group)


# ---- 版本 ----

@click.group(name="version")
def version_group() -> None:
    """版本号工具"""


@version_group.command(name="show")
def version_show() -> None:
    """输出工具版本"""
    click.echo(TOOL_VERSION_STR)


@version_group.command(name="cmp")
@click.argument("a")
@click.argument("b")
def version_cmp(a: str, b: str) -> None:
    """比较两个版本，输出第一个非零差值"""
    with _friendly_errors():
        diff = ver_cmp(parse_version(a), parse_version(b))
    click.echo(str(diff))


# ---- 文件头 ----

@click.command()
def preamble() -> None:
    """输出生成文件的头注释"""
    click.echo(generated_preamble(), nl=False)


# ---- 配置 ----

@click.group(name="config")
def config_group() -> None:
    """配置查看"""


@config_group.command(name="show")
def config_show() -> None:
    """以 YAML 输出当前生效配置"""
    click.echo(dump_yaml(get_config().to_dict()), nl=False)
