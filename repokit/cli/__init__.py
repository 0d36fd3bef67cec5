"""repokit 命令行接口

CLI 按领域拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os
from collections.abc import Iterator
from contextlib import contextmanager

import click

from repokit import __version__
from repokit.core.config import DEFAULT_CONFIG_FILE, init_config
from repokit.core.exceptions import RepoKitError
from repokit.utils.logger import setup_logging


@contextmanager
def _friendly_errors() -> Iterator[None]:
    """把业务异常转换为 click 错误输出（退出码 1）"""
    try:
        yield
    except RepoKitError as e:
        raise click.ClickException(f"[{e.code}] {e}") from e


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", default=DEFAULT_CONFIG_FILE, help="配置文件路径")
@click.option("--verbose", "-v", is_flag=True, help="输出调试日志")
def main(config_path: str, verbose: bool) -> None:
    """repokit - 仓库限定包引用解析与仓库拉取缓存"""
    level = "DEBUG" if verbose else os.getenv("REPOKIT_LOG_LEVEL", "WARNING")
    setup_logging(
        level=level,
        json_output=os.getenv("REPOKIT_LOG_JSON", "") == "1",
    )
    with _friendly_errors():
        init_config(config_path)


# 注册各领域子命令
from repokit.cli.cmd_pkg import register as _reg_pkg  # noqa: E402
from repokit.cli.cmd_repo import register as _reg_repo  # noqa: E402
from repokit.cli.cmd_fetch import register as _reg_fetch  # noqa: E402
from repokit.cli.cmd_misc import register as _reg_misc  # noqa: E402

_reg_pkg(main)
_reg_repo(main)
_reg_fetch(main)
_reg_misc(main)
