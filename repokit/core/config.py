"""集中配置管理

提供统一的配置入口，支持从 YAML 文件加载 + 编程式覆盖。
字段值按默认值类型校验/转换，类型不符抛 ConfigError。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields
from typing import Any

from repokit.core.exceptions import ConfigError
from repokit.utils.yaml_io import read_config_path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "repokit.yml"


def _coerce(name: str, value: Any, default: Any, path: str) -> Any:
    """把 YAML 值转换为字段默认值的类型"""
    if isinstance(default, int):
        if isinstance(value, bool):
            raise ConfigError(f"{path}: {name} 必须是整数: {value!r}", path=path)
        try:
            number = int(value)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{path}: {name} 必须是整数: {value!r}", path=path) from e
        if number < 0:
            raise ConfigError(f"{path}: {name} 不能为负数: {number}", path=path)
        return number
    if isinstance(default, str):
        if value is None:
            return ""
        if isinstance(value, (dict, list)):
            raise ConfigError(f"{path}: {name} 必须是字符串: {value!r}", path=path)
        return str(value)
    return value


@dataclass
class Config:
    """全局配置"""

    # 项目
    project_file: str = "project.yml"
    repos_dir: str = "repos"
    default_branch: str = "master"

    # 拉取缓存
    tmp_prefix: str = "repokit-repo"
    tmp_root: str = ""            # 空则使用系统临时目录
    git_cmd: str = "git"
    clone_depth: int = 1          # 0 表示完整 clone
    clone_timeout: int = 600      # 秒，0 表示不限时

    # 自定义扩展 (放不到字段里的配置项)
    extra: dict = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str = DEFAULT_CONFIG_FILE) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认

        异常:
            ConfigError: 文件无法读取/解析，或字段类型不符
        """
        data = read_config_path(path, missing_ok=True)
        if not data:
            return cls()
        defaults = {f.name: f.default for f in fields(cls) if f.name != "extra"}
        matched = {
            k: _coerce(k, v, defaults[k], str(path))
            for k, v in data.items() if k in defaults
        }
        extra = {k: v for k, v in data.items() if k not in defaults}
        cfg = cls(**matched)
        cfg.extra = extra
        return cfg

    def to_dict(self) -> dict:
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str = DEFAULT_CONFIG_FILE) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.info("配置已加载: %s", path)
    return _current


def reset_config() -> None:
    """恢复默认配置（仅用于测试）"""
    global _current  # noqa: PLW0603
    _current = None
