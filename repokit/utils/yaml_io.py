"""YAML 文件统一读写工具

集中管理 YAML 文件的序列化/反序列化，避免各模块重复实现。
统一 encoding="utf-8"、空值保护、目录自动创建、原子写入。
读取失败一律转换为 ConfigError，调用方不会看到原始 yaml 异常。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from repokit.core.exceptions import ConfigError
from repokit.utils.fs import atomic_write

logger = logging.getLogger(__name__)

# YAML 文件最大大小限制 (10MB)，防止恶意大文件导致内存耗尽
MAX_YAML_SIZE = 10 * 1024 * 1024


def _check_size(p: Path) -> None:
    file_size = p.stat().st_size
    if file_size > MAX_YAML_SIZE:
        raise ValueError(
            f"YAML 文件过大: {p} ({file_size} 字节), "
            f"超过限制 {MAX_YAML_SIZE} 字节"
        )


def save_yaml(path: str | Path, data: Any) -> None:
    """原子写入 YAML 文件，保持键顺序，允许 Unicode"""
    content = dump_yaml(data)
    try:
        atomic_write(Path(path), content)
    except OSError as e:
        logger.error("写入文件失败: %s, 错误: %s", path, e)
        raise


def dump_yaml(data: Any) -> str:
    """将配置映射序列化为 YAML 字符串"""
    return yaml.dump(
        data, default_flow_style=False,
        allow_unicode=True, sort_keys=False,
    )


def read_config_path(path: str | Path, *, missing_ok: bool = False) -> dict[str, Any]:
    """读取配置文件，顶层必须是映射

    参数:
        path: 文件路径
        missing_ok: 为 True 时文件不存在返回空字典

    异常:
        ConfigError: 文件缺失（missing_ok=False）、无法读取、过大、
            YAML 格式错误或顶层不是映射
    """
    p = Path(path)
    if missing_ok and not p.exists():
        return {}
    try:
        _check_size(p)
        with open(p, encoding="utf-8") as f:
            result = yaml.safe_load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"读取配置失败 {p}: {e}", path=str(p)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"解析配置失败 \"{p}\": {e}", path=str(p)) from e

    if result is None:
        return {}
    if not isinstance(result, dict):
        raise ConfigError(
            f"配置内容必须是映射 \"{p}\" (实际类型: {type(result).__name__})",
            path=str(p),
        )
    return result


def read_config(directory: str | Path, name: str) -> dict[str, Any]:
    """读取 <directory>/<name>.yml"""
    return read_config_path(Path(directory) / f"{name}.yml")
