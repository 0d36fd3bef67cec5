"""YAML 注册表基类

基于 YAML 文件的注册表共享相同的加载、保存、增删改查逻辑。
子类只需指定 section_key，即可继承完整 CRUD。
文件内容类型不符时抛 ConfigError，绝不以空字典覆盖用户内容。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from repokit.core.exceptions import ConfigError
from repokit.utils.yaml_io import read_config_path, save_yaml

logger = logging.getLogger(__name__)


class YamlRegistry:
    """YAML 文件注册表基类

    子类用法:
        class MyRegistry(YamlRegistry):
            section_key = "items"

    required=True 时文件必须存在；无论是否必需，内容都必须是映射。
    """

    section_key: str = "entries"

    def __init__(self, registry_file: str | Path, *, required: bool = False) -> None:
        self.registry_file = Path(registry_file)
        self._data: dict[str, Any] = read_config_path(
            self.registry_file, missing_ok=not required,
        )

    def _invalid(self, what: str, value: Any) -> ConfigError:
        return ConfigError(
            f"{self.registry_file}: {what} 必须是映射 (实际类型: {type(value).__name__})",
            path=str(self.registry_file),
        )

    def _mapping(self, key: str) -> dict[str, Any]:
        """顶层键对应的映射，缺失或为空时返回 {}（不写回）"""
        value = self._data.get(key)
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise self._invalid(key, value)
        return value

    def _section(self) -> dict[str, dict[str, Any]]:
        """获取当前 section 字典（缺失或为空时自动创建）"""
        section = self._mapping(self.section_key)
        if self._data.get(self.section_key) is None:
            self._data[self.section_key] = section
        return section

    def _save(self) -> None:
        """持久化到 YAML 文件"""
        save_yaml(self.registry_file, self._data)

    def _put(self, name: str, entry: dict[str, Any]) -> dict[str, Any]:
        """写入条目并保存"""
        self._section()[name] = entry
        self._save()
        return entry

    def _get_raw(self, name: str) -> dict[str, Any] | None:
        """获取原始字典，空条目视为 {}"""
        section = self._section()
        if name not in section:
            return None
        entry = section[name]
        if entry is None:
            return {}
        if not isinstance(entry, dict):
            raise self._invalid(f"{self.section_key}.{name}", entry)
        return entry

    def _names(self) -> list[str]:
        return list(self._section())

    def _remove(self, name: str) -> bool:
        """删除条目"""
        section = self._section()
        if name not in section:
            return False
        del section[name]
        self._save()
        return True
