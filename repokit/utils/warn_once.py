"""一次性警告登记表

同一条警告文本（格式化前）在一个登记表实例内只输出一次。
组件显式持有登记表实例，测试可按用例隔离警告状态。
"""

from __future__ import annotations

import logging
import threading
from typing import Any

logger = logging.getLogger(__name__)


class WarningRegistry:
    """已输出警告的登记表，只增不减"""

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._seen: set[str] = set()
        self._lock = threading.Lock()
        self._log = log or logger

    def warn(self, text: str, *args: Any) -> bool:
        """输出尚未出现过的警告，返回本次是否输出"""
        with self._lock:
            if text in self._seen:
                return False
            self._seen.add(text)
        body = text % args if args else text
        self._log.warning("WARNING: %s", body)
        return True

    def seen(self, text: str) -> bool:
        with self._lock:
            return text in self._seen

    def reset(self) -> None:
        with self._lock:
            self._seen.clear()


_default_registry = WarningRegistry()


def get_warning_registry() -> WarningRegistry:
    """获取进程级默认登记表"""
    return _default_registry
