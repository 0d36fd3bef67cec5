"""统一异常体系

所有业务异常继承 RepoKitError，替代散落的 ValueError / RuntimeError。
CLI 层据此输出友好提示，调用方可按 code 决定中止还是跳过。
"""

from __future__ import annotations


class RepoKitError(Exception):
    """框架基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(RepoKitError):
    """配置文件缺失或内容无效"""

    code = "CONFIG_ERROR"

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class ValidationError(RepoKitError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class InvalidFormatError(RepoKitError):
    """版本字符串格式无效"""

    code = "INVALID_FORMAT"

    def __init__(self, value: str) -> None:
        super().__init__(f"无效的版本字符串: {value}")
        self.value = value


class InvalidPackageStringError(RepoKitError):
    """包字符串包含仓库前缀但缺少包名"""

    code = "INVALID_PACKAGE_STRING"

    def __init__(self, value: str) -> None:
        super().__init__(f"无效的包字符串，包含仓库但没有包名: {value}")
        self.value = value


class CloneError(RepoKitError):
    """仓库 clone 失败（不在本层重试）"""

    code = "CLONE_FAILURE"

    def __init__(self, url: str, branch: str, output: str = "") -> None:
        detail = f": {output}" if output else ""
        super().__init__(f"clone 失败 {url}@{branch}{detail}")
        self.url = url
        self.branch = branch
        self.output = output


class CopyError(RepoKitError):
    """源文件不存在或目标写入失败"""

    code = "COPY_FAILURE"

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path
