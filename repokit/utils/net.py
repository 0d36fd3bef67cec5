"""网络工具: 仓库 URL 与分支名安全校验

clone 命令以参数列表传递，但 URL / 分支仍需防止以 '-' 开头被 git 当作选项。
"""

from __future__ import annotations

import re
from urllib.parse import urlparse

from repokit.core.exceptions import ValidationError

_ALLOWED_SCHEMES = frozenset(("http", "https", "ssh", "git", "file"))
_SAFE_REF_RE = re.compile(r"^[a-zA-Z0-9_./@\-]+$")
# scp 风格: user@host:path
_SCP_LIKE_RE = re.compile(r"^[\w.\-]+@[\w.\-]+:[^\s]+$")


def validate_branch(branch: str) -> None:
    """校验分支名只含安全字符且不以 '-' 开头"""
    if not branch or branch.startswith("-") or not _SAFE_REF_RE.match(branch):
        raise ValidationError(f"分支名包含非法字符: {branch}")


def validate_repo_url(url: str, *, context: str = "") -> None:
    """校验仓库 URL 协议在白名单内（或为 scp 风格地址）

    Raises:
        ValidationError: URL 为空、以 '-' 开头或协议不被允许
    """
    label = f" ({context})" if context else ""
    if not url or url.startswith("-"):
        raise ValidationError(f"无效的仓库地址{label}: {url!r}")
    if _SCP_LIKE_RE.match(url):
        return
    parsed = urlparse(url)
    if parsed.scheme not in _ALLOWED_SCHEMES:
        raise ValidationError(
            f"不允许的 URL 协议 '{parsed.scheme}'{label}，"
            f"仅支持 {'/'.join(sorted(_ALLOWED_SCHEMES))}: {url}"
        )
