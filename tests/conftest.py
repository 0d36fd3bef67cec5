"""测试共享 fixture: 假 git 执行器 + 全局状态隔离"""

from __future__ import annotations

import subprocess
from pathlib import Path

import pytest

from repokit.core.config import reset_config
from repokit.utils.logger import reset_logging
from repokit.utils.shell import CommandResult


class FakeGit:
    """模拟 git clone: 按 url 写入预置文件并创建 .git 目录

    trees: {url: {相对路径: 内容}}
    fail:  返回非零退出码的 url 集合
    timeout: 抛 TimeoutExpired 的 url 集合
    """

    def __init__(self) -> None:
        self.trees: dict[str, dict[str, str]] = {}
        self.fail: set[str] = set()
        self.timeout: set[str] = set()
        self.calls: list[list[str]] = []

    def execute(self, cmd, *, cwd=".", env=None, timeout=None):  # type: ignore[no-untyped-def]
        self.calls.append(list(cmd))
        url, dest = cmd[-2], Path(cmd[-1])
        if url in self.timeout:
            raise subprocess.TimeoutExpired(cmd, timeout or 0)
        if url in self.fail:
            return CommandResult(128, "", f"fatal: repository '{url}' not found\n")
        branch = cmd[cmd.index("--branch") + 1]
        (dest / ".git").mkdir(parents=True, exist_ok=True)
        (dest / ".git" / "HEAD").write_text(f"ref: refs/heads/{branch}\n")
        for rel, content in self.trees.get(url, {}).items():
            f = dest / rel
            f.parent.mkdir(parents=True, exist_ok=True)
            f.write_text(content)
        return CommandResult(0, "", "")

    @property
    def clone_count(self) -> int:
        return sum(1 for c in self.calls if c[1] == "clone")


@pytest.fixture()
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture(autouse=True)
def _isolate_global_state():  # type: ignore[no-untyped-def]
    reset_config()
    yield
    reset_config()
    reset_logging()
