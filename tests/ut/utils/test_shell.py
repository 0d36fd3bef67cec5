"""shell.py 单元测试"""

from __future__ import annotations

import subprocess

import pytest

from repokit.utils.shell import CommandResult, LocalExecutor, get_executor, set_executor


class TestCommandResult:
    """执行结果的成功判定与诊断输出"""

    def test_output_prefers_stderr(self) -> None:
        """stderr 非空时优先作为诊断输出"""
        assert CommandResult(1, "out", "err\n").output == "err"
        assert CommandResult(1, "out\n", "").output == "out"
        assert CommandResult(0, "", "").success

    def test_output_truncated(self) -> None:
        assert len(CommandResult(1, "", "x" * 2000).output) == 500


class TestLocalExecutor:
    """本地子进程执行器"""

    def test_success(self, tmp_path) -> None:
        r = LocalExecutor().execute(["echo", "hello"], cwd=str(tmp_path))
        assert r.success
        assert "hello" in r.stdout

    def test_failure(self, tmp_path) -> None:
        """非零退出码不抛异常，由调用方判定"""
        r = LocalExecutor().execute("false", cwd=str(tmp_path))
        assert not r.success

    def test_timeout_raises(self, tmp_path) -> None:
        with pytest.raises(subprocess.TimeoutExpired):
            LocalExecutor().execute(["sleep", "5"], cwd=str(tmp_path), timeout=1)


class TestDefaultExecutor:
    """全局默认执行器替换"""

    def test_set_and_restore(self) -> None:
        original = get_executor()
        replacement = LocalExecutor()
        try:
            set_executor(replacement)
            assert get_executor() is replacement
        finally:
            set_executor(original)
        assert get_executor() is original
