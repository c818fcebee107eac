"""LocalExecutor 与全局执行器测试"""

from __future__ import annotations

import inspect

import pytest

from modinstaller.utils.shell import LocalExecutor, get_executor, set_executor


class TestLocalExecutor:
    def test_success(self) -> None:
        r = LocalExecutor().execute(["echo", "hello"])
        assert r.success
        assert "hello" in r.stdout

    def test_failure_returncode(self) -> None:
        r = LocalExecutor().execute(["false"])
        assert not r.success
        assert r.returncode != 0

    def test_stderr_captured(self) -> None:
        r = LocalExecutor().execute(["sh", "-c", "echo boom >&2; exit 3"])
        assert r.returncode == 3
        assert "boom" in r.stderr

    def test_missing_binary_raises_oserror(self) -> None:
        with pytest.raises(OSError):
            LocalExecutor().execute(["definitely-not-a-real-binary-xyz"])

    def test_takes_only_argument_list(self) -> None:
        assert list(inspect.signature(LocalExecutor.execute).parameters) == ["self", "cmd"]


def test_set_executor(fake_executor) -> None:
    set_executor(fake_executor)
    assert get_executor() is fake_executor
