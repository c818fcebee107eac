"""包管理器子进程调用

Fetcher 只通过 CommandExecutor 协议启动包管理器，测试时注入假实现即可，
无需 patch subprocess。
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from typing import Protocol

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """一次包管理器调用的结果"""

    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0


class CommandExecutor(Protocol):
    """执行一条参数列表形式的命令

    实现需线程安全：并发模式下多个模块会同时调用 execute。
    """

    def execute(self, cmd: list[str]) -> CommandResult:
        ...


class LocalExecutor:
    """在当前工作目录启动子进程，捕获 stdout / stderr

    可执行文件不存在等启动失败以 OSError 抛出，由 Fetcher 转换为 ProcessExitError。
    """

    def execute(self, cmd: list[str]) -> CommandResult:
        logger.debug("执行命令: %s", shlex.join(cmd))
        r = subprocess.run(cmd, capture_output=True, text=True, check=False)
        return CommandResult(r.returncode, r.stdout, r.stderr)


_default_executor: CommandExecutor = LocalExecutor()


def get_executor() -> CommandExecutor:
    return _default_executor


def set_executor(executor: CommandExecutor) -> None:
    """替换全局默认执行器（测试注入替身时使用）"""
    global _default_executor  # noqa: PLW0603
    _default_executor = executor
