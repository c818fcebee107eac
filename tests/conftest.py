"""共享 fixture — 包管理器 / HTTP / 暂存区的内存替身

  FakeExecutor     按安装目标脚本化退出码，记录每次调用
  FakeHttpClient   按 URL 返回字节流或抛出网络异常
  fetcher_factory  用上述替身组装 Fetcher（暂存区落在 tmp_path）
"""

from __future__ import annotations

import io
import json
import threading
from pathlib import Path
from typing import Callable

import pytest

from modinstaller.core.config import reset_config
from modinstaller.core.fetcher import Fetcher
from modinstaller.core.staging import LocalStagingStore
from modinstaller.utils.shell import CommandResult, LocalExecutor, set_executor


class FakeExecutor:
    """包管理器替身

    failures: {安装目标: 失败次数}，-1 表示一直失败；未列出的目标一律成功。
    """

    def __init__(self, failures: dict[str, int] | None = None, stderr: str = "npm ERR! 404") -> None:
        self.failures = dict(failures or {})
        self.stderr = stderr
        self.calls: list[list[str]] = []
        self._lock = threading.Lock()

    def execute(self, cmd: list[str]) -> CommandResult:
        target = cmd[-1]
        with self._lock:
            self.calls.append(list(cmd))
            remaining = self.failures.get(target, 0)
            if remaining > 0:
                self.failures[target] = remaining - 1
        if remaining != 0:
            return CommandResult(returncode=1, stdout="", stderr=self.stderr)
        return CommandResult(returncode=0, stdout=f"added 1 package: {target}\n", stderr="")

    def targets(self) -> list[str]:
        return [c[-1] for c in self.calls]


class FakeHttpClient:
    """HTTP 替身：payloads 命中返回 BytesIO，errors 命中抛异常"""

    def __init__(
        self,
        payloads: dict[str, bytes] | None = None,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        self.payloads = payloads or {}
        self.errors = errors or {}
        self.opened: list[str] = []

    def open(self, url: str, *, timeout: float) -> io.BytesIO:
        self.opened.append(url)
        if url in self.errors:
            raise self.errors[url]
        return io.BytesIO(self.payloads.get(url, b"tarball-bytes"))


@pytest.fixture(autouse=True)
def _isolate_globals():
    """每个测试结束后恢复全局执行器与配置"""
    yield
    set_executor(LocalExecutor())
    reset_config()


@pytest.fixture()
def make_executor() -> type[FakeExecutor]:
    return FakeExecutor


@pytest.fixture()
def make_http() -> type[FakeHttpClient]:
    return FakeHttpClient


@pytest.fixture()
def fake_executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture()
def fake_http() -> FakeHttpClient:
    return FakeHttpClient()


@pytest.fixture()
def staging_dir(tmp_path: Path) -> Path:
    return tmp_path / "temp_modules"


@pytest.fixture()
def fetcher_factory(staging_dir: Path) -> Callable[..., Fetcher]:
    """fetcher_factory(executor, http) -> Fetcher"""

    def _make(executor, http=None, **kwargs) -> Fetcher:  # type: ignore[no-untyped-def]
        return Fetcher(
            executor,
            http or FakeHttpClient(),
            LocalStagingStore(staging_dir),
            **kwargs,
        )

    return _make


@pytest.fixture()
def write_manifest(tmp_path: Path) -> Callable[..., Path]:
    """write_manifest(modules, performance=None) -> package.json 路径"""

    def _write(modules: dict | None = None, performance: object = None, name: str = "package.json") -> Path:
        section: dict = {}
        if modules is not None:
            section["module"] = modules
        if performance is not None:
            section["performance"] = performance
        path = tmp_path / name
        path.write_text(json.dumps({"name": "app", "dependencies-custom": section}), encoding="utf-8")
        return path

    return _write
