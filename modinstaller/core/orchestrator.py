"""批量安装编排器

根据清单的 performance 标志选择执行策略:

  ConcurrentStrategy (performance=true)
    所有模块同时提交到线程池，等待全部结束；某个模块失败不取消其他模块，
    结果集完整。

  SequentialStrategy (performance=false)
    按清单顺序逐个安装；首个模块失败即停止，后续模块不再尝试，
    记入 BatchResult.not_attempted。

来源分类在进入重试之前完成：无法识别的来源直接记为失败（attempts=0）。

start_installation() 是命令行入口使用的完整流程，也是唯一会以非零状态
结束进程的地方。
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING, NoReturn, Protocol

from modinstaller.core.classifier import classify
from modinstaller.core.config import Config, get_config
from modinstaller.core.exceptions import ConfigError, UnrecognizedSourceKind
from modinstaller.core.fetcher import Fetcher
from modinstaller.core.installer import RetryingInstaller
from modinstaller.core.manifest import load_manifest
from modinstaller.core.models import BatchResult, InstallOutcome, InstallStatus, Manifest
from modinstaller.core.staging import LocalStagingStore
from modinstaller.utils.net import UrllibHttpClient
from modinstaller.utils.shell import get_executor

if TYPE_CHECKING:
    from modinstaller.core.staging import StagingStore
    from modinstaller.utils.net import HttpClient
    from modinstaller.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)

# 安装单个模块的回调：(模块名, 来源字符串) -> 最终结果
InstallFn = Callable[[str, str], InstallOutcome]


# =========================================================================
# 执行策略
# =========================================================================

class BatchStrategy(Protocol):
    """批量执行策略协议"""

    name: str

    def run(
        self, modules: Mapping[str, str], install_one: InstallFn,
    ) -> tuple[list[InstallOutcome], list[str]]:
        """执行全部模块，返回 (结果列表, 未尝试的模块名)"""
        ...


class ConcurrentStrategy:
    """并发执行：全部提交，全部等待，不短路"""

    name = "concurrent"

    def __init__(self, max_workers: int = 0) -> None:
        self.max_workers = max(0, max_workers)

    def run(
        self, modules: Mapping[str, str], install_one: InstallFn,
    ) -> tuple[list[InstallOutcome], list[str]]:
        if not modules:
            return [], []

        workers = self.max_workers or len(modules)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="modinstall") as pool:
            futures = {
                name: pool.submit(install_one, name, source)
                for name, source in modules.items()
            }
            outcomes = []
            for name, future in futures.items():
                outcome = future.result()
                logger.info("完成: %s -> %s", name, outcome.status.value)
                outcomes.append(outcome)
        return outcomes, []


class SequentialStrategy:
    """顺序执行：按清单顺序逐个安装，首个失败即停止"""

    name = "sequential"

    def run(
        self, modules: Mapping[str, str], install_one: InstallFn,
    ) -> tuple[list[InstallOutcome], list[str]]:
        outcomes: list[InstallOutcome] = []
        names = list(modules)
        for i, name in enumerate(names):
            logger.info("安装: %s (%d/%d)", name, i + 1, len(names))
            outcome = install_one(name, modules[name])
            outcomes.append(outcome)
            if not outcome.succeeded:
                skipped = names[i + 1:]
                if skipped:
                    logger.warning("顺序模式已停止，未尝试: %s", ", ".join(skipped))
                return outcomes, skipped
        return outcomes, []


def select_strategy(performance_mode: bool, max_workers: int = 0) -> BatchStrategy:
    """按 performance 标志选择策略"""
    if performance_mode:
        return ConcurrentStrategy(max_workers=max_workers)
    return SequentialStrategy()


# =========================================================================
# 编排器
# =========================================================================

class BatchOrchestrator:
    """驱动 RetryingInstaller 完成整批安装并汇总结果"""

    def __init__(self, installer: RetryingInstaller, *, max_workers: int = 0) -> None:
        self.installer = installer
        self.max_workers = max_workers

    def run(self, manifest: Manifest) -> BatchResult:
        strategy = select_strategy(manifest.performance_mode, self.max_workers)
        logger.info("开始安装 %d 个模块 (策略: %s)", len(manifest.modules), strategy.name)

        outcomes, skipped = strategy.run(manifest.modules, self.install_one)
        result = BatchResult(
            outcomes=tuple(outcomes),
            mode=strategy.name,
            not_attempted=tuple(skipped),
        )
        self._log_summary(result)
        return result

    def install_one(self, module_name: str, specifier: str) -> InstallOutcome:
        """分类来源后交给重试安装器；分类失败不重试"""
        try:
            descriptor = classify(module_name, specifier)
        except UnrecognizedSourceKind as e:
            logger.error("%s", e)
            return InstallOutcome(
                module_name=module_name,
                status=InstallStatus.FAILED,
                attempts=0,
                reason=str(e),
            )
        logger.debug("来源解析: %s -> %s %s", module_name, descriptor.kind.value, descriptor.target)
        return self.installer.install(module_name, descriptor)

    @staticmethod
    def _log_summary(result: BatchResult) -> None:
        failed = result.failed
        if not failed:
            logger.info("全部模块安装成功 (%d 个)", len(result.outcomes))
            return
        logger.error(
            "模块安装失败: %d 成功, %d 失败 (%s)",
            len(result.outcomes) - len(failed),
            len(failed),
            ", ".join(o.module_name for o in failed),
        )
        for o in failed:
            logger.error("  %s (尝试 %d 次): %s", o.module_name, o.attempts, o.reason)


def build_orchestrator(
    config: Config | None = None,
    *,
    executor: CommandExecutor | None = None,
    http_client: HttpClient | None = None,
    staging: StagingStore | None = None,
) -> BatchOrchestrator:
    """按配置组装 Fetcher -> RetryingInstaller -> BatchOrchestrator"""
    cfg = config or get_config()
    fetcher = Fetcher(
        executor or get_executor(),
        http_client or UrllibHttpClient(),
        staging or LocalStagingStore(cfg.staging_dir),
        package_manager=cfg.package_manager,
        download_timeout=cfg.download_timeout,
        chunk_size=cfg.chunk_size,
    )
    return BatchOrchestrator(RetryingInstaller(fetcher), max_workers=cfg.max_workers)


# =========================================================================
# 入口
# =========================================================================

def _abort(message: str) -> NoReturn:
    logger.error("安装失败: %s", message)
    sys.exit(1)


def start_installation(
    manifest_path: str | Path | None = None,
    *,
    config: Config | None = None,
    performance: bool | None = None,
    orchestrator: BatchOrchestrator | None = None,
) -> BatchResult:
    """加载清单并执行整批安装

    performance 不为 None 时覆盖清单中的 performance 标志。
    配置错误或任一模块失败时以退出码 1 结束进程。
    """
    cfg = config or get_config()
    path = Path(manifest_path or cfg.manifest)
    try:
        manifest = load_manifest(path, section=cfg.section)
    except ConfigError as e:
        _abort(str(e))

    if performance is not None and performance != manifest.performance_mode:
        manifest = replace(manifest, performance_mode=performance)

    result = (orchestrator or build_orchestrator(cfg)).run(manifest)
    if not result.success:
        _abort(f"{len(result.failed)} 个模块未能安装")
    logger.info("所有依赖安装完成")
    return result
