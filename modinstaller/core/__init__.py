"""安装器核心: 来源分类 -> 拉取 -> 重试 -> 批量编排"""

from modinstaller.core.classifier import classify
from modinstaller.core.fetcher import Fetcher
from modinstaller.core.installer import MAX_ATTEMPTS, RetryingInstaller
from modinstaller.core.manifest import load_manifest
from modinstaller.core.orchestrator import (
    BatchOrchestrator,
    ConcurrentStrategy,
    SequentialStrategy,
    build_orchestrator,
    select_strategy,
    start_installation,
)

__all__ = [
    "MAX_ATTEMPTS",
    "BatchOrchestrator",
    "ConcurrentStrategy",
    "Fetcher",
    "RetryingInstaller",
    "SequentialStrategy",
    "build_orchestrator",
    "classify",
    "load_manifest",
    "select_strategy",
    "start_installation",
]
