"""带重试的单模块安装器

每个模块最多尝试 MAX_ATTEMPTS 次，任意 FetchError 均触发一次完整重拉
（无退避、无断点续传）。结果转换为 InstallOutcome，不向外抛出 FetchError。

来源分类失败不属于此处职责：调用方须在进入重试前拒绝。
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from modinstaller.core.exceptions import FetchError
from modinstaller.core.models import InstallOutcome, InstallStatus, SourceDescriptor

if TYPE_CHECKING:
    from modinstaller.core.fetcher import Fetcher

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3


class RetryingInstaller:
    """Fetcher 的有界重试包装"""

    def __init__(self, fetcher: Fetcher, max_attempts: int = MAX_ATTEMPTS) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts 必须 >= 1")
        self.fetcher = fetcher
        self.max_attempts = max_attempts

    def install(self, module_name: str, descriptor: SourceDescriptor) -> InstallOutcome:
        last_error = ""
        for attempt in range(1, self.max_attempts + 1):
            try:
                self.fetcher.fetch(descriptor)
            except FetchError as e:
                last_error = str(e)
                logger.warning(
                    "模块安装失败: %s [%s]，重试中 (%d/%d): %s",
                    module_name, e.code, attempt, self.max_attempts, last_error,
                )
                continue

            logger.info("模块安装成功: %s (第 %d 次尝试)", module_name, attempt)
            return InstallOutcome(
                module_name=module_name,
                status=InstallStatus.SUCCESS,
                attempts=attempt,
            )

        logger.error("模块安装失败: %s，已尝试 %d 次", module_name, self.max_attempts)
        return InstallOutcome(
            module_name=module_name,
            status=InstallStatus.FAILED,
            attempts=self.max_attempts,
            reason=last_error,
        )
