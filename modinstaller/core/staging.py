"""下载暂存目录

DirectUrl 来源先下载到暂存目录，再交给包管理器安装本地文件。
暂存目录在并发模式下被多个模块共享，创建必须容忍 "已存在"。
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Protocol

logger = logging.getLogger(__name__)


class StagingStore(Protocol):
    """暂存区协议"""

    def ensure(self) -> Path:
        """确保暂存目录存在并返回其路径"""
        ...

    def open_for_write(self, filename: str) -> tuple[Path, BinaryIO]:
        """打开暂存文件用于写入，返回 (路径, 文件对象)"""
        ...

    def discard(self, path: Path) -> None:
        """删除不完整的暂存文件"""
        ...


class LocalStagingStore:
    """本地目录暂存区（默认实现）"""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def ensure(self) -> Path:
        # exist_ok: 并发拉取可能同时创建
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root

    def open_for_write(self, filename: str) -> tuple[Path, BinaryIO]:
        path = self.root / filename
        return path, open(path, "wb")  # noqa: SIM115

    def discard(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("清理暂存文件失败 %s: %s", path, e)
