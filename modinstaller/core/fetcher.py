"""模块拉取器

职责:
- RegistryRef / VcsRef: 直接调用包管理器安装
- DirectUrl: 流式下载到暂存目录，再由包管理器安装本地文件
- 将进程、网络、文件写入失败统一转换为 FetchError 子类

外部副作用（子进程、HTTP、文件系统）全部通过注入的协作者完成。
"""

from __future__ import annotations

import http.client
import logging
import shlex
import urllib.error
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from modinstaller.core.exceptions import (
    ProcessExitError,
    StreamWriteError,
    TransportError,
    ValidationError,
)
from modinstaller.core.models import DirectUrl, RegistryRef, SourceDescriptor, VcsRef
from modinstaller.utils.net import url_basename, validate_url_scheme

if TYPE_CHECKING:
    from modinstaller.core.staging import StagingStore
    from modinstaller.utils.net import HttpClient
    from modinstaller.utils.shell import CommandExecutor

logger = logging.getLogger(__name__)

DEFAULT_PACKAGE_MANAGER = "npm install"
DEFAULT_CHUNK_SIZE = 64 * 1024


class Fetcher:
    """按来源类型执行一次完整安装（不做重试、不保留中间进度）"""

    def __init__(
        self,
        executor: CommandExecutor,
        http_client: HttpClient,
        staging: StagingStore,
        *,
        package_manager: str = DEFAULT_PACKAGE_MANAGER,
        download_timeout: float = 60,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self.executor = executor
        self.http_client = http_client
        self.staging = staging
        self.install_cmd = shlex.split(package_manager)
        self.download_timeout = download_timeout
        self.chunk_size = chunk_size

    def fetch(self, descriptor: SourceDescriptor) -> None:
        """安装一个模块，失败抛 FetchError 子类"""
        if isinstance(descriptor, (RegistryRef, VcsRef)):
            self._install(descriptor.target)
        elif isinstance(descriptor, DirectUrl):
            local = self._download(descriptor.url)
            self._install(str(local))
        else:
            raise TypeError(f"未知的来源描述类型: {type(descriptor).__name__}")

    # ------------------------------------------------------------------
    # 包管理器调用
    # ------------------------------------------------------------------

    def _install(self, target: str) -> None:
        cmd = [*self.install_cmd, target]
        label = shlex.join(cmd)
        logger.info("  安装: %s", label)
        try:
            r = self.executor.execute(cmd)
        except OSError as e:
            raise ProcessExitError(f"无法启动包管理器: {label} - {e}") from e

        if not r.success:
            stderr = r.stderr.strip()
            message = stderr or f"命令执行失败 (rc={r.returncode}): {label}"
            raise ProcessExitError(message, returncode=r.returncode, stderr=r.stderr)

        if r.stdout.strip():
            logger.info("%s", r.stdout.rstrip())

    # ------------------------------------------------------------------
    # 远程下载
    # ------------------------------------------------------------------

    def _download(self, url: str) -> Path:
        """流式下载到暂存目录，返回本地文件路径"""
        try:
            validate_url_scheme(url, context="module download")
            filename = url_basename(url)
        except (ValidationError, ValueError) as e:
            # urlparse 对畸形主机名（如未闭合的 IPv6 方括号）抛 ValueError
            raise TransportError(f"无效的下载地址: {url} - {e}") from e

        try:
            self.staging.ensure()
        except OSError as e:
            raise StreamWriteError(f"无法创建暂存目录: {e}") from e

        logger.info("  下载: %s", url)
        try:
            response = self.http_client.open(url, timeout=self.download_timeout)
        except (urllib.error.URLError, http.client.HTTPException, OSError, ValueError) as e:
            raise TransportError(f"下载失败: {url} - {e}") from e

        with response:
            dest = self._stream_to_staging(url, filename, response)
        logger.info("  已保存: %s", dest)
        return dest

    def _stream_to_staging(self, url: str, filename: str, response: BinaryIO) -> Path:
        try:
            dest, out = self.staging.open_for_write(filename)
        except OSError as e:
            raise StreamWriteError(f"无法写入暂存文件 {filename}: {e}") from e

        with out:
            while True:
                try:
                    chunk = response.read(self.chunk_size)
                except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
                    out.close()
                    self.staging.discard(dest)
                    raise TransportError(f"下载中断: {url} - {e}") from e
                if not chunk:
                    break
                try:
                    out.write(chunk)
                except OSError as e:
                    out.close()
                    self.staging.discard(dest)
                    raise StreamWriteError(f"写入暂存文件失败: {dest} - {e}") from e
        return dest
