"""网络工具 — URL 校验、文件名解析、流式 HTTP 客户端"""

from __future__ import annotations

import posixpath
import urllib.request
from typing import BinaryIO, Protocol
from urllib.parse import unquote, urlparse

from modinstaller.core.exceptions import ValidationError

_ALLOWED_SCHEMES = frozenset(("http", "https"))


def validate_url_scheme(url: str, *, context: str = "") -> None:
    """校验 URL 仅使用 http/https，防止 file:// 等非预期协议访问

    Raises:
        ValidationError: URL scheme 不在白名单内
    """
    parsed = urlparse(url)
    if parsed.scheme not in _ALLOWED_SCHEMES:
        label = f" ({context})" if context else ""
        raise ValidationError(
            f"不允许的 URL 协议 '{parsed.scheme}'{label}，"
            f"仅支持 http/https: {url}"
        )


def url_basename(url: str) -> str:
    """取 URL 路径的最后一段作为文件名（忽略 query / fragment）

    Raises:
        ValidationError: 路径为空或以 / 结尾
    """
    name = posixpath.basename(unquote(urlparse(url).path))
    if not name or name in (".", ".."):
        raise ValidationError(f"无法从 URL 解析文件名: {url}")
    return name


class HttpClient(Protocol):
    """流式 HTTP GET 协议

    open() 返回可 read(n) 的二进制流（支持 with 语句）。
    连接失败、非 2xx 状态应以 OSError（含 urllib.error.URLError）抛出。
    """

    def open(self, url: str, *, timeout: float) -> BinaryIO:
        ...


class UrllibHttpClient:
    """基于 urllib.request 的默认实现"""

    def open(self, url: str, *, timeout: float) -> BinaryIO:
        req = urllib.request.Request(url, method="GET")
        return urllib.request.urlopen(req, timeout=timeout)  # noqa: S310  # nosec B310
