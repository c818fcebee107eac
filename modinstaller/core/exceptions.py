"""统一异常体系

所有业务异常继承 ModInstallerError。
CLI 层据此输出友好提示，安装器据此区分可重试与永久失败。

分类:
- ConfigError: 配置/清单缺失或无效，安装开始前即终止
- UnrecognizedSourceKind: 单个模块的来源格式无法识别，永久失败，不重试
- FetchError 及其子类: 拉取/安装失败，视为暂时性错误，按次数上限重试
"""

from __future__ import annotations


class ModInstallerError(Exception):
    """安装器基础异常"""

    code: str = "UNKNOWN"

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConfigError(ModInstallerError):
    """配置文件或依赖清单缺失、内容无效"""

    code = "CONFIG_ERROR"


class ValidationError(ModInstallerError):
    """输入数据校验失败"""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, details: list[str] | None = None) -> None:
        super().__init__(message)
        self.details = details or []


class UnrecognizedSourceKind(ModInstallerError):
    """模块来源无法识别（清单编写错误，不重试）"""

    code = "UNRECOGNIZED_SOURCE"

    def __init__(self, module_name: str, specifier: str) -> None:
        super().__init__(
            f"模块 '{module_name}' 的来源类型无效: {specifier!r}"
            "（支持 npm: / git: / github: / https://）"
        )
        self.module_name = module_name
        self.specifier = specifier


class FetchError(ModInstallerError):
    """拉取或安装失败（可重试）"""

    code = "FETCH_ERROR"


class ProcessExitError(FetchError):
    """包管理器进程以非零状态退出，或无法启动"""

    code = "PROCESS_EXIT"

    def __init__(self, message: str, returncode: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class StreamWriteError(FetchError):
    """下载内容写入暂存目录失败"""

    code = "STREAM_WRITE"


class TransportError(FetchError):
    """网络传输失败（连接、HTTP 状态、读取中断）"""

    code = "TRANSPORT"
