"""核心数据模型

所有核心数据类集中定义，classifier / fetcher / installer / orchestrator
统一从此处导入，避免模块间循环依赖。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

# =========================================================================
# 来源描述（封闭的标签联合类型）
# =========================================================================


class SourceKind(str, Enum):
    """模块来源类型"""

    REGISTRY = "registry"
    VCS = "vcs"
    URL = "url"


@dataclass(frozen=True)
class RegistryRef:
    """包仓库引用，如 npm:left-pad -> left-pad"""

    specifier: str
    kind: SourceKind = field(default=SourceKind.REGISTRY, init=False)

    @property
    def target(self) -> str:
        return self.specifier


@dataclass(frozen=True)
class VcsRef:
    """版本控制远端，前缀已改写为 https:"""

    url: str
    kind: SourceKind = field(default=SourceKind.VCS, init=False)

    @property
    def target(self) -> str:
        return self.url


@dataclass(frozen=True)
class DirectUrl:
    """直接下载地址（先下载到暂存目录再安装）"""

    url: str
    kind: SourceKind = field(default=SourceKind.URL, init=False)

    @property
    def target(self) -> str:
        return self.url


SourceDescriptor = Union[RegistryRef, VcsRef, DirectUrl]


# =========================================================================
# 依赖清单
# =========================================================================


@dataclass(frozen=True)
class Manifest:
    """已解析的依赖清单，加载后只读"""

    modules: dict[str, str] = field(default_factory=dict)  # 模块名 -> 来源
    performance_mode: bool = False
    source_path: str = ""


# =========================================================================
# 安装结果
# =========================================================================


class InstallStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class InstallOutcome:
    """单个模块的最终安装结果"""

    module_name: str
    status: InstallStatus
    attempts: int
    reason: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status is InstallStatus.SUCCESS


class BatchStatus(str, Enum):
    ALL_SUCCEEDED = "all_succeeded"
    AT_LEAST_ONE_FAILED = "at_least_one_failed"


@dataclass(frozen=True)
class BatchResult:
    """一次批量安装的汇总结果

    status 由 outcomes 推导：当且仅当全部成功时为 ALL_SUCCEEDED。
    not_attempted 仅在顺序模式短路时非空。
    """

    outcomes: tuple[InstallOutcome, ...] = ()
    mode: str = ""
    not_attempted: tuple[str, ...] = ()

    @property
    def status(self) -> BatchStatus:
        if all(o.succeeded for o in self.outcomes):
            return BatchStatus.ALL_SUCCEEDED
        return BatchStatus.AT_LEAST_ONE_FAILED

    @property
    def success(self) -> bool:
        return self.status is BatchStatus.ALL_SUCCEEDED

    @property
    def failed(self) -> list[InstallOutcome]:
        return [o for o in self.outcomes if not o.succeeded]

    def get(self, module_name: str) -> InstallOutcome | None:
        for o in self.outcomes:
            if o.module_name == module_name:
                return o
        return None
