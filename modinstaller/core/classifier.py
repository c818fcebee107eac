"""模块来源分类器

将清单中的来源字符串解析为 SourceDescriptor:
  npm:<spec>          -> RegistryRef(<spec>)
  git:<path>          -> VcsRef(https://<path>)
  github:<path>       -> VcsRef(https://<path>)
  https://<...>       -> DirectUrl(原样)

纯函数，结果只取决于前缀。
"""

from __future__ import annotations

from modinstaller.core.exceptions import UnrecognizedSourceKind
from modinstaller.core.models import DirectUrl, RegistryRef, SourceDescriptor, VcsRef

REGISTRY_PREFIX = "npm:"
URL_PREFIX = "https://"

# 所有类 VCS 前缀统一改写为 https://
VCS_PREFIXES = ("git:", "github:")
VCS_REWRITE = "https://"


def classify(module_name: str, specifier: str) -> SourceDescriptor:
    """解析来源字符串

    Raises:
        UnrecognizedSourceKind: 不匹配任何已知前缀
    """
    if specifier.startswith(REGISTRY_PREFIX):
        return RegistryRef(specifier[len(REGISTRY_PREFIX):])

    for prefix in VCS_PREFIXES:
        if specifier.startswith(prefix):
            return VcsRef(VCS_REWRITE + specifier[len(prefix):])

    if specifier.startswith(URL_PREFIX):
        return DirectUrl(specifier)

    raise UnrecognizedSourceKind(module_name, specifier)
