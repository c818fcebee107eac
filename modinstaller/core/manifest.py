"""依赖清单加载

清单为 JSON 文档（通常即 package.json），结构:

    {
      "dependencies-custom": {
        "module": {"left-pad": "npm:left-pad", "widgets": "github:acme/widgets"},
        "performance": true
      }
    }

.json 文件按 JSON 解析，其余（.yml 等）经 load_yaml 解析。任何结构缺失均为 ConfigError，
在开始安装前抛出。
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import yaml

from modinstaller.core.exceptions import ConfigError
from modinstaller.core.models import Manifest
from modinstaller.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_SECTION = "dependencies-custom"


def load_manifest(path: str | Path, section: str = DEFAULT_SECTION) -> Manifest:
    """读取并校验依赖清单

    Raises:
        ConfigError: 文件不存在、无法解析、缺少 section 或 module 映射
    """
    p = Path(path)
    if not p.exists():
        raise ConfigError(f"配置文件不存在: {p}")

    try:
        data = _read_document(p)
    except (yaml.YAMLError, OSError, ValueError) as e:
        raise ConfigError(f"无法解析配置文件 {p}: {e}") from e

    custom = data.get(section)
    if not custom:
        raise ConfigError(f"{p} 中未找到 '{section}' 字段")
    if not isinstance(custom, dict):
        raise ConfigError(f"'{section}' 必须是对象")

    modules = custom.get("module")
    if not modules:
        raise ConfigError(f"'{section}' 下未定义任何模块 (module)")
    if not isinstance(modules, dict):
        raise ConfigError(f"'{section}.module' 必须是 模块名 -> 来源 的映射")

    bad = [str(name) for name, src in modules.items() if not isinstance(src, str)]
    if bad:
        raise ConfigError(f"以下模块的来源不是字符串: {', '.join(bad)}")

    manifest = Manifest(
        modules={str(name): src for name, src in modules.items()},
        # 仅字面量 true 开启并发模式
        performance_mode=custom.get("performance") is True,
        source_path=str(p),
    )
    logger.info(
        "已加载 %d 个模块 (%s): %s",
        len(manifest.modules),
        "并发模式" if manifest.performance_mode else "顺序模式",
        p,
    )
    return manifest


def _read_document(p: Path) -> dict:
    if p.suffix == ".json":
        data = json.loads(p.read_text(encoding="utf-8"))
        return data if isinstance(data, dict) else {}
    return load_yaml(p)
