"""集中配置管理

包管理器命令、暂存目录、下载超时等统一从此处读取。
支持从 YAML 文件加载 + 编程式覆盖。
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from modinstaller.core.exceptions import ConfigError
from modinstaller.utils.yaml_io import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "configs/default.yml"


@dataclass
class Config:
    """安装器全局配置"""

    # 清单
    manifest: str = "package.json"
    section: str = "dependencies-custom"

    # 安装
    package_manager: str = "npm install"
    staging_dir: str = "temp_modules"

    # 下载
    download_timeout: float = 60
    chunk_size: int = 64 * 1024

    # 并发模式线程数，0 表示每个模块一个线程
    max_workers: int = 0

    # 无法映射到字段的配置项
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_file(cls, path: str | Path = DEFAULT_CONFIG_FILE) -> Config:
        """从 YAML 文件加载配置，不存在则返回默认"""
        data = load_yaml(path)
        if not data:
            return cls()
        known = {f.name for f in cls.__dataclass_fields__.values()} - {"extra"}
        matched = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        try:
            cfg = cls(**matched)
        except TypeError as e:
            raise ConfigError(f"配置文件 {path} 无效: {e}") from e
        cfg.extra = extra
        cfg.validate()
        return cfg

    def validate(self) -> None:
        if not str(self.package_manager).strip():
            raise ConfigError("package_manager 不能为空")
        if self.max_workers < 0:
            raise ConfigError("max_workers 必须 >= 0")
        if self.chunk_size <= 0:
            raise ConfigError("chunk_size 必须 > 0")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# 全局单例，首次 import 时不加载文件；由 CLI 入口显式初始化
_current: Config | None = None


def get_config() -> Config:
    """获取当前配置（未初始化则返回默认值）"""
    global _current  # noqa: PLW0603
    if _current is None:
        _current = Config()
    return _current


def init_config(path: str | Path = DEFAULT_CONFIG_FILE) -> Config:
    """从文件初始化全局配置"""
    global _current  # noqa: PLW0603
    _current = Config.from_file(path)
    logger.debug("配置已加载: %s", path)
    return _current


def reset_config() -> None:
    """恢复为未初始化状态（测试用）"""
    global _current  # noqa: PLW0603
    _current = None
