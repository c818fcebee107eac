"""modinstaller 命令行接口

CLI 按功能拆分为子模块，每个模块注册自己的命令到 main group。
"""

import os

import click

from modinstaller import __version__
from modinstaller.core.config import DEFAULT_CONFIG_FILE, init_config
from modinstaller.core.exceptions import ConfigError
from modinstaller.utils.logger import setup_logging


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config", "-c", "config_path",
    default=lambda: os.getenv("MODINSTALLER_CONFIG", DEFAULT_CONFIG_FILE),
    show_default=DEFAULT_CONFIG_FILE,
    help="安装器配置文件（不存在时使用默认值）",
)
def main(config_path: str) -> None:
    """modinstaller - 按清单安装自定义来源的模块"""
    setup_logging(
        level=os.getenv("MODINSTALLER_LOG_LEVEL", "INFO"),
        json_output=os.getenv("MODINSTALLER_LOG_JSON", "") == "1",
    )
    try:
        init_config(config_path)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


# 注册子命令
from modinstaller.cli.cmd_install import register as _reg_install  # noqa: E402

_reg_install(main)
