"""CLI — 模块安装与清单查看命令"""

from __future__ import annotations

import click

from modinstaller.core.classifier import classify
from modinstaller.core.config import get_config
from modinstaller.core.exceptions import ConfigError, UnrecognizedSourceKind
from modinstaller.core.manifest import load_manifest


def register(group: click.Group) -> None:
    group.add_command(install)
    group.add_command(list_modules)
    group.add_command(classify_source)


@click.command()
@click.option("--manifest", "-m", default=None, help="依赖清单路径（默认取配置中的 manifest）")
@click.option(
    "--mode", type=click.Choice(["auto", "concurrent", "sequential"]), default="auto",
    help="执行模式，auto 表示按清单中的 performance 标志",
)
def install(manifest: str | None, mode: str) -> None:
    """按清单安装全部自定义模块，任一失败则退出码为 1"""
    from modinstaller.core.orchestrator import start_installation
    performance = None if mode == "auto" else mode == "concurrent"
    result = start_installation(manifest, performance=performance)
    click.echo(f"已安装 {len(result.outcomes)} 个模块 ({result.mode})")


@click.command(name="modules")
@click.option("--manifest", "-m", default=None, help="依赖清单路径（默认取配置中的 manifest）")
def list_modules(manifest: str | None) -> None:
    """列出清单中的模块及其来源解析结果（不安装）"""
    cfg = get_config()
    try:
        m = load_manifest(manifest or cfg.manifest, section=cfg.section)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    mode = "并发" if m.performance_mode else "顺序"
    click.echo(f"{m.source_path}: {len(m.modules)} 个模块，{mode}模式")
    for name, source in m.modules.items():
        try:
            d = classify(name, source)
        except UnrecognizedSourceKind:
            click.echo(f"  {name:20s} [{'invalid':8s}] {source}")
            continue
        click.echo(f"  {name:20s} [{d.kind.value:8s}] {d.target}")


@click.command(name="classify")
@click.argument("specifier")
def classify_source(specifier: str) -> None:
    """解析单个来源字符串"""
    try:
        d = classify("<cli>", specifier)
    except UnrecognizedSourceKind as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"{d.kind.value}: {d.target}")
