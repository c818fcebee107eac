"""依赖清单加载测试"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from modinstaller.core.exceptions import ConfigError
from modinstaller.core.manifest import load_manifest


class TestLoadManifest:
    def test_modules_and_order(self, write_manifest) -> None:
        path = write_manifest({"z": "npm:z", "a": "github:acme/a", "m": "https://x.io/m.tgz"}, performance=True)
        m = load_manifest(path)
        assert list(m.modules) == ["z", "a", "m"]
        assert m.performance_mode is True
        assert m.source_path == str(path)

    @pytest.mark.parametrize("value", [None, False, "true", 1])
    def test_performance_only_literal_true(self, write_manifest, value: object) -> None:
        m = load_manifest(write_manifest({"a": "npm:a"}, performance=value))
        assert m.performance_mode is False

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="配置文件不存在"):
            load_manifest(tmp_path / "package.json")

    def test_missing_section(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text(json.dumps({"name": "app", "dependencies": {}}))
        with pytest.raises(ConfigError, match="dependencies-custom"):
            load_manifest(path)

    def test_missing_module_mapping(self, write_manifest) -> None:
        with pytest.raises(ConfigError, match="未定义任何模块"):
            load_manifest(write_manifest(None, performance=True))

    def test_module_not_mapping(self, write_manifest) -> None:
        with pytest.raises(ConfigError, match="映射"):
            load_manifest(write_manifest(["npm:a"]))  # type: ignore[arg-type]

    def test_non_string_source(self, write_manifest) -> None:
        with pytest.raises(ConfigError, match="bad"):
            load_manifest(write_manifest({"ok": "npm:ok", "bad": {"url": "x"}}))

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="无法解析"):
            load_manifest(path)

    def test_yaml_manifest(self, tmp_path: Path) -> None:
        path = tmp_path / "deps.yml"
        path.write_text(
            "custom:\n"
            "  module:\n"
            "    left-pad: 'npm:left-pad'\n"
            "  performance: true\n",
            encoding="utf-8",
        )
        m = load_manifest(path, section="custom")
        assert m.modules == {"left-pad": "npm:left-pad"}
        assert m.performance_mode is True
