"""来源分类器测试"""

from __future__ import annotations

import pytest

from modinstaller.core.classifier import VCS_PREFIXES, classify
from modinstaller.core.exceptions import UnrecognizedSourceKind
from modinstaller.core.models import DirectUrl, RegistryRef, SourceKind, VcsRef


class TestClassify:
    def test_registry_strips_prefix(self) -> None:
        assert classify("left-pad", "npm:left-pad") == RegistryRef("left-pad")

    def test_registry_keeps_version_range(self) -> None:
        d = classify("lodash", "npm:lodash@^4.17.0")
        assert isinstance(d, RegistryRef)
        assert d.specifier == "lodash@^4.17.0"
        assert d.kind is SourceKind.REGISTRY

    @pytest.mark.parametrize("spec", ["github:acme/widgets", "git:acme/widgets"])
    def test_vcs_rewritten_to_https(self, spec: str) -> None:
        assert classify("widgets", spec) == VcsRef("https://acme/widgets")

    def test_every_vcs_prefix_gets_same_rewrite(self) -> None:
        for prefix in VCS_PREFIXES:
            d = classify("m", f"{prefix}host/repo.git")
            assert isinstance(d, VcsRef)
            assert d.url == "https://" + "host/repo.git"

    def test_direct_url_is_literal(self) -> None:
        url = "https://example.com/pkgs/x-1.0.0.tgz?token=abc"
        d = classify("x", url)
        assert d == DirectUrl(url)
        assert d.kind is SourceKind.URL
        assert d.target == url

    @pytest.mark.parametrize("spec", [
        "left-pad",
        "http://example.com/x.tgz",
        "file:/tmp/x.tgz",
        "NPM:left-pad",
        "",
        " npm:left-pad",
    ])
    def test_unrecognized_raises(self, spec: str) -> None:
        with pytest.raises(UnrecognizedSourceKind) as exc:
            classify("bad-mod", spec)
        assert exc.value.module_name == "bad-mod"
        assert exc.value.specifier == spec
        assert "bad-mod" in str(exc.value)

    def test_pure(self) -> None:
        assert classify("a", "github:acme/w") == classify("b", "github:acme/w")
