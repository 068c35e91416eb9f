"""
Tests for ResourceLoader: search order, package resources, failure handling.
"""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from config_resolver.domains.registry import DomainRegistry
from config_resolver.domains.system_properties import SystemProperties
from config_resolver.infrastructure.resources import LoadResult, ResourceLoader, decode
from config_resolver.services.resolver import ConfigResolver

RESOURCES = Path(__file__).parent / "resources"


@pytest.fixture
def loader() -> ResourceLoader:
    return ResourceLoader(search_paths=[RESOURCES], packages=[])


def test_load_from_directory(loader: ResourceLoader) -> None:
    result = loader.load("souza")
    assert result.ok
    assert result.properties["name"] == "souzaProperties"
    assert result.source == str(RESOURCES / "souza.properties")


def test_first_directory_wins(tmp_path: Path) -> None:
    first = tmp_path / "first"
    second = tmp_path / "second"
    first.mkdir()
    second.mkdir()
    (first / "app.properties").write_text("name=first\n", encoding="utf-8")
    (second / "app.properties").write_text("name=second\n", encoding="utf-8")

    result = ResourceLoader(search_paths=[first, second], packages=[]).load("app")
    assert result.properties == {"name": "first"}


def test_missing_file_is_empty_and_logged(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        result = ResourceLoader(search_paths=[tmp_path], packages=[]).load("nowhere")

    assert result.properties == {}
    assert result.source is None
    assert isinstance(result.error, FileNotFoundError)
    assert "nowhere.properties" in caplog.text


def test_blank_name_loads_nothing(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        result = ResourceLoader(search_paths=[tmp_path], packages=[]).load("   ")
    assert result == LoadResult()
    assert caplog.records == []


def test_bad_escape_is_empty_and_logged(loader: ResourceLoader, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        result = loader.load("broken")

    assert result.properties == {}
    assert not result.ok
    assert "broken.properties" in caplog.text


def test_permission_error_is_swallowed(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    (tmp_path / "locked.properties").write_text("k=v\n", encoding="utf-8")
    loader = ResourceLoader(search_paths=[tmp_path], packages=[])

    with caplog.at_level(logging.WARNING):
        with patch.object(Path, "read_bytes", side_effect=PermissionError("denied")):
            result = loader.load("locked")

    assert result.properties == {}
    assert isinstance(result.error, PermissionError)
    assert "denied" in caplog.text


def test_package_resources(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    pkg = tmp_path / "bundled_cfg_pkg"
    pkg.mkdir()
    (pkg / "__init__.py").write_text("", encoding="utf-8")
    (pkg / "billing.properties").write_text("currency=EUR\n", encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))

    empty_dir = tmp_path / "empty"
    empty_dir.mkdir()
    result = ResourceLoader(search_paths=[empty_dir], packages=["bundled_cfg_pkg"]).load("billing")

    assert result.properties == {"currency": "EUR"}
    assert result.source == "bundled_cfg_pkg:billing.properties"


def test_unknown_package_is_skipped(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        result = ResourceLoader(search_paths=[], packages=["no_such_pkg_for_config"]).load("x")
    assert result.properties == {}
    assert "no_such_pkg_for_config" in caplog.text


def test_defaults_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CONFIG_RESOLVER_PATH", str(tmp_path))
    monkeypatch.setenv("CONFIG_RESOLVER_PACKAGES", "pkg_a, pkg_b")
    loader = ResourceLoader()
    assert loader.search_paths == (tmp_path,)
    assert loader.packages == ("pkg_a", "pkg_b")


def test_decode_falls_back_to_latin1() -> None:
    assert decode("name=café".encode("utf-8")) == "name=café"
    assert decode("name=café".encode("iso-8859-1")) == "name=café"
    assert decode(b"\xef\xbb\xbfk=v") == "k=v"


def test_latin1_file_with_nel_byte_stays_one_line(tmp_path: Path) -> None:
    # 0x85 is "…" in Windows-1252 and NEL once decoded as ISO-8859-1
    (tmp_path / "legacy.properties").write_bytes(b"msg=caf\xe9\x85x\nnext=1\n")
    result = ResourceLoader(search_paths=[tmp_path], packages=[]).load("legacy")
    assert result.properties == {"msg": "café\x85x", "next": "1"}


def test_plain_module_anchor_is_skipped(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "plain_cfg_module.py").write_text("", encoding="utf-8")
    pkg = tmp_path / "real_cfg_pkg"
    pkg.mkdir()
    (pkg / "__init__.py").write_text("", encoding="utf-8")
    (pkg / "app.properties").write_text("name=fromPackage\n", encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))

    loader = ResourceLoader(search_paths=[], packages=["plain_cfg_module", "real_cfg_pkg"])
    result = loader.load("app")

    assert result.ok
    assert result.properties == {"name": "fromPackage"}
    assert result.source == "real_cfg_pkg:app.properties"


def test_anchor_failing_on_import_is_swallowed(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    pkg = tmp_path / "exploding_cfg_pkg"
    pkg.mkdir()
    (pkg / "__init__.py").write_text("raise RuntimeError('boom')\n", encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))

    loader = ResourceLoader(search_paths=[], packages=["exploding_cfg_pkg"])
    with caplog.at_level(logging.WARNING):
        result = loader.load("app")

    assert result.properties == {}
    assert isinstance(result.error, RuntimeError)
    assert "boom" in caplog.text

    resolver = ConfigResolver(
        registry=DomainRegistry(loader),
        system_properties=SystemProperties(include_host=False),
        environ={},
    )
    assert resolver.get("app", "name", "fallback") == "fallback"
    assert resolver.get_int("app", "size", 3) == 3
