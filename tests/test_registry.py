"""Tests for the adapter registry."""

import pytest

from leb.adapters import (
    ADAPTER_SPECS,
    AdapterNotFoundError,
    adapter_exists,
    default_adapters_dir,
    get_adapter_config,
    get_adapter_spec,
    list_adapters,
)
from leb.models import AdapterName, RuntimeName


def test_list_adapters():
    assert list_adapters() == ["keepsuit", "kalimatas", "shopify"]
    assert set(list_adapters()) == {str(n) for n in AdapterName}


def test_adapter_exists():
    assert adapter_exists("shopify")
    assert not adapter_exists("twig")


def test_unknown_adapter():
    with pytest.raises(AdapterNotFoundError) as exc_info:
        get_adapter_spec("twig")
    assert str(exc_info.value) == "Unknown adapter: 'twig'"


def test_php_adapter_config(tmp_path):
    config = get_adapter_config("keepsuit", tmp_path)
    assert config.lang == RuntimeName.PHP
    assert config.command[0] == "php"
    assert "opcache.enable_cli=1" in config.command
    assert config.command[-1] == str(tmp_path / "php" / "keepsuit.php")
    assert config.script == tmp_path / "php" / "keepsuit.php"


def test_ruby_adapter_enables_yjit(tmp_path):
    config = get_adapter_config("shopify", tmp_path)
    assert config.command == ["ruby", str(tmp_path / "ruby" / "shopify.rb")]
    assert config.env == {"RUBY_YJIT_ENABLE": "1"}


def test_config_env_is_a_copy(tmp_path):
    config = get_adapter_config("shopify", tmp_path)
    config.env["EXTRA"] = "1"
    assert "EXTRA" not in ADAPTER_SPECS[AdapterName.SHOPIFY].env


def test_default_adapters_dir(tmp_path, monkeypatch):
    monkeypatch.delenv("LEB_ADAPTERS_DIR", raising=False)
    monkeypatch.setenv("LEB_PROJECT_ROOT", str(tmp_path))
    assert default_adapters_dir() == tmp_path / "src" / "adapters"
    monkeypatch.setenv("LEB_ADAPTERS_DIR", str(tmp_path / "custom"))
    assert default_adapters_dir() == tmp_path / "custom"
