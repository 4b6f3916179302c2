"""Tests for scrape_articles.config module."""

from unittest.mock import patch

import pytest

from scrape_articles import config as config_module
from scrape_articles.config import (
    Config,
    _parse_config,
    find_config_path,
    load_config,
)
from scrape_articles.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("CONFIG_ENV", "SCRAPE_URL", "TEXT_SINK_PATH", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    def test_prod_defaults(self) -> None:
        config = load_config("prod")
        assert config.site.url == "https://www.theverge.com/"
        assert config.site.item_selector == ".duet--recirculation--list-breaker-compact ol li"
        assert config.text_sink.path == "ddmmyyyy_verge.csv"
        assert config.row_store.database_url == "sqlite:///verge.db"
        assert config.verify.enabled is True

    def test_config_env_selects_file(self, monkeypatch) -> None:
        monkeypatch.setenv("CONFIG_ENV", "local")
        config = load_config()
        assert config.text_sink.path == "output/ddmmyyyy_verge.csv"
        assert config.site.request_timeout == 10
        assert config.site.headline_selector == "a h3"

    def test_env_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("SCRAPE_URL", "https://example.com/")
        monkeypatch.setenv("TEXT_SINK_PATH", "/tmp/out.csv")
        monkeypatch.setenv("DATABASE_URL", "sqlite:///other.db")
        config = load_config("prod")
        assert config.site.url == "https://example.com/"
        assert config.text_sink.path == "/tmp/out.csv"
        assert config.row_store.database_url == "sqlite:///other.db"

    def test_missing_file_raises(self) -> None:
        with pytest.raises(ConfigError):
            load_config("does-not-exist")

    def test_invalid_yaml_raises(self, tmp_path) -> None:
        (tmp_path / "broken.yaml").write_text("site: [unclosed\n")
        with patch.object(config_module, "CONFIG_DIR", tmp_path):
            with pytest.raises(ConfigError):
                load_config("broken")


class TestFindConfigPath:
    def test_defaults_to_prod(self) -> None:
        assert find_config_path(None).name == "prod.yaml"

    def test_custom_dir(self, tmp_path) -> None:
        (tmp_path / "dev.yaml").write_text("{}")
        assert find_config_path("dev", tmp_path) == tmp_path / "dev.yaml"


class TestParseConfig:
    def test_empty_dict_uses_defaults(self) -> None:
        assert _parse_config({}) == Config()

    def test_non_numeric_index_raises(self) -> None:
        with pytest.raises(ConfigError):
            _parse_config({"site": {"date_index": "second"}})

    def test_non_mapping_raises(self) -> None:
        with pytest.raises(ConfigError):
            _parse_config(["not", "a", "mapping"])


    def test_invalid_selector_raises(self) -> None:
        with pytest.raises(ConfigError, match="item_selector"):
            _parse_config({"site": {"item_selector": "ol li["}})
