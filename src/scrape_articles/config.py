"""Configuration loader for scrape_articles."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml
from dotenv import load_dotenv
from lxml.cssselect import CSSSelector, SelectorError

from scrape_articles.errors import ConfigError

load_dotenv()

CONFIG_DIR = Path(__file__).parent / "configs"
SELECTOR_FIELDS = ("item_selector", "headline_selector", "link_selector", "byline_selector")


@dataclass
class SiteConfig:
    url: str = "https://www.theverge.com/"
    item_selector: str = ".duet--recirculation--list-breaker-compact ol li"
    headline_selector: str = "a h3"
    link_selector: str = "a"
    byline_selector: str = "p span"
    author_index: int = 0
    date_index: int = 1
    request_timeout: int = 30
    user_agent: str = "scrape-articles/1.0"


@dataclass
class TextSinkConfig:
    path: str = "ddmmyyyy_verge.csv"


@dataclass
class RowStoreConfig:
    database_url: str = "sqlite:///verge.db"


@dataclass
class VerifyConfig:
    enabled: bool = True


@dataclass
class Config:
    site: SiteConfig = field(default_factory=SiteConfig)
    text_sink: TextSinkConfig = field(default_factory=TextSinkConfig)
    row_store: RowStoreConfig = field(default_factory=RowStoreConfig)
    verify: VerifyConfig = field(default_factory=VerifyConfig)


def find_config_path(config_name: str | None, config_dir: Path | None = None) -> Path:
    """Resolve a config name to a YAML path, checking CONFIG_ENV and defaulting to prod.

    Raises:
        ConfigError: If the config file doesn't exist.
    """
    if config_name is None:
        config_name = os.environ.get("CONFIG_ENV", "prod")
    if config_dir is None:
        config_dir = CONFIG_DIR

    config_path = config_dir / f"{config_name}.yaml"
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    return config_path


def load_config(config_name: str | None = None) -> Config:
    """Load configuration from YAML, then apply environment overrides.

    Args:
        config_name: Name of config file (without .yaml extension).
                    If None, uses CONFIG_ENV env var or "prod".

    Returns:
        Loaded Config object
    """
    config_path = find_config_path(config_name)

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    config = _parse_config(data)
    _apply_env_overrides(config)
    return config


def _parse_config(data: dict) -> Config:
    """Parse config dictionary into Config object."""
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping")

    site_data = data.get("site", {}) or {}
    defaults = SiteConfig()
    try:
        site = SiteConfig(
            url=site_data.get("url", defaults.url),
            item_selector=site_data.get("item_selector", defaults.item_selector),
            headline_selector=site_data.get("headline_selector", defaults.headline_selector),
            link_selector=site_data.get("link_selector", defaults.link_selector),
            byline_selector=site_data.get("byline_selector", defaults.byline_selector),
            author_index=int(site_data.get("author_index", defaults.author_index)),
            date_index=int(site_data.get("date_index", defaults.date_index)),
            request_timeout=int(site_data.get("request_timeout", defaults.request_timeout)),
            user_agent=site_data.get("user_agent", defaults.user_agent),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid site config: {exc}") from exc

    validate_selectors(site)

    text_sink = TextSinkConfig(
        path=(data.get("text_sink", {}) or {}).get("path", TextSinkConfig.path),
    )

    row_store = RowStoreConfig(
        database_url=(data.get("row_store", {}) or {}).get("database_url", RowStoreConfig.database_url),
    )

    verify = VerifyConfig(
        enabled=bool((data.get("verify", {}) or {}).get("enabled", True)),
    )

    return Config(site=site, text_sink=text_sink, row_store=row_store, verify=verify)


def validate_selectors(site: SiteConfig) -> None:
    """Compile every configured CSS selector once.

    Raises:
        ConfigError: If a selector is not valid CSS.
    """
    for name in SELECTOR_FIELDS:
        selector = getattr(site, name)
        try:
            CSSSelector(selector, translator="html")
        except (SelectorError, TypeError) as exc:
            raise ConfigError(f"Invalid {name} {selector!r}: {exc}") from exc


def _apply_env_overrides(config: Config) -> None:
    if os.environ.get("SCRAPE_URL"):
        config.site.url = os.environ["SCRAPE_URL"]
    if os.environ.get("TEXT_SINK_PATH"):
        config.text_sink.path = os.environ["TEXT_SINK_PATH"]
    if os.environ.get("DATABASE_URL"):
        config.row_store.database_url = os.environ["DATABASE_URL"]

