"""Helper functions for scrape_articles CLI."""

from __future__ import annotations

import argparse

from scrape_articles.config import Config


def parse_scrape_articles_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for scrape_articles. Every flag is optional.'''

    parser = argparse.ArgumentParser(
        description="Scrape article metadata from a listing page into a text file and a database.",
    )
    parser.add_argument("--config", default=None, help="Config name (default: CONFIG_ENV or prod).")
    parser.add_argument("--url", default=None, help="Listing page to scrape.")
    parser.add_argument("--text-sink-path", default=None, help="Path of the pipe-delimited output file.")
    parser.add_argument("--database-url", default=None, help="SQLAlchemy URL of the row store.")
    parser.add_argument("--skip-verify", action="store_true", help="Skip the consistency checks.")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def apply_args(config: Config, args: argparse.Namespace) -> Config:
    '''Override config values with any flags given on the command line.'''

    if args.url:
        config.site.url = args.url
    if args.text_sink_path:
        config.text_sink.path = args.text_sink_path
    if args.database_url:
        config.row_store.database_url = args.database_url
    if args.skip_verify:
        config.verify.enabled = False
    return config
