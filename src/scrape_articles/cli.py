"""CLI for scraping articles into the text sink and row store."""

from __future__ import annotations

import logging
import sys

from common.cli_helpers import setup_logging
from scrape_articles.config import load_config
from scrape_articles.errors import ConfigError, ExitCode
from scrape_articles.helpers import apply_args, parse_scrape_articles_args
from scrape_articles.scrape_articles import scrape_articles

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    args = parse_scrape_articles_args(argv)
    setup_logging(args.verbose)

    try:
        config = apply_args(load_config(args.config), args)
    except ConfigError as e:
        logger.error("%s", e)
        return ExitCode.CONFIG_ERROR

    summary = scrape_articles(config)

    if summary.skipped_extraction or summary.skipped_text_sink:
        logger.warning(
            "Skipped %d articles during extraction and %d in the text sink",
            summary.skipped_extraction,
            summary.skipped_text_sink,
        )

    return summary.exit_code


if __name__ == "__main__":
    sys.exit(main())
