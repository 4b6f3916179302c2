"""Extract raw article fields from the listing page."""

import logging

from scrape_articles.config import SiteConfig
from scrape_articles.errors import ExtractionFieldMissingError
from scrape_articles.models import ArticleRecord, ExtractionResult, RawArticle, SkippedArticle

logger = logging.getLogger(__name__)


def _require(value, index: int, field: str) -> str:
    if not value:
        raise ExtractionFieldMissingError(index, field)
    return value


def extract_article(page_fetcher, item, index: int, site: SiteConfig) -> RawArticle:
    """Pull headline, url, author and date from one list item.

    Raises:
        ExtractionFieldMissingError: If any of the four fields is absent or empty.
    """
    headline = page_fetcher.text_of(item, site.headline_selector)
    url = page_fetcher.attribute_of(item, site.link_selector, "href")
    author = page_fetcher.text_of(item, site.byline_selector, site.author_index)
    raw_date = page_fetcher.text_of(item, site.byline_selector, site.date_index)

    return RawArticle(
        headline=_require(headline, index, "headline"),
        url=_require(url, index, "url"),
        author=_require(author, index, "author"),
        raw_date=_require(raw_date, index, "date"),
    )


def extract_articles(page_fetcher, site: SiteConfig) -> ExtractionResult:
    """Navigate to the listing page and extract every article entry.

    Entries missing a field are skipped and recorded; the rest keep document order.
    """
    page_fetcher.navigate(site.url)
    items = page_fetcher.select_all(site.item_selector)
    logger.info("Found %d article entries on %s", len(items), site.url)

    result = ExtractionResult()
    for index, item in enumerate(items):
        try:
            article = extract_article(page_fetcher, item, index, site)
        except ExtractionFieldMissingError as e:
            logger.warning("Skipping article %d: missing %s", e.index, e.field)
            result.skipped.append(
                SkippedArticle(index=e.index, reason="missing field", field=e.field)
            )
            continue
        result.articles.append(article)

    logger.info("Extracted %d articles (%d skipped)", len(result.articles), len(result.skipped))
    return result


def to_records(raw_articles: list[RawArticle]) -> list[ArticleRecord]:
    """Build the export batch from raw articles, keeping order."""
    return [
        ArticleRecord(
            url=raw.url,
            headline=raw.headline,
            author=raw.author,
            raw_date=raw.raw_date,
        )
        for raw in raw_articles
    ]
