"""Fetch a listing page and expose CSS-selector text extraction over it."""

from __future__ import annotations

import logging
from typing import Optional

import requests
from lxml import etree
from lxml import html as lxml_html
from lxml.cssselect import SelectorError

from scrape_articles.errors import PageFetchError

logger = logging.getLogger(__name__)


class PageFetcher:
    """One browsing session: navigate to a page, then query it with CSS selectors.

    Use as a context manager so the HTTP session is always closed:

        with PageFetcher(timeout=30) as fetcher:
            fetcher.navigate("https://www.theverge.com/")
            items = fetcher.select_all("ol li")
    """

    def __init__(self, timeout: int = 30, user_agent: str = "scrape-articles/1.0"):
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent})
        self.url: Optional[str] = None
        self._tree = None

    def __enter__(self) -> "PageFetcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()
        logger.debug("Closed page fetcher session")

    def navigate(self, url: str) -> None:
        """GET the page and parse it, replacing any previously loaded page."""
        logger.info("Navigating to %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise PageFetchError(url, str(exc)) from exc

        self.load_html(response.text, url)

    def load_html(self, content: str, base_url: str) -> None:
        """Parse already-fetched markup as the current page."""
        try:
            tree = lxml_html.fromstring(content)
        except (etree.ParserError, ValueError) as exc:
            raise PageFetchError(base_url, f"unparseable HTML: {exc}") from exc
        # Unresolvable hrefs are dropped so only the item holding one loses its url.
        tree.make_links_absolute(base_url, handle_failures="discard")
        self._tree = tree
        self.url = base_url

    def _select(self, element, selector: str) -> list:
        try:
            return element.cssselect(selector)
        except SelectorError as exc:
            raise PageFetchError(self.url or "", f"invalid selector {selector!r}: {exc}") from exc

    def select_all(self, selector: str) -> list:
        """Return every element on the page matching the selector, in document order."""
        if self._tree is None:
            raise PageFetchError(self.url or "", "no page loaded")
        return self._select(self._tree, selector)

    def text_of(self, element, selector: str, index: int = 0) -> Optional[str]:
        """Stripped text of the index-th descendant matching selector, or None."""
        matches = self._select(element, selector)
        if len(matches) <= index:
            return None
        return matches[index].text_content().strip()

    def attribute_of(self, element, selector: str, attribute: str, index: int = 0) -> Optional[str]:
        """Stripped attribute value of the index-th matching descendant, or None."""
        matches = self._select(element, selector)
        if len(matches) <= index:
            return None
        value = matches[index].get(attribute)
        return value.strip() if value is not None else None
