"""Error types and exit codes for scrape_articles."""

from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit status per failure class (earliest stage wins)."""
    OK = 0
    EXTRACTION_FAILED = 1
    TEXT_SINK_FAILED = 2
    STORE_FAILED = 3
    VALIDATION_FAILED = 4
    CONFIG_ERROR = 5


class ScrapeError(Exception):
    """Base class for scrape_articles errors."""


class ConfigError(ScrapeError):
    """Configuration file missing or invalid."""


class PageFetchError(ScrapeError):
    """The listing page could not be fetched or parsed."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}")


class ExtractionFieldMissingError(ScrapeError):
    """A required field was absent or empty for one article entry."""

    def __init__(self, index: int, field: str):
        self.index = index
        self.field = field
        super().__init__(f"Article {index} is missing field '{field}'")


class MalformedDateError(ScrapeError, ValueError):
    """Raw date string has no recognizable month or day."""

    def __init__(self, raw_date: str, reason: str = "no month or day found"):
        self.raw_date = raw_date
        self.reason = reason
        super().__init__(f"Malformed date {raw_date!r}: {reason}")


class InvalidDayError(MalformedDateError):
    """Day of month is out of range for the month and year."""


class TextSinkError(ScrapeError):
    """Writing the text sink failed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write text sink {path}: {reason}")


class StoreError(ScrapeError):
    """Row store table creation, insert or query failed."""


class ValidationMismatchError(ScrapeError):
    """One or more consistency checks failed."""

    def __init__(self, failures: list):
        self.failures = failures
        super().__init__(f"{len(failures)} consistency check(s) failed")
