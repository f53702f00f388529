"""Exception types raised by the scraping pipeline."""

from __future__ import annotations


class ScraperError(RuntimeError):
    """Base class for failures that abort a scrape."""


class UnknownTransactionTypeError(ScraperError, ValueError):
    """Raised when a ledger row carries a type label outside the known set.

    The whole fetch is aborted; no partial result is returned.
    """

    def __init__(self, label: str) -> None:
        super().__init__(f"unknown transaction type {label!r}")
        self.label = label


class ElementNotFoundError(ScraperError):
    """Raised when an element the page layout guarantees is missing."""

    def __init__(self, selector: str, *, context: str | None = None) -> None:
        where = f" in {context}" if context else ""
        super().__init__(f"element not found: {selector!r}{where}")
        self.selector = selector


__all__ = ["ScraperError", "UnknownTransactionTypeError", "ElementNotFoundError"]
