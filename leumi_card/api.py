"""Public entry point: fetch summaries and ledgers and assemble the result.

Callers hand in a browser that is already logged in (see
:class:`leumi_card.scraper.LeumiCardScraper` for the Playwright session that
does this) and get back an in-memory :class:`~leumi_card.models.ScrapeResult`.
Nothing is persisted here.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime

from .browser import Browser
from .logging_setup import get_logger
from .models import Account, AccountSummary, ScrapeOptions, ScrapeResult, Transaction
from .selectors import DEFAULT_SELECTORS, PortalSelectors
from .summary import fetch_accounts_summary
from .transactions import fetch_transactions

logger = get_logger("leumi_card.api")


def assemble_accounts(
    summaries: Mapping[str, AccountSummary],
    txns_by_account: Mapping[str, Sequence[Transaction]],
) -> list[Account]:
    """Join summaries onto ledgers by account number.

    Accounts come from the ledger mapping; a card with no matching summary gets
    ``summary=None``.
    """

    return [
        Account(
            account_number=account_number,
            summary=summaries.get(account_number),
            txns=list(txns),
        )
        for account_number, txns in txns_by_account.items()
    ]


async def fetch_account_data(
    browser: Browser,
    options: ScrapeOptions | None = None,
    *,
    now: datetime | None = None,
    selectors: PortalSelectors = DEFAULT_SELECTORS,
) -> ScrapeResult:
    """Scrape every card's summary and finalized ledger.

    Raises
    ------
    UnknownTransactionTypeError
        When any ledger row carries an unrecognized type label. No partial
        result is returned.
    """

    options = options or ScrapeOptions()
    summaries = await fetch_accounts_summary(browser, selectors)
    txns_by_account = await fetch_transactions(browser, options, now=now, selectors=selectors)
    accounts = assemble_accounts(summaries, txns_by_account)
    missing = [a.account_number for a in accounts if a.summary is None]
    if missing:
        logger.warning("no summary found for accounts: %s", ", ".join(missing))
    logger.info("assembled %d accounts", len(accounts))
    return ScrapeResult(success=True, accounts=accounts)


__all__ = ["assemble_accounts", "fetch_account_data"]
