"""Month-by-month ledger acquisition and cross-month merge.

One fetch task per billing month in the window plus one for the current
(not yet charged) view. Each task owns its own page, and all tasks run
concurrently. Results are merged only after every task has settled, so no
state is shared while fetches are in flight.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import TypeAlias
from urllib.parse import urlencode

from .browser import Browser, Page, query_nth, query_required
from .constants import BASE_URL, TRANSACTIONS_PATH
from .dates import compute_start, get_all_month_starts
from .finalize import prepare_transactions
from .logging_setup import get_logger
from .models import RawTransactionRow, ScrapeOptions, Transaction
from .normalizers import convert_transactions
from .pagination import get_card_containers, get_card_sections, walk_section
from .pmap import p_map
from .selectors import DEFAULT_SELECTORS, PortalSelectors

logger = get_logger("leumi_card.transactions")

AccountTransactions: TypeAlias = dict[str, list[Transaction]]


def get_transactions_url(month: datetime | None) -> str:
    """Ledger URL for a billing month, or for the current view when ``month`` is None."""

    params: dict[str, str | int] = {"ActionType": 1}
    if month is not None:
        params = {"ActionType": 2, "MonthCharge": f"{month.year}{month.month:02d}"}
    params["Index"] = -2
    return f"{BASE_URL}/{TRANSACTIONS_PATH}?{urlencode(params)}"


async def get_account_number(
    page: Page, card_index: int, selectors: PortalSelectors = DEFAULT_SELECTORS
) -> str:
    card = await query_nth(page, selectors.card_container, card_index, context="ledger page")
    header = await query_required(card, selectors.card_name, context=f"card {card_index}")
    number_item = await query_nth(
        header, selectors.card_name_item, 1, context=f"card {card_index} header"
    )
    text = await number_item.inner_text()
    return text.replace("(", "").replace(")", "").strip()


async def fetch_current_transactions(
    page: Page, selectors: PortalSelectors = DEFAULT_SELECTORS
) -> AccountTransactions:
    """Read every card's every section on the already-loaded ledger page."""

    result: AccountTransactions = {}
    containers = await get_card_containers(page, selectors)
    for card_index in range(len(containers)):
        rows: list[RawTransactionRow] = []
        sections = await get_card_sections(page, card_index, selectors)
        for section_index in range(len(sections)):
            rows.extend(await walk_section(page, card_index, section_index, selectors))

        account_number = await get_account_number(page, card_index, selectors)
        result.setdefault(account_number, []).extend(convert_transactions(rows))
    return result


async def fetch_transactions_for_month(
    browser: Browser,
    month: datetime | None = None,
    selectors: PortalSelectors = DEFAULT_SELECTORS,
) -> AccountTransactions:
    url = get_transactions_url(month)
    label = month.strftime("%Y-%m") if month is not None else "current"
    page = await browser.new_page()
    try:
        await page.goto(url)
        result = await fetch_current_transactions(page, selectors)
    finally:
        await page.close()

    logger.info(
        "fetched %s ledger: %d accounts, %d transactions",
        label,
        len(result),
        sum(len(v) for v in result.values()),
    )
    return result


def merge_results(results: Iterable[Mapping[str, list[Transaction]]]) -> AccountTransactions:
    """Concatenate per-account lists across task results, in input order."""

    merged: AccountTransactions = {}
    for result in results:
        for account_number, txns in result.items():
            merged.setdefault(account_number, []).extend(txns)
    return merged


async def fetch_transactions(
    browser: Browser,
    options: ScrapeOptions,
    *,
    now: datetime | None = None,
    selectors: PortalSelectors = DEFAULT_SELECTORS,
) -> AccountTransactions:
    """Fetch, merge and finalize every account's ledger over the window."""

    now = now or datetime.now()
    start = compute_start(options.start_date, now)
    months: list[datetime | None] = [*get_all_month_starts(start, now), None]
    logger.info(
        "fetching %d ledger views from %s (combine_installments=%s)",
        len(months),
        start.date().isoformat(),
        options.combine_installments,
    )

    async def _fetch(month: datetime | None) -> AccountTransactions:
        return await fetch_transactions_for_month(browser, month, selectors)

    results = await p_map(months, _fetch)
    merged = merge_results(results)
    return {
        account_number: prepare_transactions(txns, start, options.combine_installments)
        for account_number, txns in merged.items()
    }


__all__ = [
    "get_transactions_url",
    "get_account_number",
    "fetch_current_transactions",
    "fetch_transactions_for_month",
    "merge_results",
    "fetch_transactions",
]
