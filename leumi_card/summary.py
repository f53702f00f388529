"""Per-card summary figures from the portal's overview page."""

from __future__ import annotations

from .browser import Browser, Element, Page, click_and_wait, query_nth, query_required
from .constants import HOME_PAGE_URL
from .errors import ElementNotFoundError
from .logging_setup import get_logger
from .models import AccountSummary
from .parsers import parse_charged_day_of_month, parse_number
from .selectors import DEFAULT_SELECTORS, PortalSelectors

logger = get_logger("leumi_card.summary")


async def _charge_spans(
    charges: Element, list_index: int, selectors: PortalSelectors
) -> list[Element]:
    charge_list = await query_nth(
        charges, selectors.summary_charge_list, list_index, context="card charges"
    )
    item = await query_nth(charge_list, selectors.summary_charge_item, 0, context="card charges")
    return await item.query_selector_all(selectors.summary_charge_value)


async def read_card_summary(
    card: Element, selectors: PortalSelectors = DEFAULT_SELECTORS
) -> tuple[str, AccountSummary]:
    """Return ``(account_number, summary)`` for one card element."""

    top = await query_required(card, selectors.summary_card_top, context="summary card")
    name_box = await query_required(top, selectors.card_name, context="summary card top")
    name_item = await query_nth(name_box, selectors.card_name_item, 0, context="card name")
    number_item = await query_nth(name_box, selectors.card_name_item, 1, context="card name")
    card_name = (await name_item.inner_text()).strip()
    account_number = (await number_item.inner_text()).replace("(", "").replace(")", "").strip()

    charges = await query_required(card, selectors.summary_charges, context="summary card")
    local_spans = await _charge_spans(charges, 0, selectors)
    foreign_spans = await _charge_spans(charges, 1, selectors)
    if len(local_spans) < 2 or not foreign_spans:
        raise ElementNotFoundError(selectors.summary_charge_value, context="card charges")

    frame = await query_required(card, selectors.summary_credit_frame, context="summary card")
    utilization = await query_required(frame, selectors.summary_utilization, context="credit frame")
    limit = await query_required(frame, selectors.summary_limit, context="credit frame")

    summary = AccountSummary(
        card_name=card_name,
        credit_limit=parse_number(await limit.inner_text()),
        credit_utilization=parse_number(await utilization.inner_text()),
        charged_day_of_month=parse_charged_day_of_month(await local_spans[1].inner_text()),
        upcoming_local_charge=parse_number(await local_spans[0].inner_text()),
        upcoming_foreign_charge_in_local=parse_number(await foreign_spans[0].inner_text()),
    )
    return account_number, summary


async def _read_summaries(page: Page, selectors: PortalSelectors) -> dict[str, AccountSummary]:
    await page.goto(HOME_PAGE_URL)
    # The overview starts as a carousel; the list view holds every card's figures.
    await click_and_wait(page, selectors.show_list_link, wait_until="load")

    summaries: dict[str, AccountSummary] = {}
    for card in await page.query_selector_all(selectors.summary_card):
        account_number, summary = await read_card_summary(card, selectors)
        summaries[account_number] = summary
    return summaries


async def fetch_accounts_summary(
    browser: Browser, selectors: PortalSelectors = DEFAULT_SELECTORS
) -> dict[str, AccountSummary]:
    page = await browser.new_page()
    try:
        summaries = await _read_summaries(page, selectors)
    finally:
        await page.close()
    logger.info("read summaries for %d cards", len(summaries))
    return summaries


__all__ = ["read_card_summary", "fetch_accounts_summary"]
