"""Walk one (card, section) ledger table across all of its pages.

Every page advance is a full navigation, so element handles go stale after a
click. Containers are therefore re-queried by index on each step instead of
being held across pages.
"""

from __future__ import annotations

from .browser import Element, Page, click_and_wait, query_nth
from .errors import ElementNotFoundError
from .logging_setup import get_logger
from .models import RawTransactionRow
from .selectors import DEFAULT_SELECTORS, PortalSelectors, TransactionColumns

logger = get_logger("leumi_card.pagination")


async def get_card_containers(
    page: Page, selectors: PortalSelectors = DEFAULT_SELECTORS
) -> list[Element]:
    return await page.query_selector_all(selectors.card_container)


async def get_card_sections(
    page: Page, card_index: int, selectors: PortalSelectors = DEFAULT_SELECTORS
) -> list[Element]:
    card = await query_nth(page, selectors.card_container, card_index, context="ledger page")
    return await card.query_selector_all(selectors.card_section)


async def _get_section(
    page: Page, card_index: int, section_index: int, selectors: PortalSelectors
) -> Element:
    sections = await get_card_sections(page, card_index, selectors)
    if section_index >= len(sections):
        raise ElementNotFoundError(
            f"{selectors.card_section}[{section_index}]", context=f"card {card_index}"
        )
    return sections[section_index]


async def extract_row(
    row: Element, columns: TransactionColumns, selectors: PortalSelectors = DEFAULT_SELECTORS
) -> RawTransactionRow:
    """Read one ledger row into a named-field record."""

    cells = await row.query_selector_all(selectors.cell)

    async def cell(index: int) -> str:
        if index >= len(cells):
            raise ElementNotFoundError(f"{selectors.cell}[{index}]", context="ledger row")
        return await cells[index].inner_text()

    return RawTransactionRow(
        type_str=await cell(columns.type),
        date_str=await cell(columns.date),
        processed_date_str=await cell(columns.processed_date),
        original_amount_str=await cell(columns.original_amount),
        charged_amount_str=await cell(columns.charged_amount),
        description=await cell(columns.description),
        comments=await cell(columns.comments),
    )


async def extract_section_rows(
    page: Page,
    card_index: int,
    section_index: int,
    selectors: PortalSelectors = DEFAULT_SELECTORS,
) -> list[RawTransactionRow]:
    section = await _get_section(page, card_index, section_index, selectors)
    rows = await section.query_selector_all(selectors.transaction_row)
    return [await extract_row(row, selectors.columns, selectors) for row in rows]


async def walk_section(
    page: Page,
    card_index: int,
    section_index: int,
    selectors: PortalSelectors = DEFAULT_SELECTORS,
) -> list[RawTransactionRow]:
    """Collect a section's rows from its first page through its last.

    Rows are returned in page-visit order, document order within a page. There
    is no page cap: a "next" control that never disappears loops forever.
    """

    collected: list[RawTransactionRow] = []
    page_number = 1
    while True:
        rows = await extract_section_rows(page, card_index, section_index, selectors)
        collected.extend(rows)
        logger.debug(
            "card %d section %d page %d: %d rows",
            card_index,
            section_index,
            page_number,
            len(rows),
        )

        section = await _get_section(page, card_index, section_index, selectors)
        next_button = await section.query_selector(selectors.next_page)
        if next_button is None:
            return collected
        await click_and_wait(page, next_button)
        page_number += 1


__all__ = [
    "get_card_containers",
    "get_card_sections",
    "extract_row",
    "extract_section_rows",
    "walk_section",
]
