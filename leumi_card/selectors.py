"""CSS selectors and ledger column layout for the card portal."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class TransactionColumns:
    """Cell index of each field within a ledger row (``td`` elements)."""

    date: int = 1
    processed_date: int = 2
    description: int = 3
    type: int = 4
    original_amount: int = 5
    charged_amount: int = 6
    comments: int = 7


@dataclass(frozen=True, slots=True)
class PortalSelectors:
    # Transactions ledger (ChargesDeals.aspx)
    card_container: str = ".infoList_holder"
    card_section: str = ".NotPaddingTable"
    transaction_row: str = ".jobs_regular"
    cell: str = "td"
    next_page: str = ".difdufLeft a"
    card_name: str = ".creditCard_name"
    card_name_item: str = "li"
    columns: TransactionColumns = field(default_factory=TransactionColumns)

    # Overview page (HomePage.aspx)
    show_list_link: str = "a#PlaceHolderMain_HomePage1_HomePageTop1_lnkShowListDisplay"
    summary_card: str = ".newCreditCard_bg"
    summary_card_top: str = ".newCreditCard_top"
    summary_charges: str = ".newCreditCard_listInfo"
    summary_charge_list: str = "ul"
    summary_charge_item: str = "li"
    summary_charge_value: str = "span"
    summary_credit_frame: str = ".creditFrame_width"
    summary_utilization: str = "a"
    summary_limit: str = "span"


DEFAULT_SELECTORS = PortalSelectors()


__all__ = ["TransactionColumns", "PortalSelectors", "DEFAULT_SELECTORS"]
