"""Data models for the ``leumi_card`` scraping pipeline.

Two families live here:

- transient scraped records (:class:`RawTransactionRow`), plain frozen
  dataclasses holding untouched cell text;
- the typed result surface (:class:`Transaction`, :class:`AccountSummary`,
  :class:`Account`, :class:`ScrapeResult`), pydantic models so callers can
  serialize them directly (JSON keys are camelCase).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic.alias_generators import to_camel

# ---------------------------------------------------------------------------
# Scraped (untyped) records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RawTransactionRow:
    """One ledger row as scraped, keyed by field name rather than column index."""

    type_str: str
    date_str: str
    processed_date_str: str
    original_amount_str: str
    charged_amount_str: str
    description: str
    comments: str


@dataclass(frozen=True, slots=True)
class AmountData:
    """A parsed amount and its currency token.

    ``amount`` is ``nan`` and ``currency`` ``None`` when the text is malformed;
    callers propagate these values rather than rejecting the row.
    """

    amount: float
    currency: str | None


# ---------------------------------------------------------------------------
# Result surface
# ---------------------------------------------------------------------------


class TransactionType(StrEnum):
    NORMAL = "normal"
    INSTALLMENTS = "installments"


class _ResultModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Installments(_ResultModel):
    """Position within an installment plan, as written in the row comment.

    Values are normally 1-based; the portal occasionally prints 0.
    """

    number: int = Field(ge=0)
    total: int = Field(ge=0)


class Transaction(_ResultModel):
    """A normalized ledger entry.

    Amounts are signed: scraped magnitudes are charges, so purchases come out
    negative. ``original_*`` is in the currency of the purchase,
    ``charged_amount`` in the card's settlement currency.
    """

    type: TransactionType
    date: datetime
    processed_date: datetime
    original_amount: float
    original_currency: str | None
    charged_amount: float
    description: str
    installments: Installments | None = None


class AccountSummary(_ResultModel):
    """Current-state figures shown for one card on the overview page."""

    card_name: str
    credit_limit: float
    credit_utilization: float
    charged_day_of_month: int | None
    upcoming_local_charge: float
    upcoming_foreign_charge_in_local: float


class Account(_ResultModel):
    account_number: str
    summary: AccountSummary | None = None
    txns: list[Transaction] = Field(default_factory=list)


class ScrapeResult(_ResultModel):
    """Top-level outcome of one scrape.

    ``error_type``/``error_message`` are only populated when the login step
    did not succeed; failures inside the fetch pipeline raise instead.
    """

    success: bool
    accounts: list[Account] = Field(default_factory=list)
    error_type: str | None = None
    error_message: str | None = None


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class ScrapeOptions(BaseModel):
    """Caller options for :func:`leumi_card.api.fetch_account_data`.

    ``start_date`` defaults to one year ago and is clamped so that no more than
    one year of history is requested. ``combine_installments`` keeps scraped
    installment charges on their original purchase date and exempts them from
    the window filter; when false (default) each installment is moved to the
    month it is charged in.
    """

    model_config = ConfigDict(extra="forbid")

    start_date: datetime | date | None = None
    combine_installments: bool = False


class Credentials(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    username: str = Field(min_length=1)
    password: SecretStr


__all__ = [
    "RawTransactionRow",
    "AmountData",
    "TransactionType",
    "Installments",
    "Transaction",
    "AccountSummary",
    "Account",
    "ScrapeResult",
    "ScrapeOptions",
    "Credentials",
]
