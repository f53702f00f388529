"""Field parsers: raw cell text → typed values.

Pure functions, no I/O. Numeric parsing is deliberately permissive: a cell
that does not start with a number yields ``nan`` instead of raising, so one
odd amount never aborts a scrape. Transaction type labels are the exception;
an unknown label raises :class:`~leumi_card.errors.UnknownTransactionTypeError`.
"""

from __future__ import annotations

import math
import re
from datetime import datetime

from .constants import (
    ATM_TYPE_NAME,
    DATE_FORMAT,
    INSTALLMENTS_TYPE_NAME,
    INTERNET_SHOPPING_TYPE_NAME,
    MONTHLY_CHARGE_TYPE_NAME,
    NORMAL_TYPE_NAME,
    ONE_MONTH_POSTPONED_TYPE_NAME,
    OUT_OF_LABEL,
    SHEKEL_CURRENCY,
    SHEKEL_CURRENCY_SYMBOL,
    TWO_MONTHS_POSTPONED_TYPE_NAME,
)
from .errors import UnknownTransactionTypeError
from .logging_setup import get_logger
from .models import AmountData, Installments, TransactionType

logger = get_logger("leumi_card.parsers")

_LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_DIGIT_RUN_RE = re.compile(r"\d+")
_LEADING_DAY_RE = re.compile(r"^\d+")

_TRANSACTION_TYPES: dict[str, TransactionType] = {
    NORMAL_TYPE_NAME: TransactionType.NORMAL,
    ATM_TYPE_NAME: TransactionType.NORMAL,
    MONTHLY_CHARGE_TYPE_NAME: TransactionType.NORMAL,
    ONE_MONTH_POSTPONED_TYPE_NAME: TransactionType.NORMAL,
    TWO_MONTHS_POSTPONED_TYPE_NAME: TransactionType.NORMAL,
    INTERNET_SHOPPING_TYPE_NAME: TransactionType.NORMAL,
    INSTALLMENTS_TYPE_NAME: TransactionType.INSTALLMENTS,
}


def _parse_float(text: str) -> float:
    # Leading-prefix semantics: "120abc" -> 120.0, "abc" -> nan.
    m = _LEADING_NUMBER_RE.match(text.strip())
    if m is None:
        logger.debug("unparseable numeral %r", text)
        return math.nan
    return float(m.group(0))


def parse_amount(amount_str: str) -> AmountData:
    """Parse ``"₪1,234.50"`` or ``"45.5 USD"`` into an :class:`AmountData`.

    With the shekel glyph present the remainder is the numeral and the
    currency is ``ILS``; otherwise the text is split on whitespace into a
    numeral and a currency-code token. Malformed input yields ``nan`` and/or
    a ``None`` currency.
    """

    text = amount_str.replace(",", "")
    if SHEKEL_CURRENCY_SYMBOL in text:
        return AmountData(
            amount=_parse_float(text.replace(SHEKEL_CURRENCY_SYMBOL, "")),
            currency=SHEKEL_CURRENCY,
        )
    parts = text.split()
    numeral = parts[0] if parts else ""
    currency = parts[1] if len(parts) > 1 else None
    return AmountData(amount=_parse_float(numeral), currency=currency)


def classify_transaction_type(label: str) -> TransactionType:
    try:
        return _TRANSACTION_TYPES[label.strip()]
    except KeyError:
        raise UnknownTransactionTypeError(label) from None


def parse_installments(comments: str | None) -> Installments | None:
    """Read ``{number, total}`` from a comment such as ``"תשלום 2 מתוך 5"``.

    Fewer than two digit runs means the row is not part of a plan.
    """

    if not comments:
        return None
    runs = _DIGIT_RUN_RE.findall(comments)
    if len(runs) < 2:
        return None
    return Installments(number=int(runs[0]), total=int(runs[1]))


def parse_date(date_str: str) -> datetime:
    """Parse ``DD/MM/YYYY`` into a naive datetime at local midnight."""

    try:
        return datetime.strptime(date_str.strip(), DATE_FORMAT)
    except ValueError as exc:
        raise ValueError(f"invalid DD/MM/YYYY date: {date_str!r}") from exc


def parse_number(value: str) -> float:
    """Parse a summary figure (``"₪1,200.50"``, ``"מתוך ₪10,000"``)."""

    text = value.replace(OUT_OF_LABEL, "").replace(SHEKEL_CURRENCY_SYMBOL, "")
    return _parse_float(text.replace(",", "").strip())


def parse_charged_day_of_month(fragment: str) -> int | None:
    """Day of month from a ``"(10/04/2023)"`` fragment.

    Empty or placeholder text (``"(--)"``) means the day is unknown.
    """

    text = fragment.replace("(", "").replace(")", "").strip()
    match = _LEADING_DAY_RE.match(text)
    if match is None:
        return None
    return int(match.group())


__all__ = [
    "parse_amount",
    "classify_transaction_type",
    "parse_installments",
    "parse_date",
    "parse_number",
    "parse_charged_day_of_month",
]
