"""Raw ledger rows → :class:`~leumi_card.models.Transaction` records.

The portal renders charges as positive magnitudes; canonical polarity is
negative for debits, so both amounts are negated here. No validation happens
beyond what the field parsers do: a malformed amount stays ``nan``.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import RawTransactionRow, Transaction
from .parsers import (
    classify_transaction_type,
    parse_amount,
    parse_date,
    parse_installments,
)


def convert_transaction(row: RawTransactionRow) -> Transaction:
    original = parse_amount(row.original_amount_str)
    charged = parse_amount(row.charged_amount_str)
    return Transaction(
        type=classify_transaction_type(row.type_str),
        date=parse_date(row.date_str),
        processed_date=parse_date(row.processed_date_str),
        original_amount=-original.amount,
        original_currency=original.currency,
        charged_amount=-charged.amount,
        description=row.description.strip(),
        installments=parse_installments(row.comments),
    )


def convert_transactions(rows: Iterable[RawTransactionRow]) -> list[Transaction]:
    """Convert rows in order; an unknown type label aborts the whole batch."""

    return [convert_transaction(row) for row in rows]


__all__ = ["convert_transaction", "convert_transactions"]
