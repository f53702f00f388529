"""Per-account finalization: installment dating, ordering and the window filter."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from .dates import add_months
from .models import Transaction, TransactionType


def _is_installment(txn: Transaction) -> bool:
    return txn.type is TransactionType.INSTALLMENTS


def fix_installments(txns: Iterable[Transaction]) -> list[Transaction]:
    """Move each installment charge to the month it is billed in.

    The portal lists every installment with the original purchase date;
    installment ``n`` is charged ``n - 1`` months after it. A zero position
    stays on the purchase date.
    """

    fixed: list[Transaction] = []
    for txn in txns:
        if _is_installment(txn) and txn.installments is not None:
            txn = txn.model_copy(
                update={"date": add_months(txn.date, max(txn.installments.number - 1, 0))}
            )
        fixed.append(txn)
    return fixed


def sort_transactions_by_date(txns: Iterable[Transaction]) -> list[Transaction]:
    # sorted() is stable: same-day rows keep their merged order.
    return sorted(txns, key=lambda t: t.date)


def filter_old_transactions(
    txns: Iterable[Transaction], start: datetime, combine_installments: bool
) -> list[Transaction]:
    """Drop rows dated before ``start``.

    In ``combine_installments`` mode installment rows are kept regardless of
    date: the purchase may predate the window while charges are still due.
    """

    return [
        t
        for t in txns
        if t.date >= start or (combine_installments and _is_installment(t))
    ]


def prepare_transactions(
    txns: Sequence[Transaction], start: datetime, combine_installments: bool
) -> list[Transaction]:
    prepared = list(txns)
    if not combine_installments:
        prepared = fix_installments(prepared)
    prepared = sort_transactions_by_date(prepared)
    return filter_old_transactions(prepared, start, combine_installments)


__all__ = [
    "fix_installments",
    "sort_transactions_by_date",
    "filter_old_transactions",
    "prepare_transactions",
]
