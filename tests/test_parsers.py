import math
from datetime import datetime

import pytest

from leumi_card.errors import UnknownTransactionTypeError
from leumi_card.models import Installments, TransactionType
from leumi_card.parsers import (
    classify_transaction_type,
    parse_amount,
    parse_charged_day_of_month,
    parse_date,
    parse_installments,
    parse_number,
)

# ---- amounts -------------------------------------------------------------------


def test_parse_amount_shekel_glyph():
    data = parse_amount("₪120")
    assert data.amount == 120.0
    assert data.currency == "ILS"


def test_parse_amount_strips_every_thousands_separator():
    assert parse_amount("₪1,234,567.89").amount == pytest.approx(1234567.89)
    assert parse_amount("1,250.00 EUR").amount == 1250.0


def test_parse_amount_foreign_currency_token():
    data = parse_amount("45.5 USD")
    assert data.amount == 45.5
    assert data.currency == "USD"


def test_parse_amount_is_permissive_on_garbage():
    data = parse_amount("n/a")
    assert math.isnan(data.amount)
    assert data.currency is None

    empty = parse_amount("")
    assert math.isnan(empty.amount)
    assert empty.currency is None


def test_parse_amount_takes_leading_numeric_prefix():
    assert parse_amount("12abc USD").amount == 12.0


@pytest.mark.parametrize("value", [0.0, 45.5, 120.0, 1234.56, 1e21])
def test_parse_amount_reparses_its_own_output(value):
    first = parse_amount(f"{value} USD")
    second = parse_amount(f"{first.amount} {first.currency}")
    assert second == first


# ---- transaction type --------------------------------------------------------------


@pytest.mark.parametrize(
    "label",
    ["רגילה", "חיוב עסקות מיידי", "חיוב חודשי", "דחוי חודש", "דחוי חודשיים", 'אינטרנט/חו"ל'],
)
def test_normal_labels(label):
    assert classify_transaction_type(label) is TransactionType.NORMAL


def test_installments_label_and_whitespace():
    assert classify_transaction_type("  תשלומים\n") is TransactionType.INSTALLMENTS


def test_unknown_label_raises():
    with pytest.raises(UnknownTransactionTypeError) as exc:
        classify_transaction_type("זיכוי")
    assert exc.value.label == "זיכוי"
    # Still a ValueError for callers that only know the builtin.
    assert isinstance(exc.value, ValueError)


# ---- installments ------------------------------------------------------------------


def test_installments_from_comment():
    assert parse_installments("תשלום 2 מתוך 5") == Installments(number=2, total=5)


@pytest.mark.parametrize("comment", ["", None, "הוראת קבע", "תשלום 3"])
def test_installments_absent(comment):
    assert parse_installments(comment) is None


def test_installments_uses_first_two_runs():
    assert parse_installments("1 of 12 (ref 555)") == Installments(number=1, total=12)


def test_installments_zero_position_is_kept_as_written():
    assert parse_installments("הנחה 0 מתוך 5") == Installments(number=0, total=5)
    assert parse_installments("0 0") == Installments(number=0, total=0)


# ---- dates ------------------------------------------------------------------------


def test_parse_date_is_local_midnight():
    assert parse_date("15/03/2023") == datetime(2023, 3, 15)
    assert parse_date(" 01/12/2022 ") == datetime(2022, 12, 1)


def test_parse_date_rejects_other_formats():
    with pytest.raises(ValueError):
        parse_date("2023-03-15")


# ---- summary figures ---------------------------------------------------------------


def test_parse_number_strips_glyph_and_out_of_label():
    assert parse_number("₪2,500.75") == 2500.75
    assert parse_number("מתוך ₪15,000") == 15000.0
    assert math.isnan(parse_number("—"))


def test_parse_charged_day_of_month():
    assert parse_charged_day_of_month("(10/07/2023)") == 10
    assert parse_charged_day_of_month("()") is None
    assert parse_charged_day_of_month("  ") is None


@pytest.mark.parametrize("fragment", ["(--)", "(אין)", "(/07/2023)"])
def test_parse_charged_day_of_month_placeholder_is_unknown(fragment):
    assert parse_charged_day_of_month(fragment) is None
