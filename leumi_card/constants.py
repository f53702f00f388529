"""Site constants: URLs, date format, currency tokens and transaction labels."""

from __future__ import annotations

BASE_URL = "https://online.leumi-card.co.il"
HOME_PAGE_URL = f"{BASE_URL}/Registred/HomePage.aspx"
LOGIN_URL = f"{BASE_URL}/Anonymous/Login/CardHoldersLogin.aspx"
TRANSACTIONS_PATH = "Registred/Transactions/ChargesDeals.aspx"

DATE_FORMAT = "%d/%m/%Y"

SHEKEL_CURRENCY_SYMBOL = "₪"
SHEKEL_CURRENCY = "ILS"

# Localized "out of" label shown before the credit limit ("₪1,200 מתוך ₪10,000").
OUT_OF_LABEL = "מתוך"

# Transaction type labels as rendered in the ledger's type column.
NORMAL_TYPE_NAME = "רגילה"
ATM_TYPE_NAME = "חיוב עסקות מיידי"
INTERNET_SHOPPING_TYPE_NAME = 'אינטרנט/חו"ל'
INSTALLMENTS_TYPE_NAME = "תשלומים"
MONTHLY_CHARGE_TYPE_NAME = "חיוב חודשי"
ONE_MONTH_POSTPONED_TYPE_NAME = "דחוי חודש"
TWO_MONTHS_POSTPONED_TYPE_NAME = "דחוי חודשיים"
