"""Public interface for the ``leumi_card`` package.

This module only re-exports the package's API functions and public models as
the stable import surface; there is no runtime logic here.
"""

from .api import assemble_accounts, fetch_account_data
from .errors import ElementNotFoundError, ScraperError, UnknownTransactionTypeError
from .login import LoginResult
from .models import (
    Account,
    AccountSummary,
    Credentials,
    Installments,
    RawTransactionRow,
    ScrapeOptions,
    ScrapeResult,
    Transaction,
    TransactionType,
)
from .normalizers import convert_transactions
from .scraper import LeumiCardScraper

__all__ = [
    # API
    "fetch_account_data",
    "assemble_accounts",
    "convert_transactions",
    "LeumiCardScraper",
    # Models / types
    "RawTransactionRow",
    "Transaction",
    "TransactionType",
    "Installments",
    "AccountSummary",
    "Account",
    "ScrapeResult",
    "ScrapeOptions",
    "Credentials",
    "LoginResult",
    # Errors
    "ScraperError",
    "UnknownTransactionTypeError",
    "ElementNotFoundError",
]
