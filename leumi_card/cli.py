# ruff: noqa: I001
"""CLI for the ``leumi_card`` package.

Exposes a callable command handler (``cmd_scrape``) and a Typer-based console
interface. Environment variables (notably ``LEUMI_CARD_USERNAME`` and
``LEUMI_CARD_PASSWORD``) are loaded from a local ``.env`` using
``python-dotenv`` before delegating to the scraper. The scrape result is
printed to stdout as JSON; logs and the optional summary table go to stderr.
"""

from __future__ import annotations

import asyncio
import os
import sys
from datetime import datetime
from pathlib import Path

import typer
from dotenv import load_dotenv
from playwright.async_api import Error as PlaywrightError
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .errors import ScraperError
from .logging_setup import configure_logging
from .models import Credentials, ScrapeOptions, ScrapeResult
from .scraper import LeumiCardScraper


# ---- Small module-level helpers used by CLI commands -------------------------


def _resolve_headless(flag: bool | None) -> bool:
    """Resolve headless mode from the flag, then ``LEUMI_CARD_HEADLESS``, default true."""

    if flag is not None:
        return flag
    env_val = os.getenv("LEUMI_CARD_HEADLESS")
    if env_val is not None and env_val.strip().lower() in {"0", "false", "no"}:
        return False
    return True


def _render_summary(result: ScrapeResult, console: Console) -> None:
    table = Table(title="Accounts")
    table.add_column("Account")
    table.add_column("Card")
    table.add_column("Transactions", justify="right")
    table.add_column("Utilization", justify="right")
    table.add_column("Limit", justify="right")
    for account in result.accounts:
        summary = account.summary
        table.add_row(
            account.account_number,
            summary.card_name if summary else "-",
            str(len(account.txns)),
            f"{summary.credit_utilization:,.2f}" if summary else "-",
            f"{summary.credit_limit:,.2f}" if summary else "-",
        )
    console.print(table)


def cmd_scrape(
    *,
    username: str | None,
    password: str | None,
    start_date: datetime | None = None,
    combine_installments: bool = False,
    headless: bool | None = None,
    pretty: bool = False,
    summary: bool = False,
) -> int:
    """Log in, scrape, print the JSON result. Returns a process exit code."""

    err = Console(stderr=True)
    if not username or not password:
        print(
            "Error: credentials missing; set LEUMI_CARD_USERNAME and LEUMI_CARD_PASSWORD "
            "or pass --username/--password.",
            file=sys.stderr,
        )
        return 1

    try:
        credentials = Credentials(username=username, password=password)
        options = ScrapeOptions(
            start_date=start_date.date() if start_date else None,
            combine_installments=combine_installments,
        )
    except ValidationError as e:
        print(f"Error: invalid options: {e}", file=sys.stderr)
        return 1

    scraper = LeumiCardScraper(options, headless=_resolve_headless(headless))
    try:
        result = asyncio.run(scraper.scrape(credentials))
    except ScraperError as e:
        print(f"Error: scrape failed: {e}", file=sys.stderr)
        return 1
    except PlaywrightError as e:
        print(f"Error: browser failure: {e}", file=sys.stderr)
        return 1
    except (ValidationError, ValueError) as e:
        # Malformed ledger dates or figures the models reject.
        print(f"Error: unexpected page content: {e}", file=sys.stderr)
        return 1

    print(result.model_dump_json(by_alias=True, indent=2 if pretty else None))
    if summary and result.success:
        _render_summary(result, err)
    if not result.success:
        print(f"Error: {result.error_message}", file=sys.stderr)
        return 2
    return 0


app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    help="Scrape card summaries and transaction ledgers from the card portal.",
)


@app.command("scrape")
def scrape_cmd(
    *,
    username: str | None = typer.Option(
        None, envvar="LEUMI_CARD_USERNAME", help="Portal user name."
    ),
    password: str | None = typer.Option(
        None, envvar="LEUMI_CARD_PASSWORD", help="Portal password.", show_default=False
    ),
    start_date: datetime | None = typer.Option(
        None,
        formats=["%Y-%m-%d"],
        help="Earliest transaction date (clamped to one year back).",
    ),
    combine_installments: bool = typer.Option(
        False,
        help="Keep installment charges on the purchase date and exempt them from the window.",
    ),
    headless: bool | None = typer.Option(
        None,
        "--headless/--headful",
        help="Run Chromium headless (default; env LEUMI_CARD_HEADLESS=0 for headful).",
    ),
    pretty: bool = typer.Option(False, help="Indent the JSON output."),
    summary: bool = typer.Option(False, help="Print an accounts table to stderr."),
) -> None:
    code = cmd_scrape(
        username=username,
        password=password,
        start_date=start_date,
        combine_installments=combine_installments,
        headless=headless,
        pretty=pretty,
        summary=summary,
    )
    raise typer.Exit(code)


@app.callback(invoke_without_command=True)
def _root(
    ctx: typer.Context,
    *,
    log_level: str | None = typer.Option(
        None, help="Log level (falls back to LEUMI_CARD_LOG_LEVEL, then INFO)."
    ),
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding any
    already-set environment variables) and configures logging before any
    subcommand runs.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    try:
        configure_logging(log_level)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--log-level") from e

    if ctx.invoked_subcommand is None:
        typer.echo("No subcommand provided. Use --help to see available commands.")
        raise typer.Exit(1)


if __name__ == "__main__":  # pragma: no cover
    app()
