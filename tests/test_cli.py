import json
from datetime import date
from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError
from typer.testing import CliRunner

import leumi_card.cli as cli_mod
from leumi_card.cli import _resolve_headless, app
from leumi_card.errors import UnknownTransactionTypeError
from leumi_card.models import Account, Credentials, ScrapeOptions, ScrapeResult

runner = CliRunner()


def _install_stub(monkeypatch: pytest.MonkeyPatch, outcome: ScrapeResult | Exception):
    calls: list[dict[str, Any]] = []

    class _Scraper:
        def __init__(self, options: ScrapeOptions, *, headless: bool = True) -> None:
            calls.append({"options": options, "headless": headless})

        async def scrape(self, credentials: Credentials) -> ScrapeResult:
            calls[-1]["credentials"] = credentials
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

    monkeypatch.setattr(cli_mod, "LeumiCardScraper", _Scraper)
    return calls


def test_missing_credentials_exit_1(monkeypatch):
    calls = _install_stub(monkeypatch, ScrapeResult(success=True))
    result = runner.invoke(app, ["scrape"])
    assert result.exit_code == 1
    assert calls == []


def test_scrape_prints_json_and_passes_options(monkeypatch):
    outcome = ScrapeResult(success=True, accounts=[Account(account_number="1234")])
    calls = _install_stub(monkeypatch, outcome)

    result = runner.invoke(
        app,
        ["scrape", "--start-date", "2023-05-01", "--combine-installments", "--headful"],
        env={"LEUMI_CARD_USERNAME": "me", "LEUMI_CARD_PASSWORD": "pw"},
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload == {
        "success": True,
        "accounts": [{"accountNumber": "1234", "summary": None, "txns": []}],
        "errorType": None,
        "errorMessage": None,
    }
    (call,) = calls
    assert call["options"] == ScrapeOptions(
        start_date=date(2023, 5, 1), combine_installments=True
    )
    assert call["headless"] is False
    assert call["credentials"].username == "me"
    assert call["credentials"].password.get_secret_value() == "pw"


def test_credentials_from_dotenv(monkeypatch, tmp_path: Path):
    (tmp_path / ".env").write_text("LEUMI_CARD_USERNAME=fromfile\nLEUMI_CARD_PASSWORD=pw\n")
    calls = _install_stub(monkeypatch, ScrapeResult(success=True))

    result = runner.invoke(app, ["scrape"])

    assert result.exit_code == 0, result.output
    assert calls[0]["credentials"].username == "fromfile"


def test_login_failure_exit_2(monkeypatch):
    _install_stub(
        monkeypatch,
        ScrapeResult(
            success=False, error_type="invalid_password", error_message="login failed"
        ),
    )
    result = runner.invoke(
        app, ["scrape"], env={"LEUMI_CARD_USERNAME": "me", "LEUMI_CARD_PASSWORD": "pw"}
    )
    assert result.exit_code == 2


def test_scrape_error_exit_1(monkeypatch):
    _install_stub(monkeypatch, UnknownTransactionTypeError("???"))
    result = runner.invoke(
        app, ["scrape"], env={"LEUMI_CARD_USERNAME": "me", "LEUMI_CARD_PASSWORD": "pw"}
    )
    assert result.exit_code == 1


def test_resolve_headless(monkeypatch):
    assert _resolve_headless(None) is True
    assert _resolve_headless(False) is False
    monkeypatch.setenv("LEUMI_CARD_HEADLESS", "0")
    assert _resolve_headless(None) is False
    assert _resolve_headless(True) is True


def _validation_error() -> ValidationError:
    try:
        Credentials(username="", password="pw")
    except ValidationError as e:
        return e
    raise AssertionError("expected a validation error")


@pytest.mark.parametrize(
    "error",
    [ValueError("invalid DD/MM/YYYY date: '2023-13-45'"), _validation_error()],
)
def test_malformed_page_content_exit_1_without_traceback(monkeypatch, error):
    _install_stub(monkeypatch, error)
    result = runner.invoke(
        app, ["scrape"], env={"LEUMI_CARD_USERNAME": "me", "LEUMI_CARD_PASSWORD": "pw"}
    )
    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Error: unexpected page content" in result.output


def test_unknown_log_level_is_a_usage_error(monkeypatch):
    calls = _install_stub(monkeypatch, ScrapeResult(success=True))
    result = runner.invoke(
        app,
        ["--log-level", "chatty", "scrape"],
        env={"LEUMI_CARD_USERNAME": "me", "LEUMI_CARD_PASSWORD": "pw"},
    )
    assert result.exit_code == 2
    assert calls == []
