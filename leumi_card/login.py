"""Single-submission login against the card holders' login form.

The login is described as data (:class:`LoginOptions`): which fields to fill,
which button submits, what to wait for afterwards and which landing URLs mean
what. :func:`login` runs it and reports a :class:`LoginResult`; it never
raises for a rejected password.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum

from .browser import Page
from .constants import HOME_PAGE_URL, LOGIN_URL
from .logging_setup import get_logger
from .models import Credentials

logger = get_logger("leumi_card.login")

INPUT_GROUP_NAME = "PlaceHolderMain_CardHoldersLogin1"
WRONG_DETAILS_POPUP = "#popupWrongDetails"


class LoginResult(StrEnum):
    SUCCESS = "success"
    INVALID_PASSWORD = "invalid_password"
    UNKNOWN_ERROR = "unknown_error"


@dataclass(frozen=True, slots=True)
class LoginField:
    selector: str
    value: str


@dataclass(frozen=True, slots=True)
class LoginOptions:
    login_url: str
    fields: tuple[LoginField, ...]
    submit_button_selector: str
    possible_results: Mapping[LoginResult, tuple[str, ...]]
    post_action: Callable[[Page], Awaitable[None]] | None = None


def _normalize_url(url: str) -> str:
    return url.strip().rstrip("/").lower()


async def redirect_or_dialog(page: Page) -> None:
    """Wait until the page leaves the login URL or shows the wrong-details popup."""

    login_url = _normalize_url(LOGIN_URL)
    waiters = [
        asyncio.ensure_future(page.wait_for_url(lambda url: _normalize_url(url) != login_url)),
        asyncio.ensure_future(page.wait_for_selector(WRONG_DETAILS_POPUP, state="visible")),
    ]
    try:
        done, _pending = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for waiter in waiters:
            waiter.cancel()
        await asyncio.gather(*waiters, return_exceptions=True)
    # Surface a failure of the waiter that finished first.
    for waiter in done:
        waiter.result()


def get_possible_login_results() -> dict[LoginResult, tuple[str, ...]]:
    return {
        LoginResult.SUCCESS: (HOME_PAGE_URL,),
        LoginResult.INVALID_PASSWORD: (LOGIN_URL,),
    }


def get_login_options(credentials: Credentials) -> LoginOptions:
    return LoginOptions(
        login_url=LOGIN_URL,
        fields=(
            LoginField(f"#{INPUT_GROUP_NAME}_txtUserName", credentials.username),
            LoginField(f"#{INPUT_GROUP_NAME}_txtPassword", credentials.password.get_secret_value()),
        ),
        submit_button_selector=f"#{INPUT_GROUP_NAME}_btnLogin",
        possible_results=get_possible_login_results(),
        post_action=redirect_or_dialog,
    )


def match_login_result(
    current_url: str, possible_results: Mapping[LoginResult, tuple[str, ...]]
) -> LoginResult:
    current = _normalize_url(current_url)
    for result, urls in possible_results.items():
        if any(_normalize_url(url) == current for url in urls):
            return result
    return LoginResult.UNKNOWN_ERROR


async def login(page: Page, options: LoginOptions) -> LoginResult:
    await page.goto(options.login_url)
    await page.wait_for_selector(options.submit_button_selector)
    for field in options.fields:
        await page.fill(field.selector, field.value)
    await page.click(options.submit_button_selector)
    if options.post_action is not None:
        await options.post_action(page)

    result = match_login_result(page.url, options.possible_results)
    logger.info("login finished: %s", result.value)
    return result


__all__ = [
    "LoginResult",
    "LoginField",
    "LoginOptions",
    "redirect_or_dialog",
    "get_possible_login_results",
    "get_login_options",
    "match_login_result",
    "login",
]
