"""Playwright session: launch Chromium, log in, then run the fetch pipeline."""

from __future__ import annotations

from datetime import datetime

from playwright.async_api import async_playwright

from .api import fetch_account_data
from .browser import Browser
from .logging_setup import get_logger
from .login import LoginResult, get_login_options, login
from .models import Credentials, ScrapeOptions, ScrapeResult
from .selectors import DEFAULT_SELECTORS, PortalSelectors

logger = get_logger("leumi_card.scraper")


class LeumiCardScraper:
    """Log in once and scrape every card reachable from the account.

    ``run`` works against any :class:`~leumi_card.browser.Browser`; ``scrape``
    owns a Playwright Chromium instance for the duration of one call. All pages
    share one browser context so the login cookies carry over to the
    concurrently opened ledger pages.
    """

    def __init__(
        self,
        options: ScrapeOptions | None = None,
        *,
        headless: bool = True,
        selectors: PortalSelectors = DEFAULT_SELECTORS,
    ) -> None:
        self.options = options or ScrapeOptions()
        self.headless = headless
        self.selectors = selectors

    async def run(
        self, browser: Browser, credentials: Credentials, *, now: datetime | None = None
    ) -> ScrapeResult:
        page = await browser.new_page()
        try:
            outcome = await login(page, get_login_options(credentials))
        finally:
            await page.close()

        if outcome is not LoginResult.SUCCESS:
            logger.warning("login failed: %s", outcome.value)
            return ScrapeResult(
                success=False,
                error_type=outcome.value,
                error_message=f"login failed: {outcome.value}",
            )

        return await fetch_account_data(
            browser, self.options, now=now, selectors=self.selectors
        )

    async def scrape(self, credentials: Credentials) -> ScrapeResult:
        async with async_playwright() as pw:
            chromium = await pw.chromium.launch(headless=self.headless)
            try:
                context = await chromium.new_context()
                return await self.run(context, credentials)
            finally:
                await chromium.close()


__all__ = ["LeumiCardScraper"]
