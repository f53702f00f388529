"""Browser collaborator contract and small element helpers.

The pipeline never talks to the network itself. It drives pages through the
protocols below, which are a subset of Playwright's async API: a Playwright
``Browser``/``BrowserContext``, ``Page`` and ``ElementHandle`` satisfy them as
is, and tests plug in in-memory fakes.
"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any, Protocol, TypeAlias

from .errors import ElementNotFoundError


class Element(Protocol):
    async def query_selector(self, selector: str) -> Element | None: ...

    async def query_selector_all(self, selector: str) -> list[Element]: ...

    async def inner_text(self) -> str: ...

    async def click(self) -> None: ...


class Page(Protocol):
    @property
    def url(self) -> str: ...

    async def goto(self, url: str) -> Any: ...

    async def query_selector(self, selector: str) -> Element | None: ...

    async def query_selector_all(self, selector: str) -> list[Element]: ...

    async def click(self, selector: str) -> None: ...

    async def fill(self, selector: str, value: str) -> None: ...

    def expect_navigation(
        self, *, wait_until: str | None = None
    ) -> AbstractAsyncContextManager[Any]: ...

    async def wait_for_selector(self, selector: str, *, state: str | None = None) -> Any: ...

    async def wait_for_url(self, url: str | Callable[[str], bool]) -> None: ...

    async def close(self) -> None: ...


class Browser(Protocol):
    async def new_page(self) -> Page: ...


# Either a page or an element can be the root of a query.
Queryable: TypeAlias = Page | Element


async def click_and_wait(
    page: Page, target: Element | str, *, wait_until: str = "domcontentloaded"
) -> None:
    """Click ``target`` (an element or a selector) and wait for the navigation it triggers."""

    async with page.expect_navigation(wait_until=wait_until):
        if isinstance(target, str):
            await page.click(target)
        else:
            await target.click()


async def query_required(root: Queryable, selector: str, *, context: str | None = None) -> Element:
    element = await root.query_selector(selector)
    if element is None:
        raise ElementNotFoundError(selector, context=context)
    return element


async def query_nth(
    root: Queryable, selector: str, index: int, *, context: str | None = None
) -> Element:
    elements = await root.query_selector_all(selector)
    if index >= len(elements):
        raise ElementNotFoundError(f"{selector}[{index}]", context=context)
    return elements[index]


__all__ = [
    "Element",
    "Page",
    "Browser",
    "Queryable",
    "click_and_wait",
    "query_required",
    "query_nth",
]
