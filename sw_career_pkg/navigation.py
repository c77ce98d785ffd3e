from typing import Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from playwright.async_api import Dialog, Locator, Page

from .models import QueryPagination
from .scraper_logging import debug


def build_paginated_url(href: str, pagination: Optional[QueryPagination] = None) -> str:
    """Set the one-based `page` and `pageSize` query parameters on `href`.

    Other query parameters are kept in place.
    """
    pagination = pagination or QueryPagination()
    parts = urlsplit(href)
    query = dict(parse_qsl(parts.query, keep_blank_values=True))
    query["page"] = str(pagination.page + 1)
    query["pageSize"] = str(pagination.page_size)
    return urlunsplit(parts._replace(query=urlencode(query)))


async def dismiss_dialog(dialog: Dialog) -> None:
    """Dismiss alerts/confirms so an unexpected prompt never blocks the page."""
    debug(f"Dismissing {dialog.type} dialog: {dialog.message}")
    await dialog.dismiss()


async def click_and_wait_for_navigation(page: Page, locator: Locator) -> None:
    """Click `locator` with the navigation wait armed before the click."""
    async with page.expect_navigation():
        await locator.click()


async def goto_and_wait_for_redirect(page: Page, url: str) -> None:
    """Load `url` and wait until the page has navigated away from it.

    The logout page redirects on its own once the session is cleared.
    """
    await page.goto(url)
    await page.wait_for_url(lambda current: current != url)
