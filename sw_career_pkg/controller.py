from typing import Any, Dict, List, Optional, Protocol, Sequence

from playwright.async_api import Browser, Page

from . import config
from .browser import launch_browser, new_page, shutdown_browser
from .errors import LoginFailedError, SessionClosedError
from .extraction import ISSUE_REQUEST_ROWS_JS, ISSUE_REQUEST_ROWS_SELECTOR, parse_issue_request_rows
from .models import AccountType, CertificateIssueRequest, ExpertiseSection, QueryPagination
from .navigation import (
    build_paginated_url,
    click_and_wait_for_navigation,
    dismiss_dialog,
    goto_and_wait_for_redirect,
)
from .scraper_logging import add_debug, debug, save_debug_files


# Only own properties of the global object count; anything else reads as undefined.
GLOBAL_PROPERTIES_JS = """
(names) => Object.fromEntries(names.map((name) => [
    name,
    Object.prototype.hasOwnProperty.call(globalThis, name) ? globalThis[name] : undefined,
]))
"""


class PropertyReader(Protocol):
    """Reads named values from an opaque page execution context."""

    async def evaluate_and_extract(self, names: Sequence[str]) -> Dict[str, Any]:
        ...


class PagePropertyReader:
    """PropertyReader backed by a Playwright page's global scope."""

    def __init__(self, page: Page):
        self.page = page

    async def evaluate_and_extract(self, names: Sequence[str]) -> Dict[str, Any]:
        names = list(names)
        values = await self.page.evaluate(GLOBAL_PROPERTIES_JS, names) or {}
        return {name: values.get(name) for name in names}


class CareerAccountController:
    """One signed-in browser session on the SW career portal.

    Create it with `start()`, call any number of fetches, then `finalize()`
    exactly once. The page is always ours; the browser is ours only when
    `start()` launched it (`owns_browser`).
    """

    def __init__(
        self,
        browser: Browser,
        page: Page,
        owns_browser: bool,
        reader: Optional[PropertyReader] = None,
    ):
        self.browser = browser
        self.page = page
        self.owns_browser = owns_browser
        self.reader = reader or PagePropertyReader(page)
        self.debug_msgs: List[str] = []
        self.finalized = False

    @classmethod
    async def start(
        cls,
        user_id: str,
        password: str,
        account_type: AccountType = AccountType.PERSONAL,
        browser: Optional[Browser] = None,
        headless: Optional[bool] = None,
        debug_mode: bool = False,
    ) -> "CareerAccountController":
        """Sign in and return a live controller.

        Raises LoginFailedError when the portal leaves us on the login page;
        the session is finalized before raising.
        """
        owns_browser = browser is None
        if browser is None:
            browser = await launch_browser(headless=config.HEADLESS if headless is None else headless)

        page = await new_page(browser)
        controller = cls(browser, page, owns_browser)
        page.on("dialog", dismiss_dialog)

        await page.goto(config.LOGIN_URL)
        await page.locator(f'input[name=memberDiv][value="{AccountType(account_type).value}"]').click()
        await page.locator("#input_id").fill(user_id)
        await page.locator("#input_pw").fill(password)

        debug("Trying to sign in")
        add_debug(controller.debug_msgs, "LOGIN_ATTEMPT")
        await click_and_wait_for_navigation(page, page.locator(".btn_login"))

        if page.url == config.LOGIN_URL:
            add_debug(controller.debug_msgs, "LOGIN_FAILED")
            debug_files = await save_debug_files(page, "login_failed") if debug_mode else None
            await controller.finalize(close_browser=owns_browser)
            raise LoginFailedError(debug_files=debug_files)

        debug("Signed in")
        add_debug(controller.debug_msgs, "LOGIN_OK")
        return controller

    def _ensure_open(self) -> None:
        if self.finalized:
            raise SessionClosedError("Session already finalized")

    async def finalize(self, close_browser: Optional[bool] = None) -> None:
        """Sign out, close the page and release the browser.

        When `close_browser` is not given it follows `owns_browser` rather
        than always closing: a browser we launched is closed, a borrowed one
        is left running for its owner. Pass `close_browser=True` to close a
        borrowed browser as well.

        The page and browser are released even when the logout navigation
        fails; that failure is raised afterwards.
        """
        self._ensure_open()
        self.finalized = True
        if close_browser is None:
            close_browser = self.owns_browser

        try:
            await goto_and_wait_for_redirect(self.page, config.LOGOUT_URL)
            add_debug(self.debug_msgs, "LOGOUT")
        finally:
            try:
                await self.page.close()
            finally:
                if close_browser:
                    await shutdown_browser(self.browser)

    async def get_global_properties(self, names: Sequence[str]) -> Dict[str, Any]:
        """Read page-global values by name; missing names map to None."""
        self._ensure_open()
        return await self.reader.evaluate_and_extract(names)

    async def fetch_expertises(self) -> Dict[str, Any]:
        """Return the raw value of every expertise section on the write page."""
        self._ensure_open()
        await self.page.goto(config.EXPERTISE_URL)
        add_debug(self.debug_msgs, "EXPERTISES")
        return await self.get_global_properties([section.value for section in ExpertiseSection])

    async def fetch_certificate_issue_requests(
        self, pagination: Optional[QueryPagination] = None
    ) -> List[CertificateIssueRequest]:
        """Return one page of certificate issue requests in table order."""
        self._ensure_open()
        pagination = pagination or QueryPagination()
        await self.page.goto(build_paginated_url(config.ISSUE_LIST_URL, pagination))
        raw_rows = await self.page.eval_on_selector_all(ISSUE_REQUEST_ROWS_SELECTOR, ISSUE_REQUEST_ROWS_JS)
        add_debug(self.debug_msgs, f"ISSUE_REQUESTS:page={pagination.page + 1}:rows={len(raw_rows)}")
        return parse_issue_request_rows(raw_rows)
