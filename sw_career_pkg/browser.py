from typing import Dict, Optional

import httpx
from playwright.async_api import Browser, Page, Playwright
from playwright.async_api import async_playwright

from .config import SLOW_MO_MS, VIEWPORT, random_user_agent
from .scraper_logging import debug

# One driver per browser we launched or connected; concurrent sessions must not
# stop each other's driver. Also keeps the driver from being garbage collected.
_drivers: Dict[Browser, Playwright] = {}


async def launch_browser(headless: bool = True) -> Browser:
    """Launch a Chromium browser sized for the portal's desktop layout."""
    p = await async_playwright().start()
    try:
        browser = await p.chromium.launch(
            headless=headless,
            slow_mo=SLOW_MO_MS if SLOW_MO_MS > 0 else None,
            args=[
                "--no-sandbox",
                "--disable-dev-shm-usage",
                "--disable-gpu",
                "--window-size=1920,1080",
                "--no-first-run",
                "--disable-extensions",
            ],
        )
    except Exception:
        await p.stop()
        raise
    _drivers[browser] = p
    return browser


async def resolve_cdp_endpoint(
    cdp_url: str,
    timeout: float = 10.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """Return the browser WebSocket endpoint advertised at `cdp_url`.

    Chrome rejects CDP requests whose Host header is not an IP or localhost,
    so containers reaching the host by name need the WebSocket URL instead.
    Falls back to `cdp_url` when the version endpoint is unavailable.
    """
    if cdp_url.startswith(("ws://", "wss://")):
        return cdp_url
    try:
        async with httpx.AsyncClient(transport=transport) as client:
            response = await client.get(cdp_url.rstrip("/") + "/json/version", timeout=timeout)
            if response.status_code == 200:
                ws_url = response.json().get("webSocketDebuggerUrl", "")
                if ws_url:
                    return ws_url
    except (httpx.HTTPError, ValueError) as e:
        debug(f"Failed to fetch WebSocket URL: {e}, trying direct connect")
    return cdp_url


async def connect_over_cdp(cdp_url: str) -> Browser:
    """Connect to an already running Chrome started with --remote-debugging-port.

    The caller owns this browser; sessions started with it only detach.
    """
    endpoint = await resolve_cdp_endpoint(cdp_url)
    p = await async_playwright().start()
    try:
        browser = await p.chromium.connect_over_cdp(endpoint)
    except Exception:
        await p.stop()
        raise
    _drivers[browser] = p
    return browser


async def new_page(browser: Browser, user_agent: Optional[str] = None) -> Page:
    """Open a page in its own context with the fixed desktop viewport."""
    return await browser.new_page(
        viewport=VIEWPORT,
        user_agent=user_agent or random_user_agent(),
        locale="ko-KR",
        timezone_id="Asia/Seoul",
    )


async def shutdown_browser(browser: Browser) -> None:
    """Close the browser and stop the Playwright driver started for it.

    For a CDP connection `close()` only disconnects; the remote Chrome keeps
    running. Drivers belonging to other browsers are left alone.
    """
    driver = _drivers.pop(browser, None)
    try:
        await browser.close()
    finally:
        if driver is not None:
            await driver.stop()
