from __future__ import annotations

import logging
from dataclasses import dataclass

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

logger = logging.getLogger(__name__)

_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)


class SourceUnavailable(RuntimeError):
    """The target page could not be loaded or rendered."""


@dataclass
class RenderedPage:
    url: str  # final URL after redirects
    html: str
    screenshot: bytes | None = None


async def _screenshot(page) -> bytes | None:
    try:
        return await page.screenshot(full_page=True)
    except PlaywrightError as e:
        logger.warning("Screenshot failed: %s", e)
        return None


async def load_document(
    url: str,
    timeout_ms: int = 60000,
    settle_ms: int = 1500,
    screenshot: bool = False,
) -> RenderedPage:
    """
    Render `url` in headless Chromium and return the serialized DOM.
    Every browser-side failure is raised as SourceUnavailable.
    """
    try:
        async with async_playwright() as p:
            browser = await p.chromium.launch(
                headless=True,
                args=["--no-sandbox", "--disable-setuid-sandbox"],
            )
            try:
                page = await browser.new_page(user_agent=_USER_AGENT)
                logger.info("Loading %s", url)
                await page.goto(url, wait_until="networkidle", timeout=timeout_ms)
                # news cards hydrate after network idle
                await page.wait_for_timeout(settle_ms)

                html = await page.content()
                shot = await _screenshot(page) if screenshot else None
                return RenderedPage(url=page.url or url, html=html, screenshot=shot)
            finally:
                await browser.close()
    except PlaywrightTimeoutError as e:
        raise SourceUnavailable(f"Timed out loading {url}: {e}") from e
    except PlaywrightError as e:
        raise SourceUnavailable(f"Failed to render {url}: {e}") from e
