from __future__ import annotations

import asyncio
import logging
import re

from bs4 import BeautifulSoup

from sitechat.core.config import settings
from sitechat.schemas.chat import ScrapedContent
from sitechat.services.browser_service import get_browser
from sitechat.services.scrape_concurrency import scrape_slot
from sitechat.services.text_truncator import truncate_text

logger = logging.getLogger(__name__)

REMOVED_SELECTORS = [
    "script",
    "style",
    "nav",
    "header",
    "footer",
    ".sidebar",
    "#sidebar",
    ".advertisement",
    ".ad",
    "iframe",
    "svg",
    "canvas",
]

CONTENT_SELECTORS = [
    "article",
    "section",
    "main",
    "div.content",
    "div.article-body",
    "p",
]

_WS_RE = re.compile(r"\s+")


def extract_page_text(html: str, min_length: int | None = None) -> str:
    """Extract readable text from rendered HTML.

    Boilerplate elements are removed first, then text is collected from the
    content selectors. Fragments of ``min_length`` characters or fewer are
    dropped. When nothing survives, the whole body text is used instead.
    """
    if min_length is None:
        min_length = settings.SCRAPE_MIN_TEXT_LENGTH

    soup = BeautifulSoup(html, "html.parser")
    for selector in REMOVED_SELECTORS:
        for element in soup.select(selector):
            element.decompose()

    # one pass per selector; elements matching several selectors repeat
    elements = [
        element
        for selector in CONTENT_SELECTORS
        for element in soup.select(selector)
    ]
    texts = [element.get_text().strip() for element in elements]
    texts = [text for text in texts if len(text) > min_length]

    text = _WS_RE.sub(" ", "\n\n".join(texts)).strip()
    if text:
        return text

    body = soup.body or soup
    return body.get_text().strip()


async def _render_page(url: str) -> str:
    browser = await get_browser()
    context = await browser.new_context(user_agent=settings.BROWSER_USER_AGENT)
    try:
        page = await context.new_page()
        await page.goto(
            url,
            wait_until="networkidle",
            timeout=settings.SCRAPE_NAV_TIMEOUT_MS,
        )
        return await page.content()
    finally:
        await context.close()


async def scrape_website(url: str) -> ScrapedContent:
    """Fetch, clean and truncate one page. Failures yield empty text."""
    try:
        async with scrape_slot():
            html = await asyncio.wait_for(
                _render_page(url), timeout=settings.SCRAPE_TIMEOUT_SEC
            )
        text = truncate_text(extract_page_text(html), settings.SCRAPE_MAX_TOKENS)
    except Exception:
        logger.exception("[ScrapeError] url=%s", url)
        return ScrapedContent(url=url, text="")

    if not text:
        logger.warning("[ScrapeEmpty] url=%s", url)
    else:
        logger.info("[ScrapeSuccess] url=%s chars=%d", url, len(text))
    return ScrapedContent(url=url, text=text)
