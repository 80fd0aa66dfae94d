from __future__ import annotations

import asyncio
import logging

from sitechat.core.errors import ModelCallError
from sitechat.services.chat_chain import generate_answer
from sitechat.services.scraper import scrape_website
from sitechat.services.url_extractor import extract_urls, strip_urls

logger = logging.getLogger(__name__)


async def get_chat_answer(message: str) -> dict:
    """Answer a message using the content of the pages it links to.

    Every URL is scraped concurrently and the join waits for all of them.
    ``scrape_website`` never raises, so one bad page only contributes an
    empty string to the context.

    Returns:
        dict: {"response": "<answer>", "sources": ["<url>", ...]}
    """
    urls = extract_urls(message)
    logger.info("[ChatRequest] urls=%d", len(urls))

    scraped_contents = await asyncio.gather(*(scrape_website(url) for url in urls))
    context = " ".join(content.text for content in scraped_contents)
    logger.info("[ScrapedContext] chars=%d", len(context))

    question = strip_urls(message)

    try:
        response = await generate_answer(question, context)
    except Exception as exc:
        raise ModelCallError("language model call failed") from exc

    logger.info("[ChatResponse] chars=%d", len(response))
    return {
        "response": response,
        "sources": [content.url for content in scraped_contents],
    }
