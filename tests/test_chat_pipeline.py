import asyncio

import pytest

from sitechat.core.errors import ModelCallError
from sitechat.schemas.chat import ScrapedContent
from sitechat.services import chat_pipeline


def _patch_pipeline(monkeypatch, pages, answer="answer"):
    """Install a fake scraper serving ``pages`` and record model inputs."""
    seen = {}

    async def fake_scrape(url):
        return ScrapedContent(url=url, text=pages.get(url, ""))

    async def fake_generate(question, context):
        seen["question"] = question
        seen["context"] = context
        return answer

    monkeypatch.setattr(chat_pipeline, "scrape_website", fake_scrape)
    monkeypatch.setattr(chat_pipeline, "generate_answer", fake_generate)
    return seen


def test_message_without_urls_has_no_sources_and_empty_context(monkeypatch):
    seen = _patch_pipeline(monkeypatch, {})

    result = asyncio.run(chat_pipeline.get_chat_answer("Hello there"))

    assert result == {"response": "answer", "sources": []}
    assert seen == {"question": "Hello there", "context": ""}


def test_question_has_urls_removed(monkeypatch):
    seen = _patch_pipeline(monkeypatch, {"https://example.com": "page text"})

    result = asyncio.run(chat_pipeline.get_chat_answer("What is X? https://example.com"))

    assert seen["question"] == "What is X?"
    assert seen["context"] == "page text"
    assert result["sources"] == ["https://example.com"]


def test_failed_scrape_does_not_hide_other_pages(monkeypatch):
    seen = _patch_pipeline(
        monkeypatch, {"https://a.test": "alpha text", "https://c.test": "gamma text"}
    )

    result = asyncio.run(
        chat_pipeline.get_chat_answer("Compare https://a.test https://b.test https://c.test")
    )

    # failed page still contributes its (empty) slot to the join
    assert seen["context"] == "alpha text  gamma text"
    assert result["sources"] == ["https://a.test", "https://b.test", "https://c.test"]


def test_all_scrapes_failing_still_answers(monkeypatch):
    seen = _patch_pipeline(monkeypatch, {}, answer="I could not read those pages.")

    result = asyncio.run(
        chat_pipeline.get_chat_answer("Summarize https://a.test and https://b.test")
    )

    assert result == {
        "response": "I could not read those pages.",
        "sources": ["https://a.test", "https://b.test"],
    }
    assert seen["question"] == "Summarize  and"
    assert seen["context"] == " "


def test_model_failure_is_wrapped(monkeypatch):
    _patch_pipeline(monkeypatch, {})

    async def broken_generate(question, context):
        raise ConnectionError("provider unreachable")

    monkeypatch.setattr(chat_pipeline, "generate_answer", broken_generate)

    with pytest.raises(ModelCallError) as excinfo:
        asyncio.run(chat_pipeline.get_chat_answer("hi"))
    assert isinstance(excinfo.value.__cause__, ConnectionError)
