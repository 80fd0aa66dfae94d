from __future__ import annotations

import logging

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.output_parsers import StrOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_groq import ChatGroq

from sitechat.core.config import settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a helpful AI assistant. Provide concise and accurate answers."


def get_chat_model() -> BaseChatModel:
    if settings.LLM_PROVIDER.lower() == "gemini":
        return ChatGoogleGenerativeAI(
            model=settings.GEMINI_CHAT_MODEL,
            google_api_key=settings.GEMINI_API_KEY,
            max_output_tokens=settings.LLM_MAX_TOKENS,
        )
    return ChatGroq(
        model=settings.GROQ_CHAT_MODEL,
        api_key=settings.GROQ_API_KEY,
        max_tokens=settings.LLM_MAX_TOKENS,
    )


def build_chat_prompt() -> ChatPromptTemplate:
    return ChatPromptTemplate.from_messages([
        ("system", SYSTEM_PROMPT),
        ("human", "Question: {question}\n\nContext: {context}"),
    ])


async def generate_answer(question: str, context: str) -> str:
    """Ask the model one question with the scraped pages as context."""
    chain = build_chat_prompt() | get_chat_model() | StrOutputParser()
    answer = await chain.ainvoke({"question": question, "context": context})
    return answer or ""
