from pydantic import BaseModel
from typing import List


class ChatRequest(BaseModel):
    message: str


class ChatResponse(BaseModel):
    response: str
    sources: List[str] = []


class ErrorResponse(BaseModel):
    error: str
    code: str


class ScrapedContent(BaseModel):
    url: str
    text: str = ""


class RateLimitDecision(BaseModel):
    allowed: bool
    limit: int
    remaining: int
    reset: int  # epoch seconds
