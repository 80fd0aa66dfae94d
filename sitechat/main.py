from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sitechat.api.endpoints.chat import router as chat_router
from sitechat.api.middleware.rate_limit import RateLimitMiddleware
from sitechat.core.config import settings
from sitechat.core.errors import ChatPipelineError, InvalidChatRequestError
from sitechat.services.browser_service import close_browser
from sitechat.services.redis_service import close_redis_client

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await close_browser()
    await close_redis_client()


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
app.add_middleware(RateLimitMiddleware)
app.include_router(chat_router, prefix=settings.API_STR)


def _error_response(error: ChatPipelineError) -> JSONResponse:
    return JSONResponse(
        {"error": error.public_message, "code": error.code},
        status_code=error.status_code,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.warning("[InvalidRequest] path=%s errors=%s", request.url.path, exc.errors())
    return _error_response(InvalidChatRequestError())


@app.exception_handler(ChatPipelineError)
async def chat_pipeline_error_handler(request: Request, exc: ChatPipelineError):
    logger.exception("[ChatPipelineError] path=%s code=%s", request.url.path, exc.code, exc_info=exc)
    return _error_response(exc)


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("[UnexpectedError] path=%s", request.url.path, exc_info=exc)
    return _error_response(ChatPipelineError())


def run() -> None:
    uvicorn.run("sitechat.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
