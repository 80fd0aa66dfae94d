from __future__ import annotations


class ChatPipelineError(RuntimeError):
    """Base class for failures surfaced to the caller of /api/chat."""

    code = "internal_error"
    status_code = 500
    public_message = "Failed to process request"


class InvalidChatRequestError(ChatPipelineError):
    """Raised when the request body is missing or does not carry a string message."""

    code = "invalid_request"
    status_code = 400
    public_message = "Invalid request body"


class ModelCallError(ChatPipelineError):
    """Raised when the language model provider call fails."""

    code = "model_error"


class RateLimitStoreError(RuntimeError):
    """Raised when the shared quota store cannot be queried."""
