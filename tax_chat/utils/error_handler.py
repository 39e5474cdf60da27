"""Error handling utilities and custom exceptions."""

from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse
from loguru import logger

from ..models.chat_response import ChatResult

MESSAGE_REQUIRED = "Message is required and must be a string"
USER_CONTEXT_INVALID = "userContext must be an object with string timestamp and timezone"
SERVICE_NOT_CONFIGURED = "AI service not configured"
INVALID_API_KEY = "Invalid API key configuration"
RATE_LIMIT_EXCEEDED = "Rate limit exceeded, please try again later"
INTERNAL_SERVER_ERROR = "Internal server error"


class ChatError(Exception):
    """Base class for failures surfaced by the chat endpoint.

    Each subclass fixes the HTTP status and whether the client should
    fall back to a degraded experience.
    """

    status_code = 500
    fallback: bool | None = True

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_result(self) -> ChatResult:
        return ChatResult(
            success=False,
            error=self.message,
            fallback=self.fallback,
            details=self.details,
        )


class ValidationError(ChatError):
    """The request body is malformed; retrying it unchanged will not help."""

    status_code = 400
    fallback = None


class ConfigurationError(ChatError):
    """The provider credential is missing or rejected."""

    status_code = 500


class RateLimitError(ChatError):
    """The provider refused the call because of quota or rate limits."""

    status_code = 429


class InternalError(ChatError):
    """Any other failure."""

    status_code = 500


async def chat_exception_handler(request: Request, exc: ChatError) -> JSONResponse:
    """Convert a ChatError into its JSON failure response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_result().to_payload(),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort boundary so one failing request never affects others."""
    logger.opt(exception=exc).error(
        "Unhandled error on {} {}", request.method, request.url.path
    )
    return await chat_exception_handler(request, InternalError(INTERNAL_SERVER_ERROR))


# ---------------------------------------------------------------------------
# Provider error classification

_RATE_LIMIT_STATUSES = {"RESOURCE_EXHAUSTED", "TOO_MANY_REQUESTS"}


def _status_code(exc: BaseException) -> int | None:
    """Extract a numeric HTTP status from a Google client exception.

    ``google.api_core`` exceptions expose ``code`` as an int, while
    ``google.genai`` errors use ``code`` and HTTP wrappers use
    ``status_code`` or ``status``.
    """
    for attr in ("code", "status_code", "status"):
        value = getattr(exc, attr, None)
        if isinstance(value, int):
            return value
    return None


def _status_name(exc: BaseException) -> str:
    for attr in ("status", "grpc_status_code"):
        value = getattr(exc, attr, None)
        if value is None:
            continue
        name = getattr(value, "name", value)
        if isinstance(name, str):
            return name.upper()
    return ""


def _error_text(exc: BaseException) -> str:
    parts = [str(exc)]
    reason = getattr(exc, "reason", None)
    if reason:
        parts.append(str(reason))
    # LangChain wraps provider exceptions; the original is kept as the cause
    cause = exc.__cause__
    if cause is not None and cause is not exc:
        parts.append(str(cause))
        cause_reason = getattr(cause, "reason", None)
        if cause_reason:
            parts.append(str(cause_reason))
    return " ".join(parts)


def _provider_error(exc: BaseException) -> BaseException:
    cause = exc.__cause__
    if cause is not None and _status_code(exc) is None and _status_code(cause) is not None:
        return cause
    return exc


def classify_provider_error(exc: BaseException, expose_details: bool = False) -> ChatError:
    """Map a failure of the provider call onto the chat error taxonomy.

    Checked in order: an API key problem, then quota or rate limiting,
    then anything else.  Structured status information from the client
    exception is used when present; otherwise the error text is
    inspected case-insensitively.
    """
    source = _provider_error(exc)
    text = _error_text(exc).lower()
    code = _status_code(source)
    status_name = _status_name(source)

    if "api_key" in text or "api key" in text:
        return ConfigurationError(INVALID_API_KEY)

    if code == 429 or status_name in _RATE_LIMIT_STATUSES or "quota" in text or "limit" in text:
        return RateLimitError(RATE_LIMIT_EXCEEDED)

    return InternalError(
        INTERNAL_SERVER_ERROR,
        details=str(exc) if expose_details else None,
    )
