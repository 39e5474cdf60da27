"""Controllers for chat endpoints."""

from json import JSONDecodeError
from typing import Any

from fastapi import APIRouter, Depends, Request
from loguru import logger

from ..services.chat_service import ChatService, get_chat_service
from ..utils.error_handler import INTERNAL_SERVER_ERROR, ChatError, InternalError

router = APIRouter(prefix="/api/chat", tags=["Chat"])


async def _read_body(request: Request) -> Any:
    """Decode the JSON body, treating an unreadable body as empty."""
    try:
        return await request.json()
    except (JSONDecodeError, UnicodeDecodeError):
        return None


@router.post("/message")
async def chat_message_endpoint(
    request: Request,
    service: ChatService = Depends(get_chat_service),
) -> dict[str, Any]:
    """Answer a tax question.

    The body is validated by the service rather than by FastAPI so that a
    bad request yields the ``{"success": false, "error": ...}`` shape
    with HTTP 400 instead of FastAPI's 422.
    """
    logger.info("Received chat request from {}", request.client.host if request.client else "unknown")
    payload = await _read_body(request)
    try:
        result = await service.handle(payload)
    except ChatError as exc:
        logger.warning("Chat request failed with {}: {}", type(exc).__name__, exc.message)
        raise
    except Exception as exc:
        logger.exception("Unhandled exception during chat processing")
        raise InternalError(INTERNAL_SERVER_ERROR) from exc
    return result.to_payload()
