"""Liveness and provider health endpoints.

These never touch the provider, so they answer 200 even when no API key
is configured.
"""

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends
from loguru import logger

from ..services.chat_service import ChatService, get_chat_service

router = APIRouter(tags=["Health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/")
async def root(service: ChatService = Depends(get_chat_service)) -> dict[str, Any]:
    """Describe the API and its main endpoints."""
    return {
        "message": f"{service.app_config.service_name} API",
        "status": "running",
        "endpoints": {
            "health": "/api/health",
            "chat": "/api/chat/message",
        },
        "timestamp": _now(),
    }


@router.get("/health")
async def health(service: ChatService = Depends(get_chat_service)) -> dict[str, Any]:
    """Simple health check endpoint."""
    logger.debug("Health check invoked")
    return {
        "status": "ok",
        "timestamp": _now(),
        "service": service.app_config.service_name,
        "version": service.app_config.service_version,
    }


@router.get("/api/health")
async def api_health(service: ChatService = Depends(get_chat_service)) -> dict[str, Any]:
    """Health check reporting the configured Gemini model."""
    return {
        "status": "ok",
        "ai": service.llm_service.model_name,
        "timestamp": _now(),
    }
