"""FastAPI application entry point.

This module builds the FastAPI app, configures logging and registers
API routes.  The `uvicorn` ASGI server can point to ``tax_chat.main:app``
to serve the application, or ``python -m tax_chat`` starts it on the
configured port.
"""

from __future__ import annotations

import sys

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config.app_config import AppConfig, get_app_config
from .config.llm_config import LlmConfig, get_llm_config
from .controllers import AVAILABLE_ROUTES
from .controllers.chat_controller import router as chat_router
from .controllers.health_controller import router as health_router
from .services.chat_service import ChatService
from .services.llm_service import LLMService
from .utils.error_handler import ChatError, chat_exception_handler, unhandled_exception_handler
from .utils.logger import log_startup_banner, setup_logging


async def route_not_found_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Answer unknown paths (and known paths with the wrong method) with 404."""
    if exc.status_code not in (404, 405):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})
    logger.debug("No route for {} {}", request.method, request.url.path)
    return JSONResponse(
        status_code=404,
        content={"error": "Route not found", "availableRoutes": AVAILABLE_ROUTES},
    )


def create_app(
    app_config: AppConfig | None = None,
    llm_config: LlmConfig | None = None,
    llm_service: LLMService | None = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    The chat service, its Gemini client and the prompt template are built
    here once and shared read-only by all requests.
    """
    app_config = app_config or get_app_config()
    llm_config = llm_config or get_llm_config()
    setup_logging(app_config)

    app = FastAPI(title=app_config.service_name, version=app_config.service_version)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.chat_service = ChatService(
        llm_config=llm_config,
        app_config=app_config,
        llm_service=llm_service or LLMService(llm_config=llm_config),
    )

    app.add_exception_handler(ChatError, chat_exception_handler)
    app.add_exception_handler(StarletteHTTPException, route_not_found_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health_router)
    app.include_router(chat_router)

    return app


_app: FastAPI | None = None


def get_app() -> FastAPI:
    """Return the process-wide application, building it on first use."""
    global _app
    if _app is None:
        _app = create_app()
    return _app


def __getattr__(name: str) -> FastAPI:
    # ``tax_chat.main:app`` is built on first access, not at import
    if name == "app":
        return get_app()
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def run() -> None:
    """Start uvicorn on the configured host and port.

    Any failure while starting, including invalid configuration, is logged
    and ends the process with status 1 so that an external supervisor can
    restart it.
    """
    try:
        application = get_app()
        service = application.state.chat_service
        log_startup_banner(service.app_config, service.llm_config)
        uvicorn.run(
            application,
            host=service.app_config.app_host,
            port=service.app_config.port,
            log_config=None,
        )
    except Exception:
        logger.exception("Tax chat backend failed to start")
        sys.exit(1)
