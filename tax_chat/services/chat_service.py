"""Orchestration service for tax questions.

The ChatService validates the incoming payload, composes the prompt,
asks the LLM for an answer and converts every failure into a
:class:`~tax_chat.utils.error_handler.ChatError` so controllers can
remain thin.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import Request
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from ..chains import TaxPromptChain
from ..config.app_config import AppConfig, get_app_config
from ..config.llm_config import LlmConfig, get_llm_config
from ..models.chat_request import ChatRequest
from ..models.chat_response import ChatMetadata, ChatResult
from ..utils.error_handler import (
    MESSAGE_REQUIRED,
    SERVICE_NOT_CONFIGURED,
    USER_CONTEXT_INVALID,
    ConfigurationError,
    ValidationError,
    classify_provider_error,
)
from .llm_service import LLMService

LOG_PREVIEW_CHARS = 50


class ChatService:
    """Relays a tax question to the LLM and shapes the result.

    All collaborators are passed in (or loaded once) at construction and
    never mutated afterwards, so one instance serves concurrent requests.
    """

    def __init__(
        self,
        llm_config: LlmConfig | None = None,
        app_config: AppConfig | None = None,
        llm_service: LLMService | None = None,
        prompt_chain: TaxPromptChain | None = None,
    ) -> None:
        self.llm_config = llm_config or get_llm_config()
        self.app_config = app_config or get_app_config()
        self.llm_service = llm_service or LLMService(llm_config=self.llm_config)
        self.prompt_chain = prompt_chain or TaxPromptChain()

    @staticmethod
    def parse_request(payload: Any) -> ChatRequest:
        """Validate a raw JSON body into a :class:`ChatRequest`.

        Raises
        ------
        ValidationError
            If ``message`` is missing, empty or not a string, or
            ``userContext`` is not an object of strings.
        """
        if not isinstance(payload, dict):
            raise ValidationError(MESSAGE_REQUIRED)
        try:
            return ChatRequest.model_validate(payload)
        except PydanticValidationError as exc:
            fields = {error["loc"][0] for error in exc.errors() if error["loc"]}
            if "message" in fields:
                raise ValidationError(MESSAGE_REQUIRED) from exc
            raise ValidationError(USER_CONTEXT_INVALID) from exc

    async def handle(self, payload: Any) -> ChatResult:
        """Answer a tax question.

        Parameters
        ----------
        payload: Any
            The decoded JSON body: ``{"message": str, "userContext": {...}}``.

        Returns
        -------
        ChatResult
            A successful result with the generated answer and metadata.

        Raises
        ------
        ChatError
            ``ValidationError`` for a bad body, ``ConfigurationError`` when no
            API key is set or the key is rejected, ``RateLimitError`` on quota
            problems and ``InternalError`` for anything else.
        """
        request = self.parse_request(payload)

        if not self.llm_config.is_configured or not self.llm_service.is_configured:
            logger.error("GEMINI_API_KEY is not configured")
            raise ConfigurationError(SERVICE_NOT_CONFIGURED)

        logger.info("Processing message: {!r}...", request.message[:LOG_PREVIEW_CHARS])
        prompt = self.prompt_chain.build_prompt(request)

        try:
            answer = await self.llm_service.generate(prompt)
        except Exception as exc:
            logger.opt(exception=exc).error("Gemini call failed for /api/chat/message")
            raise classify_provider_error(
                exc, expose_details=self.app_config.is_development
            ) from exc

        logger.info("Answer generated successfully")
        return ChatResult(
            success=True,
            response=answer,
            metadata=ChatMetadata(
                source=self.llm_service.source,
                timestamp=datetime.now(timezone.utc).isoformat(),
                model=self.llm_service.model_name,
            ),
        )


def get_chat_service(request: Request) -> ChatService:
    """Return the ChatService built for the running application."""
    return request.app.state.chat_service
