"""Service encapsulating interactions with the language model.

Uses LangChain's ChatGoogleGenerativeAI integration to communicate with
the Gemini API.  The service accepts a fully composed prompt and returns
the generated text.
"""

from __future__ import annotations

from typing import Any

from loguru import logger
from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from ..config.llm_config import LlmConfig, get_llm_config

PROVIDER_SOURCE = "gemini"


class EmptyResponseError(RuntimeError):
    """Gemini answered without any text, e.g. a candidate blocked for safety."""


class LLMService:
    """Service for generating responses from Gemini.

    The chat model is built once from :class:`LlmConfig` and reused by every
    request.  Without an API key no client is built and :attr:`is_configured`
    is ``False``; callers must check it before calling :meth:`generate`.
    Retries are disabled on the client: a failed call is surfaced at once.
    """

    def __init__(
        self,
        llm_config: LlmConfig | None = None,
        llm: BaseChatModel | None = None,
    ) -> None:
        """Initialise the LLM service with the provided configuration.

        Parameters
        ----------
        llm_config: LlmConfig, optional
            Credentials, model name and tuning parameters.  If omitted, the
            configuration is loaded from environment variables via
            :func:`get_llm_config`.
        llm: BaseChatModel, optional
            A prebuilt chat model, used instead of constructing a Gemini
            client.
        """
        self.llm_config = llm_config or get_llm_config()
        self.llm = llm
        if self.llm is None and self.llm_config.is_configured:
            self.llm = ChatGoogleGenerativeAI(**self._llm_kwargs())

    def _llm_kwargs(self) -> dict[str, object]:
        kwargs: dict[str, object] = {
            "google_api_key": self.llm_config.api_key,
            "model": self.llm_config.model,
            "max_retries": self.llm_config.max_retries,
        }
        # Optional tuning parameters are only forwarded when set
        if self.llm_config.temperature is not None:
            kwargs["temperature"] = self.llm_config.temperature
        if self.llm_config.timeout is not None:
            kwargs["timeout"] = self.llm_config.timeout
        return kwargs

    @property
    def is_configured(self) -> bool:
        return self.llm_config.is_configured and self.llm is not None

    @property
    def model_name(self) -> str:
        return self.llm_config.model

    @property
    def source(self) -> str:
        return PROVIDER_SOURCE

    async def generate(self, prompt: str) -> str:
        """Send ``prompt`` to the model and return the generated text.

        Provider exceptions propagate unchanged so the caller can classify
        them.  An answer with no text raises :class:`EmptyResponseError`.
        """
        if self.llm is None:
            raise RuntimeError("LLM client is not configured")
        logger.debug("Sending prompt to {} ({} characters)", self.model_name, len(prompt))
        message = await self.llm.ainvoke(prompt)
        text = _message_text(message.content)
        if not text.strip():
            raise EmptyResponseError(f"{self.model_name} returned an empty response")
        return text


def _message_text(content: Any) -> str:
    """Flatten a chat message's content into plain text.

    Gemini may return either a string or a list of content parts.
    """
    if isinstance(content, str):
        return content
    parts: list[str] = []
    for part in content or []:
        if isinstance(part, str):
            parts.append(part)
        elif isinstance(part, dict) and part.get("type", "text") == "text":
            parts.append(str(part.get("text", "")))
    return "".join(parts)
