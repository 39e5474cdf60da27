from __future__ import annotations

import asyncio

import pytest

from conftest import StubLLM
from tax_chat.config.app_config import AppConfig
from tax_chat.config.llm_config import LlmConfig
from tax_chat.models.chat_request import DEFAULT_TIMEZONE
from tax_chat.prompts import TAX_SYSTEM_PROMPT
from tax_chat.services.chat_service import ChatService
from tax_chat.services.llm_service import LLMService
from tax_chat.utils.error_handler import ConfigurationError, InternalError, ValidationError


def make_service(llm_config: LlmConfig, llm: object, app_env: str = "production") -> ChatService:
    return ChatService(
        llm_config=llm_config,
        app_config=AppConfig(app_env=app_env),
        llm_service=LLMService(llm_config=llm_config, llm=llm),
    )


def test_prompt_contains_instructions_context_and_question(llm_config: LlmConfig) -> None:
    stub = StubLLM()
    service = make_service(llm_config, stub)

    asyncio.run(
        service.handle(
            {
                "message": "Tengo ingresos de {salario}",
                "userContext": {
                    "timestamp": "2025-08-01T10:00:00Z",
                    "timezone": "America/Lima",
                    "device": "ios",
                },
            }
        )
    )

    prompt = stub.prompts[0]
    assert prompt.startswith(TAX_SYSTEM_PROMPT)
    assert "- Timestamp: 2025-08-01T10:00:00Z" in prompt
    assert "- Timezone: America/Lima" in prompt
    assert prompt.endswith("PREGUNTA DEL USUARIO: Tengo ingresos de {salario}")
    assert prompt.index("CONTEXTO DEL USUARIO") < prompt.index("PREGUNTA DEL USUARIO")


def test_prompt_uses_context_defaults(llm_config: LlmConfig) -> None:
    stub = StubLLM()
    service = make_service(llm_config, stub)

    asyncio.run(service.handle({"message": "hola", "userContext": None}))

    prompt = stub.prompts[0]
    assert f"- Timezone: {DEFAULT_TIMEZONE}" in prompt
    timestamp_line = next(line for line in prompt.splitlines() if line.startswith("- Timestamp: "))
    assert timestamp_line.removeprefix("- Timestamp: ").startswith("20")


def test_success_result_shape(llm_config: LlmConfig) -> None:
    service = make_service(llm_config, StubLLM(reply="Respuesta"))

    result = asyncio.run(service.handle({"message": "hola"}))

    assert result.success is True
    assert result.response == "Respuesta"
    assert result.error is None
    assert result.metadata is not None
    assert result.metadata.model == llm_config.model


def test_validation_runs_before_configuration_check() -> None:
    service = make_service(LlmConfig(GEMINI_API_KEY=None), StubLLM())

    with pytest.raises(ValidationError):
        asyncio.run(service.handle({"userContext": {}}))


def test_missing_api_key_raises_configuration_error() -> None:
    stub = StubLLM()
    service = make_service(LlmConfig(GEMINI_API_KEY=None), stub)

    with pytest.raises(ConfigurationError) as excinfo:
        asyncio.run(service.handle({"message": "hola"}))

    assert excinfo.value.status_code == 500
    assert excinfo.value.fallback is True
    assert stub.prompts == []


def test_parse_request_rejects_non_object_payloads() -> None:
    for payload in (None, [], "hola", 3):
        with pytest.raises(ValidationError):
            ChatService.parse_request(payload)


def test_parse_request_rejects_non_string_context_values() -> None:
    with pytest.raises(ValidationError) as excinfo:
        ChatService.parse_request({"message": "hola", "userContext": {"timezone": 5}})

    assert "userContext" in excinfo.value.message


class SlowLLM:
    def __init__(self) -> None:
        self.in_flight = 0
        self.peak = 0

    async def ainvoke(self, prompt: str):
        from langchain_core.messages import AIMessage

        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        await asyncio.sleep(0.01)
        self.in_flight -= 1
        return AIMessage(content=prompt.rsplit(": ", 1)[-1])


def test_concurrent_requests_are_independent(llm_config: LlmConfig) -> None:
    llm = SlowLLM()
    service = make_service(llm_config, llm)

    async def ask_all():
        return await asyncio.gather(
            *(service.handle({"message": f"pregunta {i}"}) for i in range(5))
        )

    results = asyncio.run(ask_all())

    assert [result.response for result in results] == [f"pregunta {i}" for i in range(5)]
    assert llm.peak == 5


def test_blocked_answer_without_text_parts_fails(llm_config: LlmConfig) -> None:
    class BlockedLLM:
        async def ainvoke(self, prompt: str):
            from langchain_core.messages import AIMessage

            return AIMessage(content=[{"type": "thinking", "thinking": "..."}])

    service = make_service(llm_config, BlockedLLM())

    with pytest.raises(InternalError):
        asyncio.run(service.handle({"message": "hola"}))
