from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from tax_chat.config.app_config import AppConfig
from tax_chat.config.llm_config import LlmConfig
from tax_chat.main import create_app
from tax_chat.services.llm_service import LLMService

_ENV_VARS = (
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "GEMINI_TEMPERATURE",
    "GEMINI_TIMEOUT",
    "GEMINI_MAX_RETRIES",
    "APP_ENV",
    "PORT",
    "LOG_FILE",
    "LOG_LEVEL",
)


class StubLLM:
    """Records prompts and answers with a canned reply or raises ``error``."""

    def __init__(self, reply: str = "Declara el **15 de agosto** 📅", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    async def ainvoke(self, prompt: str) -> AIMessage:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.reply)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def app_config() -> AppConfig:
    return AppConfig(app_env="production")


@pytest.fixture
def llm_config() -> LlmConfig:
    return LlmConfig(GEMINI_API_KEY="test-key")


@pytest.fixture
def stub_llm() -> StubLLM:
    return StubLLM()


def build_client(
    app_config: AppConfig,
    llm_config: LlmConfig,
    llm: object | None = None,
) -> TestClient:
    llm_service = LLMService(llm_config=llm_config, llm=llm)
    app = create_app(app_config=app_config, llm_config=llm_config, llm_service=llm_service)
    return TestClient(app)


@pytest.fixture
def client(app_config: AppConfig, llm_config: LlmConfig, stub_llm: StubLLM) -> TestClient:
    return build_client(app_config, llm_config, stub_llm)
