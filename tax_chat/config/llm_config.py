from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()

DEFAULT_MODEL = "gemini-1.5-pro-latest"


class LlmConfig(BaseSettings):
    """Configuration settings for the Gemini integration.

    The API key is optional at load time so the service can start (and
    answer its health checks) without one; chat requests are rejected
    with a configuration error until it is provided.
    """

    api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    model: str = Field(DEFAULT_MODEL, alias="GEMINI_MODEL")
    temperature: Optional[float] = Field(None, alias="GEMINI_TEMPERATURE")
    timeout: Optional[float] = Field(None, alias="GEMINI_TIMEOUT")
    max_retries: int = Field(0, alias="GEMINI_MAX_RETRIES")

    @field_validator("api_key", mode="before")
    def blank_api_key_is_missing(cls, value: Optional[str]) -> Optional[str]:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("model", mode="before")
    def blank_model_uses_default(cls, value: Optional[str]) -> str:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_MODEL
        return value

    @field_validator("temperature")
    def validate_temperature(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and not 0.0 <= value <= 2.0:
            raise ValueError("GEMINI_TEMPERATURE must be between 0.0 and 2.0")
        return value

    @field_validator("timeout")
    def validate_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("GEMINI_TIMEOUT must be positive")
        return value

    @field_validator("max_retries")
    def validate_max_retries(cls, value: int) -> int:
        if value < 0:
            raise ValueError("GEMINI_MAX_RETRIES must not be negative")
        return value

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)


@lru_cache()
def get_llm_config() -> LlmConfig:
    """Return a cached language model configuration."""

    return LlmConfig()
