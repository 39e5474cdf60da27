"""Request model for the chat API."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

DEFAULT_TIMEZONE = "America/Bogota"


class UserContext(BaseModel):
    """Optional client-side context interpolated into the prompt.

    Only ``timestamp`` and ``timezone`` are recognised; any other keys
    sent by the frontend are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    timestamp: StrictStr | None = None
    timezone: StrictStr | None = None

    def resolved_timestamp(self) -> str:
        return self.timestamp or datetime.now(timezone.utc).isoformat()

    def resolved_timezone(self) -> str:
        return self.timezone or DEFAULT_TIMEZONE


class ChatRequest(BaseModel):
    """Represents a request payload for a chat message.

    ``message`` holds the user's tax question and must be a non-empty
    string.  ``userContext`` is optional; when omitted (or ``null``)
    defaults are used for the timestamp and timezone.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    message: StrictStr = Field(
        ...,
        min_length=1,
        description="The user's question.",
    )
    user_context: UserContext = Field(
        default_factory=UserContext,
        alias="userContext",
        description="Optional client context (timestamp, timezone).",
    )

    @field_validator("user_context", mode="before")
    @classmethod
    def _null_context_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value
