"""Response model for the chat API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


class ChatMetadata(BaseModel):
    """Provenance of a generated answer."""

    source: str
    timestamp: str
    model: str


class ChatResult(BaseModel):
    """Outcome of a chat request.

    Exactly one of ``response`` (on success) or ``error`` (on failure) is
    populated.  ``fallback`` tells the client it may present a degraded
    experience instead of a hard error, and ``details`` carries the raw
    provider error only in development mode.
    """

    success: bool
    response: str | None = None
    error: str | None = None
    fallback: bool | None = None
    details: str | None = None
    metadata: ChatMetadata | None = Field(default=None)

    @model_validator(mode="after")
    def _check_outcome(self) -> "ChatResult":
        if (self.response is None) == (self.error is None):
            raise ValueError("exactly one of response or error must be set")
        if self.success != (self.response is not None):
            raise ValueError("success must match the populated field")
        return self

    def to_payload(self) -> dict[str, Any]:
        """Serialise for the wire, omitting unset fields."""
        return self.model_dump(exclude_none=True)
