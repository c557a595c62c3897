"""API request and response schemas."""

from typing import Any, Literal

from pydantic import BaseModel, Field

# Health


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    environment: str
    llm_provider: str
    llm_model: str
    record_store_configured: bool


# Chat


class ChatTurnSchema(BaseModel):
    """One role/content pair of the conversation log."""

    role: Literal["user", "assistant"]
    content: str = Field(max_length=10000)


class ChatRequest(BaseModel):
    """Chat request body. The full log is sent on every request."""

    messages: list[ChatTurnSchema] = Field(min_length=1)
    stream: bool = False


class ChatResponse(BaseModel):
    """Non-streaming chat response body."""

    content: str


# Profile


class ProfileResponse(BaseModel):
    """Profile wrapper returned by the profile endpoints."""

    profile: dict[str, Any] | None


# Errors


class ErrorResponse(BaseModel):
    """Error response."""

    error: str
    details: str | None = None
