"""LLM client data models (OpenAI-compatible chat format)."""

from __future__ import annotations

from pydantic import BaseModel, Field


class LLMCompletionResult(BaseModel):
    """Internal result from an LLM completion."""

    raw_response: str = Field(..., description="Raw text response from LLM")
    model: str = Field(..., description="Model that generated response")
    prompt_tokens: int | None = Field(default=None, description="Input token count")
    completion_tokens: int | None = Field(
        default=None, description="Output token count"
    )

    model_config = {"frozen": True}


class ChatMessage(BaseModel):
    """Single message in chat format."""

    role: str = Field(..., description="Message role: system, user, or assistant")
    content: str | None = Field(default=None, description="Message content")


class ChatRequest(BaseModel):
    """Request body for the /chat/completions endpoint."""

    model: str = Field(..., description="Model name (e.g., 'gpt-4o-mini')")
    messages: list[ChatMessage] = Field(..., description="Chat messages")
    response_format: dict[str, str] | None = Field(
        default=None,
        description="Response format: {'type': 'json_object'} for JSON mode",
    )
    temperature: float = Field(default=0.3, description="Sampling temperature")
    max_tokens: int | None = Field(default=None, description="Maximum tokens to generate")


class ChatUsage(BaseModel):
    """Token usage from a chat response."""

    prompt_tokens: int = Field(..., description="Input token count")
    completion_tokens: int = Field(..., description="Output token count")
    total_tokens: int = Field(..., description="Total token count")


class ChatChoice(BaseModel):
    """Single choice in a chat response."""

    index: int = Field(..., description="Choice index")
    message: ChatMessage = Field(..., description="Generated message")
    finish_reason: str | None = Field(default=None, description="Reason for completion")


class ChatResponse(BaseModel):
    """Response from the /chat/completions endpoint."""

    id: str = Field(..., description="Unique response ID")
    model: str = Field(..., description="Model that generated response")
    choices: list[ChatChoice] = Field(..., min_length=1, description="Generated completions")
    usage: ChatUsage | None = Field(default=None, description="Token usage statistics")
