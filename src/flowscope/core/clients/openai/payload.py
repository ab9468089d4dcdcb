from pydantic import BaseModel, Field, ConfigDict
from typing import Any


class OpenAIPayload(BaseModel):
    """
    Anti-corruption Layer for OpenAI chat completions.
    Mistral and Gemini are reached through OpenAI-compatible endpoints, so their payloads inherit from this model.
    """

    model_config = ConfigDict(extra="allow")

    # Required
    model: str
    messages: list[dict[str, Any]]

    # Optional
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)
    top_p: float | None = Field(default=None, ge=0.0, le=1.0)
    max_tokens: int | None = None
    stop: str | list[str] | None = None
    seed: int | None = None
