from pydantic import BaseModel, Field, ConfigDict
from typing import Any


class AnthropicPayload(BaseModel):
    """
    Anti-corruption Layer for Anthropic Messages API.

    Key differences from OpenAI:
    - 'max_tokens' is REQUIRED.
    - 'system' is a top-level parameter, not a message role.
    - temperature is capped at 1.0.
    """

    model_config = ConfigDict(extra="allow")

    # Required
    model: str
    messages: list[dict[str, Any]]
    max_tokens: int = Field(default=8000, ge=1)

    system: str | None = None

    temperature: float | None = Field(default=None, ge=0.0, le=1.0)
    top_p: float | None = Field(default=None, ge=0.0, le=1.0)
    top_k: int | None = Field(default=None, ge=0)
    stop_sequences: list[str] | None = None
