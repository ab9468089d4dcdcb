from __future__ import annotations
from flowscope.core.clients.openai.payload import OpenAIPayload


class GooglePayload(OpenAIPayload):
    """
    Gemini via the OpenAI-compatible endpoint.
    reasoning_effort is the one Gemini-specific knob that endpoint understands.
    """

    reasoning_effort: str | None = None
