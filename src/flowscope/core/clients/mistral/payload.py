from __future__ import annotations
from flowscope.core.clients.openai.payload import OpenAIPayload


class MistralPayload(OpenAIPayload):
    """
    Mistral's chat completions endpoint accepts the OpenAI request shape as-is.
    """
