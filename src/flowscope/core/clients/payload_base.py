from flowscope.core.clients.openai.payload import OpenAIPayload
from flowscope.core.clients.google.payload import GooglePayload
from flowscope.core.clients.anthropic.payload import AnthropicPayload
from flowscope.core.clients.mistral.payload import MistralPayload

Payload = AnthropicPayload | GooglePayload | OpenAIPayload | MistralPayload
