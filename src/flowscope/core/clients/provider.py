from enum import Enum


class ProviderId(str, Enum):
    """
    The closed set of supported completion providers.
    """

    OPENAI = "openai"
    CLAUDE = "claude"
    MISTRAL = "mistral"
    GEMINI = "gemini"

    @classmethod
    def from_input(cls, value: "str | ProviderId") -> "ProviderId":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(
                f"Unsupported provider '{value}'. Expected one of: {', '.join(p.value for p in cls)}"
            ) from None
