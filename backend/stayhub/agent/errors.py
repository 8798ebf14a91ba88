"""Errors raised while talking to the language model."""


class LLMError(Exception):
    """Base class for language-model failures."""


class LLMConnectionError(LLMError):
    """The model endpoint could not be reached (DNS, refused, timeout)."""


class LLMModelNotFoundError(LLMError):
    """The requested model name does not exist for this API key."""

    def __init__(self, message: str, model: str | None = None) -> None:
        super().__init__(message)
        self.model = model


class LLMAuthenticationError(LLMError):
    """The API key was rejected."""


class LLMResponseError(LLMError):
    """The model answered, but not with the JSON object we asked for."""
