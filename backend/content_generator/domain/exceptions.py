"""Domain-specific exceptions — framework-independent."""

from typing import Any


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class ConfigError(Exception):
    """Raised when a required setting (e.g. an API key) is missing."""

    def __init__(self, setting: str, message: str | None = None):
        self.setting = setting
        super().__init__(message or f"Required setting '{setting}' is not configured")


class ContentGenerationError(Exception):
    """Base class for failures of the generation pipeline.

    ``message`` is safe to show to the user, ``details`` carries diagnostics.
    """

    def __init__(self, message: str, details: Any = None):
        self.message = message
        self.details = details
        super().__init__(message)


class TransportError(ContentGenerationError):
    """Raised when the completion provider is unreachable or returns non-2xx.

    Provider-agnostic — works for OpenRouter, Groq, OpenAI, etc.
    """

    def __init__(self, provider: str, status_code: int, message: str, details: Any = None):
        self.provider = provider
        self.status_code = status_code
        super().__init__(message, details)

    def __str__(self) -> str:
        return f"[{self.provider}] {self.status_code}: {self.message}"


class EmptyContentError(ContentGenerationError):
    """Raised when a 2xx completion carries no usable text."""


class ParseError(ContentGenerationError):
    """Raised when no extraction stage yields both a title and a description."""

    def __init__(self, raw_text: str, message: str = "Could not parse API response"):
        self.raw_text = raw_text
        super().__init__(message, details=f"Content format: {raw_text}")
