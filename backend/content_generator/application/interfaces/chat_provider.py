"""Abstract chat provider interface — port for AI provider adapters.

Each AI provider (OpenRouter, Groq, OpenAI, etc.) implements this interface.
"""

from abc import ABC, abstractmethod

from content_generator.domain.entities import ChatMessage, ChatCompletionResult


class ChatProvider(ABC):
    """Port — defines what the application layer needs from any chat provider."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Unique name identifying this provider (e.g. 'openrouter', 'groq')."""
        ...

    @abstractmethod
    async def complete(
        self,
        messages: list[ChatMessage],
        model: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
    ) -> ChatCompletionResult:
        """Send a single, non-streaming chat completion request.

        Args:
            messages: The conversation (system + user prompt).
            model: The model identifier (e.g. 'deepseek/deepseek-r1:free').
            temperature: Sampling temperature (0.0–2.0).
            max_tokens: Maximum tokens in the response.
            top_p: Nucleus sampling cutoff.

        Returns:
            A ChatCompletionResult with content and any reasoning/refusal text.

        Raises:
            TransportError: Network failure or non-2xx response.
            EmptyContentError: 2xx response without any choice.
        """
        ...
