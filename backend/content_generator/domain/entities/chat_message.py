"""Domain entities for chat messages — framework-independent."""

from dataclasses import dataclass, field


@dataclass
class ChatMessage:
    """A single message in a chat conversation."""

    role: str  # "system" | "user" | "assistant"
    content: str = ""


@dataclass
class TokenUsage:
    """Token usage statistics from a completion."""

    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass
class ChatCompletionResult:
    """Result from a chat completion call.

    Reasoning models may expose their chain of thought (``reasoning``) or a
    ``refusal`` separately from the main ``content``.
    """

    model: str
    content: str
    finish_reason: str  # "stop" | "length" | "error"
    usage: TokenUsage = field(default_factory=TokenUsage)
    provider: str = ""
    reasoning: str | None = None
    refusal: str | None = None

    @property
    def alternate_text(self) -> str | None:
        """Reasoning or refusal text, whichever the provider returned."""
        return self.reasoning or self.refusal or None
