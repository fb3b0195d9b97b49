"""Domain entities — pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class GeneratedContent:
    """Title/description pair produced by the normalization pipeline."""

    title: str
    description: str


@dataclass
class Article:
    """Core domain entity representing a generated article.

    Articles are insert-only: once stored, only deletion is possible.
    """

    title: str
    description: str
    topic: str = ""
    id: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    url: str | None = None
    url_to_image: str | None = None
    tags: list[str] = field(default_factory=list)
    published_at: str | None = None

    def __post_init__(self) -> None:
        if not self.title or not self.title.strip():
            raise ValueError("Article title must not be empty")
        if not self.description or not self.description.strip():
            raise ValueError("Article description must not be empty")

    @classmethod
    def from_content(cls, content: GeneratedContent, topic: str) -> "Article":
        """Build a new, not yet persisted article from pipeline output."""
        return cls(title=content.title, description=content.description, topic=topic)
