"""Article generation use case — prompt the model, normalize its answer, store it."""

import logging

from content_generator.application.interfaces import ArticleRepository, ChatProvider
from content_generator.application.services.content_normalizer import normalize_completion
from content_generator.config import Settings
from content_generator.domain.entities import Article, ChatMessage, GeneratedContent
from content_generator.domain.exceptions import ContentGenerationError
from content_generator.infrastructure.logging.colored_logger import PipelineLogger, PipelineStage

logger = logging.getLogger(__name__)
plog = PipelineLogger("ArticleGenerationService")

_SYSTEM_PROMPT = (
    "You are an engaging writer. Respond with exactly two parts:\n"
    "1. Title: Create a compelling title in 1-2 lines (10-15 words max)\n"
    "2. Description: Write a detailed description in 6-7 complete sentences "
    "(no truncation). Make each sentence informative and engaging."
)

_USER_PROMPT = """Write an article about "{topic}" in the following format:
Title: [Your title here]
Description: [Your detailed description here]"""

_NOVELTY_HINT = """

These titles were already used, take a different angle:
{titles}"""

# Returned only when the caller explicitly asks for it.
FALLBACK_CONTENT = GeneratedContent(
    title="Technology Roundup",
    description=(
        "Today in technology: new developments in AI are changing how we work. "
        "Renewable energy solutions are becoming more efficient. "
        "Space exploration technologies continue to advance."
    ),
)


class ArticleGenerationService:
    """Generates articles from a topic through a ChatProvider.

    Single attempt per request: provider errors are never retried and are
    re-raised unless the caller opted into ``fallback_on_error``.
    """

    def __init__(
        self,
        provider: ChatProvider,
        settings: Settings,
        repository: ArticleRepository | None = None,
    ):
        self._provider = provider
        self._settings = settings
        self._repository = repository

    def build_messages(self, topic: str, previous_titles: list[str] | None = None) -> list[ChatMessage]:
        """System + user prompt for one topic, steering away from used titles."""
        user_prompt = _USER_PROMPT.format(topic=topic)
        titles = [t for t in (previous_titles or []) if t and t.strip()]
        if titles:
            listed = "\n".join(f"- {t.strip()}" for t in titles[: self._settings.previous_titles_limit])
            user_prompt += _NOVELTY_HINT.format(titles=listed)
        return [
            ChatMessage(role="system", content=_SYSTEM_PROMPT),
            ChatMessage(role="user", content=user_prompt),
        ]

    async def generate(
        self,
        topic: str,
        previous_titles: list[str] | None = None,
        *,
        fallback_on_error: bool = False,
    ) -> GeneratedContent:
        """Generate a title/description pair for ``topic``.

        Raises:
            TransportError: The provider call failed.
            EmptyContentError: The completion had no content.
            ParseError: No extraction stage could read the completion.
        """
        try:
            return await self._generate(topic, previous_titles)
        except ContentGenerationError as e:
            if not fallback_on_error:
                raise
            logger.warning(
                "Generation failed for topic %r, using fallback article: %s", topic, e
            )
            return FALLBACK_CONTENT

    async def _generate(self, topic: str, previous_titles: list[str] | None) -> GeneratedContent:
        settings = self._settings
        messages = self.build_messages(topic, previous_titles)

        with plog.timed_step(
            PipelineStage.COMPLETION,
            "Requesting article",
            topic=topic,
            model=settings.generation_model,
        ):
            result = await self._provider.complete(
                messages=messages,
                model=settings.generation_model,
                temperature=settings.generation_temperature,
                max_tokens=settings.generation_max_tokens,
                top_p=settings.generation_top_p,
            )
        plog.detail("Completion received", finish_reason=result.finish_reason,
                    tokens=result.usage.total_tokens)
        logger.debug("Raw content received: %r", result.content)

        with plog.timed_step(PipelineStage.NORMALIZATION, "Extracting title and description"):
            return normalize_completion(result.content, result.alternate_text)

    async def generate_and_store(
        self,
        topic: str,
        previous_titles: list[str] | None = None,
        *,
        fallback_on_error: bool = False,
    ) -> Article:
        """Generate an article and insert it into the repository.

        When ``previous_titles`` is omitted the most recently stored titles
        are used to steer the model towards a new angle.
        """
        if self._repository is None:
            raise RuntimeError("ArticleGenerationService was built without a repository")

        if previous_titles is None:
            previous_titles = await self._repository.recent_titles(
                limit=self._settings.previous_titles_limit
            )

        content = await self.generate(
            topic, previous_titles, fallback_on_error=fallback_on_error
        )
        article = Article.from_content(content, topic=topic)

        with plog.timed_step(PipelineStage.STORAGE, "Storing article", title=article.title):
            return await self._repository.create(article)
