"""Application service (use case) for Article operations."""

from content_generator.application.interfaces import ArticleRepository
from content_generator.application.schemas import ArticleCreate
from content_generator.domain.entities import Article
from content_generator.domain.exceptions import EntityNotFoundError


class ArticleService:
    """Orchestrates article business logic. Depends on the repository port (DI)."""

    def __init__(self, repository: ArticleRepository):
        self._repository = repository

    async def get_article(self, article_id: str) -> Article:
        article = await self._repository.get_by_id(article_id)
        if article is None:
            raise EntityNotFoundError("Article", article_id)
        return article

    async def list_articles(self, skip: int = 0, limit: int = 100) -> list[Article]:
        return await self._repository.get_all(skip=skip, limit=limit)

    async def create_article(self, data: ArticleCreate) -> Article:
        article = Article(
            title=data.title,
            description=data.description,
            topic=data.topic,
            url=data.url,
            url_to_image=data.url_to_image,
            tags=list(data.tags),
            published_at=data.published_at,
        )
        return await self._repository.create(article)

    async def delete_article(self, article_id: str) -> bool:
        exists = await self._repository.get_by_id(article_id)
        if exists is None:
            raise EntityNotFoundError("Article", article_id)
        return await self._repository.delete(article_id)
