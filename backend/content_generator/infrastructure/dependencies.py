"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from content_generator.application.interfaces import ChatProvider
from content_generator.application.services import (
    ArticleGenerationService,
    ArticleService,
    TopicValidationService,
)
from content_generator.config import Settings, get_settings
from content_generator.infrastructure.database.session import get_db_session
from content_generator.infrastructure.database.repositories import SQLAlchemyArticleRepository
from content_generator.infrastructure.openrouter import OpenRouterClient


def build_chat_provider(settings: Settings, http_client: httpx.AsyncClient) -> ChatProvider:
    """Build the OpenRouter provider; raises ConfigError when no key is set."""
    return OpenRouterClient(
        api_key=settings.require_openrouter_api_key(),
        base_url=settings.openrouter_base_url,
        app_name=settings.openrouter_app_name,
        site_url=settings.openrouter_site_url,
        http_client=http_client,
        timeout=settings.request_timeout_seconds,
    )


def get_chat_provider(request: Request) -> ChatProvider:
    """Provider built once in the application lifespan."""
    return request.app.state.chat_provider


async def get_article_service(
    session: AsyncSession = Depends(get_db_session),
) -> AsyncGenerator[ArticleService, None]:
    """Provides an ArticleService instance with its repository wired up."""
    repository = SQLAlchemyArticleRepository(session)
    yield ArticleService(repository)


async def get_article_generation_service(
    session: AsyncSession = Depends(get_db_session),
    provider: ChatProvider = Depends(get_chat_provider),
) -> AsyncGenerator[ArticleGenerationService, None]:
    """Provides an ArticleGenerationService bound to the shared provider."""
    yield ArticleGenerationService(
        provider=provider,
        settings=get_settings(),
        repository=SQLAlchemyArticleRepository(session),
    )


def get_topic_validation_service(
    provider: ChatProvider = Depends(get_chat_provider),
) -> TopicValidationService:
    return TopicValidationService(provider=provider, settings=get_settings())
