"""Endpoint tests for generation, topic validation and articles.

Services are wired to in-memory fakes through FastAPI dependency overrides,
so no database or network access is needed.
"""

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from content_generator.application.interfaces import ArticleRepository, ChatProvider
from content_generator.application.services import (
    ArticleGenerationService,
    ArticleService,
    TopicValidationService,
)
from content_generator.config import Settings
from content_generator.domain.entities import Article, ChatCompletionResult, ChatMessage
from content_generator.domain.exceptions import TransportError
from content_generator.infrastructure.dependencies import (
    get_article_generation_service,
    get_article_service,
    get_topic_validation_service,
)
from content_generator.main import app


# ── Fakes ──


class ScriptedChatProvider(ChatProvider):
    """Answers generation and validation prompts from fixed scripts."""

    def __init__(
        self,
        *,
        article: str = "Title: Solar Power Advances\nDescription: Efficiency rose 25% this year.",
        verdict: str = "valid",
        error: Exception | None = None,
    ):
        self.article = article
        self.verdict = verdict
        self.error = error
        self.models: list[str] = []

    @property
    def provider_name(self) -> str:
        return "scripted"

    async def complete(
        self,
        messages: list[ChatMessage],
        model: str,
        *,
        temperature: float | None = None,
        max_tokens: int | None = None,
        top_p: float | None = None,
    ) -> ChatCompletionResult:
        self.models.append(model)
        if self.error:
            raise self.error
        is_validation = "topic validator" in messages[0].content
        content = self.verdict if is_validation else self.article
        return ChatCompletionResult(model=model, content=content, finish_reason="stop")


class InMemoryArticleRepository(ArticleRepository):
    def __init__(self):
        self._articles: dict[str, Article] = {}
        self._next_id = 1

    async def get_by_id(self, article_id: str) -> Article | None:
        return self._articles.get(article_id)

    async def get_all(self, skip: int = 0, limit: int = 100) -> list[Article]:
        articles = sorted(self._articles.values(), key=lambda a: a.created_at, reverse=True)
        return articles[skip : skip + limit]

    async def recent_titles(self, limit: int = 10) -> list[str]:
        return [a.title for a in await self.get_all(limit=limit)]

    async def create(self, article: Article) -> Article:
        article.id = f"id-{self._next_id}"
        self._next_id += 1
        self._articles[article.id] = article
        return article

    async def delete(self, article_id: str) -> bool:
        return self._articles.pop(article_id, None) is not None


# ── Fixtures ──


@pytest.fixture
def provider() -> ScriptedChatProvider:
    return ScriptedChatProvider()


@pytest.fixture
def repository() -> InMemoryArticleRepository:
    return InMemoryArticleRepository()


@pytest_asyncio.fixture
async def client(
    provider: ScriptedChatProvider, repository: InMemoryArticleRepository
) -> AsyncIterator[AsyncClient]:
    settings = Settings(openrouter_api_key="test-key", _env_file=None)
    app.dependency_overrides[get_article_service] = lambda: ArticleService(repository)
    app.dependency_overrides[get_article_generation_service] = lambda: ArticleGenerationService(
        provider, settings, repository
    )
    app.dependency_overrides[get_topic_validation_service] = lambda: TopicValidationService(
        provider, settings
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ── /generate ──


@pytest.mark.asyncio
async def test_generate_returns_title_and_description(client: AsyncClient):
    response = await client.post(
        "/api/v1/generate",
        json={"topic": "solar power", "previousTitles": ["Old One"]},
    )

    assert response.status_code == 200
    assert response.json() == {
        "title": "Solar Power Advances",
        "description": "Efficiency rose 25% this year.",
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"topic": ""}, {"topic": "   "}])
async def test_generate_without_topic_is_400(client: AsyncClient, body: dict):
    response = await client.post("/api/v1/generate", json=body)

    assert response.status_code == 400
    assert response.json()["error"] == "Please enter a topic"


@pytest.mark.asyncio
async def test_generate_parse_failure_is_500_with_details(
    client: AsyncClient, provider: ScriptedChatProvider
):
    provider.article = "only one line"

    response = await client.post("/api/v1/generate", json={"topic": "solar power"})

    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Could not parse API response"
    assert data["details"] == "Content format: only one line"


@pytest.mark.asyncio
async def test_generate_upstream_failure_is_500(
    client: AsyncClient, provider: ScriptedChatProvider
):
    provider.error = TransportError(provider="scripted", status_code=429, message="Rate limit exceeded")

    response = await client.post("/api/v1/generate", json={"topic": "solar power"})

    assert response.status_code == 500
    assert response.json()["error"] == "Rate limit exceeded"


@pytest.mark.asyncio
async def test_generate_fallback_on_request(client: AsyncClient, provider: ScriptedChatProvider):
    provider.article = ""

    response = await client.post(
        "/api/v1/generate", json={"topic": "solar power", "fallbackOnError": True}
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Technology Roundup"


# ── /validate-topic ──


@pytest.mark.asyncio
async def test_validate_topic_missing_is_400(client: AsyncClient):
    response = await client.post("/api/v1/validate-topic", json={})

    assert response.status_code == 400
    assert response.json() == {"isValid": False, "message": "Please enter a topic"}


@pytest.mark.asyncio
async def test_validate_topic_numbers_only(client: AsyncClient, provider: ScriptedChatProvider):
    response = await client.post("/api/v1/validate-topic", json={"topic": "12345"})

    assert response.status_code == 200
    assert response.json() == {"isValid": False, "message": "Please enter a meaningful topic"}
    assert provider.models == []


@pytest.mark.asyncio
async def test_validate_topic_valid(client: AsyncClient):
    response = await client.post("/api/v1/validate-topic", json={"topic": "Climate Change"})

    assert response.status_code == 200
    assert response.json() == {"isValid": True}


@pytest.mark.asyncio
async def test_validate_topic_fails_open(client: AsyncClient, provider: ScriptedChatProvider):
    provider.error = TransportError(provider="scripted", status_code=503, message="down")

    response = await client.post("/api/v1/validate-topic", json={"topic": "Climate Change"})

    assert response.status_code == 200
    assert response.json() == {"isValid": True}


# ── /articles ──


@pytest.mark.asyncio
async def test_generate_and_store_then_list_and_delete(client: AsyncClient):
    created = await client.post("/api/v1/articles/generate", json={"topic": "solar power"})

    assert created.status_code == 201
    article = created.json()
    assert article["title"] == "Solar Power Advances"
    assert article["topic"] == "solar power"
    assert "createdAt" in article
    assert article["urlToImage"] is None
    assert article["tags"] == []

    listed = await client.get("/api/v1/articles")
    assert [a["id"] for a in listed.json()] == [article["id"]]

    deleted = await client.delete(f"/api/v1/articles/{article['id']}")
    assert deleted.status_code == 204

    missing = await client.get(f"/api/v1/articles/{article['id']}")
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_generate_and_store_failure_stores_nothing(
    client: AsyncClient, provider: ScriptedChatProvider
):
    provider.article = ""

    response = await client.post("/api/v1/articles/generate", json={"topic": "solar power"})

    assert response.status_code == 500
    assert response.json()["error"] == "No content received from API"
    assert (await client.get("/api/v1/articles")).json() == []


@pytest.mark.asyncio
async def test_create_article_manually(client: AsyncClient):
    response = await client.post(
        "/api/v1/articles",
        json={"title": "Manual", "description": "Typed by hand.", "topic": "misc", "tags": ["a"]},
    )

    assert response.status_code == 201
    assert response.json()["tags"] == ["a"]


@pytest.mark.asyncio
async def test_delete_missing_article_is_404(client: AsyncClient):
    response = await client.delete("/api/v1/articles/does-not-exist")
    assert response.status_code == 404
