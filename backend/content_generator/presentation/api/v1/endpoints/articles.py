"""Article endpoints — list, get, insert, generate-and-store, delete.

There is no update endpoint: articles are insert-only.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from content_generator.application.schemas import (
    ArticleCreate,
    ArticleResponse,
    ErrorResponse,
    GenerateRequest,
)
from content_generator.application.services import ArticleGenerationService, ArticleService
from content_generator.domain.exceptions import ContentGenerationError, EntityNotFoundError
from content_generator.infrastructure.dependencies import (
    get_article_generation_service,
    get_article_service,
)
from content_generator.presentation.api.v1.errors import (
    generation_error_response,
    missing_topic_response,
)

router = APIRouter(prefix="/articles", tags=["Articles"])


@router.get("", response_model=list[ArticleResponse])
async def list_articles(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    service: ArticleService = Depends(get_article_service),
) -> list[ArticleResponse]:
    """Retrieve a page of articles, newest first."""
    articles = await service.list_articles(skip=skip, limit=limit)
    return [ArticleResponse.model_validate(a, from_attributes=True) for a in articles]


@router.get("/{article_id}", response_model=ArticleResponse)
async def get_article(
    article_id: str,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Retrieve a single article by ID."""
    try:
        article = await service.get_article(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.post("", response_model=ArticleResponse, status_code=status.HTTP_201_CREATED)
async def create_article(
    data: ArticleCreate,
    service: ArticleService = Depends(get_article_service),
) -> ArticleResponse:
    """Insert an article supplied by the client."""
    article = await service.create_article(data)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.post(
    "/generate",
    response_model=ArticleResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate_article(
    request: GenerateRequest,
    service: ArticleGenerationService = Depends(get_article_generation_service),
) -> ArticleResponse | JSONResponse:
    """Generate an article for a topic and store it."""
    if not request.topic or not request.topic.strip():
        return missing_topic_response()

    try:
        article = await service.generate_and_store(
            request.topic.strip(),
            request.previous_titles,
            fallback_on_error=request.fallback_on_error,
        )
    except ContentGenerationError as e:
        return generation_error_response(e)
    return ArticleResponse.model_validate(article, from_attributes=True)


@router.delete("/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: str,
    service: ArticleService = Depends(get_article_service),
) -> None:
    """Delete an article by ID."""
    try:
        await service.delete_article(article_id)
    except EntityNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
