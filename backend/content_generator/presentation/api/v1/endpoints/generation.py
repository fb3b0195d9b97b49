"""Generation and topic validation endpoints."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from content_generator.application.schemas import (
    ErrorResponse,
    GenerateRequest,
    GeneratedContentResponse,
    TopicValidationRequest,
    TopicValidationResponse,
)
from content_generator.application.services import (
    ArticleGenerationService,
    TopicValidationService,
)
from content_generator.domain.exceptions import ContentGenerationError
from content_generator.infrastructure.dependencies import (
    get_article_generation_service,
    get_topic_validation_service,
)
from content_generator.presentation.api.v1.errors import (
    MISSING_TOPIC_MESSAGE,
    generation_error_response,
    missing_topic_response,
)

router = APIRouter(tags=["Generation"])


@router.post(
    "/generate",
    response_model=GeneratedContentResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def generate(
    request: GenerateRequest,
    service: ArticleGenerationService = Depends(get_article_generation_service),
) -> GeneratedContentResponse | JSONResponse:
    """Generate a title/description pair for a topic without storing it."""
    if not request.topic or not request.topic.strip():
        return missing_topic_response()

    try:
        content = await service.generate(
            request.topic.strip(),
            request.previous_titles,
            fallback_on_error=request.fallback_on_error,
        )
    except ContentGenerationError as e:
        return generation_error_response(e)

    return GeneratedContentResponse(title=content.title, description=content.description)


@router.post(
    "/validate-topic",
    response_model=TopicValidationResponse,
    response_model_exclude_none=True,
)
async def validate_topic(
    request: TopicValidationRequest,
    service: TopicValidationService = Depends(get_topic_validation_service),
) -> TopicValidationResponse | JSONResponse:
    """Check whether a topic is meaningful enough to generate content for.

    Always answers 200 except for a missing topic: the check is advisory.
    """
    if not request.topic:
        body = TopicValidationResponse(is_valid=False, message=MISSING_TOPIC_MESSAGE)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=body.model_dump(by_alias=True),
        )

    result = await service.validate(request.topic)
    return TopicValidationResponse(is_valid=result.is_valid, message=result.message)
