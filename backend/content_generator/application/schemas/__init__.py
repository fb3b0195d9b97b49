from .article import ArticleCreate, ArticleResponse
from .generation import (
    ErrorResponse,
    GenerateRequest,
    GeneratedContentResponse,
    TopicValidationRequest,
    TopicValidationResponse,
)

__all__ = [
    "ArticleCreate",
    "ArticleResponse",
    "ErrorResponse",
    "GenerateRequest",
    "GeneratedContentResponse",
    "TopicValidationRequest",
    "TopicValidationResponse",
]
