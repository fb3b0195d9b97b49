from .article_service import ArticleService
from .article_generation_service import ArticleGenerationService
from .topic_validation_service import TopicValidationService

__all__ = [
    "ArticleService",
    "ArticleGenerationService",
    "TopicValidationService",
]
