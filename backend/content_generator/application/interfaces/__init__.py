from .article_repository import ArticleRepository
from .chat_provider import ChatProvider

__all__ = [
    "ArticleRepository",
    "ChatProvider",
]
