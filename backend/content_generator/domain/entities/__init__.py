from .article import Article, GeneratedContent
from .chat_message import ChatMessage, ChatCompletionResult, TokenUsage
from .topic_validation import TopicValidation

__all__ = [
    "Article",
    "GeneratedContent",
    "ChatMessage",
    "ChatCompletionResult",
    "TokenUsage",
    "TopicValidation",
]
