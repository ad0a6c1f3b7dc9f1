"""
Data Models

AI Review Action의 핵심 데이터 모델들
"""

from .repository import RepositoryRef, PullRequestRef
from .diff import DiffResult
from .completion import (
    ChatMessage,
    ChatCompletionRequest,
    ChatCompletionResponse,
    MessageCompletionResponse,
)
from .review import ReviewResult

__all__ = [
    "RepositoryRef",
    "PullRequestRef",
    "DiffResult",
    "ChatMessage",
    "ChatCompletionRequest",
    "ChatCompletionResponse",
    "MessageCompletionResponse",
    "ReviewResult",
]
