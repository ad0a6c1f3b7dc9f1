"""
Review Data Models

리뷰 실행 결과
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class ReviewResult:
    """한 번의 리뷰 실행 요약"""
    repository: str
    pr_number: int
    comment_body: str
    diff_size: int
    comment_url: Optional[str]
    processing_time: float
    created_at: datetime

    @property
    def posted(self) -> bool:
        return self.comment_url is not None
