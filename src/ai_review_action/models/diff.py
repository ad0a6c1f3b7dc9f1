"""
Diff Data Models

git diff 실행 결과
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class DiffResult:
    """두 리비전 사이의 unified diff 원본"""
    content: bytes
    base_ref: str
    head_ref: str
    exclusions: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def text(self) -> str:
        """UTF-8로 디코딩한 diff 텍스트"""
        return self.content.decode('utf-8', errors='replace')

    @property
    def is_empty(self) -> bool:
        return not self.content.strip()

    @property
    def size(self) -> int:
        return len(self.content)
