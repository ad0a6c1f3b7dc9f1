"""
Repository Data Models

리뷰 대상 저장소와 Pull Request 식별자
"""

from dataclasses import dataclass

from ..exceptions import ConfigurationError


@dataclass(frozen=True)
class RepositoryRef:
    """owner/name 형식의 저장소 식별자"""
    owner: str
    name: str

    @classmethod
    def parse(cls, identifier: str) -> "RepositoryRef":
        """'owner/name' 문자열 파싱"""
        parts = (identifier or "").split('/')
        if len(parts) != 2:
            raise ConfigurationError(f"invalid repository name: {identifier!r}")
        owner, name = parts
        if not owner or not name:
            raise ConfigurationError(f"invalid repository name: {identifier!r}")
        return cls(owner=owner, name=name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.full_name


@dataclass(frozen=True)
class PullRequestRef:
    """Pull Request 번호"""
    number: int

    def __post_init__(self):
        """데이터 검증"""
        if isinstance(self.number, bool) or not isinstance(self.number, int):
            raise TypeError("PR number must be an integer")
