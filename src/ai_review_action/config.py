"""
Configuration Management

리뷰 액션 설정 관리
"""

import os
import yaml
from dataclasses import dataclass, field, replace, asdict
from typing import Optional, Dict, Any
from pathlib import Path
import logging

from .exceptions import ConfigurationError
from .formatting.comment import DEFAULT_HEADING
from .git.ignore import DEFAULT_IGNORE_PATH
from .git.repository import DIFF_BASE_HEAD, DIFF_DIRECTIONS
from .llm.client import DEFAULT_ENDPOINT, DEFAULT_MODEL, RESPONSE_SCHEMAS, SCHEMA_CHOICES
from .models.repository import RepositoryRef


def _env_number(name: str, default: str, cast=float):
    """Parse a numeric variable, keeping the raw text for validate() to report."""
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError:
        return raw


def _is_number(value, kind=(int, float)) -> bool:
    # bool is an int subclass
    return isinstance(value, kind) and not isinstance(value, bool)


@dataclass
class GitHubConfig:
    """GitHub 저장소 및 API 설정"""
    repository: Optional[str] = None
    token: Optional[str] = None
    base_ref: Optional[str] = None
    head_ref: Optional[str] = None
    event_path: Optional[str] = None
    api_base_url: str = "https://api.github.com"
    server_url: str = "https://github.com"
    workspace: str = field(default_factory=os.getcwd)
    clone: bool = True
    timeout_seconds: float = 30


@dataclass
class CompletionConfig:
    """Completion API 설정"""
    api_key: Optional[str] = None
    endpoint: str = DEFAULT_ENDPOINT
    model: str = DEFAULT_MODEL
    response_schema: str = SCHEMA_CHOICES
    timeout_seconds: float = 60


@dataclass
class ReviewConfig:
    """리뷰 생성 설정"""
    language: str = "English"
    ignore_path: str = DEFAULT_IGNORE_PATH
    diff_direction: str = DIFF_BASE_HEAD
    comment_heading: str = DEFAULT_HEADING
    dry_run: bool = False


@dataclass
class LoggingConfig:
    """로깅 설정"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5


@dataclass
class AppConfig:
    """전체 애플리케이션 설정"""
    github: GitHubConfig
    completion: CompletionConfig
    review: ReviewConfig
    logging: LoggingConfig

    @classmethod
    def from_env(cls) -> "AppConfig":
        """환경 변수에서 설정 로드"""
        return cls(
            github=GitHubConfig(
                repository=os.getenv("GITHUB_REPOSITORY"),
                token=os.getenv("INPUT_GITHUB_TOKEN") or os.getenv("GITHUB_TOKEN"),
                base_ref=os.getenv("GITHUB_BASE_REF"),
                head_ref=os.getenv("GITHUB_HEAD_REF"),
                event_path=os.getenv("GITHUB_EVENT_PATH"),
                api_base_url=os.getenv("GITHUB_API_URL", "https://api.github.com"),
                server_url=os.getenv("GITHUB_SERVER_URL", "https://github.com"),
                workspace=os.getenv("GITHUB_WORKSPACE") or os.getcwd(),
                clone=os.getenv("INPUT_CLONE", "true").lower() == "true",
                timeout_seconds=_env_number("GITHUB_TIMEOUT", "30"),
            ),
            completion=CompletionConfig(
                api_key=os.getenv("INPUT_OPENAI_API_KEY"),
                endpoint=os.getenv("INPUT_OPENAI_ENDPOINT") or DEFAULT_ENDPOINT,
                model=os.getenv("INPUT_MODEL") or DEFAULT_MODEL,
                response_schema=os.getenv("INPUT_RESPONSE_SCHEMA") or SCHEMA_CHOICES,
                timeout_seconds=_env_number("REQUEST_TIMEOUT", "60"),
            ),
            review=ReviewConfig(
                language=os.getenv("INPUT_LANGUAGE") or "English",
                ignore_path=os.getenv("INPUT_REVIEW_IGNORE_PATH") or DEFAULT_IGNORE_PATH,
                diff_direction=os.getenv("INPUT_DIFF_DIRECTION") or DIFF_BASE_HEAD,
                comment_heading=os.getenv("INPUT_COMMENT_HEADING") or DEFAULT_HEADING,
                dry_run=os.getenv("INPUT_DRY_RUN", "false").lower() == "true",
            ),
            logging=LoggingConfig(
                level=os.getenv("LOG_LEVEL", "INFO"),
                format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
                file_path=os.getenv("LOG_FILE"),
                max_file_size=_env_number("LOG_MAX_SIZE", str(10 * 1024 * 1024), int),
                backup_count=_env_number("LOG_BACKUP_COUNT", "5", int),
            ),
        )

    @classmethod
    def from_yaml(cls, config_path: str) -> "AppConfig":
        """YAML 파일에서 설정 로드 (환경 변수 값 위에 덮어씀)"""
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in config file {config_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {config_path}: {e}")

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config file must contain a mapping: {config_path}")

        base = cls.from_env()
        try:
            return cls(
                github=replace(base.github, **config_data.get('github', {})),
                completion=replace(base.completion, **config_data.get('completion', {})),
                review=replace(base.review, **config_data.get('review', {})),
                logging=replace(base.logging, **config_data.get('logging', {})),
            )
        except TypeError as e:
            raise ConfigurationError(f"Invalid config file {config_path}: {e}")

    @property
    def repository_ref(self) -> RepositoryRef:
        return RepositoryRef.parse(self.github.repository)

    def validate(self) -> None:
        """설정 유효성 검사 (모든 오류를 한 번에 보고)"""
        errors = []

        # 필수 값 확인
        required = {
            "GITHUB_REPOSITORY": self.github.repository,
            "GITHUB_TOKEN": self.github.token,
            "GITHUB_BASE_REF": self.github.base_ref,
            "GITHUB_HEAD_REF": self.github.head_ref,
            "GITHUB_EVENT_PATH": self.github.event_path,
            "OPENAI_API_KEY": self.completion.api_key,
        }
        for name, value in required.items():
            if not value:
                errors.append(f"{name} environment variable must be set")
            elif not isinstance(value, str):
                errors.append(f"{name} must be a string, got {value!r}")

        if self.github.repository and isinstance(self.github.repository, str):
            try:
                RepositoryRef.parse(self.github.repository)
            except ConfigurationError as e:
                errors.append(str(e))

        # 문자열 설정 타입 확인
        strings = {
            "github.api_base_url": self.github.api_base_url,
            "github.server_url": self.github.server_url,
            "github.workspace": self.github.workspace,
            "completion.endpoint": self.completion.endpoint,
            "completion.model": self.completion.model,
            "review.language": self.review.language,
            "review.ignore_path": self.review.ignore_path,
            "review.comment_heading": self.review.comment_heading,
        }
        for name, value in strings.items():
            if not isinstance(value, str):
                errors.append(f"{name} must be a string, got {value!r}")

        for name, value in {"github.clone": self.github.clone, "review.dry_run": self.review.dry_run}.items():
            if not isinstance(value, bool):
                errors.append(f"{name} must be true or false, got {value!r}")

        if self.completion.response_schema not in RESPONSE_SCHEMAS:
            errors.append(f"Invalid response schema: {self.completion.response_schema}")

        if self.review.diff_direction not in DIFF_DIRECTIONS:
            errors.append(f"Invalid diff direction: {self.review.diff_direction}")

        # 숫자 설정 검증
        timeouts = {
            "GITHUB_TIMEOUT": self.github.timeout_seconds,
            "REQUEST_TIMEOUT": self.completion.timeout_seconds,
        }
        for name, value in timeouts.items():
            if not _is_number(value):
                errors.append(f"{name} must be a number, got {value!r}")
            elif value <= 0:
                errors.append(f"{name} must be positive")

        counts = {
            "LOG_MAX_SIZE": self.logging.max_file_size,
            "LOG_BACKUP_COUNT": self.logging.backup_count,
        }
        for name, value in counts.items():
            if not _is_number(value, int):
                errors.append(f"{name} must be an integer, got {value!r}")
            elif value < 0:
                errors.append(f"{name} must not be negative")

        # 로그 레벨 검증
        valid_log_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if not isinstance(self.logging.level, str) or self.logging.level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.logging.level}")

        if not isinstance(self.logging.format, str):
            errors.append(f"logging.format must be a string, got {self.logging.format!r}")

        if self.logging.file_path is not None and not isinstance(self.logging.file_path, str):
            errors.append(f"logging.file_path must be a string, got {self.logging.file_path!r}")

        if errors:
            raise ConfigurationError(
                f"Configuration validation failed: {'; '.join(errors)}",
                problems=errors,
            )

    def to_dict(self) -> Dict[str, Any]:
        """설정을 딕셔너리로 변환"""
        data = {
            'github': asdict(self.github),
            'completion': asdict(self.completion),
            'review': asdict(self.review),
            'logging': asdict(self.logging),
        }
        # 보안상 토큰은 제외
        data['github'].pop('token')
        data['completion'].pop('api_key')
        return data


class ConfigManager:
    """설정 관리자"""

    def __init__(self, config: Optional[AppConfig] = None):
        self._config = config or AppConfig.from_env()
        self._config.validate()
        self._setup_logging()

    @property
    def config(self) -> AppConfig:
        """현재 설정 반환"""
        return self._config

    def update_config(self, **kwargs) -> None:
        """설정 업데이트 (예: 'review.dry_run')"""
        sections = {
            'github': self._config.github,
            'completion': self._config.completion,
            'review': self._config.review,
            'logging': self._config.logging,
        }

        for key, value in kwargs.items():
            section, _, name = key.partition('.')
            if section not in sections or not name:
                raise ConfigurationError(f"Unknown setting: {key}")
            try:
                sections[section] = replace(sections[section], **{name: value})
            except TypeError:
                raise ConfigurationError(f"Unknown setting: {key}")

        config = AppConfig(**sections)
        config.validate()
        self._config = config

    def _setup_logging(self) -> None:
        """로깅 설정"""
        logging.basicConfig(
            level=getattr(logging, self._config.logging.level.upper()),
            format=self._config.logging.format,
        )

        # 파일 로깅이 설정된 경우 로테이션 설정
        if self._config.logging.file_path:
            from logging.handlers import RotatingFileHandler

            handler = RotatingFileHandler(
                self._config.logging.file_path,
                maxBytes=self._config.logging.max_file_size,
                backupCount=self._config.logging.backup_count,
            )
            handler.setFormatter(logging.Formatter(self._config.logging.format))

            # 루트 로거에 핸들러 추가
            root_logger = logging.getLogger()
            root_logger.addHandler(handler)
