"""
Error Taxonomy

Every failure of a review run is fatal. These classes only name the
category so the command-line entry point can report it cleanly.
"""

from typing import Any, Dict, Optional


class ReviewActionError(Exception):
    """Base class for all review action errors."""


class ConfigurationError(ReviewActionError):
    """Missing or malformed configuration."""

    def __init__(self, message: str, problems: Optional[list] = None):
        super().__init__(message)
        self.problems = problems or [message]


class IgnoreFileError(ReviewActionError):
    """Ignore file exists but could not be read."""


class EventPayloadError(ReviewActionError):
    """Event metadata unreadable or missing the pull request number."""


class GitCommandError(ReviewActionError):
    """A git child process failed or git is not installed."""

    def __init__(self, message: str, command: Optional[list] = None,
                 returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.command = command or []
        self.returncode = returncode
        self.stderr = stderr


class TransportError(ReviewActionError):
    """Non-success response or unusable body from an external HTTP API."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 response_data: Optional[Any] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class EmptyCompletionError(ReviewActionError):
    """Completion response carried no usable review text."""

    def __init__(self, message: str, response_data: Optional[Dict] = None):
        super().__init__(message)
        self.response_data = response_data
