"""
GitHub Integration Layer

This module provides GitHub API integration for posting review
comments and reading the pull request event payload.
"""

from .client import GitHubClient, GitHubAPIError
from .event import load_pull_request_ref

__all__ = ['GitHubClient', 'GitHubAPIError', 'load_pull_request_ref']
