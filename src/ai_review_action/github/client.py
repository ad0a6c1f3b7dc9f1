"""
GitHub API Client

Handles GitHub API authentication and communication for posting
review comments on pull requests.
"""

import logging
from typing import Dict, Optional
import requests

from ..exceptions import TransportError


logger = logging.getLogger(__name__)


class GitHubAPIError(TransportError):
    """GitHub API related errors"""


class GitHubClient:
    """
    GitHub API client with authentication and error handling.

    Requests are made exactly once; failures surface as GitHubAPIError
    carrying the response status code.
    """

    def __init__(self, token: str, base_url: str = "https://api.github.com", timeout: float = 30):
        """
        Initialize GitHub client.

        Args:
            token: GitHub token (Actions token or personal access token)
            base_url: GitHub API base URL (default: https://api.github.com)
            timeout: Request timeout in seconds
        """
        if not token:
            raise ValueError("GitHub token is required")

        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = self._create_session()

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self.session.headers)

    def _create_session(self) -> requests.Session:
        """Create requests session with authentication headers."""
        session = requests.Session()
        session.headers.update({
            'Authorization': f'token {self.token}',
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': 'AI-Review-Action/1.0'
        })
        return session

    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make authenticated request to GitHub API.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments for requests

        Returns:
            Response object

        Raises:
            GitHubAPIError: For network failures and non-success statuses
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault('timeout', self.timeout)

        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise GitHubAPIError(f"Request failed: {str(e)}") from e

        if not response.ok:
            try:
                error_data = response.json() if response.content else {}
            except ValueError:
                error_data = {'message': response.text}
            message = error_data.get('message', 'Unknown error') if isinstance(error_data, dict) else str(error_data)
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} - {message}",
                status_code=response.status_code,
                response_data=error_data
            )

        return response

    def create_issue_comment(self, owner: str, repo: str, pr_number: int, body: str) -> Dict:
        """
        Post a comment on a pull request's conversation thread.

        Args:
            owner: Repository owner
            repo: Repository name
            pr_number: Pull request number
            body: Markdown comment body

        Returns:
            Created comment data
        """
        logger.info(f"Posting review comment to {owner}/{repo}#{pr_number}")

        response = self._make_request(
            'POST',
            f'/repos/{owner}/{repo}/issues/{pr_number}/comments',
            json={'body': body}
        )
        comment = response.json()
        logger.info(f"Comment created: {comment.get('html_url')}")
        return comment

