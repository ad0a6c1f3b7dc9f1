"""
Main Review Action

Orchestrates one review run from repository acquisition to the
posted pull request comment.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import AppConfig
from .formatting.comment import format_review_comment
from .git.ignore import load_exclusions
from .git.repository import GitRepository, build_clone_url
from .github.client import GitHubClient
from .github.event import load_pull_request_ref
from .llm.client import CompletionClient
from .models.review import ReviewResult


logger = logging.getLogger(__name__)


class ReviewAction:
    """
    Pull request review action.

    Runs the review steps in strict sequence:
    1. Clone the repository (or use the checked-out workspace) and fetch origin
    2. Compute the diff between base and head, minus ignored paths
    3. Request a review of the diff from the completion API
    4. Post the review as a comment on the pull request

    The first failure propagates to the caller and nothing is posted.
    """

    def __init__(
        self,
        config: AppConfig,
        git: Optional[GitRepository] = None,
        completion_client: Optional[CompletionClient] = None,
        github_client: Optional[GitHubClient] = None,
    ):
        """
        Initialize review action.

        Args:
            config: Validated application configuration
            git: Working copy to diff; acquired from the workspace when omitted
            completion_client: Completion API client
            github_client: GitHub API client
        """
        self.config = config
        self.repository = config.repository_ref
        self.git = git
        self.completion_client = completion_client or CompletionClient(
            api_key=config.completion.api_key,
            endpoint=config.completion.endpoint,
            model=config.completion.model,
            response_schema=config.completion.response_schema,
            timeout=config.completion.timeout_seconds,
        )
        self.github_client = github_client or GitHubClient(
            config.github.token,
            base_url=config.github.api_base_url,
            timeout=config.github.timeout_seconds,
        )

    def acquire_repository(self) -> GitRepository:
        """Clone the repository into the workspace, or use the workspace as is."""
        workspace = Path(self.config.github.workspace)
        secrets = [self.config.github.token]

        if self.config.github.clone:
            url = build_clone_url(
                self.repository.owner,
                self.repository.name,
                self.config.github.token,
                server_url=self.config.github.server_url,
            )
            working_dir = GitRepository(workspace, secrets=secrets).clone(url, self.repository.name)
        else:
            logger.info(f"Using existing working copy at {workspace}")
            working_dir = workspace

        repository = GitRepository(working_dir, secrets=secrets)
        repository.fetch("origin")
        return repository

    def run(self) -> ReviewResult:
        """
        Run the review.

        Returns:
            ReviewResult summarising the run
        """
        start_time = datetime.now()
        logger.info(f"Starting review of {self.repository}")

        if self.git is None:
            self.git = self.acquire_repository()

        ignore_path = self.git.working_dir / self.config.review.ignore_path
        exclusions = load_exclusions(ignore_path)

        diff = self.git.diff(
            self.config.github.base_ref,
            self.config.github.head_ref,
            exclusions,
            direction=self.config.review.diff_direction,
        )
        if diff.is_empty:
            logger.warning("Diff is empty, requesting a review anyway")

        review = self.completion_client.request_review(diff, self.config.review.language)
        body = format_review_comment(review, self.config.review.comment_heading)

        pull_request = load_pull_request_ref(self.config.github.event_path)

        comment_url = None
        if self.config.review.dry_run:
            logger.info(f"Dry run, not posting comment:\n{body}")
        else:
            comment = self.github_client.create_issue_comment(
                self.repository.owner,
                self.repository.name,
                pull_request.number,
                body,
            )
            comment_url = comment.get('html_url', '')

        processing_time = (datetime.now() - start_time).total_seconds()
        logger.info(f"Review of {self.repository}#{pull_request.number} completed ({processing_time:.2f}s)")

        return ReviewResult(
            repository=self.repository.full_name,
            pr_number=pull_request.number,
            comment_body=body,
            diff_size=diff.size,
            comment_url=comment_url,
            processing_time=processing_time,
            created_at=start_time,
        )
