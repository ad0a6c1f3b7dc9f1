"""
Review Comment Formatter

Formats the generated review as a GitHub PR comment body.
"""

import logging


logger = logging.getLogger(__name__)

DEFAULT_HEADING = "ChatGPT Review"
MAX_COMMENT_LENGTH = 65536  # GitHub's comment limit


def format_review_comment(review: str, heading: str = DEFAULT_HEADING) -> str:
    """
    Format review text under a markdown heading.

    Args:
        review: Review text returned by the model
        heading: Comment heading

    Returns:
        Markdown comment body
    """
    body = f"## {heading}\n\n{review.strip()}"
    if len(body) > MAX_COMMENT_LENGTH:
        logger.warning(f"Comment body is {len(body)} chars, over GitHub's {MAX_COMMENT_LENGTH} limit")
    return body
