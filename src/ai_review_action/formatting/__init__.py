"""
Formatting Layer

Formats reviews for GitHub PR comments.
"""

from .comment import format_review_comment, DEFAULT_HEADING

__all__ = ['format_review_comment', 'DEFAULT_HEADING']
