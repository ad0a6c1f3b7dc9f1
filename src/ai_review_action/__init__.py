"""
AI Review Action

GitHub Actions step that reviews a pull request diff with a chat
completion model and posts the review as a PR comment.
"""

__version__ = "1.0.0"

from .api import ReviewAction

__all__ = ["ReviewAction"]
