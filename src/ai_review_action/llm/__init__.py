"""
LLM Review Requester

This module builds the review prompt and requests the review
from a chat completion endpoint.
"""

from .prompts import PromptBuilder
from .client import CompletionClient, CompletionAPIError, MalformedResponseError

__all__ = ['PromptBuilder', 'CompletionClient', 'CompletionAPIError', 'MalformedResponseError']
