"""
Prompt Builder

Builds the single-turn review prompt sent to the chat completion API.
"""

import logging
from typing import List

from ..models.completion import ChatMessage


logger = logging.getLogger(__name__)

REVIEW_TEMPLATE = (
    "You are an excellent software engineer. "
    "Please propose some refactoring by looking at the output of the following `git diff`. "
    "Please provide your response in {language} using bullet points.\n"
    "```\n{diff}\n```"
)


class PromptBuilder:
    """Builds review prompts in the requested output language."""

    def __init__(self, language: str = "English", template: str = REVIEW_TEMPLATE):
        self.language = language
        self.template = template

    def build_review_prompt(self, diff_text: str) -> str:
        """
        Build the review prompt for a diff.

        Args:
            diff_text: Unified diff text

        Returns:
            Prompt string embedding the diff and the output language
        """
        logger.debug(f"Building review prompt ({len(diff_text)} chars of diff, {self.language})")
        return self.template.format(language=self.language, diff=diff_text)

    def build_messages(self, diff_text: str) -> List[ChatMessage]:
        return [ChatMessage(role="user", content=self.build_review_prompt(diff_text))]
