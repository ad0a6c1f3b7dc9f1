"""
Completion Client

Sends the review prompt to a chat completion endpoint and extracts
the generated review text from the response.
"""

import logging
from typing import Any, Dict, Union
import requests
from pydantic import ValidationError

from ..exceptions import EmptyCompletionError, TransportError
from ..models.completion import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    MessageCompletionResponse,
)
from ..models.diff import DiffResult
from .prompts import PromptBuilder


logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.openai.com/v1/chat/completions"
DEFAULT_MODEL = "gpt-3.5-turbo"

SCHEMA_CHOICES = "choices"
SCHEMA_MESSAGE = "message"
RESPONSE_SCHEMAS = (SCHEMA_CHOICES, SCHEMA_MESSAGE)


class CompletionAPIError(TransportError):
    """Completion API returned a non-success status or was unreachable"""


class MalformedResponseError(TransportError):
    """Completion API body is not JSON or does not match the schema"""


class CompletionClient:
    """
    Chat completion API client.

    Makes exactly one request per review. The response is decoded with
    either the ``choices[].message.content`` schema or the flat
    ``message`` schema.
    """

    def __init__(
        self,
        api_key: str,
        endpoint: str = DEFAULT_ENDPOINT,
        model: str = DEFAULT_MODEL,
        response_schema: str = SCHEMA_CHOICES,
        timeout: float = 60,
    ):
        """
        Initialize completion client.

        Args:
            api_key: Bearer credential for the endpoint
            endpoint: Chat completion URL
            model: Model identifier
            response_schema: ``choices`` or ``message``
            timeout: Request timeout in seconds
        """
        if not api_key:
            raise ValueError("Completion API key is required")
        if response_schema not in RESPONSE_SCHEMAS:
            raise ValueError(f"Unknown response schema: {response_schema}")

        self.endpoint = endpoint
        self.model = model
        self.response_schema = response_schema
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Authorization': f'Bearer {api_key}',
        })

    def request_review(self, diff: Union[DiffResult, bytes, str], language: str = "English") -> str:
        """
        Request a review of a diff.

        Args:
            diff: Diff to review
            language: Natural language of the review

        Returns:
            Review text of the first returned choice

        Raises:
            CompletionAPIError: On network failure or non-success status
            MalformedResponseError: If the body cannot be decoded
            EmptyCompletionError: If the response carries no review text
        """
        if isinstance(diff, DiffResult):
            diff_text = diff.text
        elif isinstance(diff, bytes):
            diff_text = diff.decode('utf-8', errors='replace')
        else:
            diff_text = diff

        request = ChatCompletionRequest(
            model=self.model,
            messages=PromptBuilder(language=language).build_messages(diff_text),
        )
        payload = self._post(request.dict())
        review = self.extract_content(payload)
        logger.info(f"Received review ({len(review)} chars) from {self.model}")
        return review

    def _post(self, body: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"Requesting review from {self.endpoint} (model={self.model})")

        try:
            response = self.session.post(self.endpoint, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Completion request failed: {e}")
            raise CompletionAPIError(f"Completion request failed: {str(e)}") from e

        if not response.ok:
            raise CompletionAPIError(
                f"status code error: {response.status_code}\n{response.text}",
                status_code=response.status_code,
                response_data=response.text,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise MalformedResponseError(
                f"Completion response is not JSON: {e}",
                status_code=response.status_code,
                response_data=response.text,
            ) from e

        if not isinstance(payload, dict):
            raise MalformedResponseError(
                "Completion response is not a JSON object",
                status_code=response.status_code,
                response_data=payload,
            )
        return payload

    def extract_content(self, payload: Dict[str, Any]) -> str:
        """
        Extract review text from a decoded response.

        Raises:
            MalformedResponseError: If the payload does not match the schema
            EmptyCompletionError: If there is no choice or no content
        """
        try:
            if self.response_schema == SCHEMA_MESSAGE:
                content = self._extract_flat_message(payload)
            else:
                content = self._extract_first_choice(payload)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Unexpected completion response shape: {e}",
                response_data=payload,
            ) from e

        if not content or not content.strip():
            raise EmptyCompletionError("Completion response has empty content", response_data=payload)
        return content

    def _extract_first_choice(self, payload: Dict[str, Any]) -> str:
        parsed = ChatCompletionResponse(**payload)
        if not parsed.choices:
            raise EmptyCompletionError("Completion response contains no choices", response_data=payload)

        message = parsed.choices[0].message
        if message is None or message.content is None:
            raise EmptyCompletionError("First choice has no message content", response_data=payload)
        return message.content

    def _extract_flat_message(self, payload: Dict[str, Any]) -> str:
        parsed = MessageCompletionResponse(**payload)
        message = parsed.message
        if message is None:
            raise EmptyCompletionError("Completion response has no message", response_data=payload)
        if isinstance(message, str):
            return message
        if message.content is None:
            raise EmptyCompletionError("Completion message has no content", response_data=payload)
        return message.content
