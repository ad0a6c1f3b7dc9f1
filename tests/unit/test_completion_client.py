"""
Unit tests for the completion API client.
"""

from unittest.mock import Mock, patch

import pytest
import requests

from ai_review_action.exceptions import EmptyCompletionError, TransportError
from ai_review_action.llm.client import (
    CompletionAPIError,
    CompletionClient,
    MalformedResponseError,
)
from ai_review_action.llm.prompts import PromptBuilder
from ai_review_action.models.diff import DiffResult


def make_response(status_code=200, payload=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


class TestPromptBuilder:
    """Unit tests for PromptBuilder."""

    def test_prompt_embeds_diff_and_language(self):
        prompt = PromptBuilder(language="Japanese").build_review_prompt("+x = 1")

        assert "Please provide your response in Japanese using bullet points." in prompt
        assert prompt.endswith("```\n+x = 1\n```")

    def test_single_user_message(self):
        messages = PromptBuilder().build_messages("+x")

        assert len(messages) == 1
        assert messages[0].role == "user"
        assert "English" in messages[0].content


class TestCompletionClient:
    """Unit tests for CompletionClient."""

    def test_initialization(self):
        client = CompletionClient("sk-test")

        assert client.session.headers["Authorization"] == "Bearer sk-test"
        assert client.model == "gpt-3.5-turbo"
        assert client.endpoint == "https://api.openai.com/v1/chat/completions"

    def test_initialization_validation(self):
        with pytest.raises(ValueError):
            CompletionClient("")
        with pytest.raises(ValueError):
            CompletionClient("sk-test", response_schema="xml")

    def test_request_review(self):
        client = CompletionClient("sk-test", model="gpt-4o")
        diff = DiffResult(content=b"+print('hi')\n", base_ref="main", head_ref="feature")
        payload = {"choices": [{"message": {"role": "assistant", "content": "Looks good"}}]}

        with patch.object(client.session, 'post', return_value=make_response(payload=payload)) as mock_post:
            review = client.request_review(diff, "English")

        assert review == "Looks good"
        mock_post.assert_called_once()
        body = mock_post.call_args.kwargs["json"]
        assert body["model"] == "gpt-4o"
        assert len(body["messages"]) == 1
        assert body["messages"][0]["role"] == "user"
        assert "+print('hi')" in body["messages"][0]["content"]

    def test_non_success_status_carries_code(self):
        client = CompletionClient("sk-test")
        response = make_response(status_code=429, text='{"error": "rate limited"}')

        with patch.object(client.session, 'post', return_value=response):
            with pytest.raises(CompletionAPIError) as exc_info:
                client.request_review("+x", "English")

        assert isinstance(exc_info.value, TransportError)
        assert exc_info.value.status_code == 429
        assert "429" in str(exc_info.value)
        assert "rate limited" in exc_info.value.response_data

    def test_network_error(self):
        client = CompletionClient("sk-test")

        with patch.object(client.session, 'post', side_effect=requests.ConnectionError("down")):
            with pytest.raises(CompletionAPIError) as exc_info:
                client.request_review("+x")

        assert exc_info.value.status_code is None

    def test_non_json_body(self):
        client = CompletionClient("sk-test")

        with patch.object(client.session, 'post', return_value=make_response(payload=ValueError("bad"))):
            with pytest.raises(MalformedResponseError):
                client.request_review("+x")

    def test_empty_choices_fail_explicitly(self):
        client = CompletionClient("sk-test")

        with patch.object(client.session, 'post', return_value=make_response(payload={"choices": []})):
            with pytest.raises(EmptyCompletionError):
                client.request_review("+x")

    @pytest.mark.parametrize("payload", [
        {},
        {"choices": [{}]},
        {"choices": [{"message": {"role": "assistant"}}]},
        {"choices": [{"message": {"content": "   "}}]},
    ])
    def test_missing_content_fails_explicitly(self, payload):
        client = CompletionClient("sk-test")

        with pytest.raises(EmptyCompletionError):
            client.extract_content(payload)

    def test_wrong_shape_is_malformed(self):
        client = CompletionClient("sk-test")

        with pytest.raises(MalformedResponseError):
            client.extract_content({"choices": "nope"})

    def test_flat_message_schema(self):
        client = CompletionClient("sk-test", response_schema="message")

        assert client.extract_content({"message": "Looks good"}) == "Looks good"
        assert client.extract_content({"message": {"content": "Fine"}}) == "Fine"
        with pytest.raises(EmptyCompletionError):
            client.extract_content({"message": ""})
        with pytest.raises(EmptyCompletionError):
            client.extract_content({})
