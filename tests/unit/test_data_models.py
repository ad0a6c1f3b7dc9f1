"""
Unit tests for data models.
"""

import pytest
from pydantic import ValidationError

from ai_review_action.exceptions import ConfigurationError
from ai_review_action.models.repository import RepositoryRef, PullRequestRef
from ai_review_action.models.diff import DiffResult
from ai_review_action.models.completion import (
    ChatMessage,
    ChatCompletionRequest,
    ChatCompletionResponse,
    MessageCompletionResponse,
)


class TestRepositoryRef:
    """Unit tests for RepositoryRef parsing."""

    def test_parse_owner_and_name(self):
        ref = RepositoryRef.parse("a/b")

        assert (ref.owner, ref.name) == ("a", "b")
        assert ref.full_name == "a/b"
        assert str(ref) == "a/b"

    @pytest.mark.parametrize("identifier", ["ab", "a/b/c", "", "/b", "a/", None])
    def test_parse_rejects_malformed_identifiers(self, identifier):
        with pytest.raises(ConfigurationError):
            RepositoryRef.parse(identifier)

    def test_refs_are_immutable(self):
        ref = RepositoryRef.parse("octo/demo")
        with pytest.raises(Exception):
            ref.owner = "other"


class TestPullRequestRef:
    """Unit tests for PullRequestRef."""

    def test_number(self):
        assert PullRequestRef(number=42).number == 42

    def test_rejects_non_integer(self):
        with pytest.raises(TypeError):
            PullRequestRef(number="42")
        with pytest.raises(TypeError):
            PullRequestRef(number=True)


class TestDiffResult:
    """Unit tests for DiffResult."""

    def test_text_and_size(self):
        diff = DiffResult(content=b"+hello\n", base_ref="main", head_ref="feature")

        assert diff.text == "+hello\n"
        assert diff.size == 7
        assert not diff.is_empty
        assert diff.exclusions == ()

    def test_empty_diff(self):
        assert DiffResult(content=b"\n", base_ref="main", head_ref="feature").is_empty

    def test_invalid_utf8_is_replaced(self):
        diff = DiffResult(content=b"+\xff\n", base_ref="main", head_ref="feature")
        assert "�" in diff.text


class TestCompletionModels:
    """Unit tests for completion API wire models."""

    def test_request_serialization(self):
        request = ChatCompletionRequest(
            model="gpt-3.5-turbo",
            messages=[ChatMessage(role="user", content="review this")],
        )

        assert request.dict() == {
            "model": "gpt-3.5-turbo",
            "messages": [{"role": "user", "content": "review this"}],
        }

    def test_request_requires_messages(self):
        with pytest.raises(ValidationError):
            ChatCompletionRequest(model="gpt-3.5-turbo", messages=[])

    def test_message_role_validation(self):
        with pytest.raises(ValidationError):
            ChatMessage(role="robot", content="hi")

    def test_response_ignores_extra_fields(self):
        response = ChatCompletionResponse(**{
            "id": "chatcmpl-1",
            "object": "chat.completion",
            "usage": {"total_tokens": 3},
            "choices": [{"index": 0, "message": {"role": "assistant", "content": "Looks good"},
                         "finish_reason": "stop"}],
        })

        assert response.choices[0].message.content == "Looks good"

    def test_flat_message_response(self):
        assert MessageCompletionResponse(**{"message": "Looks good"}).message == "Looks good"
        nested = MessageCompletionResponse(**{"message": {"role": "assistant", "content": "Fine"}})
        assert nested.message.content == "Fine"
