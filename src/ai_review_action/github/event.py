"""
GitHub Event Payload

Reads the pull request number from the webhook event file that
GitHub Actions exposes through GITHUB_EVENT_PATH.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from ..exceptions import EventPayloadError
from ..models.repository import PullRequestRef


logger = logging.getLogger(__name__)


def read_event(event_path: Union[str, Path]) -> Dict[str, Any]:
    """Read and decode the event JSON document."""
    path = Path(event_path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            event = json.load(f)
    except OSError as e:
        raise EventPayloadError(f"Cannot read event file {path}: {e}") from e
    except ValueError as e:
        raise EventPayloadError(f"Event file {path} is not valid JSON: {e}") from e

    if not isinstance(event, dict):
        raise EventPayloadError(f"Event file {path} does not contain a JSON object")
    return event


def extract_pull_request_number(event: Dict[str, Any]) -> int:
    pull_request = event.get('pull_request')
    if not isinstance(pull_request, dict):
        raise EventPayloadError("Event has no pull_request object")

    number = pull_request.get('number')
    # bool is an int subclass
    if isinstance(number, bool) or not isinstance(number, (int, float)):
        raise EventPayloadError(f"pull_request.number is not a number: {number!r}")
    if isinstance(number, float) and not number.is_integer():
        raise EventPayloadError(f"pull_request.number is not an integer: {number!r}")
    return int(number)


def load_pull_request_ref(event_path: Union[str, Path]) -> PullRequestRef:
    """
    Load the pull request reference from an event file.

    Raises:
        EventPayloadError: If the file is unreadable or lacks pull_request.number
    """
    number = extract_pull_request_number(read_event(event_path))
    logger.info(f"Reviewing pull request #{number}")
    return PullRequestRef(number=number)
