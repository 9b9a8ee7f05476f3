"""
Reading and writing the JSON bodies of team events.
"""

import json

from team_events_webhooks.exceptions import MalformedPayload
from team_events_webhooks.types import Document


def parse(text: str) -> Document:
    """
    Parse a request body into a JSON object.

    Only the syntax is checked: the body must be a JSON object.

    Raises:
        MalformedPayload: if it isn't.
    """
    if not text or not text.strip():
        raise MalformedPayload("Request body is empty")
    try:
        document = json.loads(text)
    except ValueError as exc:
        raise MalformedPayload(f"Request body is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        raise MalformedPayload("Request body is nested too deeply") from exc
    if not isinstance(document, dict):
        raise MalformedPayload(
            f"Request body must be a JSON object, not {type(document).__name__}"
        )
    return document


def serialize(document: Document) -> str:
    """Write a JSON object as the text of a response body."""
    return json.dumps(document, separators=(",", ":")) + "\n"
