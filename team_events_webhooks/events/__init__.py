r"""
Events posted to us by Team Foundation Server and Azure DevOps.

Each event module defines a ``HookEvent`` subclass with a nested
``Factory``.  The factory validates a payload and makes the event, the
event performs the reaction and returns a JSON object for the response.

Inputs
------

-  The payload is the request body parsed into a Python ``dict``.

-  A ``Factory`` raises ``ValidationError`` (a ``ValueError``) when the
   payload lacks something the event needs.  Any other exception is a
   failure on our side.
"""

import abc
from typing import Any

from glom import glom, GlomError, Path

from team_events_webhooks.exceptions import ValidationError
from team_events_webhooks.types import Document


class HookEvent(abc.ABC):
    """One received event, ready to be acted on."""

    @abc.abstractmethod
    def perform(self, payload: Document) -> Document:
        """React to the event, returning the JSON object to respond with."""


class HookEventFactory(abc.ABC):
    """Makes a ``HookEvent`` from a payload.  Stateless, shared by all requests."""

    # An example payload for the index page.  Never performed.
    sample_request_payload: str = "{}"

    @abc.abstractmethod
    def create(self, payload: Document) -> HookEvent:
        """Validate `payload` and make the event for it."""


def _glom_path(path: str) -> Path:
    """Dotted text to a glom Path, with numeric segments indexing lists."""
    return Path(*(int(seg) if seg.isdigit() else seg for seg in path.split(".")))


def optional(payload: Document, path: str, default: Any = None) -> Any:
    """Get a value at a dotted `path` in `payload`, or `default`."""
    try:
        return glom(payload, _glom_path(path))
    except GlomError:
        return default


def require(payload: Document, path: str, expected_type: type = str) -> Any:
    """
    Get a value at a dotted `path` in `payload`, which must be there.

    Raises:
        ValidationError: if the value is missing, null, empty or of the
            wrong type.
    """
    value = optional(payload, path)
    if value is None or value == "":
        raise ValidationError(f"Payload is missing {path!r}")
    wrong_type = not isinstance(value, expected_type)
    if expected_type is int and isinstance(value, bool):
        wrong_type = True
    if wrong_type:
        raise ValidationError(
            f"Payload value {path!r} must be of type {expected_type.__name__}"
        )
    return value
