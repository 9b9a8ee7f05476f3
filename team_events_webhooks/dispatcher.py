"""
Dispatch incoming team events to their handlers.

Every event request goes through :func:`dispatch`, which resolves the
event name, parses the payload, creates the handler and performs it.
Problems with the request are answered with a 400 before any event code
runs, and failures of our own with a 500.  Nothing is raised to the
caller: every request gets a status and a body.
"""

import dataclasses
import logging

import sentry_sdk

from team_events_webhooks import codec
from team_events_webhooks.debug import dump_event
from team_events_webhooks.events import HookEvent, HookEventFactory
from team_events_webhooks.exceptions import (
    InternalError, InvalidEvent, TeamEventsError, ValidationError,
)
from team_events_webhooks.paths import path_to_event_name
from team_events_webhooks.registry import EventRegistry
from team_events_webhooks.types import Document
from team_events_webhooks.utils import sentry_extra_context

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json; charset=utf-8"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"


@dataclasses.dataclass(frozen=True)
class EventResponse:
    """What to answer an event request with."""
    status_code: int
    content_type: str
    body: str

    @classmethod
    def from_error(cls, exc: TeamEventsError) -> "EventResponse":
        return cls(exc.status_code, TEXT_CONTENT_TYPE, str(exc))


def dispatch(registry: EventRegistry, path: str, body: str) -> EventResponse:
    """
    Handle one event request.

    Arguments:
        registry: the events we handle.
        path (str): the request path, like ``/team-events/gitPush``.
        body (str): the raw request body.
    """
    event_name = path_to_event_name(path)
    try:
        factory = _lookup_factory(registry, event_name)
        payload = codec.parse(body)
        logger.info(f"Incoming team event: {event_name!r}, keys: {' '.join(sorted(payload))}")
        dump_event(logger, event_name, payload)
        sentry_extra_context({"event_name": event_name, "event": payload})

        hook_event = _create_hook_event(factory, event_name, payload)
        response_body = _perform(hook_event, event_name, payload)
    except TeamEventsError as exc:
        return EventResponse.from_error(exc)

    return EventResponse(200, JSON_CONTENT_TYPE, response_body)


def _lookup_factory(registry, event_name) -> HookEventFactory:
    if event_name is None or not event_name.strip():
        logger.info("Rejecting event request without an event name")
        raise InvalidEvent(event_name)
    factory = registry.lookup(event_name)
    if factory is None:
        logger.info(f"Rejecting unknown event {event_name!r}")
        raise InvalidEvent(event_name)
    return factory


def _create_hook_event(factory, event_name, payload: Document) -> HookEvent:
    try:
        return factory.create(payload)
    except ValueError as exc:
        logger.warning(f"Invalid payload for {event_name!r} event: {exc}")
        if isinstance(exc, ValidationError):
            raise
        raise ValidationError(str(exc)) from exc
    except Exception as exc:
        raise _internal_error(event_name, exc) from exc


def _perform(hook_event, event_name, payload: Document) -> str:
    try:
        return codec.serialize(hook_event.perform(payload))
    except TeamEventsError as exc:
        if exc.status_code >= 500:
            logger.exception(f"Error while performing reaction to {event_name!r} event: {exc}")
            sentry_sdk.capture_exception(exc)
        raise
    except Exception as exc:
        raise _internal_error(event_name, exc) from exc


def _internal_error(event_name, exc) -> InternalError:
    error = InternalError(event_name, exc)
    logger.exception(str(error))
    sentry_sdk.capture_exception(exc)
    return error
