"""
The ways handling a team event can fail.

Each class carries the HTTP status that the event endpoint answers with.
"""


class TeamEventsError(Exception):
    """Base class for failures reported back to the caller."""
    status_code = 500


class InvalidEvent(TeamEventsError):
    """The request path doesn't name a registered event."""
    status_code = 400

    def __init__(self, event_name=None):
        super().__init__("Invalid event")
        self.event_name = event_name


class MalformedPayload(TeamEventsError):
    """The request body isn't a JSON object."""
    status_code = 400


class ValidationError(TeamEventsError, ValueError):
    """The payload is JSON, but not the shape this event needs."""
    status_code = 400


class InternalError(TeamEventsError):
    """Something unexpected went wrong while reacting to an event."""
    status_code = 500

    def __init__(self, event_name, cause):
        super().__init__(f"Error while performing reaction to {event_name!r} event.")
        self.event_name = event_name
        self.cause = cause


class RegistryFrozen(Exception):
    """Events can only be registered while the registry is being built."""
