"""
Where team events are received.
"""

from typing import Optional

URL_NAME = "team-events"
URL_PREFIX = "/" + URL_NAME + "/"


def path_to_event_name(path: str, prefix: str = URL_PREFIX) -> Optional[str]:
    """
    Get the event name from a request path.

    ``/team-events/gitPush`` and ``/team-events/gitPush/more/stuff`` both
    name the ``gitPush`` event.

    Returns:
        The segment following `prefix`, which can be empty, or None if
        `path` doesn't start with `prefix`.
    """
    if not path.startswith(prefix):
        return None
    rest_of_path = path[len(prefix):]
    event_name, _, _ = rest_of_path.partition("/")
    return event_name
