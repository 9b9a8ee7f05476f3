"""
These are the views that receive events from Team Foundation Server.
"""

from flask import Blueprint, current_app, make_response, request

from team_events_webhooks.dispatcher import dispatch
from team_events_webhooks.docs import render_index
from team_events_webhooks.registry import EventRegistry
from team_events_webhooks.utils import get_root_url

team_events_bp = Blueprint('team_events', __name__)


def get_registry() -> EventRegistry:
    """The registry built when the app was created."""
    return current_app.extensions["team_events_registry"]


@team_events_bp.route("/", methods=("GET",))
def index():
    """
    Display an HTML page listing the events we accept, with sample payloads.
    """
    return render_index(get_registry(), get_root_url())


@team_events_bp.route("/", methods=("POST",), endpoint="receive_nameless")
@team_events_bp.route("/<path:event_path>", methods=("POST",))
def receive(event_path=None):
    """
    Process an incoming team event.

    The event is named by the first path segment after the prefix: a POST
    to ``/team-events/gitPush`` is a ``gitPush`` event.

    Returns:
        A JSON response from the event's handler, or a plain-text error.
    """
    result = dispatch(get_registry(), request.path, request.get_data(as_text=True))
    resp = make_response(result.body, result.status_code)
    resp.headers["Content-Type"] = result.content_type
    return resp
