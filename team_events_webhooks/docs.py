"""
The index page describing the events we accept.
"""

from flask import render_template
from markupsafe import escape, Markup

from team_events_webhooks.paths import URL_NAME
from team_events_webhooks.registry import EventRegistry


def describe_events(registry: EventRegistry, url_name: str = URL_NAME) -> str:
    """
    Make the HTML table rows describing each event in `registry`.

    Each row has the event name, its URL relative to the server root, and
    the factory's sample payload, escaped.
    """
    lines = []
    for event_name, factory in registry.list_all():
        lines.append("<tr>")
        lines.append(f"<td valign='top'>{escape(event_name)}</td>")
        lines.append(f"<td valign='top'>/{escape(url_name)}/{escape(event_name)}</td>")
        lines.append(f"<td><pre>{escape(factory.sample_request_payload)}</pre></td>")
        lines.append("</tr>")
    return "".join(line + "\n" for line in lines)


def render_index(registry: EventRegistry, root_url: str, url_name: str = URL_NAME) -> str:
    """Render the whole index page.  Needs a Flask app context."""
    return render_template(
        "team_events.html",
        url_name=url_name,
        event_rows=Markup(describe_events(registry, url_name)),
        root_url=root_url,
    )
