"""
The ``ping`` event, sent to check that we can be reached.
"""

import logging

from team_events_webhooks.events import HookEvent, HookEventFactory
from team_events_webhooks.types import Document

logger = logging.getLogger(__name__)


class PingHookEvent(HookEvent):

    class Factory(HookEventFactory):
        sample_request_payload = """{
    "message": "Hello, world!"
}"""

        def create(self, payload):
            return PingHookEvent()

    def perform(self, payload: Document) -> Document:
        logger.info(f"ping: {payload.get('message', '')!r}")
        return {
            "result": "pong",
            "request": payload,
        }
