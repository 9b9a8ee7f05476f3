"""Helpers for debugging."""

import base64
import gzip
import json
import logging


def compress_for_log(text):
    """
    Pack long text into one log-safe line.

    The line is Python that prints the original text when run.
    """
    data = base64.b85encode(gzip.compress(text.encode())).decode()
    return "import base64,gzip;" + f"print(gzip.decompress(base64.b85decode({data!r})).decode())"


def dump_event(logger, event_name, payload):
    """Log the whole payload of a team event, if `logger` is at debug level."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    text = json.dumps(payload, sort_keys=True, indent=4)
    logger.debug(f"Payload of {event_name!r} event, {len(text)} chars: {compress_for_log(text)}")
