"""
The table of events we know how to handle.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional, Tuple

from team_events_webhooks.events import HookEventFactory
from team_events_webhooks.exceptions import RegistryFrozen

logger = logging.getLogger(__name__)


class EventRegistry:
    """
    Event names mapped to the factories that handle them.

    Names are case-insensitive.  The registry is filled while the app
    starts, then frozen: after that it is only read, so requests can share
    it without locking.
    """

    def __init__(self):
        # Keyed by the lowercased name: (name as registered, factory).
        self._entries: Dict[str, Tuple[str, HookEventFactory]] = {}
        self._frozen = False

    def register(self, name: str, factory: HookEventFactory) -> None:
        if self._frozen:
            raise RegistryFrozen(f"Can't register {name!r}, the registry is frozen")
        key = name.lower()
        if key in self._entries:
            # Keep the name as first registered, but use the new factory.
            existing_name, _ = self._entries[key]
            logger.warning(f"Event {name!r} replaces the factory registered as {existing_name!r}")
            name = existing_name
        self._entries[key] = (name, factory)

    def freeze(self) -> "EventRegistry":
        self._entries = MappingProxyType(self._entries)    # type: ignore[assignment]
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: Optional[str]) -> Optional[HookEventFactory]:
        """Find the factory for an event name, ignoring case."""
        if not name:
            return None
        entry = self._entries.get(name.lower())
        if entry is None:
            return None
        return entry[1]

    def list_all(self) -> List[Tuple[str, HookEventFactory]]:
        """All (name, factory) pairs, ordered by name, ignoring case."""
        return [self._entries[key] for key in sorted(self._entries)]

    def __contains__(self, name) -> bool:
        return self.lookup(name) is not None

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self.list_all())

    def __len__(self) -> int:
        return len(self._entries)


def build_registry() -> EventRegistry:
    """Make the frozen registry of every event this service handles."""
    # Imported here so the event modules can't depend on the registry.
    from team_events_webhooks.events.git_code_pushed import GitCodePushedHookEvent
    from team_events_webhooks.events.git_push import GitPushEvent
    from team_events_webhooks.events.ping import PingHookEvent
    from team_events_webhooks.events.pull_request_merge_commit_created import (
        PullRequestMergeCommitCreatedHookEvent,
    )

    registry = EventRegistry()
    registry.register("ping", PingHookEvent.Factory())
    registry.register("gitCodePushed", GitCodePushedHookEvent.Factory())
    registry.register("gitPush", GitPushEvent.Factory())
    registry.register("pullRequestMergeCommitCreated", PullRequestMergeCommitCreatedHookEvent.Factory())
    return registry.freeze()
