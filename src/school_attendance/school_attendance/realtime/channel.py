"""In-process named-channel event bus.

Handlers run synchronously on the publishing thread, in registration order.
A failing handler is logged and skipped; publish never raises on its behalf.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from ..common.validators import require_choice
from ..core.enums import Channel

logger = logging.getLogger(__name__)

Handler = Callable[[Any], None]
Unsubscribe = Callable[[], None]


class _Subscription:
    __slots__ = ("handler", "active")

    def __init__(self, handler: Handler):
        self.handler = handler
        self.active = True


class UpdateChannel:
    def __init__(self):
        self._lock = threading.Lock()
        self._subscriptions: dict[Channel, list[_Subscription]] = {}

    def subscribe(self, channel: Channel | str, handler: Handler) -> Unsubscribe:
        channel = require_choice(channel, Channel, "channel")
        sub = _Subscription(handler)
        with self._lock:
            # Lists are replaced, never mutated in place; publish iterates the one it read.
            self._subscriptions[channel] = [*self._subscriptions.get(channel, []), sub]

        def unsubscribe() -> None:
            with self._lock:
                if not sub.active:
                    return
                sub.active = False
                remaining = [s for s in self._subscriptions.get(channel, []) if s is not sub]
                if remaining:
                    self._subscriptions[channel] = remaining
                else:
                    self._subscriptions.pop(channel, None)

        return unsubscribe

    def publish(self, channel: Channel | str, payload: Any = None) -> int:
        """Deliver ``payload`` to every handler registered when the call starts.

        Returns the number of handlers that completed without raising.
        """
        channel = require_choice(channel, Channel, "channel")
        with self._lock:
            scheduled = self._subscriptions.get(channel, [])

        delivered = 0
        for sub in scheduled:
            try:
                sub.handler(payload)
            except Exception:
                logger.exception("Error in update handler %r for %s", sub.handler, channel.value)
                continue
            delivered += 1
        return delivered

    def subscriber_count(self, channel: Channel | str) -> int:
        channel = require_choice(channel, Channel, "channel")
        return len(self._subscriptions.get(channel, []))

    def active_channels(self) -> list[Channel]:
        return list(self._subscriptions.keys())

    def unsubscribe_all(self) -> None:
        with self._lock:
            for subs in self._subscriptions.values():
                for sub in subs:
                    sub.active = False
            self._subscriptions.clear()

    def on_attendance_update(self, handler: Handler) -> Unsubscribe:
        return self.subscribe(Channel.ATTENDANCE, handler)

    def broadcast_attendance_update(self, payload: Any = None) -> int:
        return self.publish(Channel.ATTENDANCE, payload)
