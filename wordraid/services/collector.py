"""
Message Collector

Intake of chat messages for a running game, limited by a filter and a hard
time limit.
"""

import threading
import time
from typing import Callable, Optional


class MessageCollector:
    """
    Passes accepted messages to a handler until stopped or timed out.

    Stopping is idempotent: stopping an ended collector does nothing.
    """

    def __init__(self,
                 message_filter: Callable[[object], bool],
                 handler: Callable[[object], object],
                 time_limit: float,
                 clock: Callable[[], float] = time.monotonic):
        self._filter = message_filter
        self._handler = handler
        self._clock = clock
        self._deadline = clock() + time_limit
        self._lock = threading.Lock()
        self.ended = False
        self.end_reason: Optional[str] = None

    def collect(self, message):
        """
        Offers a message to the collector.

        Returns:
            The handler's result, or None if the message was not accepted
        """
        if self.ended:
            return None
        if self._clock() >= self._deadline:
            self.stop('time')
            return None
        if not self._filter(message):
            return None
        return self._handler(message)

    def stop(self, reason: str = 'user') -> None:
        with self._lock:
            if self.ended:
                return
            self.ended = True
            self.end_reason = reason

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop('released')
        return False
