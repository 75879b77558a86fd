from __future__ import annotations

import asyncio
import logging
from typing import Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    """
    Delay a rapidly changing value until it has been stable for ``quiet_period``.

    Every ``push`` cancels the armed timer handle and arms a new one, so only
    the last value of a burst reaches ``callback``. Equal values are not
    deduplicated.
    """

    def __init__(self, quiet_period: float, callback: Callable[[T], None]):
        if quiet_period < 0:
            raise ValueError("quiet_period must be >= 0")
        self.quiet_period = quiet_period
        self._callback = callback
        self._handle: asyncio.TimerHandle | None = None
        self._value: T | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def push(self, value: T) -> None:
        """Record ``value`` and restart the quiet period. Needs a running loop."""
        loop = asyncio.get_running_loop()
        self._value = value
        self.cancel()
        self._handle = loop.call_later(self.quiet_period, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        self._handle = None
        value = self._value
        try:
            self._callback(value)
        except Exception:
            # Logged here so the loop exception handler never sees it
            logger.exception("Debounced callback raised")
