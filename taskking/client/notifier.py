from __future__ import annotations

import asyncio
from typing import Callable, Optional


class NotificationTimer:
    """Single-slot dismissal timer on the running event loop.

    Arming it cancels whatever dismissal was pending, so at most one callback
    is ever scheduled.
    """

    def __init__(self, delay: float, on_expire: Callable[[int], None]) -> None:
        self.delay = delay
        self._on_expire = on_expire
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None and not self._handle.cancelled()

    def arm(self, seq: int) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, seq)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, seq: int) -> None:
        self._handle = None
        self._on_expire(seq)
