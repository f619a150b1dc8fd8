import asyncio
from typing import Callable

from app.config import settings


class AsyncioFrameScheduler:
    """Frame requests as `call_later` timers on the running event loop."""

    def __init__(self, interval_s: float | None = None):
        self.interval_s = settings.frame_interval_s if interval_s is None else interval_s

    def request_frame(self, callback: Callable[[], None]) -> asyncio.TimerHandle:
        loop = asyncio.get_running_loop()
        return loop.call_later(self.interval_s, callback)

    def cancel_frame(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()
