import itertools

import pytest


class ManualFrameScheduler:
    """Collects frame requests; tests fire them one at a time."""

    def __init__(self):
        self.pending = {}
        self.cancelled = []
        self._ids = itertools.count(1)

    def request_frame(self, callback):
        handle = next(self._ids)
        self.pending[handle] = callback
        return handle

    def cancel_frame(self, handle):
        self.cancelled.append(handle)
        self.pending.pop(handle, None)

    def run_frame(self):
        """Fire every callback that was pending when the frame started."""
        callbacks = list(self.pending.values())
        self.pending.clear()
        for cb in callbacks:
            cb()
        return len(callbacks)

    def run_until_idle(self, max_frames=1000):
        frames = 0
        while self.pending:
            if frames >= max_frames:
                raise AssertionError("animation did not settle")
            self.run_frame()
            frames += 1
        return frames


@pytest.fixture
def scheduler():
    return ManualFrameScheduler()
