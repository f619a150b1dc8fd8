import logging
import math
from typing import Any, Callable, Protocol

from app.config import settings
from app.utils.geo import normalize_degrees, shortest_angle_delta

logger = logging.getLogger(__name__)


class FrameScheduler(Protocol):
    """Runs a callback before the next repaint. Requests can be cancelled."""

    def request_frame(self, callback: Callable[[], None]) -> Any: ...

    def cancel_frame(self, handle: Any) -> None: ...


class HeadingAnimator:
    """
    Eases a displayed heading toward a target heading, one frame at a time.

    Each tick closes `ease_factor` of the remaining shortest-path rotation,
    so the needle never turns the long way across 0°/360°. Once the
    remaining rotation drops under `snap_threshold` degrees the displayed
    angle snaps to the target and no further frame is requested.

    At most one frame request is outstanding at any time.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        seed: float = 0.0,
        snap_threshold: float | None = None,
        ease_factor: float | None = None,
        on_change: Callable[[float], None] | None = None,
    ):
        self.snap_threshold = settings.snap_threshold_deg if snap_threshold is None else snap_threshold
        self.ease_factor = settings.ease_factor if ease_factor is None else ease_factor
        if self.snap_threshold <= 0:
            raise ValueError(f"snap_threshold must be positive, got {self.snap_threshold}")
        if not 0 < self.ease_factor <= 1:
            raise ValueError(f"ease_factor must be in (0, 1], got {self.ease_factor}")

        self._scheduler = scheduler
        self._on_change = on_change
        self._handle: Any = None
        self._disposed = False
        self.current_angle = normalize_degrees(seed)
        self.target_angle = self.current_angle

    @property
    def running(self) -> bool:
        return self._handle is not None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def set_target(self, angle: float) -> None:
        """
        Point the animation at a new heading; a converging animation redirects in place.

        Non-finite angles are ignored and the last displayed heading stays.
        """
        if self._disposed or not math.isfinite(angle):
            return
        self.target_angle = normalize_degrees(angle)
        if self._handle is None and self.current_angle != self.target_angle:
            logger.debug("Converging %.2f -> %.2f", self.current_angle, self.target_angle)
            self._request_frame()

    def tick(self) -> bool:
        """Advance one frame. Returns True while the animation is still converging."""
        self._cancel_pending()
        if self._disposed:
            return False

        delta = shortest_angle_delta(self.current_angle, self.target_angle)
        if abs(delta) < self.snap_threshold:
            changed = self.current_angle != self.target_angle
            self.current_angle = self.target_angle
            if changed:
                self._notify()
                logger.debug("Converged at %.2f", self.current_angle)
            return False

        self.current_angle = normalize_degrees(self.current_angle + delta * self.ease_factor)
        self._notify()
        self._request_frame()
        return True

    def reset(self, seed: float = 0.0) -> None:
        """
        Drop any in-flight animation and restart from `seed`.

        Does nothing once the animator has been disposed.
        """
        if self._disposed:
            return
        self._cancel_pending()
        self.current_angle = normalize_degrees(seed)
        self.target_angle = self.current_angle

    def dispose(self) -> None:
        self._cancel_pending()
        self._disposed = True

    def _on_frame(self) -> None:
        self._handle = None
        self.tick()

    def _request_frame(self) -> None:
        self._handle = self._scheduler.request_frame(self._on_frame)

    def _cancel_pending(self) -> None:
        if self._handle is not None:
            self._scheduler.cancel_frame(self._handle)
            self._handle = None
            logger.debug("Cancelled pending frame")

    def _notify(self) -> None:
        if self._on_change:
            self._on_change(self.current_angle)
