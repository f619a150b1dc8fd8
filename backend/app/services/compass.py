import logging
import math
import uuid
from uuid import UUID

from app.config import settings
from app.schemas.compass import CompassState, GeoPoint
from app.services.heading_animator import FrameScheduler, HeadingAnimator
from app.utils.geo import bearing_to_direction, compute_bearing

logger = logging.getLogger(__name__)


class CompassNotFoundError(Exception):
    pass


class Compass:
    """
    Heading display for one vehicle.

    Keeps the latest bearing and its label together and feeds the bearing
    to a HeadingAnimator, whose displayed angle is what a renderer rotates
    the needle by.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        needle_gradient: tuple[str, str] | None = None,
        seed_degrees: float = 0.0,
        snap_threshold: float | None = None,
        ease_factor: float | None = None,
    ):
        self.id = uuid.uuid4()
        self.needle_gradient = tuple(needle_gradient or settings.needle_gradient)
        self.animator = HeadingAnimator(
            scheduler,
            seed=seed_degrees,
            snap_threshold=snap_threshold,
            ease_factor=ease_factor,
        )
        self.degrees = self.animator.target_angle
        self.direction = bearing_to_direction(self.degrees)

    def update_positions(self, previous: GeoPoint | None, current: GeoPoint | None) -> bool:
        """
        Recompute the heading from the previous to the current position.

        Nothing changes unless both positions are given. Returns whether
        the heading was recomputed.
        """
        if previous is None or current is None:
            return False
        self.degrees = compute_bearing(previous, current)
        self.direction = bearing_to_direction(self.degrees)
        self.animator.set_target(self.degrees)
        return True

    def swap_source(self, seed: float | None = None) -> None:
        """
        Start over for a new position source.

        The pending frame is cancelled before the animator restarts from
        `seed`, or from the angle currently on display.
        """
        start = self.animator.current_angle if seed is None else seed
        self.animator.reset(start)
        self.degrees = self.animator.target_angle
        self.direction = bearing_to_direction(self.degrees)

    def snapshot(self) -> CompassState:
        displayed = self.animator.current_angle
        return CompassState(
            direction=self.direction,
            target_degrees=self.degrees,
            displayed_degrees=displayed,
            rounded_degrees=math.floor(displayed + 0.5) % 360,
            running=self.animator.running,
            needle_gradient=self.needle_gradient,
        )

    def close(self) -> None:
        self.animator.dispose()


class CompassRegistry:
    """Live compasses by id. Held in memory only."""

    def __init__(self, scheduler: FrameScheduler):
        self.scheduler = scheduler
        self._compasses: dict[UUID, Compass] = {}

    def create(self, needle_gradient: tuple[str, str] | None = None, seed_degrees: float = 0.0) -> Compass:
        compass = Compass(self.scheduler, needle_gradient=needle_gradient, seed_degrees=seed_degrees)
        self._compasses[compass.id] = compass
        logger.info("Created compass %s", compass.id)
        return compass

    def get(self, compass_id: UUID) -> Compass:
        compass = self._compasses.get(compass_id)
        if compass is None:
            raise CompassNotFoundError(f"Compass {compass_id} not found")
        return compass

    def remove(self, compass_id: UUID) -> None:
        compass = self.get(compass_id)
        compass.close()
        del self._compasses[compass_id]
        logger.info("Removed compass %s", compass_id)

    def close_all(self) -> None:
        for compass in self._compasses.values():
            compass.close()
        logger.info("Closed %d compasses", len(self._compasses))
        self._compasses.clear()

    def __len__(self) -> int:
        return len(self._compasses)
