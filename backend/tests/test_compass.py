import uuid
from types import SimpleNamespace

import pytest

from app.schemas.compass import GeoPoint
from app.services.compass import Compass, CompassNotFoundError, CompassRegistry

ORIGIN = GeoPoint(lat=0, lng=0)
EAST = GeoPoint(lat=0, lng=1)
NORTH = GeoPoint(lat=1, lng=0)


def test_initial_state(scheduler):
    state = Compass(scheduler).snapshot()
    assert state.direction == "N"
    assert state.target_degrees == 0.0
    assert state.displayed_degrees == 0.0
    assert state.rounded_degrees == 0
    assert not state.running
    assert state.needle_gradient == ("#6EE7B7", "#3B82F6")


def test_custom_gradient(scheduler):
    compass = Compass(scheduler, needle_gradient=("#ff0000", "#00ff00"))
    assert compass.snapshot().needle_gradient == ("#ff0000", "#00ff00")


def test_update_sets_label_and_animates(scheduler):
    compass = Compass(scheduler)
    assert compass.update_positions(ORIGIN, EAST) is True

    state = compass.snapshot()
    assert state.direction == "E"
    assert state.target_degrees == pytest.approx(90.0)
    assert state.displayed_degrees == 0.0
    assert state.running

    scheduler.run_until_idle()
    state = compass.snapshot()
    assert state.displayed_degrees == state.target_degrees
    assert state.rounded_degrees == 90
    assert not state.running


def test_missing_position_keeps_last_state(scheduler):
    compass = Compass(scheduler)
    compass.update_positions(ORIGIN, EAST)
    scheduler.run_until_idle()
    before = compass.snapshot()

    assert compass.update_positions(None, NORTH) is False
    assert compass.update_positions(NORTH, None) is False
    assert compass.snapshot() == before
    assert scheduler.pending == {}


def test_stationary_vehicle_points_north(scheduler):
    compass = Compass(scheduler)
    compass.update_positions(ORIGIN, EAST)
    scheduler.run_until_idle()

    compass.update_positions(EAST, EAST)
    assert compass.direction == "N"
    assert compass.degrees == 0.0
    scheduler.run_until_idle()
    assert compass.snapshot().displayed_degrees == 0.0


def test_label_matches_target(scheduler):
    compass = Compass(scheduler)
    compass.update_positions(GeoPoint(lat=51.5074, lng=-0.1278), GeoPoint(lat=48.8566, lng=2.3522))
    assert compass.direction == "SSE"


def test_nan_position_gives_undefined_direction(scheduler):
    compass = Compass(scheduler)
    bad = SimpleNamespace(lat=float("nan"), lng=0.0)
    assert compass.update_positions(bad, SimpleNamespace(lat=1.0, lng=1.0)) is True

    state = compass.snapshot()
    assert state.direction is None
    assert state.displayed_degrees == 0.0
    assert not state.running
    assert scheduler.pending == {}


def test_swap_source_after_close_does_not_restart(scheduler):
    compass = Compass(scheduler)
    compass.close()
    compass.swap_source(seed=90)
    compass.update_positions(ORIGIN, EAST)
    assert compass.animator.disposed
    assert scheduler.pending == {}


def test_rounded_degrees_wrap(scheduler):
    compass = Compass(scheduler, seed_degrees=359.7)
    assert compass.snapshot().rounded_degrees == 0


def test_swap_source_cancels_pending_frame(scheduler):
    compass = Compass(scheduler)
    compass.update_positions(ORIGIN, EAST)
    scheduler.run_frame()
    displayed = compass.animator.current_angle
    (handle,) = scheduler.pending

    compass.swap_source()
    assert handle in scheduler.cancelled
    assert scheduler.pending == {}
    state = compass.snapshot()
    assert state.displayed_degrees == displayed
    assert state.target_degrees == displayed
    assert not state.running


def test_swap_source_with_seed(scheduler):
    compass = Compass(scheduler)
    compass.swap_source(seed=180)
    assert compass.direction == "S"
    assert compass.snapshot().displayed_degrees == 180


def test_close_disposes_animator(scheduler):
    compass = Compass(scheduler)
    compass.update_positions(ORIGIN, EAST)
    compass.close()
    assert scheduler.pending == {}
    assert compass.animator.disposed


class TestRegistry:
    def test_create_and_get(self, scheduler):
        registry = CompassRegistry(scheduler)
        compass = registry.create()
        assert registry.get(compass.id) is compass
        assert len(registry) == 1

    def test_get_unknown(self, scheduler):
        registry = CompassRegistry(scheduler)
        with pytest.raises(CompassNotFoundError):
            registry.get(uuid.uuid4())

    def test_remove_disposes(self, scheduler):
        registry = CompassRegistry(scheduler)
        compass = registry.create()
        compass.update_positions(ORIGIN, NORTH)
        compass.update_positions(ORIGIN, EAST)
        assert len(scheduler.pending) == 1

        registry.remove(compass.id)
        assert scheduler.pending == {}
        assert len(registry) == 0
        with pytest.raises(CompassNotFoundError):
            registry.remove(compass.id)

    def test_close_all(self, scheduler):
        registry = CompassRegistry(scheduler)
        compasses = [registry.create(seed_degrees=10.0 * i) for i in range(3)]
        for compass in compasses:
            compass.update_positions(ORIGIN, EAST)
        assert len(scheduler.pending) == 3

        registry.close_all()
        assert scheduler.pending == {}
        assert len(registry) == 0
        assert all(c.animator.disposed for c in compasses)
