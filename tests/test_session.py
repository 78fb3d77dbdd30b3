"""
Tests for the simulation session.
"""

import pytest
import numpy as np
from py_wavesphere.config import SimulationSettings
from py_wavesphere.core.interaction import (
    FrameTick,
    GestureBegin,
    GestureEnd,
    GestureMove,
    GestureState,
    ScreenPosition,
    SpherePosition,
)
from py_wavesphere.core.session import WaveSphereSession
from py_wavesphere.utils.log import configure_logging


def drag_script():
    """A tap, a drag across the sphere and some frames."""
    events = [GestureBegin(ScreenPosition(400, 300))]
    for i in range(1, 6):
        events.append(GestureMove(ScreenPosition(400 + 15 * i, 300 + 5 * i)))
        events.append(FrameTick())
    events.append(GestureEnd())
    events.extend(FrameTick() for _ in range(20))
    return events


class TestWaveSphereSession:
    """Test session wiring and behaviour."""

    @pytest.fixture
    def settings(self):
        return SimulationSettings(cols=32, rows=16)

    @pytest.fixture
    def session(self, settings):
        return WaveSphereSession(settings)

    def test_initial_state(self, session):
        assert session.heights.shape == (32, 16)
        assert session.ticks == 0
        assert session.state_of() is GestureState.IDLE

    def test_tick(self, session):
        session.dispatch(FrameTick())
        session.tick()
        assert session.ticks == 2
        assert session.simulator.steps == 2

    def test_injection_before_tick_is_visible(self, session):
        """Test a tap written before a tick shows up in that tick's output."""
        session.dispatch(GestureBegin(SpherePosition(1.0, 1.5)))
        assert session.grid.energy() == 0.0

        session.dispatch(FrameTick())

        assert session.grid.energy() > 0.0

    def test_fresh_tap_listeners(self, session):
        taps = []

        @session.on_fresh_tap
        def record(tap):
            taps.append(tap)

        session.dispatch(GestureBegin(ScreenPosition(400, 300)))
        session.dispatch(GestureMove(ScreenPosition(420, 300)))
        session.dispatch(GestureEnd())

        assert len(taps) == 1

        session.remove_listener(record)
        session.dispatch(GestureBegin(ScreenPosition(400, 300)))
        assert len(taps) == 1

    def test_failing_listener_does_not_stop_simulation(self, session):
        """Test a broken feedback collaborator is isolated from the simulation."""
        calls = []

        def broken(tap):
            raise RuntimeError("audio device unavailable")

        session.on_fresh_tap(broken)
        session.on_fresh_tap(calls.append)

        session.dispatch(GestureBegin(ScreenPosition(400, 300)))
        session.dispatch(FrameTick())

        assert len(calls) == 1
        assert session.ticks == 1
        assert session.grid.energy() > 0.0

    def test_replay_is_deterministic(self, settings):
        """Test two sessions fed the same script end bit-identical."""
        first = WaveSphereSession(settings)
        second = WaveSphereSession(settings)

        first.run(drag_script())
        second.run(drag_script())

        assert first.snapshot().equals(second.snapshot())
        assert first.grid.total_energy() > 0.0

    def test_sessions_do_not_share_state(self, settings):
        first = WaveSphereSession(settings)
        second = WaveSphereSession(settings)

        first.run(drag_script())

        assert second.grid.total_energy() == 0.0
        assert second.ticks == 0

    def test_boundary_rows_hold_through_replay(self, session):
        session.run(drag_script())
        assert np.all(session.heights[:, 0] == 0)
        assert np.all(session.heights[:, -1] == 0)

    def test_resize_updates_radius(self, session):
        session.resize(1000, 500)
        assert session.viewport.radius == pytest.approx(150.0)
        assert session.interaction.viewport is session.viewport

    def test_rotation_gesture(self, session):
        session.dispatch(GestureBegin(ScreenPosition(5, 5)))
        session.dispatch(GestureMove(ScreenPosition(25, 5)))
        assert session.view.y == pytest.approx(0.2)
        assert session.grid.total_energy() == 0.0

    def test_runs_with_console_logging(self, settings):
        configure_logging("DEBUG", "plain")
        session = WaveSphereSession(settings)
        session.dispatch(GestureBegin(ScreenPosition(400, 300)))
        session.tick()
        assert session.ticks == 1
