"""
Simulation session.

A WaveSphereSession is the single context object that owns one grid and
everything that reads or writes it. Input callbacks and the frame clock call
into the session from the same thread, so an impulse dispatched before a
tick is always seen by that tick.
"""

import structlog
from typing import Callable, Iterable, List, Optional

from ..config import SimulationSettings, settings as default_settings
from .heightfield import GridSnapshot, HeightfieldGrid
from .impulse_injector import ImpulseInjector
from .interaction import (
    FrameTick,
    FreshTap,
    GestureState,
    InputEvent,
    InteractionStateMachine,
    ViewRotation,
)
from .spherical_mapper import SphericalMapper, Viewport
from .wave_simulator import WaveSimulator

logger = structlog.get_logger()

FreshTapListener = Callable[[FreshTap], None]


class WaveSphereSession:
    """Owns the heightfield and routes input and frame ticks into it."""

    def __init__(
        self,
        settings: Optional[SimulationSettings] = None,
        viewport: Optional[Viewport] = None,
    ):
        """
        Build a session.

        Args:
            settings: Simulation settings; the process-wide settings when omitted
            viewport: Screen model for screen-space gestures (800x600 when omitted)
        """
        self.settings = settings or default_settings
        s = self.settings

        self.grid = HeightfieldGrid(s.cols, s.rows)
        self.mapper = SphericalMapper(self.grid, display_clamp=s.display_clamp)
        self.simulator = WaveSimulator(s.damping)
        self.injector = ImpulseInjector(
            self.grid,
            self.mapper,
            strength=s.impulse_strength,
            falloff_point=s.neighbor_falloff_point,
            falloff_path=s.neighbor_falloff_path,
        )
        self.viewport = viewport or Viewport(800, 600, s.sphere_radius_fraction)
        self.view = ViewRotation()
        self.interaction = InteractionStateMachine(
            self.injector,
            self.viewport,
            self.view,
            drawable_radius_multiplier=s.drawable_radius_multiplier,
            rotation_sensitivity=s.rotation_sensitivity,
            on_fresh_tap=self._emit_fresh_tap,
        )

        self.ticks = 0
        self._listeners: List[FreshTapListener] = []

        logger.info(
            "Session created",
            cols=s.cols,
            rows=s.rows,
            damping=s.damping,
            impulse_strength=s.impulse_strength,
        )

    # ------------------------------------------------------------------
    # Listeners (audio, haptics)
    # ------------------------------------------------------------------

    def on_fresh_tap(self, listener: FreshTapListener) -> FreshTapListener:
        """Register a listener; returns it so the method works as a decorator."""
        self._listeners.append(listener)
        return listener

    def remove_listener(self, listener: FreshTapListener) -> None:
        self._listeners.remove(listener)

    def _emit_fresh_tap(self, tap: FreshTap) -> None:
        logger.debug("Fresh tap", col=tap.col, row=tap.row, pointer_id=tap.pointer_id, tick=self.ticks)
        for listener in list(self._listeners):
            try:
                listener(tap)
            except Exception:
                # Feedback collaborators must never stop the simulation
                logger.warning(
                    "Fresh tap listener failed",
                    listener=getattr(listener, "__name__", repr(listener)),
                    exc_info=True,
                )

    # ------------------------------------------------------------------
    # Driving the simulation
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """Advance exactly one simulation step."""
        self.simulator.step(self.grid)
        self.ticks += 1

    def dispatch(self, event: InputEvent) -> None:
        if isinstance(event, FrameTick):
            self.tick()
        else:
            self.interaction.handle(event)

    def run(self, events: Iterable[InputEvent]) -> None:
        """Replay an ordered sequence of input events and frame ticks."""
        for event in events:
            self.dispatch(event)

    def resize(self, width: float, height: float) -> None:
        self.viewport.resize(width, height)
        logger.debug("Viewport resized", width=width, height=height, radius=self.viewport.radius)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def state_of(self, pointer_id: int = 0) -> GestureState:
        return self.interaction.state_of(pointer_id)

    @property
    def heights(self):
        """Current heightfield, ``(cols, rows)``; a live view, do not write to it."""
        return self.grid.current

    def snapshot(self) -> GridSnapshot:
        return self.grid.snapshot()
