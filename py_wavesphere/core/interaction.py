"""
Gesture classification and dispatch.

Every pointer runs its own small state machine:

    Idle --begin--> Drawing | Rotating --end--> Idle

The choice between Drawing and Rotating is made once, when the gesture
begins, from the distance between the touch point and the sphere centre.
Drawing gestures feed the ImpulseInjector; Rotating gestures only turn the
view.
"""

import math
import structlog
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, Union

from .impulse_injector import ImpulseInjector
from .spherical_mapper import Viewport, screen_to_angles, view_distance

logger = structlog.get_logger()


class GestureState(Enum):
    IDLE = "idle"
    ROTATING = "rotating"
    DRAWING = "drawing"


@dataclass(frozen=True)
class ScreenPosition:
    """Pixel position, origin at the top-left of the viewport."""

    x: float
    y: float


@dataclass(frozen=True)
class SpherePosition:
    """Position already expressed as sphere angles."""

    theta: float
    phi: float


Position = Union[ScreenPosition, SpherePosition]


@dataclass(frozen=True)
class GestureBegin:
    position: Position
    pointer_id: int = 0


@dataclass(frozen=True)
class GestureMove:
    position: Position
    pointer_id: int = 0


@dataclass(frozen=True)
class GestureEnd:
    pointer_id: int = 0


@dataclass(frozen=True)
class FrameTick:
    """Advance the simulation by one step."""


GestureEvent = Union[GestureBegin, GestureMove, GestureEnd]
InputEvent = Union[GestureBegin, GestureMove, GestureEnd, FrameTick]


@dataclass(frozen=True)
class FreshTap:
    """Emitted once when a drawing gesture lands on the sphere."""

    theta: float
    phi: float
    col: int
    row: int
    pointer_id: int = 0


@dataclass
class ViewRotation:
    """Rotation of the rendered sphere, in radians."""

    x: float = 0.0
    y: float = 0.0

    def rotate(self, dx: float, dy: float, sensitivity: float = 0.01) -> None:
        """Apply a drag of (dx, dy) pixels. Tilt is limited to +/- pi/2."""
        self.y += dx * sensitivity
        self.x = min(max(self.x + dy * sensitivity, -math.pi / 2), math.pi / 2)


@dataclass
class _Gesture:
    state: GestureState
    last_screen: Optional[Tuple[float, float]] = None


class InteractionStateMachine:
    """Classifies gestures per pointer and routes them."""

    def __init__(
        self,
        injector: ImpulseInjector,
        viewport: Viewport,
        view: Optional[ViewRotation] = None,
        drawable_radius_multiplier: float = 1.5,
        rotation_sensitivity: float = 0.01,
        on_fresh_tap: Optional[Callable[[FreshTap], None]] = None,
    ):
        self.injector = injector
        self.viewport = viewport
        self.view = view or ViewRotation()
        self.drawable_radius_multiplier = drawable_radius_multiplier
        self.rotation_sensitivity = rotation_sensitivity
        self.on_fresh_tap = on_fresh_tap
        self._gestures: Dict[int, _Gesture] = {}

    def state_of(self, pointer_id: int = 0) -> GestureState:
        gesture = self._gestures.get(pointer_id)
        return gesture.state if gesture else GestureState.IDLE

    def handle(self, event: GestureEvent) -> None:
        if isinstance(event, GestureBegin):
            self._begin(event)
        elif isinstance(event, GestureMove):
            self._move(event)
        elif isinstance(event, GestureEnd):
            self._end(event.pointer_id)
        else:
            raise TypeError(f"Unsupported gesture event: {event!r}")

    def _to_angles(self, position: Position) -> Optional[Tuple[float, float]]:
        if isinstance(position, SpherePosition):
            return position.theta, position.phi
        return screen_to_angles(
            position.x, position.y, self.viewport, self.drawable_radius_multiplier
        )

    def _classify(self, position: Position) -> GestureState:
        if isinstance(position, SpherePosition):
            return GestureState.DRAWING
        distance = view_distance(position.x, position.y, self.viewport)
        if distance < self.viewport.radius * self.drawable_radius_multiplier:
            return GestureState.DRAWING
        return GestureState.ROTATING

    def _begin(self, event: GestureBegin) -> None:
        if event.pointer_id in self._gestures:
            # Lost end event; close the stale gesture first
            self._end(event.pointer_id)

        state = self._classify(event.position)
        last_screen = None
        if isinstance(event.position, ScreenPosition):
            last_screen = (event.position.x, event.position.y)
        self._gestures[event.pointer_id] = _Gesture(state, last_screen)
        logger.debug("Gesture started", pointer_id=event.pointer_id, state=state.value)

        if state is GestureState.DRAWING:
            angles = self._to_angles(event.position)
            if angles is None:
                return
            col, row = self.injector.begin_stroke(angles[0], angles[1], event.pointer_id)
            if self.on_fresh_tap is not None:
                self.on_fresh_tap(FreshTap(angles[0], angles[1], col, row, event.pointer_id))

    def _move(self, event: GestureMove) -> None:
        gesture = self._gestures.get(event.pointer_id)
        if gesture is None:
            return

        if gesture.state is GestureState.DRAWING:
            angles = self._to_angles(event.position)
            if angles is None:
                return
            self.injector.extend_stroke(angles[0], angles[1], event.pointer_id)
        elif isinstance(event.position, ScreenPosition):
            x, y = event.position.x, event.position.y
            if gesture.last_screen is not None:
                last_x, last_y = gesture.last_screen
                self.view.rotate(x - last_x, y - last_y, self.rotation_sensitivity)
            gesture.last_screen = (x, y)

    def _end(self, pointer_id: int) -> None:
        gesture = self._gestures.pop(pointer_id, None)
        if gesture is not None and gesture.state is GestureState.DRAWING:
            self.injector.end_stroke(pointer_id)
