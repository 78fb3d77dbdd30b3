"""
Core wave simulation functionality.
"""

from .heightfield import HeightfieldGrid, GridSnapshot
from .spherical_mapper import SphericalMapper, Viewport, screen_to_angles, view_distance
from .wave_simulator import WaveSimulator, step
from .impulse_injector import ImpulseInjector
from .interaction import (
    InteractionStateMachine, GestureState, GestureBegin, GestureMove, GestureEnd,
    FrameTick, FreshTap, ScreenPosition, SpherePosition, ViewRotation,
)
from .session import WaveSphereSession

__all__ = ['HeightfieldGrid', 'GridSnapshot', 'SphericalMapper', 'Viewport',
           'screen_to_angles', 'view_distance', 'WaveSimulator', 'step',
           'ImpulseInjector', 'InteractionStateMachine', 'GestureState',
           'GestureBegin', 'GestureMove', 'GestureEnd', 'FrameTick', 'FreshTap',
           'ScreenPosition', 'SpherePosition', 'ViewRotation', 'WaveSphereSession']
