"""
py_wavesphere: touch-reactive wave simulation on a spherical heightfield.
"""

__version__ = "0.1.0"

from .core import WaveSphereSession
from .config import SimulationSettings

__all__ = ['WaveSphereSession', 'SimulationSettings', '__version__']
