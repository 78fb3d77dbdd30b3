#!/usr/bin/env python3
"""
Demo script showing the wave sphere simulation without a renderer.
"""

import math
import numpy as np
import matplotlib.pyplot as plt
from py_wavesphere import WaveSphereSession, SimulationSettings
from py_wavesphere.core import FrameTick, GestureBegin, GestureEnd, GestureMove, ScreenPosition
from py_wavesphere.utils.log import configure_logging


def visualize_heightfield(session: WaveSphereSession, title: str):
    """Plot the heightfield as an equirectangular image."""
    thetas = np.linspace(0, 2 * math.pi, session.grid.cols, endpoint=False)[None, :]
    phis = np.linspace(0, math.pi, session.grid.rows, endpoint=False)[:, None]
    image = session.mapper.sample_normalized(thetas, phis)

    plt.figure(figsize=(10, 5))
    plt.imshow(image, cmap='coolwarm', vmin=-1, vmax=1, extent=(0, 360, 180, 0))
    plt.colorbar(label='Normalized height')
    plt.title(title)
    plt.xlabel('Longitude (deg)')
    plt.ylabel('Colatitude (deg)')


def main():
    """Tap, drag, and let the ripples run."""
    settings = SimulationSettings()
    configure_logging(settings.log_level, settings.log_format)

    print("Py-WaveSphere Ripple Demo")
    print("=" * 40)

    session = WaveSphereSession(settings)
    taps = []
    session.on_fresh_tap(taps.append)

    # Tap the centre of the sphere, then drag to the right
    script = [GestureBegin(ScreenPosition(400, 300))]
    for i in range(1, 11):
        script.append(GestureMove(ScreenPosition(400 + 8 * i, 300 - 3 * i)))
        script.append(FrameTick())
    script.append(GestureEnd())

    session.run(script)
    print(f"Fresh taps: {len(taps)}")

    for _ in range(6):
        print(f"  tick {session.ticks:3d}: energy {session.grid.energy():.3e}, "
              f"peak {np.max(np.abs(session.heights)):.1f}")
        session.run(FrameTick() for _ in range(5))

    visualize_heightfield(session, f"Heightfield after {session.ticks} ticks")
    plt.savefig('ripple_demo.png', dpi=100, bbox_inches='tight')
    print("\nSaved ripple_demo.png")


if __name__ == "__main__":
    main()
