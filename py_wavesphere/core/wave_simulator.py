"""
Discrete wave propagation over the heightfield.

Each step reads the eight neighbours of every interior cell from the
previous buffer, subtracts the cell's current value and scales by the
damping factor:

    new = damping * (sum(previous[8 neighbours]) / 8 - current)

Columns wrap, so the stencil at column 0 reaches column ``cols - 1``.
Boundary rows are never computed and stay at zero. After the pass the new
values become ``current`` and the old ``current`` becomes ``previous``.

One step is taken per frame tick; simulated time is tied to the frame rate.
"""

import numpy as np

from .heightfield import HeightfieldGrid


def neighbor_sum(previous: np.ndarray) -> np.ndarray:
    """
    Sum of the eight neighbours of every interior cell.

    Args:
        previous: ``(cols, rows)`` array

    Returns:
        ``(cols, rows - 2)`` array for rows ``1 .. rows - 2``
    """
    west = np.roll(previous, 1, axis=0)
    east = np.roll(previous, -1, axis=0)
    band = west + previous + east
    return band[:, :-2] + band[:, 2:] + west[:, 1:-1] + east[:, 1:-1]


def step(grid: HeightfieldGrid, damping: float) -> None:
    """
    Advance the grid by one tick in place.

    ``damping`` is not checked here; it is validated when settings are built.
    """
    previous = grid.previous
    interior = damping * (neighbor_sum(previous) / 8.0 - grid.current[:, 1:-1])

    # The previous buffer is free once the stencil has been evaluated
    previous[:, 1:-1] = interior
    previous[:, 0] = 0.0
    previous[:, -1] = 0.0
    grid.swap()


class WaveSimulator:
    """Steps a grid with a fixed damping factor and counts ticks."""

    def __init__(self, damping: float = 0.985):
        self.damping = damping
        self.steps = 0

    def step(self, grid: HeightfieldGrid) -> None:
        step(grid, self.damping)
        self.steps += 1
