"""
Double-buffered heightfield storage.

The grid is indexed ``[col, row]``. Columns run along longitude and wrap;
rows run along colatitude and are bounded, with rows ``0`` and ``rows - 1``
pinned at zero. Both buffers live in a single ``(2, cols, rows)`` array and
the roles of ``current`` and ``previous`` are selected by an index that
``swap()`` toggles, so the two never alias.
"""

import numpy as np
from dataclasses import dataclass

MIN_ROWS = 3
MIN_COLS = 1


@dataclass(frozen=True)
class GridSnapshot:
    """Copy of both buffers at one point in time."""

    current: np.ndarray
    previous: np.ndarray

    def equals(self, other: "GridSnapshot") -> bool:
        """Bitwise equality of both buffers."""
        return np.array_equal(self.current, other.current) and np.array_equal(
            self.previous, other.previous
        )


class HeightfieldGrid:
    """Fixed-size ``cols x rows`` scalar field with a current and previous buffer."""

    def __init__(self, cols: int = 256, rows: int = 128):
        if cols < MIN_COLS:
            raise ValueError(f"cols must be >= {MIN_COLS}, got {cols}")
        if rows < MIN_ROWS:
            raise ValueError(f"rows must be >= {MIN_ROWS}, got {rows}")

        self._cols = int(cols)
        self._rows = int(rows)
        self._buffers = np.zeros((2, self._cols, self._rows), dtype=np.float64)
        self._front = 0

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def shape(self):
        return (self._cols, self._rows)

    @property
    def current(self) -> np.ndarray:
        """View of the buffer the renderer reads."""
        return self._buffers[self._front]

    @property
    def previous(self) -> np.ndarray:
        """View of the buffer impulses are written into."""
        return self._buffers[1 - self._front]

    def get(self, col: int, row: int) -> float:
        """Read ``current[col, row]``. ``row`` must already be in range."""
        return float(self.current[col, row])

    def set(self, col: int, row: int, value: float) -> None:
        """Write ``current[col, row]``. ``row`` must already be in range."""
        self.current[col, row] = value

    def get_previous(self, col: int, row: int) -> float:
        return float(self.previous[col, row])

    def set_previous(self, col: int, row: int, value: float) -> None:
        self.previous[col, row] = value

    def swap(self) -> None:
        """Rotate buffer roles: current becomes previous and vice versa."""
        self._front ^= 1

    def reset(self) -> None:
        """Zero both buffers."""
        self._buffers.fill(0.0)

    def energy(self) -> float:
        """Sum of squared values of the current buffer."""
        return float(np.sum(self.current * self.current))

    def total_energy(self) -> float:
        """Sum of squared values over both buffers."""
        return float(np.sum(self._buffers * self._buffers))

    def snapshot(self) -> GridSnapshot:
        return GridSnapshot(current=self.current.copy(), previous=self.previous.copy())
