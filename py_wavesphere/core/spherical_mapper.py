"""
Mapping between the sphere surface and the heightfield grid.

Theta is longitude in radians (any value; wrapped into the grid), phi is
colatitude in ``[0, pi]`` measured from the +y pole. Also holds the
viewport model used to project screen positions onto the sphere.
"""

import math
import numpy as np
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .heightfield import HeightfieldGrid

TWO_PI = 2.0 * math.pi


@dataclass
class Viewport:
    """Screen area the sphere is drawn into, centred."""

    width: float
    height: float
    radius_fraction: float = 0.3
    radius: float = field(init=False)

    def __post_init__(self):
        self.radius = min(self.width, self.height) * self.radius_fraction

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self.radius = min(width, height) * self.radius_fraction


class SphericalMapper:
    """Binds continuous (theta, phi) angles to a HeightfieldGrid."""

    def __init__(self, grid: HeightfieldGrid, display_clamp: float = 400.0):
        self.grid = grid
        self.display_clamp = display_clamp

    # ------------------------------------------------------------------
    # angle -> index
    # ------------------------------------------------------------------

    def wrap_col(self, col: int) -> int:
        return col % self.grid.cols

    def clamp_row(self, row: int) -> int:
        return min(max(row, 0), self.grid.rows - 1)

    def clamp_interior_row(self, row: int) -> int:
        """Clamp into ``[1, rows - 2]``, never touching the pinned rows."""
        return min(max(row, 1), self.grid.rows - 2)

    def angle_to_index(self, theta: float, phi: float) -> Tuple[int, int]:
        """Map angles to ``(col, row)`` with the row clamped to the full range."""
        col = math.floor(theta / TWO_PI * self.grid.cols) % self.grid.cols
        row = self.clamp_row(math.floor(phi / math.pi * self.grid.rows))
        return col, row

    def angle_to_interior_index(self, theta: float, phi: float) -> Tuple[int, int]:
        """Map angles to ``(col, row)`` with the row kept off the boundary rows."""
        col = math.floor(theta / TWO_PI * self.grid.cols) % self.grid.cols
        row = self.clamp_interior_row(math.floor(phi / math.pi * self.grid.rows))
        return col, row

    # ------------------------------------------------------------------
    # index -> height
    # ------------------------------------------------------------------

    def index_to_height(self, col: int, row: int) -> float:
        return self.grid.get(col, row)

    def gradient_at(self, col: int, row: int) -> Tuple[float, float]:
        """
        Forward difference against the next wrapped column and next clamped row.

        Returns:
            (dHeight/dCol, dHeight/dRow)
        """
        h = self.grid.get(col, row)
        next_col = (col + 1) % self.grid.cols
        next_row = min(row + 1, self.grid.rows - 1)
        return self.grid.get(next_col, row) - h, self.grid.get(col, next_row) - h

    def height_at(self, theta: float, phi: float) -> float:
        return self.index_to_height(*self.angle_to_index(theta, phi))

    def gradient_at_angle(self, theta: float, phi: float) -> Tuple[float, float]:
        return self.gradient_at(*self.angle_to_index(theta, phi))

    def normalized_height(self, theta: float, phi: float) -> float:
        """Height clamped to the display range and scaled into ``[-1, 1]``."""
        c = self.display_clamp
        return min(max(self.height_at(theta, phi), -c), c) / c

    # ------------------------------------------------------------------
    # Vectorized sampling for per-vertex queries
    # ------------------------------------------------------------------

    def _indices(self, thetas, phis) -> Tuple[np.ndarray, np.ndarray]:
        thetas = np.asarray(thetas, dtype=np.float64)
        phis = np.asarray(phis, dtype=np.float64)
        cols = np.floor(thetas / TWO_PI * self.grid.cols).astype(np.int64) % self.grid.cols
        rows = np.clip(
            np.floor(phis / math.pi * self.grid.rows).astype(np.int64),
            0,
            self.grid.rows - 1,
        )
        return cols, rows

    def sample_heights(self, thetas, phis) -> np.ndarray:
        """Heights for arrays of angles (broadcast together)."""
        cols, rows = self._indices(thetas, phis)
        return self.grid.current[cols, rows]

    def sample_gradients(self, thetas, phis) -> Tuple[np.ndarray, np.ndarray]:
        """Forward-difference gradients for arrays of angles."""
        cols, rows = self._indices(thetas, phis)
        current = self.grid.current
        h = current[cols, rows]
        d_col = current[(cols + 1) % self.grid.cols, rows] - h
        d_row = current[cols, np.minimum(rows + 1, self.grid.rows - 1)] - h
        return d_col, d_row

    def sample_normalized(self, thetas, phis) -> np.ndarray:
        c = self.display_clamp
        return np.clip(self.sample_heights(thetas, phis), -c, c) / c


def view_distance(x: float, y: float, viewport: Viewport) -> float:
    """Pixel distance from the viewport centre."""
    return math.hypot(x - viewport.width / 2, y - viewport.height / 2)


def screen_to_angles(
    x: float,
    y: float,
    viewport: Viewport,
    drawable_multiplier: float = 1.5,
) -> Optional[Tuple[float, float]]:
    """
    Project a screen position onto the sphere.

    The position is taken to normalized device coordinates and scaled by the
    sphere radius. Points inside the silhouette are lifted onto the front
    hemisphere; points in the ring up to ``drawable_multiplier`` radii land
    on the silhouette itself.

    Returns:
        (theta, phi), or None when the point is outside the drawable disc
    """
    r = viewport.radius
    if r <= 0:
        return None
    ndc_x = (x / viewport.width) * 2 - 1
    ndc_y = 1 - (y / viewport.height) * 2
    px = ndc_x * r
    py = ndc_y * r

    dist = math.sqrt(px * px + py * py)
    if dist > r * drawable_multiplier:
        return None

    pz = 0.0
    if dist < r:
        pz = math.sqrt(r * r - dist * dist)

    length = math.sqrt(px * px + py * py + pz * pz)
    px, py, pz = (px / length * r, py / length * r, pz / length * r)

    phi = math.acos(min(max(py / r, -1.0), 1.0))
    theta = math.atan2(pz, px)
    return theta, phi
