"""
Impulse injection from user interaction.

Impulses overwrite cells of the previous buffer, so the next step picks them
up. A tap writes a 3x3 splat; a drag writes a splat at every cell of an
index-space line between the last and the current position. Lines are
interpolated over grid indices, not along great circles.
"""

import structlog
from typing import Dict, List, Optional, Tuple

from .heightfield import HeightfieldGrid
from .spherical_mapper import SphericalMapper

logger = structlog.get_logger()

Cell = Tuple[int, int]


def _step_index(start: int, stop: int, s: int, steps: int) -> int:
    """Floor of the linear interpolation at s/steps, in integer arithmetic."""
    return start + ((stop - start) * s) // steps


class ImpulseInjector:
    """Writes point and path impulses and tracks per-pointer stroke continuity."""

    def __init__(
        self,
        grid: HeightfieldGrid,
        mapper: SphericalMapper,
        strength: float = 400.0,
        falloff_point: float = 0.7,
        falloff_path: float = 0.6,
    ):
        self.grid = grid
        self.mapper = mapper
        self.strength = strength
        self.falloff_point = falloff_point
        self.falloff_path = falloff_path

        # Last (theta, phi) per pointer, only while a stroke is active
        self._last: Dict[int, Tuple[float, float]] = {}

    def _splat(self, col: int, row: int, strength: float, falloff: float) -> None:
        """Overwrite the centre cell and its eight neighbours."""
        previous = self.grid.previous
        cols = self.grid.cols
        previous[col, row] = strength

        neighbor_value = strength * falloff
        for di in (-1, 0, 1):
            for dj in (-1, 0, 1):
                if di == 0 and dj == 0:
                    continue
                # A clamped row can land back on the centre; the later write wins
                nc = (col + di) % cols
                nr = self.mapper.clamp_interior_row(row + dj)
                previous[nc, nr] = neighbor_value

    def inject_point(self, col: int, row: int, strength: Optional[float] = None) -> None:
        """
        Single tap impulse at a grid cell.

        Repeating the call with the same arguments leaves the grid unchanged,
        since every write is an overwrite.
        """
        if strength is None:
            strength = self.strength
        col = self.mapper.wrap_col(col)
        row = self.mapper.clamp_interior_row(row)
        self._splat(col, row, strength, self.falloff_point)

    def inject_path_indices(
        self,
        from_col: int,
        from_row: int,
        to_col: int,
        to_row: int,
        strength: Optional[float] = None,
    ) -> List[Cell]:
        """
        Splat every cell of the index-space line between two cells.

        The step count is the Chebyshev distance between the endpoints. The
        column delta is not taken the short way round the seam.

        Returns:
            Centre cells in the order they were written
        """
        if strength is None:
            strength = self.strength

        steps = max(abs(to_col - from_col), abs(to_row - from_row))
        centers = []
        divisor = max(steps, 1)
        for s in range(steps + 1):
            col = self.mapper.wrap_col(_step_index(from_col, to_col, s, divisor))
            row = self.mapper.clamp_interior_row(_step_index(from_row, to_row, s, divisor))
            self._splat(col, row, strength, self.falloff_path)
            centers.append((col, row))
        return centers

    def inject_path(
        self,
        from_theta: float,
        from_phi: float,
        to_theta: float,
        to_phi: float,
        strength: Optional[float] = None,
    ) -> List[Cell]:
        """Map both endpoints onto interior cells and splat the line between them."""
        from_col, from_row = self.mapper.angle_to_interior_index(from_theta, from_phi)
        to_col, to_row = self.mapper.angle_to_interior_index(to_theta, to_phi)
        return self.inject_path_indices(from_col, from_row, to_col, to_row, strength)

    # ------------------------------------------------------------------
    # Stroke continuity
    # ------------------------------------------------------------------

    def begin_stroke(self, theta: float, phi: float, pointer_id: int = 0) -> Cell:
        """Tap at the angle and remember it as the stroke's last position."""
        col, row = self.mapper.angle_to_interior_index(theta, phi)
        self.inject_point(col, row)
        self._last[pointer_id] = (theta, phi)
        logger.debug("Stroke started", pointer_id=pointer_id, col=col, row=row)
        return col, row

    def extend_stroke(self, theta: float, phi: float, pointer_id: int = 0) -> List[Cell]:
        """
        Draw from the stroke's last position to this one.

        A pointer with no active stroke starts one instead.
        """
        last = self._last.get(pointer_id)
        if last is None:
            return [self.begin_stroke(theta, phi, pointer_id)]

        centers = self.inject_path(last[0], last[1], theta, phi)
        self._last[pointer_id] = (theta, phi)
        return centers

    def end_stroke(self, pointer_id: int = 0) -> None:
        """Forget the stroke's last position. The grid is left as it is."""
        self._last.pop(pointer_id, None)

    def last_position(self, pointer_id: int = 0) -> Optional[Tuple[float, float]]:
        return self._last.get(pointer_id)

    @property
    def active_strokes(self) -> int:
        return len(self._last)
