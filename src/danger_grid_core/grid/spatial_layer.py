"""
Single-layer spatial grid: one danger value and a set of occupants per cell
"""
import sys
from pathlib import Path
from typing import Dict, Set, Tuple, Union

import numpy as np

from ..exceptions import CellIndexError, ConfigurationError
from ..geometry.geodesy import width_in_squares, height_in_squares
from ..utils import EPSILON


class SpatialLayer:
    """
    W×H grid of cells for one moment in time

    Danger values live in a float64 numpy array indexed ``[x, y]``;
    x grows to the east and y grows to the south.

    Attributes:
        width: Width of the field (any unit)
        height: Height of the field (same unit)
        resolution: Edge length of one square (same unit)
    """

    def __init__(self, width: float, height: float, resolution: float):
        """
        Args:
            width: Width of the flyable area (our x dimension)
            height: Height of the flyable area (our y dimension)
            resolution: Edge length of one square

        Raises:
            ConfigurationError: zero or negative width, height or resolution
        """
        if resolution <= 0 or width <= 0 or height <= 0:
            raise ConfigurationError(
                "Map width, height and resolution must be positive",
                {"width": width, "height": height, "resolution": resolution},
            )
        self.width = float(width)
        self.height = float(height)
        self.resolution = float(resolution)

        squares_wide = width_in_squares(width, resolution)
        squares_high = height_in_squares(height, resolution)
        self._danger = np.zeros((squares_wide, squares_high), dtype=np.float64)
        self._occupants: Dict[Tuple[int, int], Set[int]] = {}

    @classmethod
    def like(cls, other: "SpatialLayer") -> "SpatialLayer":
        """Empty layer with the same dimensions and resolution"""
        layer = cls.from_danger(np.zeros(other.shape), other.resolution)
        layer.width = other.width
        layer.height = other.height
        return layer

    @classmethod
    def from_danger(cls, danger: np.ndarray, resolution: float = 1.0) -> "SpatialLayer":
        """
        Layer whose danger values are copied from a (W, H) array
        """
        danger = np.asarray(danger, dtype=np.float64)
        if danger.ndim != 2 or 0 in danger.shape:
            raise ConfigurationError(f"Danger array must be a non-empty 2-D array, got shape {danger.shape}")
        if resolution <= 0:
            raise ConfigurationError(f"Map resolution must be positive, got {resolution}")
        layer = cls.__new__(cls)
        layer.width = danger.shape[0] * float(resolution)
        layer.height = danger.shape[1] * float(resolution)
        layer.resolution = float(resolution)
        layer._danger = danger.copy()
        layer._occupants = {}
        return layer

    def copy(self) -> "SpatialLayer":
        """Independent copy (danger values and occupants)"""
        clone = SpatialLayer.from_danger(self._danger, self.resolution)
        clone.width = self.width
        clone.height = self.height
        clone._occupants = {cell: set(ids) for cell, ids in self._occupants.items()}
        return clone

    # ------------------------------------------------------------------
    # Dimensions
    # ------------------------------------------------------------------
    def get_width_in_squares(self) -> int:
        return self._danger.shape[0]

    def get_height_in_squares(self) -> int:
        return self._danger.shape[1]

    def get_resolution(self) -> float:
        return self.resolution

    @property
    def shape(self) -> Tuple[int, int]:
        """(width, height) in squares"""
        return self._danger.shape

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._danger.shape[0] and 0 <= y < self._danger.shape[1]

    def _check(self, x: int, y: int):
        if not self.in_bounds(x, y):
            raise CellIndexError(x, y, self._danger.shape[0], self._danger.shape[1])

    # ------------------------------------------------------------------
    # Danger access
    # ------------------------------------------------------------------
    def get_danger_at(self, x: int, y: int) -> float:
        self._check(x, y)
        return float(self._danger[x, y])

    def set_danger_at(self, x: int, y: int, danger: float):
        self._check(x, y)
        self._danger[x, y] = danger

    def add_danger_at(self, x: int, y: int, danger: float):
        self._check(x, y)
        self._danger[x, y] += danger

    def safely_add_danger_at(self, x: int, y: int, danger: float) -> bool:
        """
        Bounds-checked add; cells outside the layer are ignored

        Returns:
            True if the cell was inside the layer and was updated
        """
        if not self.in_bounds(x, y):
            return False
        self._danger[x, y] += danger
        return True

    def as_array(self) -> np.ndarray:
        """Copy of the danger values, shape (W, H), indexed [x, y]"""
        return self._danger.copy()

    # ------------------------------------------------------------------
    # Occupants
    # ------------------------------------------------------------------
    def add_plane_at(self, x: int, y: int, plane_id: int):
        """Register an aircraft as occupying a cell (danger is unchanged)"""
        self._check(x, y)
        self._occupants.setdefault((x, y), set()).add(plane_id)

    def get_planes_at(self, x: int, y: int) -> Tuple[int, ...]:
        """IDs of all aircraft in a cell, sorted"""
        self._check(x, y)
        return tuple(sorted(self._occupants.get((x, y), ())))

    # ------------------------------------------------------------------
    # Troubleshooting output
    # ------------------------------------------------------------------
    def render(self) -> str:
        """
        Text view of the layer, north row first

        Near-zero cells print as ``-``, others as danger × 100.
        """
        lines = []
        for y in range(self._danger.shape[1]):
            cells = []
            for x in range(self._danger.shape[0]):
                value = self._danger[x, y]
                if -EPSILON < value < EPSILON:
                    cells.append(" - ")
                else:
                    cells.append("%2.0f " % (value * 100))
            lines.append("".join(cells).rstrip())
        return "\n".join(lines)

    def render_big_numbers(self) -> str:
        """Text view for fused cost layers: values printed as rounded integers"""
        width = max(len("%d" % round(v)) for v in self._danger.flat)
        lines = []
        for y in range(self._danger.shape[1]):
            lines.append(" ".join(
                "%*d" % (width, round(self._danger[x, y]))
                for x in range(self._danger.shape[0])
            ))
        return "\n".join(lines)

    def dump(self, file=None):
        """Print :meth:`render` (stdout by default)"""
        print(self.render(), file=file or sys.stdout)

    def dump_big_numbers(self, file=None):
        """Print :meth:`render_big_numbers` (stdout by default)"""
        print(self.render_big_numbers(), file=file or sys.stdout)

    def to_csv(self, path: Union[str, Path], fmt: str = "%.6f") -> Path:
        """
        Write the layer as CSV, one row per y (north first), one column per x
        """
        path = Path(path)
        np.savetxt(path, self._danger.T, delimiter=",", fmt=fmt)
        return path

    def __repr__(self) -> str:
        return (f"SpatialLayer({self.get_width_in_squares()}x{self.get_height_in_squares()}, "
                f"resolution={self.resolution})")
