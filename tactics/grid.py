from typing import Iterable, Iterator, Tuple
import numpy as np
from .config import BattleConfig
from .errors import OutOfBoundsError
from .model import Coord, Unit

# Fixed neighbour order: orthogonal first, then diagonals.
# Search tie-breaks depend on it, do not reorder.
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, 0),
    (1, 0),
    (0, -1),
    (0, 1),
    (-1, -1),
    (-1, 1),
    (1, -1),
    (1, 1),
)


class Battlefield:
    """Fixed-size grid with occupancy derived from living units."""

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"field size must be positive, got {width}x{height}")
        self.width = width
        self.height = height

    @classmethod
    def from_config(cls, config: BattleConfig) -> "Battlefield":
        return cls(config.field_width, config.field_height)

    def in_bounds(self, coord: Coord) -> bool:
        x, y = coord
        return 0 <= x < self.width and 0 <= y < self.height

    def require_in_bounds(self, coord: Coord, what: str = "coordinate") -> None:
        """Raise OutOfBoundsError when coord is off the field."""
        if not self.in_bounds(coord):
            raise OutOfBoundsError(coord, self.width, self.height, what)

    def occupancy(self, units: Iterable[Unit], exclude: Iterable[Coord] = ()) -> np.ndarray:
        """Boolean (width, height) mask of cells held by living units.

        Cells in `exclude` are never marked. Dead units and units standing
        off the field are ignored.
        """
        blocked = np.zeros((self.width, self.height), dtype=bool)
        for u in units:
            if u.alive and self.in_bounds(u.position):
                blocked[u.x, u.y] = True
        for x, y in exclude:
            if self.in_bounds((x, y)):
                blocked[x, y] = False
        return blocked

    def neighbors(self, coord: Coord) -> Iterator[Tuple[Coord, bool]]:
        """Yield (cell, is_diagonal) for every in-bounds neighbour of coord."""
        x, y = coord
        for dx, dy in DIRECTIONS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                yield (nx, ny), dx != 0 and dy != 0
