import heapq
import logging
import math
from collections import deque
from typing import Dict, Iterable, Optional
import numpy as np
from .config import BattleConfig, DEFAULT_PATH_COST, PathCost
from .grid import Battlefield
from .model import Coord, Path, Unit

logger = logging.getLogger(__name__)

STRAIGHT_COST = 1.0
DIAGONAL_COST = math.sqrt(2)


def _reconstruct(parents: Dict[Coord, Coord], start: Coord, end: Coord) -> Path:
    """Walk parent links back from end to start and return start -> end."""
    path: Path = [end]
    cur = end
    while cur != start:
        cur = parents[cur]
        path.append(cur)
    path.reverse()
    return path


class PathFinder:
    """Shortest routes across the battlefield that avoid living units.

    Stateless between calls: occupancy is rebuilt from the roster on every
    query, so one instance can serve any number of battles.
    """

    def __init__(self, field: Battlefield, cost: PathCost = DEFAULT_PATH_COST):
        if cost not in ("uniform", "weighted"):
            raise ValueError(f"unknown path cost policy: {cost!r}")
        self.field = field
        self.cost = cost

    @classmethod
    def from_config(cls, config: BattleConfig) -> "PathFinder":
        return cls(Battlefield.from_config(config), config.path_cost)

    def find_path(self, start: Coord, end: Coord, units: Iterable[Unit]) -> Path:
        """Return the cells from start to end inclusive, or [] if unreachable."""
        start, end = tuple(start), tuple(end)
        self.field.require_in_bounds(start, "start")
        self.field.require_in_bounds(end, "end")
        if start == end:
            return [start]

        blocked = self.field.occupancy(units, exclude=(start, end))
        if self.cost == "uniform":
            path = self._bfs(start, end, blocked)
        else:
            path = self._dijkstra(start, end, blocked)
        logger.debug("path %s -> %s (%s): %d cells", start, end, self.cost, len(path))
        return path

    def find_target_path(self, attacker: Unit, target: Unit, units: Iterable[Unit]) -> Path:
        """Path from the attacker's cell to the target's cell."""
        return self.find_path(attacker.position, target.position, units)

    def _bfs(self, start: Coord, end: Coord, blocked: np.ndarray) -> Path:
        parents: Dict[Coord, Coord] = {}
        seen = {start}
        queue = deque([start])
        while queue:
            cur = queue.popleft()
            if cur == end:
                return _reconstruct(parents, start, end)
            for nxt, _diagonal in self.field.neighbors(cur):
                if nxt in seen or blocked[nxt]:
                    continue
                seen.add(nxt)
                parents[nxt] = cur
                queue.append(nxt)
        return []

    def _dijkstra(self, start: Coord, end: Coord, blocked: np.ndarray) -> Path:
        dist = np.full((self.field.width, self.field.height), np.inf)
        dist[start] = 0.0
        parents: Dict[Coord, Coord] = {}
        # (distance, x, y): equal distances pop lowest x, then lowest y
        heap = [(0.0, start[0], start[1])]
        while heap:
            d, x, y = heapq.heappop(heap)
            cur = (x, y)
            if cur == end:
                return _reconstruct(parents, start, end)
            if d > dist[cur]:
                continue
            for nxt, diagonal in self.field.neighbors(cur):
                if blocked[nxt]:
                    continue
                nd = d + (DIAGONAL_COST if diagonal else STRAIGHT_COST)
                if nd < dist[nxt]:
                    dist[nxt] = nd
                    parents[nxt] = cur
                    heapq.heappush(heap, (nd, nxt[0], nxt[1]))
        return []


def find_path(start: Coord, end: Coord, units: Iterable[Unit],
              config: Optional[BattleConfig] = None) -> Path:
    """One-shot path query using a fresh PathFinder for config."""
    return PathFinder.from_config(config or BattleConfig()).find_path(start, end, units)
