from typing import Dict, Iterable, List, Optional, Sequence
from .model import Unit


def select_open_targets(units_by_row: Iterable[Optional[Sequence[Unit]]],
                        left_army_target: bool) -> List[Unit]:
    """Return the unit not shielded by a living ally in each row.

    When attacking the left army the open unit is the living one with the
    smallest y in its row; otherwise the one with the largest y. Dead units
    are ignored, rows with no living unit (or no row at all) contribute
    nothing, and the result keeps row order. Ties keep the first unit seen.
    """
    result: List[Unit] = []
    for row in units_by_row:
        if not row:
            continue
        best: Optional[Unit] = None
        for u in row:
            if not u.alive:
                continue
            if best is None:
                best = u
            elif left_army_target and u.y < best.y:
                best = u
            elif not left_army_target and u.y > best.y:
                best = u
        if best is not None:
            result.append(best)
    return result


def group_by_row(units: Iterable[Unit]) -> List[List[Unit]]:
    """Partition units into rows keyed by x, rows in ascending x order."""
    rows: Dict[int, List[Unit]] = {}
    for u in units:
        rows.setdefault(u.x, []).append(u)
    return [rows[x] for x in sorted(rows)]
