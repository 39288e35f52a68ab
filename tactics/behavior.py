import logging
from typing import Callable, List, Optional
from .model import Army, Unit
from .pathfinding import PathFinder
from .rng import DRNG
from .targeting import group_by_row, select_open_targets

logger = logging.getLogger(__name__)


def calculate_damage(attacker: Unit, target: Unit) -> int:
    """Base attack scaled by the attacker's bonus and the target's defence."""
    dmg = attacker.base_attack * attacker.attack_bonus(target.unit_type)
    dmg /= target.defence_bonus(attacker.attack_type)
    return max(0, round(dmg))


class OpenTargetAttacker:
    """Attack a random reachable open enemy.

    Open targets come from the enemy army's rows; only those with a path
    from the attacker are candidates. The field roster is read through
    `field_units` on every turn so occupancy is current.
    """

    def __init__(self, unit: Unit, enemies: Army, field_units: Callable[[], List[Unit]],
                 path_finder: PathFinder, rng: DRNG, left_army_target: bool):
        self.unit = unit
        self.enemies = enemies
        self.field_units = field_units
        self.path_finder = path_finder
        self.rng = rng
        self.left_army_target = left_army_target

    def attack(self) -> Optional[Unit]:
        open_targets = select_open_targets(group_by_row(self.enemies.units), self.left_army_target)
        roster = self.field_units()
        reachable = [t for t in open_targets
                     if self.path_finder.find_target_path(self.unit, t, roster)]
        if not reachable:
            logger.debug("%s has no reachable target", self.unit.name)
            return None

        target = self.rng.choice(reachable)
        dmg = calculate_damage(self.unit, target)
        target.health -= dmg
        if target.health <= 0:
            target.kill()
        logger.debug("%s hits %s for %d (hp %d)", self.unit.name, target.name, dmg, target.health)
        return target


def arm(side_a: Army, side_b: Army, path_finder: PathFinder, seed: int) -> None:
    """Attach an OpenTargetAttacker to every unit of both armies.

    Side A stands on the left, so its units target the right army and
    vice versa.
    """
    rng = DRNG(seed)

    def roster() -> List[Unit]:
        return side_a.units + side_b.units

    for u in side_a.units:
        u.program = OpenTargetAttacker(u, side_b, roster, path_finder, rng, left_army_target=False)
    for u in side_b.units:
        u.program = OpenTargetAttacker(u, side_a, roster, path_finder, rng, left_army_target=True)
