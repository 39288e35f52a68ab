import logging
from dataclasses import replace
from typing import Dict, Iterator, List, Literal, Optional
from .config import BattleConfig
from .model import Army, Coord, Unit

logger = logging.getLogger(__name__)


def _efficiency(template: Unit):
    return (template.base_attack / template.cost, template.health / template.cost)


def deployment_cells(config: BattleConfig, side: Literal["left", "right"]) -> Iterator[Coord]:
    """Cells of an army's deployment region, column by column, y ascending."""
    columns = min(config.deploy_columns, config.field_width)
    for col in range(columns):
        x = col if side == "left" else config.field_width - 1 - col
        for y in range(config.field_height):
            yield (x, y)


def generate_preset(templates: List[Unit], max_points: int,
                    config: Optional[BattleConfig] = None,
                    side: Literal["left", "right"] = "left") -> Army:
    """Greedily build the strongest army the point budget allows.

    Unit types are ranked by attack per point, then health per point. Each
    type is added up to `max_units_per_type` times while the budget lasts.
    Copies get unique names and distinct cells in the side's deployment
    region; allocation stops once the region is full.
    """
    config = config or BattleConfig()
    ranked = sorted((t for t in templates if t.cost > 0), key=_efficiency, reverse=True)
    cells = deployment_cells(config, side)
    counts: Dict[str, int] = {}
    units: List[Unit] = []
    points = 0

    for template in ranked:
        count = counts.get(template.unit_type, 0)
        while count < config.max_units_per_type and points + template.cost <= max_points:
            cell = next(cells, None)
            if cell is None:
                logger.warning("Deployment region full after %d units", len(units))
                return Army(units=units, points=points)
            units.append(replace(
                template,
                name=f"{template.unit_type} {count}",
                attack_bonuses=dict(template.attack_bonuses),
                defence_bonuses=dict(template.defence_bonuses),
                x=cell[0],
                y=cell[1],
                alive=True,
                program=None,
            ))
            points += template.cost
            count += 1
        counts[template.unit_type] = count

    logger.info("Preset: %d units for %d/%d points", len(units), points, max_points)
    return Army(units=units, points=points)
