from dataclasses import dataclass, field
from typing import Callable, Dict, List, Literal, Optional, Protocol, Tuple

Side = Literal["A", "B"]
Coord = Tuple[int, int]  # (x, y) grid cell, 0-based
Path = List[Coord]


class AttackerBehavior(Protocol):
    """Per-unit decision policy invoked once per turn."""

    def attack(self) -> Optional["Unit"]:
        ...


@dataclass(eq=False)
class Unit:
    name: str
    unit_type: str
    health: int
    base_attack: int
    cost: int
    attack_type: str = "melee"
    attack_bonuses: Dict[str, float] = field(default_factory=dict)  # enemy unit_type -> multiplier
    defence_bonuses: Dict[str, float] = field(default_factory=dict)  # enemy attack_type -> multiplier
    x: int = 0
    y: int = 0
    alive: bool = True
    program: Optional[AttackerBehavior] = field(default=None, repr=False)

    @property
    def position(self) -> Coord:
        return (self.x, self.y)

    def attack_bonus(self, unit_type: str) -> float:
        """Attack multiplier against a unit type (1.0 when not listed)."""
        return self.attack_bonuses.get(unit_type, 1.0)

    def defence_bonus(self, attack_type: str) -> float:
        """Defence multiplier against an attack type (1.0 when not listed)."""
        return self.defence_bonuses.get(attack_type, 1.0)

    def kill(self) -> None:
        """Mark the unit dead. There is no way back."""
        self.alive = False


@dataclass
class Army:
    units: List[Unit] = field(default_factory=list)
    points: int = 0

    def alive_units(self) -> List[Unit]:
        return [u for u in self.units if u.alive]

    def has_alive_units(self) -> bool:
        return any(u.alive for u in self.units)


@dataclass
class Outcome:
    actor: Unit
    target: Optional[Unit]


OutcomeSink = Callable[[Unit, Optional[Unit]], None]
