import logging
import threading
from dataclasses import dataclass
from typing import Generator, List, Optional
from .config import BattleConfig
from .errors import BattleInterrupted, MissingArmyError, MissingProgramError
from .model import Army, Outcome, OutcomeSink, Side, Unit

logger = logging.getLogger(__name__)


@dataclass
class BattleResult:
    rounds: int
    actions: int
    winner: Optional[Side] = None
    stalemate: bool = False


def turn_order(units: List[Unit]) -> List[Unit]:
    """Strongest first; equal attack keeps collection order."""
    return sorted(units, key=lambda u: -u.base_attack)


def _require_army(army: Optional[Army], what: str) -> Army:
    if army is None or army.units is None:
        raise MissingArmyError(f"{what} army is required")
    return army


class BattleScheduler:
    """Round loop: every living unit acts once per round, strongest first.

    Termination is checked only at the top of a round, so a side wiped out
    mid-round still lets the remaining living actors of that round act.
    """

    def __init__(self, config: Optional[BattleConfig] = None):
        self.config = config or BattleConfig()

    def actions(self, side_a: Army, side_b: Army, sink: OutcomeSink,
                cancel: Optional[threading.Event] = None) -> Generator[Outcome, None, BattleResult]:
        """Return a generator that performs one unit action per step.

        Each step reports the action to `sink` and then yields it; the
        generator's return value is the BattleResult. Suspending between
        steps is how callers interrupt a battle. When `cancel` is set, the
        generator raises BattleInterrupted instead of starting the next
        unit action.
        """
        _require_army(side_a, "side_a")
        _require_army(side_b, "side_b")
        return self._run(side_a, side_b, sink, cancel)

    def _run(self, side_a: Army, side_b: Army, sink: OutcomeSink,
             cancel: Optional[threading.Event]) -> Generator[Outcome, None, BattleResult]:
        rounds = 0
        count = 0
        max_rounds = self.config.max_rounds
        while side_a.has_alive_units() and side_b.has_alive_units():
            if max_rounds is not None and rounds >= max_rounds:
                logger.warning("No decision after %d rounds, calling a stalemate", rounds)
                return BattleResult(rounds, count, None, stalemate=True)
            rounds += 1
            queue = turn_order(side_a.alive_units() + side_b.alive_units())
            logger.debug("Round %d: %d units to act", rounds, len(queue))
            for unit in queue:
                # may have been killed earlier this round
                if not unit.alive:
                    continue
                if cancel is not None and cancel.is_set():
                    logger.warning("Battle interrupted after %d actions", count)
                    raise BattleInterrupted(count)
                if unit.program is None:
                    raise MissingProgramError(f"unit {unit.name} has no attacker behavior")
                target = unit.program.attack()
                sink(unit, target)
                count += 1
                yield Outcome(unit, target)

        winner: Optional[Side] = None
        if side_a.has_alive_units():
            winner = "A"
        elif side_b.has_alive_units():
            winner = "B"
        logger.info("Battle over after %d rounds, %d actions, winner %s", rounds, count, winner)
        return BattleResult(rounds, count, winner)

    def run_battle(self, side_a: Army, side_b: Army, sink: OutcomeSink,
                   cancel: Optional[threading.Event] = None) -> BattleResult:
        """Fight to the end, or raise BattleInterrupted once `cancel` is set.

        The cancel flag is checked right before each unit action, never
        during one. A battle already decided returns its result even if the
        flag was set by its last action.
        """
        steps = self.actions(side_a, side_b, sink, cancel)
        while True:
            try:
                next(steps)
            except StopIteration as stop:
                return stop.value


def run_battle(side_a: Army, side_b: Army, sink: OutcomeSink,
               config: Optional[BattleConfig] = None) -> BattleResult:
    """Run a whole battle with a fresh scheduler."""
    return BattleScheduler(config).run_battle(side_a, side_b, sink)
