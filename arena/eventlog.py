from typing import List, Optional, Tuple
from tactics.model import Outcome, Unit


class BattleLog:
    """Append-only record of unit actions for replay and streaming.

    Instances are outcome sinks: call one with (actor, target).
    """

    def __init__(self):
        self._log: List[Outcome] = []

    def __call__(self, actor: Unit, target: Optional[Unit]) -> None:
        self._log.append(Outcome(actor, target))

    def __len__(self) -> int:
        return len(self._log)

    def since(self, offset: int, limit: int = 1000) -> Tuple[List[Outcome], int]:
        """Return outcomes starting from offset, up to limit."""
        offset = max(0, offset)
        chunk = self._log[offset: offset + limit]
        return chunk, offset + len(chunk)

    def lines(self) -> List[str]:
        """Human-readable "actor -> target" entries."""
        return [f"{o.actor.name} -> {o.target.name if o.target else 'None'}" for o in self._log]
