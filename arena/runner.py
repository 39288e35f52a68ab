import asyncio
import logging
from typing import Optional
from tactics.errors import BattleError
from tactics.model import Army
from tactics.scheduler import BattleResult, BattleScheduler
from .eventlog import BattleLog

logger = logging.getLogger(__name__)


class BattleRunner:
    """Async driver that plays one battle at a time, pausing between unit actions.

    Every battle started on a runner gets its own `log`.
    """

    def __init__(self, scheduler: BattleScheduler, action_delay_ms: int = 0):
        self.scheduler = scheduler
        self.action_delay_ms = action_delay_ms
        self.sleep_s = max(0, action_delay_ms) / 1000.0
        self.log = BattleLog()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self, side_a: Army, side_b: Army):
        """Start the battle loop."""
        if self.running:
            raise RuntimeError("battle already running")
        log = BattleLog()
        # validate armies here so the caller sees the error, not the task
        steps = self.scheduler.actions(side_a, side_b, log)
        self.log = log
        self._task = asyncio.create_task(self._loop(steps))

    async def stop(self):
        """Stop the battle loop between two actions and forget the battle.

        A battle that already failed is logged and not re-raised here;
        call `wait()` before `stop()` to see its error.
        """
        if not self._task:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            logger.info("Battle stopped after %d actions", len(self.log))
        except BattleError as exc:
            logger.warning("Battle had already failed: %s", exc)
        finally:
            self._task = None

    async def wait(self) -> BattleResult:
        """Wait for the battle to finish and return its result."""
        if not self._task:
            raise RuntimeError("battle not started")
        return await self._task

    async def _loop(self, steps) -> BattleResult:
        """Main loop - one unit action per step, yield to the event loop in between."""
        try:
            while True:
                try:
                    outcome = next(steps)
                except StopIteration as stop:
                    return stop.value
                logger.debug("%s -> %s", outcome.actor.name,
                             outcome.target.name if outcome.target else None)
                await asyncio.sleep(self.sleep_s)
        finally:
            steps.close()
