class BattleError(Exception):
    """Base class for caller-visible battle failures."""


class OutOfBoundsError(BattleError, ValueError):
    """A coordinate lies outside the battlefield."""

    def __init__(self, coord, width: int, height: int, what: str = "coordinate"):
        self.coord = coord
        super().__init__(f"{what} {coord} is outside the {width}x{height} field")


class MissingArmyError(BattleError, ValueError):
    """An army reference was required but absent."""


class MissingProgramError(BattleError):
    """A unit was asked to act but has no attacker behavior attached."""


class BattleInterrupted(BattleError):
    """The battle loop was stopped between two unit actions."""

    def __init__(self, actions: int):
        self.actions = actions
        super().__init__(f"battle interrupted after {actions} actions")
