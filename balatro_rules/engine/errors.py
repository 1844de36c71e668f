"""
Errors raised for rejected game operations.

A rejected operation never mutates the game state.
"""


class GameRuleError(ValueError):
    """Base class for operations the rules do not allow."""


class InvalidSelection(GameRuleError):
    """The selected card indexes are not a valid selection."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ResourceExhausted(GameRuleError):
    """No plays or discards are left this round."""


class NoPlaysLeft(ResourceExhausted):
    def __init__(self):
        super().__init__("No plays left this round.")


class NoDiscardsLeft(ResourceExhausted):
    def __init__(self):
        super().__init__("No discards left this round.")


class RoundOver(GameRuleError):
    """The round has already been won or lost."""

    def __init__(self, phase: str = ""):
        message = "The round is over; start a new round first."
        if phase:
            message = f"The round is over ({phase}); start a new round first."
        super().__init__(message)
        self.phase = phase
