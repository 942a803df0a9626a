"""
Application-layer exceptions.

These exceptions are raised by the gamification engine and translated to
HTTP responses by the API layer. All of them are local, recoverable
conditions; callers surface them as user-facing messages.
"""


class GamificationError(Exception):
    """Base class for engine errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(GamificationError):
    """Malformed input, e.g. a negative lift or an unknown duel type."""

    pass


class InvalidTransition(GamificationError):
    """A duel state machine edge that the transition table does not allow."""

    pass


class InvalidProof(GamificationError):
    """A progress/proof submission without a finite non-negative value."""

    pass


class InsufficientResource(GamificationError):
    """XP or rank gate not met for a cosmetic unlock."""

    pass


class NotFound(GamificationError):
    """A referenced quest, duel, cosmetic or profile does not exist."""

    pass
