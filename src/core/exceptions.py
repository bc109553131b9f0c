"""
Custom errors, shared by all layers.

Errors of the domain layer are 'expected' errors (bad input from a user / stale requests).
The service / API layers decide how to report them.
"""


class GameError(Exception):
    """Base class for everything that can go wrong while playing a game of checkers."""


class GameStateError(GameError):
    """The game is in a state that does not allow the requested action (ex. it already finished)."""


class OutOfBoundsError(GameError):
    """A cell outside of the board was accessed."""


class InvalidNotationError(GameError):
    """A board notation string could not be parsed."""


class InvalidRequestError(GameError):
    """Request data sent to the service could not be interpreted."""


class RepositoryError(GameError):
    """Persistence failure: record not found, or the record could not be read/written."""
