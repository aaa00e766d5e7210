"""
Error types raised by the SCM simulator.

Every error is raised before the session state is touched, so a rejected
command or turn leaves the game valid and advanceable.
"""


class SimulationError(Exception):
    """Base class for all simulator errors."""


class NotFoundError(SimulationError, KeyError):
    """An unknown product, player or supplier id was referenced."""

    def __init__(self, kind: str, identifier):
        self.kind = kind
        self.identifier = identifier
        super().__init__(f"{kind} with id {identifier!r} not found")

    def __str__(self):
        return self.args[0]


class InvalidArgumentError(SimulationError, ValueError):
    """A command argument is outside its allowed domain."""


class TurnClosedError(SimulationError):
    """A decision was submitted for a turn that has already been advanced."""

    def __init__(self, submitted_turn: int, current_turn: int):
        self.submitted_turn = submitted_turn
        self.current_turn = current_turn
        super().__init__(
            f"Turn {submitted_turn} is closed; the session is at turn {current_turn}"
        )
