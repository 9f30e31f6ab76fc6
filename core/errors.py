"""
core.errors
Error types shared by the core and the boundary layer.

The transition itself never raises for finite numeric input; these exist so
callers can tell malformed input apart from missing records or storage faults.
"""

from __future__ import annotations

from typing import Sequence


class SimulationError(Exception):
    """Base class for every error raised by this project."""


class ConfigError(SimulationError, ValueError):
    """Raised when configuration cannot be parsed into a balance/engine config."""


class InvalidDecisionInput(SimulationError, ValueError):
    """A decision body is missing fields or carries non-numeric values."""

    def __init__(self, message: str, fields: Sequence[str] = ()):
        super().__init__(message)
        self.fields = tuple(fields)


class InvalidGameState(SimulationError, ValueError):
    """A game state record violates the model invariants."""


class GameNotFound(SimulationError, LookupError):
    pass


class Unauthorized(SimulationError):
    pass


class StorageError(SimulationError):
    pass
