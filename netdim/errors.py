"""Error types raised by the calculation engine."""
from __future__ import annotations


class CalculationError(Exception):
    """Base class for failures of a dimensioning calculation."""


class ErlangConvergenceError(CalculationError):
    """Raised when the Erlang-B channel search exceeds its channel bound."""

    def __init__(self, traffic: float, blocking_probability: float, max_channels: int) -> None:
        self.traffic = traffic
        self.blocking_probability = blocking_probability
        self.max_channels = max_channels
        super().__init__(
            f"Could not converge on a solution for Erlang B calculation "
            f"(traffic={traffic} Erl, blocking={blocking_probability}, max_channels={max_channels})"
        )
