"""
System failure error classifications.

These exceptions represent numerical failures inside the engine that
prevent a signal from being produced for the current bar.
"""

from typing import Any, Dict, Optional


class SystemFailureError(Exception):
    """Base class for unrecoverable engine failures."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class SimulationError(SystemFailureError):
    """Monte Carlo batch produced unusable terminal prices."""

    def __init__(self, message: str, simulations: Optional[int] = None,
                 non_finite_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.simulations = simulations
        self.non_finite_count = non_finite_count
