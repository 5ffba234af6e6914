"""
Error classification for the signal engine.

Insufficient history, zero volatility and degenerate option inputs are
legal states with fallback values and never raise. These exceptions cover
bad caller input, invalid configuration and numerical failures.
"""

from .configuration import ConfigurationError
from .data_quality import (
    DataQualityError,
    MalformedDataError,
)
from .system_failures import (
    SystemFailureError,
    SimulationError,
)

__all__ = [
    # Configuration
    "ConfigurationError",
    # Data Quality Errors
    "DataQualityError",
    "MalformedDataError",
    # System Failures
    "SystemFailureError",
    "SimulationError",
]
