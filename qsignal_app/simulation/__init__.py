"""Monte Carlo price path simulation"""

from .gbm import PathSimulator, RandomSource, SimulationBatch

__all__ = [
    "PathSimulator",
    "RandomSource",
    "SimulationBatch",
]
