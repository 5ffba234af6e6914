"""
Logging configuration and utilities for the QSignal engine.
"""
from .config import configure_logging, get_logger, only_subsystems

__all__ = ["configure_logging", "get_logger", "only_subsystems"]
