"""Position state tracking"""

from .models import CloseReason, PositionState, PositionStatus
from .position import PositionMonitor

__all__ = ["CloseReason", "PositionMonitor", "PositionState", "PositionStatus"]
