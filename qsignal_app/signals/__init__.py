"""Signal generation and decision fusion"""

from .generator import SignalGenerator, fuse_signal
from .models import SignalInputs, TradeAction, TradingSignal

__all__ = [
    "SignalGenerator",
    "SignalInputs",
    "TradeAction",
    "TradingSignal",
    "fuse_signal",
]
