"""
Trading signal data models.

TradeAction is the tagged decision at the API boundary. The bare integer
encoding (1 / -1 / 0) used by bar-oriented host platforms is only
produced through legacy_code.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class TradeAction(str, Enum):
    """Decision produced for a bar."""
    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"

    @property
    def legacy_code(self) -> int:
        """Integer encoding for legacy host interfaces."""
        return _LEGACY_CODES[self]


_LEGACY_CODES = {
    TradeAction.BUY: 1,
    TradeAction.SELL: -1,
    TradeAction.HOLD: 0,
}


def clamp_unit(value: float) -> float:
    """Clamp a score into [0, 1]."""
    return min(1.0, max(0.0, value))


@dataclass(frozen=True)
class SignalInputs:
    """Quantities the decision rule is evaluated on."""
    expected_return: float
    profit_probability: float
    loss_probability: float
    volatility: float
    call_signal: float
    put_signal: float
    simulations: int
    drift: float = 0.0
    mean_price: Optional[float] = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "expected_return": self.expected_return,
            "profit_probability": self.profit_probability,
            "loss_probability": self.loss_probability,
            "volatility": self.volatility,
            "call_signal": self.call_signal,
            "put_signal": self.put_signal,
            "simulations": self.simulations,
            "drift": self.drift,
            "mean_price": self.mean_price,
        }


@dataclass(frozen=True)
class TradingSignal:
    """Fused decision with strengths and confidence, all in [0, 1]."""
    action: TradeAction = TradeAction.HOLD
    buy_strength: float = 0.0
    sell_strength: float = 0.0
    confidence: float = 0.0
    inputs: Optional[SignalInputs] = None

    def __post_init__(self):
        # Frozen dataclass: clamp through object.__setattr__
        object.__setattr__(self, "buy_strength", clamp_unit(self.buy_strength))
        object.__setattr__(self, "sell_strength", clamp_unit(self.sell_strength))
        object.__setattr__(self, "confidence", clamp_unit(self.confidence))

    @classmethod
    def hold(cls, confidence: float = 0.0, inputs: Optional[SignalInputs] = None) -> "TradingSignal":
        """Hold signal with both strengths at zero."""
        return cls(action=TradeAction.HOLD, confidence=confidence, inputs=inputs)
