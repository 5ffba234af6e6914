"""Per-bar analysis result returned by the engine"""

from dataclasses import dataclass
from typing import Any, Optional

from ..signals.models import TradeAction, TradingSignal


@dataclass(frozen=True)
class BarAnalysis:
    """Outcome of analysing one bar"""
    action: TradeAction
    buy_strength: float
    sell_strength: float
    confidence: float
    bar_index: int
    volatility: Optional[float] = None
    position_closed: bool = False
    accepted: bool = True  # False when the bar was rejected and not recorded

    @classmethod
    def from_signal(cls, signal: TradingSignal, bar_index: int, volatility: float,
                    position_closed: bool = False) -> "BarAnalysis":
        return cls(
            action=signal.action,
            buy_strength=signal.buy_strength,
            sell_strength=signal.sell_strength,
            confidence=signal.confidence,
            bar_index=bar_index,
            volatility=volatility,
            position_closed=position_closed,
        )

    @classmethod
    def rejected(cls, bar_index: int) -> "BarAnalysis":
        """Hold result for a bar that could not be scored"""
        return cls(
            action=TradeAction.HOLD,
            buy_strength=0.0,
            sell_strength=0.0,
            confidence=0.0,
            bar_index=bar_index,
            accepted=False,
        )

    def as_legacy_tuple(self) -> tuple[int, float, float, float]:
        """(action code, buy strength, sell strength, confidence) for integer-coded hosts"""
        return (self.action.legacy_code, self.buy_strength, self.sell_strength, self.confidence)

    def to_dict(self) -> dict[str, Any]:
        return {
            "action": self.action.value,
            "buy_strength": self.buy_strength,
            "sell_strength": self.sell_strength,
            "confidence": self.confidence,
            "bar_index": self.bar_index,
            "volatility": self.volatility,
            "position_closed": self.position_closed,
            "accepted": self.accepted,
        }
