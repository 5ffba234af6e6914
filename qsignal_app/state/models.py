"""
Position state data models.

This module defines the immutable snapshot of the single tracked position
and its two lifecycle states.
"""

from dataclasses import dataclass, replace
from enum import Enum


class PositionStatus(str, Enum):
    """Position lifecycle states."""
    FLAT = "flat"
    OPEN = "open"


class CloseReason(str, Enum):
    """Why a position left the OPEN state."""
    STOP_LOSS = "stop_loss"
    TAKE_PROFIT = "take_profit"
    RESET = "reset"


@dataclass(frozen=True)
class PositionState:
    """Snapshot of the tracked position."""

    entry_price: float = 0.0
    quantity: float = 0                              # Signed, negative for short
    is_long: bool = False

    # Mark-to-market
    last_price: float = 0.0
    unrealized_pnl: float = 0.0                      # Currency: (price - entry) * quantity
    unrealized_pnl_percent: float = 0.0              # Fraction of entry notional

    @property
    def status(self) -> PositionStatus:
        return PositionStatus.OPEN if self.quantity != 0 else PositionStatus.FLAT

    @property
    def is_open(self) -> bool:
        return self.status == PositionStatus.OPEN

    @classmethod
    def flat(cls) -> "PositionState":
        """Empty, no-position state."""
        return cls()

    @classmethod
    def opened(cls, entry_price: float, quantity: float) -> "PositionState":
        """New position marked at its entry price."""
        return cls(
            entry_price=entry_price,
            quantity=quantity,
            is_long=quantity > 0,
            last_price=entry_price,
        )

    def with_price(self, price: float) -> "PositionState":
        """Mark the position to a new price."""
        if not self.is_open:
            return self

        pnl = (price - self.entry_price) * self.quantity
        pnl_percent = pnl / (self.entry_price * abs(self.quantity))
        return replace(
            self,
            last_price=price,
            unrealized_pnl=pnl,
            unrealized_pnl_percent=pnl_percent,
        )
