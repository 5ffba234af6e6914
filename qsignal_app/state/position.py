"""
Single-position risk monitor.

Two states, FLAT and OPEN. Price updates mark the open position to market
and close it when a directional stop-loss or take-profit threshold is hit.

P&L percent is signed by quantity, so a short gains when price falls.
Short exits compare it against the mirrored thresholds: the stop-loss
distance closes a short on the gain side and the take-profit distance on
the loss side.

should_close() is a separate, direction-agnostic query: it reports a
close whenever the absolute P&L reaches the stop-loss distance. For a
short whose P&L lies between -take_profit and -stop_loss it answers True
while on_price_update() keeps the position open. Both rules are kept as
they are; callers rely on each of them.
"""

from typing import Optional

from ..config.defaults import EngineParams
from ..data.validators import validate_price, validate_quantity
from ..logging.config import get_position_logger, log_position_transition
from .models import CloseReason, PositionState, PositionStatus

position_logger = get_position_logger(__name__)


class PositionMonitor:
    """Tracks one position against stop-loss / take-profit thresholds."""

    def __init__(self, stop_loss_percent: float = EngineParams.stop_loss_percent,
                 take_profit_percent: float = EngineParams.take_profit_percent):
        self.stop_loss_percent = stop_loss_percent
        self.take_profit_percent = take_profit_percent
        self.state = PositionState.flat()
        self.last_close_reason: Optional[CloseReason] = None

    @property
    def status(self) -> PositionStatus:
        return self.state.status

    @property
    def unrealized_pnl(self) -> float:
        """Unrealized P&L in currency (price delta times quantity)."""
        return self.state.unrealized_pnl

    def open(self, entry_price: float, quantity: float) -> PositionState:
        """
        Open a position, replacing any existing one.

        A zero quantity leaves the monitor flat.

        Raises:
            MalformedDataError: If entry_price or quantity is unusable
        """
        entry_price = validate_price(entry_price, "entry_price")
        quantity = validate_quantity(quantity)

        previous = self.state
        if quantity == 0:
            self._transition(PositionState.flat(), "open_zero_quantity")
            return self.state

        self._transition(
            PositionState.opened(entry_price, quantity),
            "replace" if previous.is_open else "open",
        )
        self.last_close_reason = None
        return self.state

    def mark_to_market(self, price: float) -> PositionState:
        """Recompute unrealized P&L at `price` without enforcing exits."""
        self.state = self.state.with_price(price)
        return self.state

    def on_price_update(self, price: float) -> bool:
        """
        Mark the position and apply the directional exit rule.

        Long positions close at pnl <= -stop_loss or pnl >= take_profit;
        short positions at pnl >= stop_loss or pnl <= -take_profit.

        Returns:
            True if the position was closed by this update
        """
        if not self.state.is_open:
            return False

        state = self.mark_to_market(price)
        reason = self._exit_reason(state)
        if reason is None:
            return False

        self.last_close_reason = reason
        self._transition(PositionState.flat(), reason.value, closed=state)
        return True

    def should_close(self) -> bool:
        """True when open and |pnl| >= stop_loss or pnl >= take_profit."""
        if not self.state.is_open:
            return False

        pnl_percent = self.state.unrealized_pnl_percent
        return (abs(pnl_percent) >= self.stop_loss_percent
                or pnl_percent >= self.take_profit_percent)

    def reset(self) -> None:
        """Explicitly drop the position."""
        if self.state.is_open:
            self.last_close_reason = CloseReason.RESET
        self._transition(PositionState.flat(), CloseReason.RESET.value)

    def _exit_reason(self, state: PositionState) -> Optional[CloseReason]:
        pnl_percent = state.unrealized_pnl_percent
        if state.is_long:
            if pnl_percent <= -self.stop_loss_percent:
                return CloseReason.STOP_LOSS
            if pnl_percent >= self.take_profit_percent:
                return CloseReason.TAKE_PROFIT
        else:
            if pnl_percent >= self.stop_loss_percent:
                return CloseReason.STOP_LOSS
            if pnl_percent <= -self.take_profit_percent:
                return CloseReason.TAKE_PROFIT
        return None

    def _transition(self, new_state: PositionState, trigger: str,
                    closed: Optional[PositionState] = None) -> None:
        old_state = self.state
        self.state = new_state

        if old_state.status == new_state.status and not new_state.is_open:
            return

        snapshot = closed or old_state
        log_position_transition(
            position_logger,
            from_state=old_state.status.value,
            to_state=new_state.status.value,
            trigger=trigger,
            context={
                "entry_price": new_state.entry_price if new_state.is_open else snapshot.entry_price,
                "quantity": new_state.quantity if new_state.is_open else snapshot.quantity,
                "last_price": snapshot.last_price,
                "unrealized_pnl": snapshot.unrealized_pnl,
                "unrealized_pnl_percent": snapshot.unrealized_pnl_percent,
                "stop_loss_percent": self.stop_loss_percent,
                "take_profit_percent": self.take_profit_percent,
            }
        )
