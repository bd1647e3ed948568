"""A single open position built from lots matched first-in, first-out."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from .models import SignalType, Trade, is_near_zero


class PositionType(Enum):
    LONG = "long"
    SHORT = "short"


@dataclass
class _Lot:
    side: SignalType
    price: float
    quantity: float


class Position:
    """Tracks size, open lots and realised profit of one position."""

    HEADERS: ClassVar[tuple[str, ...]] = ("Entry", "Exit", "PnL", "Type")

    def __init__(self) -> None:
        self.size = 0.0
        self.realised_pnl = 0.0
        self.closed = False
        self.entry_time = ""
        self.exit_time = ""
        self.type = PositionType.LONG
        self._lots: deque[_Lot] = deque()

    def update(self, trade: Trade) -> bool:
        """Apply a trade; return True when the position has been brought flat."""
        if not self.entry_time:
            self.entry_time = trade.timestamp

        if trade.type is SignalType.BUY:
            if self.size >= 0:
                self._open_lot(trade)
                self.size += trade.quantity
                return False
            return self._realise(trade)

        if self.size <= 0:
            self._open_lot(trade)
            self.size -= trade.quantity
            return False
        return self._realise(trade)

    def close(self, closing_trade: Trade) -> None:
        """Mark the position closed by ``closing_trade``."""
        self.type = (
            PositionType.LONG if closing_trade.type is SignalType.SELL else PositionType.SHORT
        )
        self.exit_time = closing_trade.timestamp
        self.closed = True

    def _open_lot(self, trade: Trade) -> None:
        self._lots.append(_Lot(trade.type, trade.price, trade.quantity))

    def _realise(self, trade: Trade) -> bool:
        remaining = trade.quantity
        while remaining > 0 and self._lots:
            lot = self._lots[0]
            matched = min(remaining, lot.quantity)
            if lot.side is SignalType.SELL:
                self.realised_pnl += (lot.price - trade.price) * matched
                self.size += matched
            else:
                self.realised_pnl += (trade.price - lot.price) * matched
                self.size -= matched
            lot.quantity -= matched
            remaining -= matched
            if is_near_zero(lot.quantity):
                self._lots.popleft()
        return is_near_zero(self.size)