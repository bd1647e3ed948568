"""Cash balance, trade history and positions of one account."""

from __future__ import annotations

import math

from .models import Stats, Trade
from .position import Position


def _ratio(numerator: float, denominator: float) -> float:
    if denominator:
        return numerator / denominator
    if numerator == 0:
        return math.nan
    return math.copysign(math.inf, numerator)


class Portfolio:
    """Holds the balance, recorded trades, the open position and closed ones."""

    def __init__(self, initial_balance: float) -> None:
        self.initial_balance = float(initial_balance)
        self.current_balance = float(initial_balance)
        self.trade_history: list[Trade] = []
        self.closed_positions: list[Position] = []
        self._position = Position()

    @property
    def position_size(self) -> float:
        """Signed size of the open position: positive long, negative short."""
        return self._position.size

    def record_trade(self, trade: Trade) -> None:
        """Add a trade to the history and apply it to the open position."""
        self.trade_history.append(trade)
        if self._position.update(trade):
            self._close_position(trade)

    def decrease_balance(self, amount: float) -> None:
        """Take ``amount`` from the balance, never going below zero."""
        if amount < 0:
            raise ValueError(f"amount must not be negative: {amount}")
        self.current_balance -= min(self.current_balance, amount)

    def increase_balance(self, amount: float) -> None:
        """Add ``amount`` to the balance."""
        if amount < 0:
            raise ValueError(f"amount must not be negative: {amount}")
        self.current_balance += amount

    def stats(self) -> Stats:
        """Summary statistics as of now."""
        winning = sum(1 for p in self.closed_positions if p.realised_pnl > 0)
        losing = sum(1 for p in self.closed_positions if p.realised_pnl < 0)
        profit = self.current_balance - self.initial_balance
        decided = winning + losing
        return Stats(
            perc_return=_ratio(profit, self.initial_balance) * 100,
            initial_capital=self.initial_balance,
            final_capital=self.current_balance,
            num_trades=len(self.trade_history),
            total_profit=profit,
            win_rate=0.0 if decided == 0 else winning / decided * 100,
            winning_positions=winning,
            losing_positions=losing,
        )

    def _close_position(self, closing_trade: Trade) -> None:
        self._position.close(closing_trade)
        self.closed_positions.append(self._position)
        self._position = Position()