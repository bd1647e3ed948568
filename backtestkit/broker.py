"""Order execution: sizing, slippage, commission and settlement."""

from __future__ import annotations

from .models import Bar, SignalType, Stats, StrategySignal, Trade, is_near_zero
from .portfolio import Portfolio
from .position import Position


class Broker:
    """Turns strategy signals into trades against a portfolio."""

    SLIPPAGE = 0.001

    def __init__(self, trade_commission: float, allocation_perc: float, portfolio: Portfolio) -> None:
        self.trade_commission = float(trade_commission)
        self.allocation_perc = float(allocation_perc)
        self.portfolio = portfolio

    @property
    def trade_history(self) -> list[Trade]:
        """Every trade executed so far."""
        return self.portfolio.trade_history

    @property
    def closed_positions(self) -> list[Position]:
        """Positions that have been brought flat."""
        return self.portfolio.closed_positions

    def process_signal(self, signal: StrategySignal) -> Trade | None:
        """Execute ``signal``; return the resulting trade, or None if nothing traded."""
        price = self._apply_slippage(signal.price, signal.type)
        if signal.close_all:
            quantity = abs(self.portfolio.position_size)
        else:
            quantity = self._quantity(price, signal.volume, signal.type)

        if is_near_zero(quantity):
            return None

        trade = Trade(
            type=signal.type,
            quantity=quantity,
            price=price,
            timestamp=signal.timestamp,
        )

        self.portfolio.decrease_balance(self.trade_commission)
        notional = trade.quantity * trade.price
        if trade.type is SignalType.BUY:
            self.portfolio.decrease_balance(notional)
        else:
            self.portfolio.increase_balance(notional)

        self.portfolio.record_trade(trade)
        return trade

    def finalise(self, last_bar: Bar) -> Trade | None:
        """Close any open position at the close of ``last_bar``."""
        size = self.portfolio.position_size
        if is_near_zero(size):
            return None
        exit_signal = StrategySignal(
            type=SignalType.SELL if size > 0 else SignalType.BUY,
            price=last_bar.close,
            timestamp=last_bar.timestamp,
            close_all=True,
        )
        return self.process_signal(exit_signal)

    def stats(self) -> Stats:
        """Summary statistics of the underlying portfolio."""
        return self.portfolio.stats()

    def _quantity(self, price: float, market_volume: float, side: SignalType) -> float:
        if is_near_zero(price):
            raise ValueError(f"cannot size a trade at price {price}")

        commission = self.trade_commission
        by_capital = self.allocation_perc * self.portfolio.current_balance
        max_qty_by_capital = max(0.0, by_capital - commission) / price

        by_liquidity = self.allocation_perc * market_volume * price
        max_qty_by_liquidity = max(0.0, by_liquidity - commission) / price

        size = self.portfolio.position_size
        if side is SignalType.SELL:
            if size > 0:
                return max(0.0, min(size, max_qty_by_liquidity))
            return max(0.0, min(max_qty_by_capital, max_qty_by_liquidity))
        if size < 0:
            return max(0.0, min(abs(size), max_qty_by_liquidity))
        return max(0.0, min(max_qty_by_capital, max_qty_by_liquidity))

    def _apply_slippage(self, price: float, side: SignalType) -> float:
        if side is SignalType.BUY:
            return price * (1 + self.SLIPPAGE)
        return price * (1 - self.SLIPPAGE)