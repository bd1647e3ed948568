"""Plain data types shared across the backtester."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

NEAR_ZERO_TOLERANCE = 1e-8


def is_near_zero(value: float) -> bool:
    """Return True when ``value`` lies within the near-zero tolerance."""
    return -NEAR_ZERO_TOLERANCE <= value <= NEAR_ZERO_TOLERANCE


def _general(value: float) -> str:
    """Format a float the way a default stream would (six significant digits)."""
    return f"{value:g}"


class SignalType(Enum):
    """Direction a strategy asks the broker to trade in."""

    BUY = "buy"
    SELL = "sell"
    HOLD = "hold"


@dataclass(frozen=True)
class Bar:
    """One open/high/low/close/volume row of market data."""

    open: float = 0.0
    high: float = 0.0
    low: float = 0.0
    close: float = 0.0
    volume: float = 0.0
    timestamp: str = ""
    is_header: bool = False

    def __str__(self) -> str:
        return (
            f" Open: {_general(self.open)} High: {_general(self.high)}"
            f" Low: {_general(self.low)} Close: {_general(self.close)}"
            f" Volume: {_general(self.volume)} Timestamp: {self.timestamp}"
        )


@dataclass(frozen=True)
class StrategySignal:
    """An order request produced from a strategy decision."""

    type: SignalType = SignalType.HOLD
    price: float = 0.0
    volume: float = 0.0
    timestamp: str = ""
    close_all: bool = False


@dataclass(frozen=True)
class Trade:
    """An executed fill."""

    HEADERS: ClassVar[tuple[str, ...]] = ("Side", "Price", "Quantity", "Timestamp")

    type: SignalType = SignalType.HOLD
    quantity: float = 0.0
    price: float = 0.0
    timestamp: str = ""

    def __str__(self) -> str:
        side = "Buy" if self.type is SignalType.BUY else "Sell"
        return (
            f"{side} @ ${_general(self.price)} Q: {_general(self.quantity)}"
            f" Timestamp: {self.timestamp}"
        )


@dataclass
class Stats:
    """Summary figures of a finished backtest."""

    perc_return: float = 0.0
    initial_capital: float = 0.0
    final_capital: float = 0.0
    num_trades: int = 0
    total_profit: float = 0.0
    win_rate: float = 0.0
    winning_positions: int = 0
    losing_positions: int = 0

    def __str__(self) -> str:
        lines = [
            "===== Backtest Statistics =====",
            f"Initial Capital     : ${self.initial_capital:.2f}",
            f"Final Capital       : ${self.final_capital:.2f}",
            f"Final Profit/Loss   : ${self.total_profit:.2f}",
            f"Percentage Return   : {self.perc_return:.2f}%",
            f"Number of Trades    : {self.num_trades}",
            f"Win Rate            : {self.win_rate:.2f}%",
            f"Winning Positions   : {self.winning_positions}",
            f"Losing Positions    : {self.losing_positions}",
            "===============================",
        ]
        return "\n".join(lines) + "\n"


@dataclass(frozen=True)
class BollingerBands:
    """Lower, middle and upper Bollinger band values at one point in time."""

    HEADERS: ClassVar[tuple[str, ...]] = ("Lower", "Middle", "Upper", "Timestamp")

    lower: float = 0.0
    middle: float = 0.0
    upper: float = 0.0
    timestamp: str = ""


@dataclass(frozen=True)
class Stochastic:
    """Stochastic oscillator %K and %D at one point in time."""

    HEADERS: ClassVar[tuple[str, ...]] = ("%K", "%D", "Timestamp")

    perc_k: float = 0.0
    perc_d: float = 0.0
    timestamp: str = ""


@dataclass
class BacktestConfig:
    """Settings for one backtest run."""

    strategy_name: str = "bb-mean-rev"
    file_name: str = ""
    trade_commission: float = 0.0
    initial_balance: float = 10000.0
    allocation_perc: float = 0.1
    period: int = 14