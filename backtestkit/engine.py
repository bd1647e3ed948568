"""The event loop that drives a strategy over a data feed."""

from __future__ import annotations

import os
from collections.abc import Iterable

from .broker import Broker
from .models import Bar, SignalType, Stats, StrategySignal
from .reporting import log_bollinger_bands, log_positions, log_stochastic, log_trades
from .strategies import BaseStrategy


class Engine:
    """Feeds bars to a strategy and executes its signals on the following bar."""

    def __init__(self, data_feed: Iterable[Bar], strategy: BaseStrategy, broker: Broker) -> None:
        self.data_feed = data_feed
        self.strategy = strategy
        self.broker = broker
        self.dataset_size = 0

    def run(self) -> Stats:
        """Run the backtest, print its statistics and return them.

        A signal raised on one bar is filled at the open of the next. Reading
        stops at the first bar without a timestamp; any position still open
        is closed at the last bar's close.
        """
        previous = Bar()
        pending = SignalType.HOLD
        self.dataset_size = 0

        for bar in self.data_feed:
            if not bar.timestamp:
                break
            if bar.is_header:
                continue

            self.dataset_size += 1
            if pending is not SignalType.HOLD:
                self.broker.process_signal(
                    StrategySignal(
                        type=pending,
                        price=bar.open,
                        volume=bar.volume,
                        timestamp=bar.timestamp,
                    )
                )

            pending = self.strategy.progress(bar)
            previous = bar

        self.broker.finalise(previous)

        stats = self.broker.stats()
        print("\n" + str(stats))
        print(f"Dataset size: {self.dataset_size}")
        print(f"Strategy used: {self.strategy.name}")
        return stats

    def log_results(self, results_dir: str | os.PathLike[str] = "results") -> None:
        """Write positions, trades and indicator histories as CSV files."""
        log_positions(self.broker.closed_positions, results_dir)
        log_trades(self.broker.trade_history, results_dir)
        log_bollinger_bands(self.strategy.history, self.strategy.period, results_dir)
        log_stochastic(self.strategy.history, self.strategy.period, results_dir)