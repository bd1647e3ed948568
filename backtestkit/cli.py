"""Command-line entry point for running a backtest."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path

from .broker import Broker
from .datafeed import DataFeed
from .engine import Engine
from .models import BacktestConfig
from .portfolio import Portfolio
from .strategies import create_strategy

DATA_DIR = Path("..") / "data"
RESULTS_DIR = Path("..") / "results"


def _parse_period(text: str) -> int:
    period = int(text)
    if period < 0:
        raise ValueError(f"period must not be negative: {period}")
    return period


_FLAGS = {
    "--filename": "file_name",
    "-f": "file_name",
    "--commission": "trade_commission",
    "-c": "trade_commission",
    "--balance": "initial_balance",
    "-b": "initial_balance",
    "--period": "period",
    "-p": "period",
    "--allocation": "allocation_perc",
    "-a": "allocation_perc",
    "--strategy": "strategy_name",
    "-s": "strategy_name",
}

_CONVERTERS = {
    "file_name": str,
    "trade_commission": float,
    "initial_balance": float,
    "period": _parse_period,
    "allocation_perc": float,
    "strategy_name": str,
}


def parse_args(argv: Sequence[str]) -> BacktestConfig:
    """Build a configuration from flag/value pairs; unknown arguments are ignored.

    A flag given as the last argument, with no value after it, is ignored.
    """
    config = BacktestConfig()
    args = iter(argv)
    for arg in args:
        field = _FLAGS.get(arg)
        if field is None:
            continue
        value = next(args, None)
        if value is None:
            break
        setattr(config, field, _CONVERTERS[field](value))
    return config


def main(argv: Sequence[str] | None = None) -> int:
    """Run a backtest as configured on the command line."""
    if argv is None:
        argv = sys.argv[1:]

    try:
        config = parse_args(argv)
    except ValueError as error:
        print(f"Invalid argument: {error}")
        return 1

    try:
        strategy = create_strategy(config.strategy_name, config.period)
    except ValueError:
        print("Invalid strategy provided, terminating backtest...")
        return 1

    portfolio = Portfolio(config.initial_balance)
    broker = Broker(config.trade_commission, config.allocation_perc, portfolio)
    data_path = DATA_DIR / config.file_name
    engine = Engine(DataFeed(data_path), strategy, broker)

    try:
        engine.run()
    except OSError as error:
        print(f"Could not read data file {data_path}: {error}")
        return 1
    except ValueError as error:
        print(f"Invalid data in {data_path}: {error}")
        return 1

    engine.log_results(RESULTS_DIR)
    return 0


if __name__ == "__main__":
    sys.exit(main())