"""Writing backtest results to CSV files."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Sequence
from dataclasses import replace
from pathlib import Path
from types import TracebackType
from typing import Generic, TypeVar

from .indicators import bollinger_bands, stochastic_oscillator
from .models import Bar, BollingerBands, SignalType, Stochastic, Trade
from .position import Position, PositionType

T = TypeVar("T")

Formatter = Callable[[T], Sequence[str]]

POSITIONS_FILE = "closed_positions.csv"
TRADES_FILE = "trades.csv"
BOLLINGER_FILE = "bollinger_bands.csv"
STOCHASTIC_FILE = "stochastic.csv"


def _fixed(value: float) -> str:
    """Six digits after the point, as the default float-to-text conversion gives."""
    return f"{value:f}"


class CSVWriter(Generic[T]):
    """Writes items as CSV rows; the header line precedes the first row."""

    def __init__(
        self,
        path: str | os.PathLike[str],
        headers: Sequence[str],
        formatter: Formatter[T],
    ) -> None:
        self.path = Path(path)
        self.headers = tuple(headers)
        self._formatter = formatter
        self._wrote_header = False
        self._handle = self.path.open("w", encoding="utf-8", newline="")

    def write(self, item: T) -> None:
        """Format ``item`` and append it as one row."""
        row = tuple(self._formatter(item))
        if len(row) != len(self.headers):
            raise ValueError(
                f"row has {len(row)} columns, expected {len(self.headers)}"
            )
        if not self._wrote_header:
            self._handle.write(self._to_line(self.headers))
            self._wrote_header = True
        self._handle.write(self._to_line(row))

    def close(self) -> None:
        """Flush and close the underlying file."""
        self._handle.close()

    def __enter__(self) -> CSVWriter[T]:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @staticmethod
    def _to_line(values: Iterable[str]) -> str:
        return ",".join(values) + "\n"


def write_csv(
    path: str | os.PathLike[str],
    headers: Sequence[str],
    data: Iterable[T],
    formatter: Formatter[T],
) -> Path:
    """Write every item of ``data`` to ``path``; return the path written."""
    with CSVWriter(path, headers, formatter) as writer:
        for item in data:
            writer.write(item)
    return writer.path


def _results_path(results_dir: str | os.PathLike[str], name: str) -> Path:
    directory = Path(results_dir)
    directory.mkdir(parents=True, exist_ok=True)
    return directory / name


def _position_row(position: Position) -> tuple[str, ...]:
    return (
        position.entry_time,
        position.exit_time,
        f"{position.realised_pnl:.2f}",
        "Long" if position.type is PositionType.LONG else "Short",
    )


def _trade_row(trade: Trade) -> tuple[str, ...]:
    return (
        "Buy" if trade.type is SignalType.BUY else "Sell",
        f"{trade.price:.2f}",
        _fixed(trade.quantity),
        trade.timestamp,
    )


def _bands_row(bands: BollingerBands) -> tuple[str, ...]:
    return (_fixed(bands.lower), _fixed(bands.middle), _fixed(bands.upper), bands.timestamp)


def _stochastic_row(stochastic: Stochastic) -> tuple[str, ...]:
    return (_fixed(stochastic.perc_k), _fixed(stochastic.perc_d), stochastic.timestamp)


def log_positions(
    positions: Iterable[Position], results_dir: str | os.PathLike[str] = "results"
) -> Path:
    """Write closed positions to ``closed_positions.csv``."""
    return write_csv(
        _results_path(results_dir, POSITIONS_FILE), Position.HEADERS, positions, _position_row
    )


def log_trades(
    trades: Iterable[Trade], results_dir: str | os.PathLike[str] = "results"
) -> Path:
    """Write executed trades to ``trades.csv``."""
    return write_csv(_results_path(results_dir, TRADES_FILE), Trade.HEADERS, trades, _trade_row)


def log_bollinger_bands(
    history: Sequence[Bar], period: int, results_dir: str | os.PathLike[str] = "results"
) -> Path:
    """Write the Bollinger bands as they stood after each bar."""
    rows = []
    for end, bar in enumerate(history, start=1):
        bands = bollinger_bands(history[:end], period)
        if bands is not None:
            rows.append(replace(bands, timestamp=bar.timestamp))
    return write_csv(
        _results_path(results_dir, BOLLINGER_FILE), BollingerBands.HEADERS, rows, _bands_row
    )


def log_stochastic(
    history: Sequence[Bar], period: int, results_dir: str | os.PathLike[str] = "results"
) -> Path:
    """Write the stochastic oscillator as it stood after each bar."""
    rows = []
    for end, bar in enumerate(history, start=1):
        stochastic = stochastic_oscillator(history[:end], period)
        if stochastic is not None:
            rows.append(replace(stochastic, timestamp=bar.timestamp))
    return write_csv(
        _results_path(results_dir, STOCHASTIC_FILE), Stochastic.HEADERS, rows, _stochastic_row
    )