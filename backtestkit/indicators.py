"""Technical indicators computed over a history of bars."""

from __future__ import annotations

import math
import sys
from collections.abc import Sequence

from .models import Bar, BollingerBands, Stochastic


def _window(history: Sequence[Bar], period: int) -> Sequence[Bar]:
    """Return the last ``min(period, len(history))`` bars."""
    size = min(period, len(history))
    return history[len(history) - size:]


def simple_moving_average(history: Sequence[Bar], period: int = 20) -> float:
    """Mean close over the last ``period`` bars (or all of them if fewer)."""
    if not history:
        return 0.0
    window = _window(history, period)
    if not window:
        return math.nan
    return sum(bar.close for bar in window) / len(window)


def bollinger_bands(
    history: Sequence[Bar], period: int = 20, std_dev_multiplier: float = 2.0
) -> BollingerBands | None:
    """Bollinger bands over the last ``period`` bars; None for an empty history."""
    if not history:
        return None
    window = _window(history, period)
    if not window:
        return BollingerBands(lower=math.nan, middle=math.nan, upper=math.nan)
    sma = simple_moving_average(history, len(window))
    variance = sum((bar.close - sma) ** 2 for bar in window)
    std_dev = math.sqrt(variance / len(window))
    return BollingerBands(
        lower=sma - std_dev * std_dev_multiplier,
        middle=sma,
        upper=sma + std_dev * std_dev_multiplier,
    )


def stochastic_oscillator(
    history: Sequence[Bar], period: int = 14, d: int = 3
) -> Stochastic | None:
    """%K of the latest bar and %D as the mean of the last ``d`` %K values.

    Returns None until at least ``period + d - 1`` bars are available.
    """
    required = period + d - 1
    if required < 0 or len(history) < required:
        return None

    size = len(history)
    perc_k = 0.0
    total = 0.0
    for i in range(size - d, size):
        window = history[i - period + 1:i + 1]
        high = max((bar.high for bar in window), default=-sys.float_info.max)
        low = min((bar.low for bar in window), default=sys.float_info.max)
        if high == low:
            current = 50.0
        else:
            current = (history[i].close - low) / (high - low) * 100
        total += current
        if i == size - 1:
            perc_k = current

    perc_d = total / d if d else math.nan
    return Stochastic(perc_k=perc_k, perc_d=perc_d)