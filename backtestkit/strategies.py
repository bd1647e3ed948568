"""Trading strategies that emit a signal for each new bar."""

from __future__ import annotations

from .indicators import bollinger_bands, simple_moving_average, stochastic_oscillator
from .models import Bar, SignalType


class BaseStrategy:
    """A strategy that never trades; subclasses override :meth:`progress`."""

    def __init__(self, period: int, name: str = "Base Strategy") -> None:
        self.period = period
        self.name = name
        self.history: list[Bar] = []

    def progress(self, bar: Bar) -> SignalType:
        """Consume ``bar`` and return the signal for the next bar."""
        return SignalType.HOLD


class BollingerBandMeanReversion(BaseStrategy):
    """Buy on a close back above the lower band, sell back below the upper."""

    def __init__(self, period: int) -> None:
        super().__init__(period, "Bollinger Band Mean Reversion")

    def progress(self, bar: Bar) -> SignalType:
        self.history.append(bar)
        if len(self.history) < self.period + 1:
            return SignalType.HOLD

        bands = bollinger_bands(self.history, self.period)
        if bands is None:
            return SignalType.HOLD
        previous = self.history[-2]

        if previous.close < bands.lower and bar.close >= bands.lower:
            return SignalType.BUY
        if previous.close > bands.upper and bar.close <= bands.upper:
            return SignalType.SELL
        return SignalType.HOLD


class MovingAveragePriceCrossover(BaseStrategy):
    """Buy when a bar crosses the moving average upward, sell when downward."""

    def __init__(self, period: int) -> None:
        super().__init__(period, "Moving Average Price Crossover")

    def progress(self, bar: Bar) -> SignalType:
        self.history.append(bar)
        if len(self.history) < self.period:
            return SignalType.HOLD

        sma = simple_moving_average(self.history, self.period)
        if bar.open < sma < bar.close:
            return SignalType.BUY
        if bar.open > sma > bar.close:
            return SignalType.SELL
        return SignalType.HOLD


class StochasticOscillatorCrossover(BaseStrategy):
    """Trade %K/%D crossovers while %K is oversold (<= 20) or overbought (>= 80)."""

    def __init__(self, period: int) -> None:
        super().__init__(period, "Stochastic Oscillator Crossover")
        self._prev_k: float | None = None
        self._prev_d: float | None = None

    def progress(self, bar: Bar) -> SignalType:
        self.history.append(bar)
        if len(self.history) < self.period:
            return SignalType.HOLD

        stochastic = stochastic_oscillator(self.history, self.period)
        if stochastic is None:
            return SignalType.HOLD

        k, d = stochastic.perc_k, stochastic.perc_d
        signal = SignalType.HOLD
        if self._prev_k is not None and (k <= 20 or k >= 80):
            if self._prev_k < self._prev_d and k >= d:
                signal = SignalType.BUY
            elif self._prev_k > self._prev_d and k <= d:
                signal = SignalType.SELL

        self._prev_k, self._prev_d = k, d
        return signal


_STRATEGIES: dict[str, type[BaseStrategy]] = {
    "ma-price-cross": MovingAveragePriceCrossover,
    "bb-mean-rev": BollingerBandMeanReversion,
    "stochastic-osc-cross": StochasticOscillatorCrossover,
}


def create_strategy(name: str, period: int) -> BaseStrategy:
    """Build the strategy registered under ``name``."""
    try:
        factory = _STRATEGIES[name]
    except KeyError:
        raise ValueError(f"unknown strategy: {name!r}") from None
    return factory(period)