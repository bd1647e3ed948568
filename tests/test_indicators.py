import pytest

from backtestkit.indicators import (
    bollinger_bands,
    simple_moving_average,
    stochastic_oscillator,
)
from backtestkit.models import Bar


def flat(closes):
    return [Bar(open=c, high=c, low=c, close=c) for c in closes]


def varied_bars():
    rows = [
        (10, 8, 9), (11, 9, 10), (12, 9, 11), (11, 8, 8.5),
        (13, 10, 12), (14, 11, 13), (13, 9, 10), (12, 10, 11),
    ]
    return [Bar(open=c, high=h, low=lo, close=c, timestamp=str(i))
            for i, (h, lo, c) in enumerate(rows)]


def test_sma_empty_history_is_zero():
    assert simple_moving_average([], 5) == 0.0


def test_sma_of_constant_closes():
    assert simple_moving_average(flat([7.0] * 6), 4) == pytest.approx(7.0)


def test_sma_period_longer_than_history_uses_all():
    assert simple_moving_average(flat([1.0, 2.0, 3.0]), 10) == pytest.approx(2.0)


def test_sma_uses_only_last_period_bars():
    with_old = simple_moving_average(flat([100.0, 1.0, 2.0, 3.0]), 3)
    without_old = simple_moving_average(flat([1.0, 2.0, 3.0]), 3)
    assert with_old == pytest.approx(without_old)


def test_sma_default_period():
    history = flat([1000.0] * 5 + [1.0] * 20)
    assert simple_moving_average(history) == pytest.approx(1.0)


def test_bollinger_empty_is_none():
    assert bollinger_bands([], 5) is None


def test_bollinger_constant_closes_collapse():
    bands = bollinger_bands(flat([4.0] * 5), 5)
    assert bands.lower == pytest.approx(4.0)
    assert bands.middle == pytest.approx(4.0)
    assert bands.upper == pytest.approx(4.0)


def test_bollinger_worked_example():
    bands = bollinger_bands(flat([1.0, 3.0]), 2)
    assert bands.lower == pytest.approx(0.0)
    assert bands.upper == pytest.approx(4.0)


def test_bollinger_symmetric_around_sma():
    history = flat([3.0, 8.0, 1.0, 6.0, 2.0])
    bands = bollinger_bands(history, 4)
    assert bands.middle == pytest.approx(simple_moving_average(history, 4))
    assert bands.upper - bands.middle == pytest.approx(bands.middle - bands.lower)


def test_bollinger_width_scales_with_multiplier():
    history = flat([3.0, 8.0, 1.0, 6.0, 2.0])
    narrow = bollinger_bands(history, 5, 2.0)
    wide = bollinger_bands(history, 5, 4.0)
    assert wide.upper - wide.lower == pytest.approx(2 * (narrow.upper - narrow.lower))


def test_bollinger_zero_multiplier_has_no_width():
    bands = bollinger_bands(flat([3.0, 8.0, 1.0]), 3, 0.0)
    assert bands.lower == bands.middle == bands.upper


def test_stochastic_needs_enough_history():
    assert stochastic_oscillator(flat([5.0] * 6), 5, 3) is None
    result = stochastic_oscillator(flat([5.0] * 7), 5, 3)
    assert result.perc_k == 50.0


def test_stochastic_default_parameters():
    assert stochastic_oscillator(flat([5.0] * 15)) is None
    assert stochastic_oscillator(flat([5.0] * 16)).perc_d == 50.0


def test_stochastic_flat_range_is_fifty():
    result = stochastic_oscillator(flat([5.0] * 10), 4, 3)
    assert result.perc_k == 50.0
    assert result.perc_d == 50.0


def test_stochastic_close_at_high_is_hundred():
    bars = [Bar(open=i, high=i + 1, low=i, close=i + 1) for i in range(10)]
    result = stochastic_oscillator(bars, 3, 3)
    assert result.perc_k == pytest.approx(100.0)
    assert result.perc_d == pytest.approx(100.0)


def test_stochastic_within_bounds():
    result = stochastic_oscillator(varied_bars(), 3, 3)
    assert 0.0 <= result.perc_k <= 100.0
    assert 0.0 <= result.perc_d <= 100.0


def test_stochastic_d_is_mean_of_recent_k():
    bars = varied_bars()
    full = stochastic_oscillator(bars, 3, 3)
    recent_k = [stochastic_oscillator(bars[:len(bars) - k], 3, 1).perc_k for k in range(3)]
    assert full.perc_k == pytest.approx(recent_k[0])
    assert full.perc_d == pytest.approx(sum(recent_k) / 3)