import pytest

from backtestkit.models import (
    Bar,
    BollingerBands,
    SignalType,
    Stats,
    StrategySignal,
    Trade,
    is_near_zero,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (0.0, True),
        (1e-8, True),
        (-1e-8, True),
        (1e-7, False),
        (-1e-7, False),
        (1.0, False),
    ],
)
def test_is_near_zero(value, expected):
    assert is_near_zero(value) is expected


def test_trade_str_buy():
    trade = Trade(type=SignalType.BUY, quantity=2.0, price=10.5, timestamp="t1")
    assert str(trade) == "Buy @ $10.5 Q: 2 Timestamp: t1"


@pytest.mark.parametrize("side", [SignalType.SELL, SignalType.HOLD])
def test_trade_str_non_buy_is_sell(side):
    trade = Trade(type=side, quantity=1.0, price=3.0, timestamp="x")
    assert str(trade).startswith("Sell @ $3 ")


def test_bar_str_lists_every_field():
    bar = Bar(open=1.0, high=2.0, low=0.5, close=1.5, volume=100.0, timestamp="day")
    assert str(bar) == " Open: 1 High: 2 Low: 0.5 Close: 1.5 Volume: 100 Timestamp: day"


def test_stats_str_layout():
    stats = Stats(initial_capital=1000.0, final_capital=1000.0, num_trades=3)
    lines = str(stats).splitlines()
    assert lines[0] == "===== Backtest Statistics ====="
    assert lines[-1] == "==============================="
    assert len(lines) == 10
    assert lines[1] == "Initial Capital     : $1000.00"
    assert lines[5] == "Number of Trades    : 3"


def test_stats_str_ends_with_newline():
    assert str(Stats()).endswith("===============================\n")


def test_signal_defaults_to_hold():
    signal = StrategySignal(price=5.0)
    assert signal.type is SignalType.HOLD
    assert signal.close_all is False


def test_frozen_bands_reject_assignment():
    bands = BollingerBands(lower=1.0, middle=2.0, upper=3.0)
    with pytest.raises(AttributeError):
        bands.lower = 0.0  # type: ignore[misc]
    assert bands.lower == 1.0
    assert bands.middle == 2.0
    assert bands.upper == 3.0