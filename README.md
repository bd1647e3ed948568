# backtestkit

backtestkit replays a CSV file of OHLCV price bars through a trading strategy. It simulates
order execution with slippage, commission and position sizing. When the run ends, it reports
how the strategy performed.

## How a backtest runs

The engine handles each bar in the data as follows:

1. A signal produced on the previous bar is filled at this bar's **open** price. A buy fills
   0.1% above the open. A sell fills 0.1% below it.
2. The strategy sees the bar and returns `BUY`, `SELL` or `HOLD`.

Reading stops at the first bar that has no timestamp.

After the last bar, any position still open is closed at that bar's close price. The engine
then prints a statistics summary with these figures:

- initial and final capital
- profit or loss
- percentage return
- number of trades
- win rate
- number of winning and losing positions

It also prints the number of bars processed and the name of the strategy used.

### Trades and positions

- Trades are matched first in, first out.
- A position counts as closed when its size returns to zero. Its realised profit or loss is
  recorded at that point.
- A flat commission is charged on every trade.
- The cash balance never goes below zero.

### Trade size

Each trade's size is limited by the smaller of two amounts, each less the commission:

- the allocation fraction of the current cash balance
- the allocation fraction of the bar's traded value, which is volume × price

A trade against an open position is never larger than that position. A sell while long
reduces or closes the long position and does not turn it short. A buy while short does the
same for the short position.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Input data

The input is a CSV file. Its first line is a header and is skipped. Every other line holds
these fields, in this order:

```
open,high,low,close,volume,timestamp
```

Any fields after the timestamp are ignored. If a line has fewer than five numeric fields, or a
field that is not a number, the file is rejected.

Example:

```
open,high,low,close,volume,timestamp
100.0,101.5,99.2,100.8,120000,2024-01-02
100.8,102.0,100.1,101.7,98000,2024-01-03
```

## Command line

```
backtestkit --filename prices.csv --strategy bb-mean-rev --period 20
```

The file name is looked up in `../data/`, relative to the current directory. The result files
are written to `../results/`, which is created if it does not exist.

| Option | Short | Meaning | Default |
|---|---|---|---|
| `--filename` | `-f` | CSV file of bars, inside `../data/` | none |
| `--strategy` | `-s` | strategy name (see below) | `bb-mean-rev` |
| `--period` | `-p` | lookback period of the strategy's indicator | `14` |
| `--balance` | `-b` | starting cash balance | `10000` |
| `--commission` | `-c` | flat commission charged per trade | `0.0` |
| `--allocation` | `-a` | fraction of balance and of bar volume usable per trade | `0.1` |

How arguments are handled:

- Unrecognised arguments are ignored.
- An option given last, with no value after it, is ignored.
- A negative period or a value that is not a number is an error.

The command prints a message and exits with status 1 in these cases:

- an argument is invalid
- the strategy name is not recognised
- the data file cannot be read
- the data file holds an invalid line

Otherwise it exits with status 0.

### Strategies

- `ma-price-cross`: moving-average price crossover. The strategy buys when a bar opens below
  the simple moving average and closes above it. It sells on the opposite crossing.
- `bb-mean-rev`: Bollinger Band mean reversion, with bands two standard deviations wide. The
  strategy buys when the close moves back up through the lower band. It sells when the close
  moves back down through the upper band.
- `stochastic-osc-cross`: stochastic oscillator crossover, with a 3-bar %D. The strategy acts
  on a crossing of %K and %D, but only while %K is at or below 20 or at or above 80.

### Result files

After the run, these CSV files are written:

- `closed_positions.csv`: for each position, the entry time, exit time, realised profit or
  loss, and whether it was `Long` or `Short`
- `trades.csv`: the side, fill price, quantity and timestamp of every trade
- `bollinger_bands.csv`: the lower, middle and upper band after every bar
- `stochastic.csv`: %K and %D after every bar where they can be computed

A file whose list of rows is empty is created with no lines at all, not even a header.

## Using it from Python

### Indicators

The functions in `backtestkit.indicators` work on a list of `Bar` objects:

```python
from backtestkit.models import Bar
from backtestkit.indicators import simple_moving_average, bollinger_bands, stochastic_oscillator

history = [
    Bar(open=1.0, high=2.0, low=0.5, close=1.5, volume=100.0, timestamp="t1"),
    Bar(open=1.5, high=2.5, low=1.0, close=2.0, volume=100.0, timestamp="t2"),
]
print(simple_moving_average(history, 2))
print(bollinger_bands(history, 2, 2.0))
print(stochastic_oscillator(history, 1, 2))
```

`stochastic_oscillator` returns `None` until the history holds at least `period + d - 1`
bars. `bollinger_bands` returns `None` only when the history is empty.

### Strategies

`create_strategy` builds a strategy from its name. An unknown name raises `ValueError`. Call
`progress` with one bar at a time; it returns a `SignalType`:

```python
from backtestkit.strategies import create_strategy

strategy = create_strategy("ma-price-cross", 20)
```

### A full run

```python
from backtestkit.broker import Broker
from backtestkit.datafeed import DataFeed
from backtestkit.engine import Engine
from backtestkit.portfolio import Portfolio
from backtestkit.strategies import create_strategy

portfolio = Portfolio(10000)
broker = Broker(trade_commission=1.0, allocation_perc=0.1, portfolio=portfolio)
engine = Engine(DataFeed("prices.csv"), create_strategy("bb-mean-rev", 20), broker)

stats = engine.run()           # prints the summary and returns a Stats object
engine.log_results("results")  # writes the four CSV files into ./results
```

`DataFeed` takes the path to the file exactly as given. `Engine` accepts any iterable of `Bar`
objects in its place.

### The command from Python

The command-line entry point can also be called with an argument list:

```python
from backtestkit.cli import main

main(["-f", "prices.csv", "-s", "stochastic-osc-cross", "-p", "14"])
```

## What it does not do

backtestkit works offline on a single price series from one CSV file. It does not:

- download market data
- connect to a broker or place real orders
- trade several instruments at once
- draw charts

Its results are the printed summary and the CSV files described above.