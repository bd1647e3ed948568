"""Event-driven backtesting of trading strategies over OHLCV price data read from CSV."""

__version__ = "0.1.0"