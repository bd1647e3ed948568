[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "backtestkit"
version = "0.1.0"
description = "A small event-driven backtesting engine for OHLCV price data with technical-indicator strategies"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "backtesting",
    "trading",
    "ohlcv",
    "bollinger-bands",
    "stochastic-oscillator",
    "moving-average",
    "finance",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Financial and Insurance Industry",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
backtestkit = "backtestkit.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["backtestkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
