"""Reading bars from a CSV file of open, high, low, close, volume, timestamp."""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

from .models import Bar

_NUMERIC_FIELDS = ("open", "high", "low", "close", "volume")


def parse_bar(line: str) -> Bar:
    """Parse one CSV data line into a :class:`Bar`.

    The first five fields are numbers; the sixth, if present, is the
    timestamp. Any further fields are ignored.
    """
    fields = line.rstrip("\r\n").split(",")
    if len(fields) < len(_NUMERIC_FIELDS):
        raise ValueError(f"expected at least {len(_NUMERIC_FIELDS)} fields: {line!r}")

    values = {}
    for name, token in zip(_NUMERIC_FIELDS, fields):
        try:
            values[name] = float(token)
        except ValueError:
            raise ValueError(f"invalid {name} value {token!r} in line {line!r}") from None

    timestamp = fields[len(_NUMERIC_FIELDS)] if len(fields) > len(_NUMERIC_FIELDS) else ""
    return Bar(timestamp=timestamp, **values)


class DataFeed:
    """Iterates the data rows of a CSV file, skipping its header line."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def __iter__(self) -> Iterator[Bar]:
        with self.path.open(encoding="utf-8") as handle:
            next(handle, None)
            for line in handle:
                yield parse_bar(line)