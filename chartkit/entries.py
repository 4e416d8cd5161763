from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

import numpy as np


RGBA = tuple[int, int, int, int]

DEFAULT_ENTRY_COLOR: RGBA = (0, 0, 0, 255)
DEFAULT_TEXT_COLOR: RGBA = (128, 128, 128, 255)


@dataclass(frozen=True)
class ChartEntry:
    value: float | None
    label: str | None = None
    value_label: str | None = None
    color: RGBA = DEFAULT_ENTRY_COLOR
    text_color: RGBA = DEFAULT_TEXT_COLOR

    @property
    def has_value(self) -> bool:
        return self.value is not None


@dataclass(frozen=True)
class ChartSeries:
    name: str
    entries: tuple[ChartEntry, ...] = ()
    color: RGBA = DEFAULT_ENTRY_COLOR

    def values(self) -> np.ndarray:
        """Entry values as float64, with NaN where an entry has no value."""
        return np.asarray(
            [np.nan if e.value is None else float(e.value) for e in self.entries],
            dtype=np.float64,
        )


@dataclass(frozen=True)
class ValueRange:
    min_value: float
    max_value: float

    @property
    def span(self) -> float:
        return self.max_value - self.min_value

    def is_degenerate(self) -> bool:
        return self.min_value == self.max_value


def value_bounds(series: Iterable[ChartSeries]) -> ValueRange | None:
    """Raw min/max over every present value, or None when nothing has a value."""
    chunks = [s.values() for s in series]
    chunks = [c[np.isfinite(c)] for c in chunks if c.size]
    if not chunks:
        return None
    values = np.concatenate(chunks)
    if values.size == 0:
        return None
    return ValueRange(min_value=float(np.min(values)), max_value=float(np.max(values)))
