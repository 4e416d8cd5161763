from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from chartkit.entries import ValueRange
from chartkit.errors import ChartConfigError, ChartDataError
from chartkit.scales import calculate_nice_scale, descending_ticks, format_tick
from chartkit.text.metrics import TextMetrics, TextStyle, max_height, max_width, measure_texts


LOGGER = logging.getLogger(__name__)

# Appended to every label before measuring so the trailing glyph's overhang is covered.
SENTINEL_GLYPH = "Z"

DEGENERATE_RANGE_EXPANSION = 100.0

LabelFormatter = Callable[[float], str]


class AxisPosition(str, Enum):
    LEADING = "leading"
    TRAILING = "trailing"


class AxisKind(str, Enum):
    VALUE = "value"
    CATEGORY = "category"


@dataclass(frozen=True)
class AxisConfig:
    show_text: bool = False
    show_lines: bool = False
    max_ticks: int = 5
    label_formatter: LabelFormatter | None = None
    text_style: TextStyle = field(default_factory=TextStyle)
    position: AxisPosition = AxisPosition.TRAILING
    fixed_range: bool = False

    def __post_init__(self) -> None:
        if self.max_ticks < 2:
            raise ChartConfigError("max_ticks must be >= 2")

    @property
    def visible(self) -> bool:
        return self.show_text or self.show_lines


@dataclass(frozen=True)
class AxisLayout:
    """Outcome of laying out one axis.

    ``range`` replaces the raw data range for every later projection; ``ticks``
    run from ``range.max_value`` downwards.
    """

    extent: float
    leading_shift: float = 0.0
    ticks: tuple[float, ...] = ()
    labels: tuple[str, ...] = ()
    range: ValueRange | None = None
    tick_spacing: float = 0.0
    max_label_extent: float = 0.0


def expand_degenerate_range(value_range: ValueRange) -> ValueRange:
    """Give a zero-width range some span: grow upwards from >= 0, else collapse the top to zero."""
    if not value_range.is_degenerate():
        return value_range
    lo = value_range.min_value
    hi = lo + DEGENERATE_RANGE_EXPANSION if lo >= 0 else 0.0
    LOGGER.debug("expanding degenerate range [%s, %s] to [%s, %s]", lo, lo, lo, hi)
    return ValueRange(min_value=lo, max_value=hi)


def compute_axis(
    config: AxisConfig,
    value_range: ValueRange | None,
    available_extent: float,
    metrics: TextMetrics,
    *,
    kind: AxisKind = AxisKind.VALUE,
) -> AxisLayout:
    if not config.visible or value_range is None:
        return AxisLayout(extent=available_extent, range=value_range)

    resolved = expand_degenerate_range(value_range)
    if not math.isfinite(resolved.span):
        raise ChartDataError(f"value span of [{resolved.min_value}, {resolved.max_value}] overflows a float")
    if config.fixed_range:
        nice_min = resolved.min_value
        nice_max = resolved.max_value
        spacing = (nice_max - nice_min) / (config.max_ticks - 1)
        count = config.max_ticks
    else:
        scale = calculate_nice_scale(resolved.min_value, resolved.max_value, config.max_ticks)
        nice_min = scale.nice_min
        nice_max = scale.nice_max
        spacing = scale.tick_spacing
        count = scale.tick_count

    ticks = descending_ticks(nice_max, spacing, count)
    if config.label_formatter is None:
        labels = tuple(format_tick(float(t), step=spacing) for t in ticks)
    else:
        labels = tuple(config.label_formatter(float(t)) for t in ticks)

    bounds = measure_texts(metrics, [label + SENTINEL_GLYPH for label in labels], config.text_style)
    largest = max_width(bounds) if kind is AxisKind.VALUE else max_height(bounds)
    shift = largest if config.position is AxisPosition.LEADING else 0.0

    return AxisLayout(
        extent=available_extent - largest,
        leading_shift=shift,
        ticks=tuple(float(t) for t in ticks),
        labels=labels,
        range=ValueRange(min_value=nice_min, max_value=nice_max),
        tick_spacing=spacing,
        max_label_extent=largest,
    )


def compute_value_axis(
    config: AxisConfig,
    value_range: ValueRange | None,
    available_width: float,
    metrics: TextMetrics,
) -> AxisLayout:
    return compute_axis(config, value_range, available_width, metrics, kind=AxisKind.VALUE)


def compute_category_axis(
    config: AxisConfig,
    value_range: ValueRange | None,
    available_height: float,
    metrics: TextMetrics,
) -> AxisLayout:
    return compute_axis(config, value_range, available_height, metrics, kind=AxisKind.CATEGORY)
