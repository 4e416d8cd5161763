from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

import numpy as np

from chartkit.errors import ChartConfigError, ChartDataError


LOGGER = logging.getLogger(__name__)

# Absolute slack added to the interval quotient so 2.9999999 spacings count as 3.
_TICK_COUNT_EPS = 1e-9


@dataclass(frozen=True)
class NiceScale:
    """Result of nice-number scaling for one axis.

    ``range`` is the rounded-up data span that the tick spacing was derived
    from. ``tick_count`` is the number of whole spacings between ``nice_min``
    and ``nice_max``; it can differ from the requested tick count, which is a
    property of the algorithm rather than an error.
    """

    range: float
    tick_spacing: float
    nice_min: float
    nice_max: float
    tick_count: int


def nice_number(value: float, *, round_result: bool) -> float:
    """Round ``value`` to 1, 2, 5 or 10 times a power of ten.

    With ``round_result`` the nearest candidate is taken; otherwise the value
    is rounded up, and 2.5 is also accepted as a candidate.
    """
    if not math.isfinite(value) or value <= 0:
        raise ChartConfigError(f"nice_number requires a finite positive value, got {value!r}")
    exp = math.floor(math.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 2.5:
            nice_frac = 2.5
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))


def calculate_nice_scale(min_value: float, max_value: float, desired_ticks: int) -> NiceScale:
    if not (math.isfinite(min_value) and math.isfinite(max_value)):
        raise ChartConfigError("nice scale bounds must be finite")
    if max_value <= min_value:
        raise ChartConfigError(f"nice scale needs max > min, got [{min_value}, {max_value}]")
    if desired_ticks < 2:
        raise ChartConfigError("desired_ticks must be >= 2")

    if not math.isfinite(max_value - min_value):
        raise ChartDataError(f"value span of [{min_value}, {max_value}] overflows a float")
    span = nice_number(max_value - min_value, round_result=False)
    spacing = nice_number(span / (desired_ticks - 1), round_result=True)
    nice_min = _snap_zero(math.floor(min_value / spacing) * spacing, spacing)
    nice_max = _snap_zero(math.ceil(max_value / spacing) * spacing, spacing)
    tick_count = max(1, int(math.floor((nice_max - nice_min) / spacing + _TICK_COUNT_EPS)))

    if tick_count != desired_ticks:
        LOGGER.debug(
            "nice scale for [%s, %s] yields %d ticks (requested %d)",
            min_value,
            max_value,
            tick_count,
            desired_ticks,
        )
    return NiceScale(range=span, tick_spacing=spacing, nice_min=nice_min, nice_max=nice_max, tick_count=tick_count)


def descending_ticks(nice_max: float, tick_spacing: float, count: int) -> np.ndarray:
    if count <= 0:
        return np.zeros(0, dtype=np.float64)
    ticks = nice_max - np.arange(count, dtype=np.float64) * tick_spacing
    if tick_spacing > 0:
        ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=tick_spacing * 1e-9)] = 0.0
    return ticks


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e6 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def _snap_zero(value: float, step: float) -> float:
    if abs(value) <= step * 1e-9:
        return 0.0
    return float(value)


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
