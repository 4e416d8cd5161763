from __future__ import annotations

import numpy as np

from chartkit.entries import ValueRange
from chartkit.errors import ChartConfigError
from chartkit.layout import SlotSize


def _check_progress(animation_progress: float) -> None:
    if not 0.0 <= animation_progress <= 1.0:
        raise ValueError("animation_progress must be in [0, 1]")


def project_point(
    margin: float,
    animation_progress: float,
    max_value: float,
    value_range: float,
    value: float,
    index: int,
    slot: SlotSize,
    origin: float,
    header_height: float,
    origin_x: float = 0.0,
) -> tuple[float, float]:
    """Pixel position of ``value`` in slot ``index``.

    At progress 0 every point sits on ``origin``; at progress 1 it sits at its
    scaled height below ``header_height``. Pixel y grows downwards, hence
    ``max_value - value``.
    """
    _check_progress(animation_progress)
    if value_range == 0:
        raise ChartConfigError("value_range must be non-zero; pass the nice-scaled range from the axis layout")
    x = origin_x + margin + slot.width / 2 + index * (slot.width + margin)
    y = header_height + (
        (1 - animation_progress) * (origin - header_height)
        + ((max_value - value) / value_range) * slot.height * animation_progress
    )
    return (x, y)


def project_points(
    values: np.ndarray,
    *,
    margin: float,
    animation_progress: float,
    value_range: ValueRange,
    slot: SlotSize,
    origin: float,
    header_height: float,
    origin_x: float = 0.0,
) -> tuple[np.ndarray, np.ndarray]:
    """Vectorised :func:`project_point` over a whole series; NaN values give NaN y."""
    _check_progress(animation_progress)
    span = value_range.span
    if span == 0:
        raise ChartConfigError("value_range must be non-zero; pass the nice-scaled range from the axis layout")
    vals = np.asarray(values, dtype=np.float64)
    idx = np.arange(vals.size, dtype=np.float64)
    xs = origin_x + margin + slot.width / 2 + idx * (slot.width + margin)
    ys = header_height + (
        (1 - animation_progress) * (origin - header_height)
        + ((value_range.max_value - vals) / span) * slot.height * animation_progress
    )
    return xs, ys


def origin_baseline(slot_height: float, header_height: float, value_range: ValueRange) -> float:
    """Pixel y of the zero line, clamped to the plot edge when zero is out of range."""
    if value_range.max_value <= 0:
        return header_height
    if value_range.min_value > 0:
        return header_height + slot_height
    span = value_range.span
    if span == 0:
        return header_height + slot_height
    return header_height + value_range.max_value * slot_height / span
