from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from chartkit.entries import DEFAULT_ENTRY_COLOR, DEFAULT_TEXT_COLOR, RGBA, ChartEntry, ChartSeries
from chartkit.errors import ChartDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_values(values: Any, *, label: str = "values") -> np.ndarray:
    """Coerce a 1-D input into float64, mapping missing entries to NaN."""
    if values is None:
        raise ChartDataError(f"{label} input is required")
    return _coerce_1d_numeric(values, label=label)


def entries_from_values(
    values: Any,
    *,
    labels: Sequence[str | None] | None = None,
    value_labels: Sequence[str | None] | None = None,
    colors: Sequence[RGBA] | None = None,
    text_color: RGBA = DEFAULT_TEXT_COLOR,
) -> tuple[ChartEntry, ...]:
    arr = normalize_values(values)
    n = arr.size
    for name, seq in (("labels", labels), ("value_labels", value_labels)):
        if seq is not None and len(seq) != n:
            raise ChartDataError(f"{name} length mismatch: {len(seq)} != {n}")
    if colors is not None and not colors:
        raise ChartDataError("colors must not be empty")

    entries: list[ChartEntry] = []
    for i, raw in enumerate(arr.tolist()):
        value = None if not np.isfinite(raw) else float(raw)
        entries.append(
            ChartEntry(
                value=value,
                label=labels[i] if labels is not None else None,
                value_label=value_labels[i] if value_labels is not None else None,
                color=colors[i % len(colors)] if colors is not None else DEFAULT_ENTRY_COLOR,
                text_color=text_color,
            )
        )
    return tuple(entries)


def series_from_values(
    name: str,
    values: Any,
    *,
    color: RGBA = DEFAULT_ENTRY_COLOR,
    labels: Sequence[str | None] | None = None,
) -> ChartSeries:
    entries = entries_from_values(values, labels=labels, colors=[color])
    return ChartSeries(name=name, entries=entries, color=color)


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(dtype=object, na_value=None), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise ChartDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(list(value), dtype=object), label=label)

    raise ChartDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        if isinstance(raw, (str, bytes)):
            raise ChartDataError(f"{label} contains non-numeric value at index {i}: {raw!r}")
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise ChartDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
