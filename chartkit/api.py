from __future__ import annotations

from typing import Any, Sequence

from chartkit.adapters import entries_from_values
from chartkit.chart import Chart
from chartkit.config import ChartConfig, config_from_mapping
from chartkit.entries import RGBA
from chartkit.samples import PALETTE
from chartkit.text.metrics import TextMetrics


def chart(
    values: Any = None,
    *,
    labels: Sequence[str | None] | None = None,
    value_labels: Sequence[str | None] | None = None,
    colors: Sequence[RGBA] | None = None,
    config: ChartConfig | dict[str, Any] | None = None,
    metrics: TextMetrics | None = None,
) -> Chart:
    if isinstance(config, dict):
        config = config_from_mapping(config)
    if values is None:
        return Chart.from_entries((), config=config, metrics=metrics)
    entries = entries_from_values(
        values,
        labels=labels,
        value_labels=value_labels,
        colors=colors if colors is not None else PALETTE,
    )
    return Chart.from_entries(entries, config=config, metrics=metrics)
