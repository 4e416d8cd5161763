from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

import numpy as np

from chartkit.axis import AxisLayout, compute_category_axis, compute_value_axis, expand_degenerate_range
from chartkit.config import ChartConfig
from chartkit.entries import ChartEntry, ChartSeries, ValueRange, value_bounds
from chartkit.errors import ChartConfigError, ChartDataError
from chartkit.layout import LayoutRect, SlotSize, footer_header_height, item_size
from chartkit.projection import origin_baseline, project_points
from chartkit.text.metrics import TextMetrics, measure_texts
from chartkit.text.pillow_metrics import PillowTextMetrics


LOGGER = logging.getLogger(__name__)

Point = tuple[float, float]


@dataclass(frozen=True)
class SeriesPoints:
    name: str
    points: tuple[Point | None, ...]


@dataclass(frozen=True)
class ChartLayout:
    plot_rect: LayoutRect
    header_height: float
    footer_height: float
    y_axis: AxisLayout
    x_axis: AxisLayout | None
    value_range: ValueRange | None
    slot: SlotSize
    origin: float
    series_points: tuple[SeriesPoints, ...] = ()

    def points(self, name: str | None = None) -> tuple[Point | None, ...]:
        if not self.series_points:
            return ()
        if name is None:
            return self.series_points[0].points
        for sp in self.series_points:
            if sp.name == name:
                return sp.points
        raise KeyError(name)


@dataclass
class Chart:
    """Entries (one or more series sharing a value range) plus the layout pass over them."""

    series: list[ChartSeries] = field(default_factory=list)
    config: ChartConfig = field(default_factory=ChartConfig)
    metrics: TextMetrics = field(default_factory=PillowTextMetrics)

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[ChartEntry],
        *,
        config: ChartConfig | None = None,
        metrics: TextMetrics | None = None,
    ) -> "Chart":
        chart = cls(config=config or ChartConfig(), metrics=metrics or PillowTextMetrics())
        chart.series.append(ChartSeries(name="", entries=tuple(entries)))
        return chart

    def add_series(self, series: ChartSeries) -> "Chart":
        if any(s.name == series.name for s in self.series):
            raise ChartDataError(f"duplicate series name: {series.name!r}")
        self.series.append(series)
        return self

    @property
    def item_count(self) -> int:
        return max((len(s.entries) for s in self.series), default=0)

    def labels(self) -> list[str]:
        """Category labels by index: the first series carrying a label wins."""
        out: list[str] = []
        for i in range(self.item_count):
            label = ""
            for s in self.series:
                if i < len(s.entries) and s.entries[i].label:
                    label = s.entries[i].label or ""
                    break
            out.append(label)
        return out

    def value_labels(self) -> list[str]:
        return [e.value_label or "" for s in self.series for e in s.entries]

    def raw_range(self) -> ValueRange | None:
        cfg = self.config
        if cfg.y_axis.fixed_range:
            if cfg.min_value is None or cfg.max_value is None:
                raise ChartConfigError("a fixed y axis needs min_value and max_value")
            return ValueRange(min_value=cfg.min_value, max_value=cfg.max_value)
        bounds = value_bounds(self.series)
        if bounds is None:
            return None
        lo = bounds.min_value if cfg.min_value is None else min(bounds.min_value, cfg.min_value)
        hi = bounds.max_value if cfg.max_value is None else max(bounds.max_value, cfg.max_value)
        return ValueRange(min_value=lo, max_value=hi)

    def layout(self, width: float, height: float, *, animation_progress: float = 1.0) -> ChartLayout:
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        if not 0.0 <= animation_progress <= 1.0:
            raise ValueError("animation_progress must be in [0, 1]")
        cfg = self.config

        header = footer_header_height(
            cfg.margin,
            cfg.value_label_text_size,
            measure_texts(self.metrics, self.value_labels(), cfg.value_label_style()),
            cfg.value_label_orientation,
        )
        footer = footer_header_height(
            cfg.margin,
            cfg.label_text_size,
            measure_texts(self.metrics, self.labels(), cfg.label_style()),
            cfg.label_orientation,
        )

        y_axis = compute_value_axis(cfg.y_axis, self.raw_range(), width, self.metrics)
        plot = LayoutRect(x=y_axis.leading_shift, y=header, width=y_axis.extent, height=height - header - footer)

        n = self.item_count
        x_axis: AxisLayout | None = None
        if cfg.x_axis is not None:
            categories = ValueRange(min_value=0.0, max_value=float(n - 1)) if n > 0 else None
            x_axis = compute_category_axis(cfg.x_axis, categories, plot.height, self.metrics)
            plot = plot.with_height(x_axis.extent, shift=x_axis.leading_shift)

        slot = item_size(n, plot.width, plot.height, cfg.margin)
        value_range = expand_degenerate_range(y_axis.range) if y_axis.range is not None else None
        if value_range is None:
            LOGGER.debug("chart has no values; laying out axes only")
            return ChartLayout(
                plot_rect=plot,
                header_height=header,
                footer_height=footer,
                y_axis=y_axis,
                x_axis=x_axis,
                value_range=None,
                slot=slot,
                origin=plot.bottom,
                series_points=tuple(SeriesPoints(s.name, tuple(None for _ in s.entries)) for s in self.series),
            )

        origin = origin_baseline(slot.height, plot.y, value_range)
        series_points = tuple(
            SeriesPoints(
                name=s.name,
                points=self._project_series(s, value_range, slot, origin, plot, animation_progress),
            )
            for s in self.series
        )
        return ChartLayout(
            plot_rect=plot,
            header_height=header,
            footer_height=footer,
            y_axis=y_axis,
            x_axis=x_axis,
            value_range=value_range,
            slot=slot,
            origin=origin,
            series_points=series_points,
        )

    def _project_series(
        self,
        series: ChartSeries,
        value_range: ValueRange,
        slot: SlotSize,
        origin: float,
        plot: LayoutRect,
        animation_progress: float,
    ) -> tuple[Point | None, ...]:
        values = series.values()
        xs, ys = project_points(
            values,
            margin=self.config.margin,
            animation_progress=animation_progress,
            value_range=value_range,
            slot=slot,
            origin=origin,
            header_height=plot.y,
            origin_x=plot.x,
        )
        present = np.isfinite(values)
        return tuple(
            (float(x), float(y)) if ok else None
            for x, y, ok in zip(xs.tolist(), ys.tolist(), present.tolist(), strict=True)
        )


def layout_entries(
    entries: Sequence[ChartEntry],
    width: float,
    height: float,
    *,
    config: ChartConfig | None = None,
    metrics: TextMetrics | None = None,
    animation_progress: float = 1.0,
) -> ChartLayout:
    return Chart.from_entries(entries, config=config, metrics=metrics).layout(
        width, height, animation_progress=animation_progress
    )
