from chartkit.api import chart
from chartkit.axis import AxisConfig, AxisKind, AxisLayout, AxisPosition, compute_axis
from chartkit.chart import Chart, ChartLayout, SeriesPoints
from chartkit.config import ChartConfig, config_from_mapping
from chartkit.entries import ChartEntry, ChartSeries, ValueRange
from chartkit.errors import ChartConfigError, ChartDataError
from chartkit.layout import LayoutRect, Orientation, SlotSize
from chartkit.projection import project_point
from chartkit.scales import NiceScale, calculate_nice_scale

__all__ = [
    "AxisConfig",
    "AxisKind",
    "AxisLayout",
    "AxisPosition",
    "Chart",
    "ChartConfig",
    "ChartConfigError",
    "ChartDataError",
    "ChartEntry",
    "ChartLayout",
    "ChartSeries",
    "LayoutRect",
    "NiceScale",
    "Orientation",
    "SeriesPoints",
    "SlotSize",
    "ValueRange",
    "calculate_nice_scale",
    "chart",
    "compute_axis",
    "config_from_mapping",
    "project_point",
]
