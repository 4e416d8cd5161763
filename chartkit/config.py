from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, TypeVar

from chartkit.axis import AxisConfig, AxisPosition
from chartkit.errors import ChartConfigError
from chartkit.layout import Orientation
from chartkit.text.metrics import DEFAULT_FONT_FAMILY, TextStyle


DEFAULT_MARGIN = 20.0
DEFAULT_LABEL_TEXT_SIZE = 16.0
DEFAULT_VALUE_LABEL_TEXT_SIZE = 16.0
DEFAULT_Y_AXIS_MAX_TICKS = 5
DEFAULT_X_AXIS_MAX_TICKS = 5

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class ChartConfig:
    margin: float = DEFAULT_MARGIN
    label_text_size: float = DEFAULT_LABEL_TEXT_SIZE
    label_orientation: Orientation = Orientation.VERTICAL
    value_label_text_size: float = DEFAULT_VALUE_LABEL_TEXT_SIZE
    value_label_orientation: Orientation = Orientation.VERTICAL
    font_family: str = DEFAULT_FONT_FAMILY
    y_axis: AxisConfig = field(default_factory=lambda: AxisConfig(max_ticks=DEFAULT_Y_AXIS_MAX_TICKS))
    x_axis: AxisConfig | None = None
    min_value: float | None = None
    max_value: float | None = None

    def __post_init__(self) -> None:
        if self.margin < 0:
            raise ChartConfigError("margin must be >= 0")
        if self.label_text_size <= 0:
            raise ChartConfigError("label_text_size must be > 0")
        if self.value_label_text_size <= 0:
            raise ChartConfigError("value_label_text_size must be > 0")
        if self.y_axis.fixed_range and (self.min_value is None or self.max_value is None):
            raise ChartConfigError("a fixed y_axis range needs both min_value and max_value")
        if self.min_value is not None and self.max_value is not None and self.min_value > self.max_value:
            raise ChartConfigError("min_value must be <= max_value")

    def label_style(self) -> TextStyle:
        return TextStyle(font_size_px=self.label_text_size, font_family=self.font_family)

    def value_label_style(self) -> TextStyle:
        return TextStyle(font_size_px=self.value_label_text_size, font_family=self.font_family)


def config_from_mapping(data: Mapping[str, Any]) -> ChartConfig:
    """Build a :class:`ChartConfig` from a JSON-style mapping.

    Enum values are given by name (``"leading"``, ``"vertical"``), axes as
    nested objects. Unknown keys are rejected so typos do not pass silently.
    """
    if not isinstance(data, Mapping):
        raise ChartConfigError("chart config must be an object")
    _reject_unknown(data, _CHART_KEYS, "chart")

    kwargs: dict[str, Any] = {}
    for key in ("margin", "label_text_size", "value_label_text_size"):
        if key in data:
            kwargs[key] = _require_number(data[key], key)
    for key in ("min_value", "max_value"):
        if data.get(key) is not None:
            kwargs[key] = _require_number(data[key], key)
    for key in ("label_orientation", "value_label_orientation"):
        if key in data:
            kwargs[key] = _require_enum(Orientation, data[key], key)
    if "font_family" in data:
        kwargs["font_family"] = _require_str(data["font_family"], "font_family")

    font_family = kwargs.get("font_family", DEFAULT_FONT_FAMILY)
    if "y_axis" in data:
        kwargs["y_axis"] = _axis_from_mapping(data["y_axis"], "y_axis", font_family, DEFAULT_Y_AXIS_MAX_TICKS)
    if data.get("x_axis") is not None:
        kwargs["x_axis"] = _axis_from_mapping(data["x_axis"], "x_axis", font_family, DEFAULT_X_AXIS_MAX_TICKS)

    try:
        return ChartConfig(**kwargs)
    except ChartConfigError:
        raise
    except ValueError as exc:
        raise ChartConfigError(str(exc)) from exc


_CHART_KEYS = frozenset(
    {
        "margin",
        "label_text_size",
        "label_orientation",
        "value_label_text_size",
        "value_label_orientation",
        "font_family",
        "y_axis",
        "x_axis",
        "min_value",
        "max_value",
    }
)
_AXIS_KEYS = frozenset({"show_text", "show_lines", "max_ticks", "text_size", "position", "fixed_range"})


def _axis_from_mapping(raw: Any, path: str, font_family: str, default_ticks: int) -> AxisConfig:
    if not isinstance(raw, Mapping):
        raise ChartConfigError(f"{path} must be an object")
    _reject_unknown(raw, _AXIS_KEYS, path)
    text_size = _require_number(raw.get("text_size", DEFAULT_LABEL_TEXT_SIZE), f"{path}.text_size")
    max_ticks = raw.get("max_ticks", default_ticks)
    if not isinstance(max_ticks, int) or isinstance(max_ticks, bool):
        raise ChartConfigError(f"{path}.max_ticks must be an integer")
    show_text = _require_bool(raw.get("show_text", False), f"{path}.show_text")
    show_lines = _require_bool(raw.get("show_lines", False), f"{path}.show_lines")
    position = _require_enum(AxisPosition, raw.get("position", AxisPosition.TRAILING.value), f"{path}.position")
    fixed_range = _require_bool(raw.get("fixed_range", False), f"{path}.fixed_range")
    try:
        return AxisConfig(
            show_text=show_text,
            show_lines=show_lines,
            max_ticks=max_ticks,
            text_style=TextStyle(font_size_px=text_size, font_family=font_family),
            position=position,
            fixed_range=fixed_range,
        )
    except ValueError as exc:
        raise ChartConfigError(f"{path}: {exc}") from exc


def _reject_unknown(data: Mapping[str, Any], allowed: frozenset[str], path: str) -> None:
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ChartConfigError(f"{path} has unknown keys: {', '.join(map(str, unknown))}")


def _require_number(value: Any, path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ChartConfigError(f"{path} must be a number")
    return float(value)


def _require_bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise ChartConfigError(f"{path} must be a boolean")
    return value


def _require_str(value: Any, path: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ChartConfigError(f"{path} must be a non-empty string")
    return value


def _require_enum(enum_type: type[E], value: Any, path: str) -> E:
    if isinstance(value, enum_type):
        return value
    if isinstance(value, str):
        try:
            return enum_type(value.strip().lower())
        except ValueError:
            pass
    choices = ", ".join(m.value for m in enum_type)
    raise ChartConfigError(f"{path} must be one of: {choices}")
