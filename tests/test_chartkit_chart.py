from __future__ import annotations

import unittest
from typing import Sequence

from chartkit import chart
from chartkit.axis import AxisConfig, AxisPosition
from chartkit.chart import Chart, layout_entries
from chartkit.config import ChartConfig
from chartkit.entries import ChartEntry, ChartSeries, ValueRange
from chartkit.errors import ChartConfigError, ChartDataError
from chartkit.layout import Orientation, footer_header_height, item_size
from chartkit.text.metrics import TextBounds, TextStyle


class _FixedWidthMetrics:
    def __init__(self, char_w: float = 10.0) -> None:
        self.char_w = char_w

    def measure(self, text: str, style: TextStyle) -> TextBounds:
        if not text:
            return TextBounds.empty()
        return TextBounds(width=len(text) * self.char_w, height=style.font_size_px)

    def measure_batch(self, texts: Sequence[str], style: TextStyle) -> list[TextBounds]:
        return [self.measure(t, style) for t in texts]


def _entries(*values: float | None) -> tuple[ChartEntry, ...]:
    return tuple(ChartEntry(value=v) for v in values)


class HeaderFooterTests(unittest.TestCase):
    def test_all_empty_labels_leave_a_single_margin(self) -> None:
        self.assertEqual(footer_header_height(12.0, 16.0, [TextBounds.empty()] * 3, Orientation.VERTICAL), 12.0)
        self.assertEqual(footer_header_height(12.0, 16.0, [], Orientation.HORIZONTAL), 12.0)

    def test_vertical_labels_use_widest_label(self) -> None:
        bounds = [TextBounds(width=30.0, height=8.0), TextBounds.empty(), TextBounds(width=55.0, height=8.0)]
        self.assertEqual(footer_header_height(10.0, 16.0, bounds, Orientation.VERTICAL), 75.0)

    def test_horizontal_labels_use_text_size(self) -> None:
        bounds = [TextBounds(width=300.0, height=8.0)]
        self.assertEqual(footer_header_height(10.0, 16.0, bounds, Orientation.HORIZONTAL), 36.0)

    def test_item_size_spreads_margins(self) -> None:
        slot = item_size(3, 260.0, 180.0, 10.0)
        self.assertAlmostEqual(slot.width, 220.0 / 3.0)
        self.assertEqual(slot.height, 180.0)
        self.assertEqual(item_size(0, 260.0, 180.0, 10.0).width, 0.0)


class ChartLayoutTests(unittest.TestCase):
    def _config(self, **kwargs) -> ChartConfig:
        y_axis = kwargs.pop(
            "y_axis",
            AxisConfig(show_text=True, max_ticks=3, label_formatter=lambda v: f"{v:g}", position=AxisPosition.LEADING),
        )
        return ChartConfig(margin=10.0, label_orientation=Orientation.HORIZONTAL, y_axis=y_axis, **kwargs)

    def test_mixed_sign_render_pass(self) -> None:
        layout = layout_entries(_entries(100.0, 300.0, -50.0), 300.0, 200.0, config=self._config(), metrics=_FixedWidthMetrics())

        self.assertEqual(layout.y_axis.labels, ("400", "200", "0"))
        self.assertEqual(layout.value_range, ValueRange(-200.0, 400.0))
        self.assertEqual(layout.header_height, 10.0)
        self.assertEqual(layout.footer_height, 10.0)
        self.assertEqual(layout.plot_rect.x, 40.0)
        self.assertEqual(layout.plot_rect.width, 260.0)
        self.assertEqual(layout.plot_rect.height, 180.0)
        self.assertEqual(layout.origin, 130.0)

        points = layout.points()
        self.assertEqual(len(points), 3)
        x0, y0 = points[0]
        self.assertAlmostEqual(x0, 40.0 + 10.0 + (220.0 / 3.0) / 2.0)
        self.assertAlmostEqual(y0, 10.0 + 300.0 / 600.0 * 180.0)
        self.assertAlmostEqual(points[2][1], 10.0 + 450.0 / 600.0 * 180.0)

    def test_start_of_animation_is_flat(self) -> None:
        layout = layout_entries(
            _entries(100.0, 300.0, -50.0),
            300.0,
            200.0,
            config=self._config(),
            metrics=_FixedWidthMetrics(),
            animation_progress=0.0,
        )
        self.assertTrue(all(p is not None and p[1] == layout.origin for p in layout.points()))

    def test_absent_values_have_no_point(self) -> None:
        layout = layout_entries(_entries(4.0, None, 9.0), 300.0, 200.0, config=self._config(), metrics=_FixedWidthMetrics())
        points = layout.points()
        self.assertIsNotNone(points[0])
        self.assertIsNone(points[1])
        self.assertIsNotNone(points[2])

    def test_empty_chart_lays_out_without_ticks(self) -> None:
        layout = layout_entries((), 300.0, 200.0, config=self._config(), metrics=_FixedWidthMetrics())
        self.assertEqual(layout.y_axis.extent, 300.0)
        self.assertEqual(layout.y_axis.ticks, ())
        self.assertIsNone(layout.value_range)
        self.assertEqual(layout.points(), ())

    def test_all_absent_values_behave_like_empty(self) -> None:
        layout = layout_entries(_entries(None, None), 300.0, 200.0, config=self._config(), metrics=_FixedWidthMetrics())
        self.assertEqual(layout.y_axis.extent, 300.0)
        self.assertEqual(layout.points(), (None, None))

    def test_hidden_axis_single_value_still_projects(self) -> None:
        config = ChartConfig(margin=10.0, y_axis=AxisConfig())
        layout = layout_entries(_entries(5.0), 120.0, 100.0, config=config, metrics=_FixedWidthMetrics())
        self.assertEqual(layout.value_range, ValueRange(5.0, 105.0))
        point = layout.points()[0]
        assert point is not None
        self.assertAlmostEqual(point[1], layout.plot_rect.bottom)

    def test_series_share_one_range(self) -> None:
        ch = Chart(config=self._config(), metrics=_FixedWidthMetrics())
        ch.add_series(ChartSeries(name="a", entries=_entries(10.0, 20.0)))
        ch.add_series(ChartSeries(name="b", entries=_entries(-30.0, 90.0)))
        layout = ch.layout(300.0, 200.0)
        assert layout.value_range is not None
        self.assertLessEqual(layout.value_range.min_value, -30.0)
        self.assertGreaterEqual(layout.value_range.max_value, 90.0)
        self.assertEqual(len(layout.points("b")), 2)
        with self.assertRaises(KeyError):
            layout.points("c")

    def test_duplicate_series_name_is_rejected(self) -> None:
        ch = Chart(metrics=_FixedWidthMetrics())
        ch.add_series(ChartSeries(name="a"))
        with self.assertRaises(ChartDataError):
            ch.add_series(ChartSeries(name="a"))

    def test_fixed_range_uses_configured_bounds(self) -> None:
        config = self._config(
            y_axis=AxisConfig(show_text=True, max_ticks=5, fixed_range=True),
            min_value=0.0,
            max_value=1000.0,
        )
        layout = layout_entries(_entries(100.0, 300.0), 300.0, 200.0, config=config, metrics=_FixedWidthMetrics())
        self.assertEqual(layout.value_range, ValueRange(0.0, 1000.0))
        self.assertEqual(len(layout.y_axis.ticks), 5)

    def test_fixed_range_without_bounds_is_a_config_error(self) -> None:
        config = self._config(y_axis=AxisConfig(show_text=True, fixed_range=True), min_value=0.0, max_value=10.0)
        object.__setattr__(config, "max_value", None)
        ch = Chart.from_entries(_entries(1.0, 2.0), config=config, metrics=_FixedWidthMetrics())
        with self.assertRaises(ChartConfigError):
            ch.raw_range()

    def test_category_axis_shrinks_plot_height(self) -> None:
        config = self._config(x_axis=AxisConfig(show_text=True, text_style=TextStyle(font_size_px=12.0), position=AxisPosition.LEADING))
        layout = layout_entries(_entries(1.0, 2.0, 3.0, 4.0), 300.0, 200.0, config=config, metrics=_FixedWidthMetrics())
        assert layout.x_axis is not None
        self.assertEqual(layout.plot_rect.height, 168.0)
        self.assertEqual(layout.plot_rect.y, 22.0)
        self.assertEqual(layout.slot.height, 168.0)

    def test_labels_drive_header_and_footer(self) -> None:
        entries = (
            ChartEntry(value=1.0, label="Jan", value_label="1"),
            ChartEntry(value=2.0, label="February", value_label="2"),
        )
        config = ChartConfig(margin=10.0, label_orientation=Orientation.VERTICAL, value_label_orientation=Orientation.HORIZONTAL)
        layout = layout_entries(entries, 300.0, 300.0, config=config, metrics=_FixedWidthMetrics())
        self.assertEqual(layout.footer_height, 10.0 + 80.0 + 10.0)
        self.assertEqual(layout.header_height, 10.0 + 16.0 + 10.0)

    def test_invalid_dimensions(self) -> None:
        ch = Chart.from_entries(_entries(1.0), metrics=_FixedWidthMetrics())
        with self.assertRaises(ValueError):
            ch.layout(0.0, 100.0)
        with self.assertRaises(ValueError):
            ch.layout(100.0, 100.0, animation_progress=2.0)

    def test_chart_factory_accepts_mapping_config(self) -> None:
        ch = chart(
            [200, 400, 100, 600, 1600],
            labels=["Week 1", "Week 2", "Week 3", "Week 4", "Week 5"],
            config={"margin": 10, "y_axis": {"show_text": True, "max_ticks": 3, "position": "leading"}},
            metrics=_FixedWidthMetrics(),
        )
        layout = ch.layout(400.0, 300.0)
        self.assertEqual(len(layout.points()), 5)
        self.assertEqual(layout.y_axis.leading_shift, layout.plot_rect.x)
        self.assertGreater(layout.plot_rect.x, 0.0)


if __name__ == "__main__":
    unittest.main()
