from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Any

from chartkit import Chart, ChartLayout, calculate_nice_scale, config_from_mapping
from chartkit.config import ChartConfig
from chartkit.errors import ChartConfigError
from chartkit.samples import create_entries


def main() -> None:
    parser = argparse.ArgumentParser(prog="chartkit")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    layout = sub.add_parser("layout", help="lay out the bundled sample data and print the geometry as JSON")
    layout.add_argument("--config", type=Path, default=None, help="JSON chart config")
    layout.add_argument("--width", type=float, default=800.0)
    layout.add_argument("--height", type=float, default=600.0)
    layout.add_argument("--count", type=int, default=12)
    layout.add_argument("--data", choices=["positive", "negative", "mixed"], default="mixed")
    layout.add_argument("--frames", type=int, default=1, help="animation frames from flat to final")

    ticks = sub.add_parser("ticks", help="print the nice scale for a range")
    ticks.add_argument("min_value", type=float)
    ticks.add_argument("max_value", type=float)
    ticks.add_argument("--max-ticks", type=int, default=5)

    args = parser.parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.command == "ticks":
            print(json.dumps(asdict(calculate_nice_scale(args.min_value, args.max_value, args.max_ticks)), indent=2))
            return
        _run_layout(args)
    except (ValueError, OSError) as exc:
        parser.exit(2, f"chartkit: {exc}\n")


def _run_layout(args: argparse.Namespace) -> None:
    if args.frames < 1:
        raise ChartConfigError("--frames must be >= 1")
    config = ChartConfig()
    if args.config is not None:
        config = config_from_mapping(json.loads(args.config.read_text(encoding="utf-8")))
    entries = create_entries(
        args.count,
        positive=args.data in {"positive", "mixed"},
        negative=args.data in {"negative", "mixed"},
    )
    chart = Chart.from_entries(entries, config=config)

    frames: list[dict[str, Any]] = []
    for i in range(args.frames):
        progress = 1.0 if args.frames == 1 else i / (args.frames - 1)
        frames.append(_layout_to_dict(chart.layout(args.width, args.height, animation_progress=progress), progress))
    print(json.dumps(frames if len(frames) > 1 else frames[0], indent=2))


def _layout_to_dict(layout: ChartLayout, progress: float) -> dict[str, Any]:
    return {
        "animation_progress": progress,
        "plot_rect": asdict(layout.plot_rect),
        "header_height": layout.header_height,
        "footer_height": layout.footer_height,
        "value_range": asdict(layout.value_range) if layout.value_range is not None else None,
        "y_ticks": list(layout.y_axis.ticks),
        "y_labels": list(layout.y_axis.labels),
        "origin": layout.origin,
        "series": {sp.name or "default": [list(p) if p is not None else None for p in sp.points] for sp in layout.series_points},
    }


if __name__ == "__main__":
    main()
