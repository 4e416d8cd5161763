from __future__ import annotations

from typing import Iterator

from chartkit.entries import RGBA, ChartEntry


def parse_hex_color(value: str) -> RGBA:
    raw = value.strip().lstrip("#")
    if len(raw) == 6:
        raw += "ff"
    if len(raw) != 8:
        raise ValueError(f"expected #RRGGBB or #RRGGBBAA, got {value!r}")
    try:
        r, g, b, a = (int(raw[i : i + 2], 16) for i in range(0, 8, 2))
    except ValueError as exc:
        raise ValueError(f"invalid hex color: {value!r}") from exc
    return (r, g, b, a)


TEXT_COLOR: RGBA = (128, 128, 128, 255)

PALETTE: tuple[RGBA, ...] = tuple(
    parse_hex_color(c)
    for c in (
        "#266489",
        "#68B9C0",
        "#90D585",
        "#F3C151",
        "#F37F64",
        "#424856",
        "#8F97A4",
        "#DAC096",
        "#76846E",
        "#DABFAF",
        "#A65B69",
        "#97A69D",
    )
)

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

POSITIVE_DATA: tuple[tuple[str, int], ...] = tuple(
    zip(MONTHS, (400, 600, 900, 100, 200, 500, 300, 200, 200, 800, 950, 700), strict=True)
)
MIXED_DATA: tuple[tuple[str, int], ...] = tuple(
    zip(MONTHS, (-400, 600, 900, 100, -200, 500, 300, -200, 200, 800, 950, -700), strict=True)
)
NEGATIVE_DATA: tuple[tuple[str, int], ...] = tuple(
    zip(MONTHS, (-400, -600, -900, -100, -200, -500, -300, -200, -200, -800, -950, -700), strict=True)
)


def palette_cycle(start: int = 0) -> Iterator[RGBA]:
    i = start
    while True:
        yield PALETTE[i % len(PALETTE)]
        i += 1


def create_entries(
    count: int,
    *,
    positive: bool = True,
    negative: bool = False,
    with_labels: bool = True,
    with_value_labels: bool = True,
    single_color: bool = False,
) -> tuple[ChartEntry, ...]:
    """Build up to ``count`` month entries from the bundled sample data."""
    if count < 0:
        raise ValueError("count must be >= 0")
    if positive and negative:
        data = MIXED_DATA
    elif positive:
        data = POSITIVE_DATA
    elif negative:
        data = NEGATIVE_DATA
    else:
        data = ()

    colors = palette_cycle()
    return tuple(
        ChartEntry(
            value=float(value),
            label=label if with_labels else None,
            value_label=str(value) if with_value_labels else None,
            color=PALETTE[2] if single_color else next(colors),
            text_color=TEXT_COLOR,
        )
        for label, value in data[:count]
    )
