from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from chartkit.text.metrics import TextBounds


class Orientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class LayoutRect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def with_height(self, height: float, *, shift: float = 0.0) -> "LayoutRect":
        return LayoutRect(x=self.x, y=self.y + shift, width=self.width, height=height)


@dataclass(frozen=True)
class SlotSize:
    width: float
    height: float


def footer_header_height(
    margin: float,
    text_size: float,
    bounds: Sequence[TextBounds],
    orientation: Orientation,
) -> float:
    """Height of the band holding labels above or below the plot.

    Vertical labels are as tall as the widest one; horizontal labels take one
    line of ``text_size``. Either way the band is padded by ``margin`` on both
    sides, and collapses to a single margin when every label is empty.
    """
    result = margin
    if any(not b.is_empty for b in bounds):
        if orientation is Orientation.VERTICAL:
            widest = max(b.width for b in bounds)
            if widest > 0:
                result += widest + margin
        else:
            result += text_size + margin
    return result


def item_size(count: int, width: float, height: float, margin: float) -> SlotSize:
    if count <= 0:
        return SlotSize(width=0.0, height=max(0.0, height))
    slot_w = (width - (count + 1) * margin) / count
    return SlotSize(width=max(0.0, slot_w), height=max(0.0, height))
