from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence


DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 16.0


@dataclass(frozen=True)
class TextBounds:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def empty(cls) -> "TextBounds":
        return cls()

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 and self.height <= 0


@dataclass(frozen=True)
class TextStyle:
    font_size_px: float = DEFAULT_FONT_SIZE_PX
    font_family: str = DEFAULT_FONT_FAMILY

    def __post_init__(self) -> None:
        if self.font_size_px <= 0:
            raise ValueError("font_size_px must be > 0")


class TextMetrics(Protocol):
    def measure(self, text: str, style: TextStyle) -> TextBounds: ...

    def measure_batch(self, texts: Sequence[str], style: TextStyle) -> list[TextBounds]: ...


def measure_texts(metrics: TextMetrics, texts: Sequence[str], style: TextStyle) -> list[TextBounds]:
    """Measure ``texts`` in one batched call; empty strings never reach the provider."""
    out: list[TextBounds] = [TextBounds.empty()] * len(texts)
    live = [(i, t) for i, t in enumerate(texts) if t]
    if not live:
        return out
    measured = metrics.measure_batch([t for _, t in live], style)
    if len(measured) != len(live):
        raise RuntimeError(f"text metrics returned {len(measured)} bounds for {len(live)} strings")
    for (i, _), bounds in zip(live, measured, strict=True):
        out[i] = bounds
    return out


def max_width(bounds: Sequence[TextBounds]) -> float:
    return max((b.width for b in bounds if not b.is_empty), default=0.0)


def max_height(bounds: Sequence[TextBounds]) -> float:
    return max((b.height for b in bounds if not b.is_empty), default=0.0)
