from .metrics import TextBounds, TextMetrics, TextStyle, max_height, max_width, measure_texts
from .pillow_metrics import PillowTextMetrics

__all__ = [
    "PillowTextMetrics",
    "TextBounds",
    "TextMetrics",
    "TextStyle",
    "max_height",
    "max_width",
    "measure_texts",
]
