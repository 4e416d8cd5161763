from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Sequence

from PIL import ImageFont

from chartkit.text.metrics import DEFAULT_FONT_FAMILY, TextBounds, TextStyle


LOGGER = logging.getLogger(__name__)

FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "helvetica",
    "arial",
    "liberationsans",
    "menlo",
    "dejavusansmono",
)

FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


class PillowTextMetrics:
    """Text bounds from Pillow fonts, resolved by family name from the system font dirs."""

    def measure(self, text: str, style: TextStyle) -> TextBounds:
        if not text:
            return TextBounds.empty()
        font = load_font(style.font_family, style.font_size_px)
        left, top, right, bottom = font.getbbox(text)
        return TextBounds(
            x=float(left),
            y=float(top),
            width=float(max(0, right - left)),
            height=float(max(0, bottom - top)),
        )

    def measure_batch(self, texts: Sequence[str], style: TextStyle) -> list[TextBounds]:
        return [self.measure(text, style) for text in texts]


@lru_cache(maxsize=64)
def load_font(font_family: str, font_size_px: float) -> Font:
    size = max(1, int(round(font_size_px)))
    font_path = resolve_font_path(font_family)
    if font_path is None:
        LOGGER.warning("no font file matches %r; using Pillow default font", font_family)
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError as exc:
        LOGGER.warning("could not load font %s (%s); using Pillow default font", font_path, exc)
        return ImageFont.load_default(size=size)


@lru_cache(maxsize=32)
def resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + FONT_FALLBACK_PATTERNS

    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))

    stems = [path.stem.lower().replace(" ", "") for path in candidates]
    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path, stem in zip(candidates, stems):
            if stem == p:
                return path
        for path, stem in zip(candidates, stems):
            if p in stem:
                return path
    return None
