from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from luvatrix_legend.raster.canvas import RGBA, blend_coverage


DEFAULT_FONT_FAMILY = "Comic Mono"
FALLBACK_FAMILIES = ("comicmono", "dejavusans", "liberationsans", "helvetica", "arial", "menlo", "courier")
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont


def quarter_turns(angle: float) -> int:
    """Counter-clockwise quarter turns for `angle` degrees; other angles are unsupported."""

    if float(angle) % 90 != 0:
        raise ValueError(f"text angle must be a multiple of 90 degrees, got {angle}")
    return (int(angle) // 90) % 4


def text_size(text: str, *, font_family: str = DEFAULT_FONT_FAMILY, font_size_px: float = 12.0, rotate_deg: float = 0) -> tuple[int, int]:
    """Pixel (width, height) of `text` after rotation; empty text is (0, 0)."""

    turns = quarter_turns(rotate_deg)
    if not text:
        return (0, 0)
    left, top, right, bottom = load_font(font_family, _px(font_size_px)).getbbox(text)
    w, h = max(0, int(right - left)), max(1, int(bottom - top))
    return (h, w) if turns % 2 else (w, h)


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = 12.0,
    rotate_deg: float = 0,
) -> None:
    """Blend `text` into `dst` with the rotated text's top-left corner at (x, y)."""

    if not text:
        return
    coverage = text_mask(text, font_family, _px(font_size_px), quarter_turns(rotate_deg))
    blend_coverage(dst, x, y, coverage, color)


@lru_cache(maxsize=256)
def text_mask(text: str, font_family: str, size: int, turns: int = 0) -> np.ndarray:
    font = load_font(font_family, size)
    left, top, right, bottom = font.getbbox(text)
    image = Image.new("L", (max(1, int(right - left)), max(1, int(bottom - top))), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    mask = np.asarray(image, dtype=np.uint8)
    return np.rot90(mask, k=turns) if turns else mask


@lru_cache(maxsize=64)
def load_font(font_family: str, size: int) -> Font:
    path = find_font_file(font_family)
    if path is not None:
        try:
            return ImageFont.truetype(str(path), size=size)
        except OSError:
            pass
    return ImageFont.load_default(size=size)


@lru_cache(maxsize=32)
def find_font_file(font_family: str) -> Path | None:
    """First installed font file whose name contains the family, then the fallbacks."""

    index = _font_index()
    wanted = _squash(font_family) or _squash(DEFAULT_FONT_FAMILY)
    for family in (wanted,) + FALLBACK_FAMILIES:
        for stem, path in index:
            if family in stem:
                return path
    return None


@lru_cache(maxsize=1)
def _font_index() -> tuple[tuple[str, Path], ...]:
    found: list[tuple[str, Path]] = []
    for base in FONT_DIRS:
        if not base.is_dir():
            continue
        for pattern in ("*.ttf", "*.otf", "*.ttc"):
            found.extend((_squash(path.stem), path) for path in sorted(base.rglob(pattern)))
    return tuple(found)


def _squash(name: str) -> str:
    return name.strip().lower().replace(" ", "").replace("-", "")


def _px(font_size_px: float) -> int:
    return max(1, int(round(font_size_px)))
