from __future__ import annotations

from typing import Any

import numpy as np

from luvatrix_legend.raster.canvas import RGBA, blend_mask, fill_rect


# on/off run lengths as hex digits, in multiples of the stroke width
LINETYPE_DASHES: dict[Any, str | None] = {
    0: "",
    1: None,
    2: "44",
    3: "13",
    4: "1343",
    5: "73",
    6: "2262",
    "blank": "",
    "solid": None,
    "dashed": "44",
    "dotted": "13",
    "dotdash": "1343",
    "longdash": "73",
    "twodash": "2262",
}


def dash_pattern(linetype: Any) -> str | None:
    """Hex dash string for `linetype`; None is solid and "" draws nothing."""

    if linetype is None:
        return None
    if linetype in LINETYPE_DASHES:
        return LINETYPE_DASHES[linetype]
    text = str(linetype).strip().lower()
    if text in LINETYPE_DASHES:
        return LINETYPE_DASHES[text]
    if len(text) % 2 == 0 and all(ch in "0123456789abcdef" for ch in text):
        return text
    raise ValueError(f"unsupported linetype: {linetype!r}")


def draw_hstroke(
    dst: np.ndarray,
    x0: int,
    x1: int,
    y: int,
    color: RGBA,
    *,
    width: int = 1,
    dashes: str | None = None,
) -> None:
    """Horizontal stroke over columns [x0, x1] centred on row `y`."""

    if dashes == "":
        return
    top = y - (width - 1) // 2
    bottom = top + width - 1
    if dashes is None:
        fill_rect(dst, x0, top, x1, bottom, color)
        return
    runs = [int(ch, 16) * width for ch in dashes]
    x, on, i = x0, True, 0
    while x <= x1:
        run = max(1, runs[i % len(runs)])
        if on:
            fill_rect(dst, x, top, min(x1, x + run - 1), bottom, color)
        x += run
        on = not on
        i += 1


def draw_disc(
    dst: np.ndarray,
    cx: float,
    cy: float,
    diameter: float,
    fill: RGBA | None,
    *,
    outline: RGBA | None = None,
) -> None:
    """Disc sampled at pixel centres; `outline` paints the outermost one-pixel ring."""

    r = max(0.5, float(diameter) / 2.0)
    x0, y0 = max(0, int(np.floor(cx - r))), max(0, int(np.floor(cy - r)))
    x1, y1 = min(dst.shape[1], int(np.ceil(cx + r)) + 1), min(dst.shape[0], int(np.ceil(cy + r)) + 1)
    if x1 <= x0 or y1 <= y0:
        return
    yy, xx = np.mgrid[y0:y1, x0:x1]
    dist = np.hypot(xx + 0.5 - cx, yy + 0.5 - cy)
    inside = dist <= r
    view = dst[y0:y1, x0:x1]
    if fill is not None:
        blend_mask(view, inside, fill)
    if outline is not None:
        blend_mask(view, inside & (dist > r - 1.0), outline)
