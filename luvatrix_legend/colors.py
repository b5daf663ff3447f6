from __future__ import annotations

import re
from typing import Any

from luvatrix_legend.raster.canvas import RGBA


_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

NAMED_COLORS: dict[str, str] = {
    "black": "#000000",
    "white": "#FFFFFF",
    "red": "#FF0000",
    "green": "#00FF00",
    "blue": "#0000FF",
    "orange": "#FFA500",
    "purple": "#A020F0",
    "steelblue": "#4682B4",
    "grey20": "#333333",
    "grey35": "#595959",
    "grey50": "#7F7F7F",
    "grey80": "#CCCCCC",
    "grey95": "#F2F2F2",
}


def is_hex_color(value: Any) -> bool:
    return isinstance(value, str) and bool(_HEX_COLOR.match(value))


def to_rgba(value: Any, alpha: float | None = None) -> RGBA | None:
    """Coerce a colour aesthetic value to RGBA; None and NA-like values stay None."""

    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if text.lower() in {"", "na", "none", "transparent"}:
            return None
        text = NAMED_COLORS.get(text.lower().replace("gray", "grey"), text)
        if not _HEX_COLOR.match(text):
            raise ValueError(f"unsupported colour value: {value!r}")
        r, g, b = (int(text[i : i + 2], 16) for i in (1, 3, 5))
        a = int(text[7:9], 16) if len(text) == 9 else 255
        color: tuple[int, ...] = (r, g, b, a)
    else:
        color = tuple(int(c) for c in value)
        if len(color) == 3:
            color = color + (255,)
        if len(color) != 4:
            raise ValueError(f"unsupported colour value: {value!r}")
    if alpha is None:
        return (color[0], color[1], color[2], color[3])
    out_a = int(max(0.0, min(1.0, float(alpha))) * color[3])
    return (color[0], color[1], color[2], out_a)


def interpolate_hex(low: str, high: str, t: float) -> str:
    lo = to_rgba(low)
    hi = to_rgba(high)
    if lo is None or hi is None:
        raise ValueError("colour endpoints must be concrete colours")
    t = max(0.0, min(1.0, float(t)))
    r, g, b = (int(round(lo[i] + (hi[i] - lo[i]) * t)) for i in range(3))
    return f"#{r:02X}{g:02X}{b:02X}"
