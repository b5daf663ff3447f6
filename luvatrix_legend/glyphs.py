from __future__ import annotations

from typing import Any, Mapping, Protocol

import numpy as np

from luvatrix_legend.colors import to_rgba
from luvatrix_legend.elements import Drawable, KeyElement, PixelBox, stroke_px
from luvatrix_legend.raster import dash_pattern, draw_disc, draw_hstroke, fill_rect, stroke_rect


class KeyGlyph(Protocol):
    """Draws one legend key sample for one mark type."""

    name: str

    def minimum_size(self, row: Mapping[str, Any]) -> float:
        ...

    def draw_key(self, row: Mapping[str, Any], params: Mapping[str, Any]) -> Drawable:
        ...

    def paint(
        self,
        canvas: np.ndarray,
        box: PixelBox,
        row: Mapping[str, Any],
        params: Mapping[str, Any],
        px_per_mm: float,
    ) -> None:
        ...


class _GlyphBase:
    name = "blank"

    def minimum_size(self, row: Mapping[str, Any]) -> float:
        return 0.0

    def draw_key(self, row: Mapping[str, Any], params: Mapping[str, Any]) -> Drawable:
        return KeyElement(glyph=self, row=dict(row), params=dict(params))

    def paint(
        self,
        canvas: np.ndarray,
        box: PixelBox,
        row: Mapping[str, Any],
        params: Mapping[str, Any],
        px_per_mm: float,
    ) -> None:
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


OPEN_SHAPES = {1, "open", "circle open"}
FILLED_OUTLINE_SHAPES = {21, 22}
SQUARE_SHAPES = {0, 15, 22, "square"}


class PointKey(_GlyphBase):
    """A point centred in the key; its `size` (mm) can force a larger key."""

    name = "point"

    def minimum_size(self, row: Mapping[str, Any]) -> float:
        return float(row.get("size") or 0.0) + float(row.get("stroke") or 0.0)

    def paint(self, canvas, box, row, params, px_per_mm) -> None:
        shape = row.get("shape", 19)
        alpha = row.get("alpha")
        colour = to_rgba(row.get("colour"), alpha)
        fill = to_rgba(row.get("fill"), alpha) if shape in FILLED_OUTLINE_SHAPES else colour
        outline = colour if shape in FILLED_OUTLINE_SHAPES or shape in OPEN_SHAPES else None
        if shape in OPEN_SHAPES:
            fill = None
        diameter = max(1.0, float(row.get("size") or 0.0) * px_per_mm)
        cx, cy = box.center
        if shape in SQUARE_SHAPES:
            half = int(round(diameter / 2.0))
            x0, y0, x1, y1 = int(cx) - half, int(cy) - half, int(cx) + half - 1, int(cy) + half - 1
            if fill is not None:
                fill_rect(canvas, x0, y0, x1, y1, fill)
            if outline is not None:
                stroke_rect(canvas, x0, y0, x1, y1, outline)
            return
        draw_disc(canvas, cx, cy, diameter, fill, outline=outline)


class PathKey(_GlyphBase):
    """A horizontal stroke through the middle of the key, dashed by `linetype`."""

    name = "path"

    def paint(self, canvas, box, row, params, px_per_mm) -> None:
        colour = to_rgba(row.get("colour"), row.get("alpha"))
        if colour is None or box.width < 3:
            return
        width = stroke_px(float(row.get("linewidth", row.get("size")) or 0.5), px_per_mm)
        draw_hstroke(
            canvas,
            box.x0 + 1,
            box.x1 - 2,
            int(box.center[1]),
            colour,
            width=width,
            dashes=dash_pattern(row.get("linetype")),
        )


class RectKey(_GlyphBase):
    """Fills the key with the row's `fill`, outlined in `colour` when set."""

    name = "rect"

    def paint(self, canvas, box, row, params, px_per_mm) -> None:
        if box.width == 0 or box.height == 0:
            return
        fill = to_rgba(row.get("fill"), row.get("alpha"))
        colour = to_rgba(row.get("colour"))
        x0, y0, x1, y1 = box.x0, box.y0, box.x1 - 1, box.y1 - 1
        if fill is not None:
            fill_rect(canvas, x0, y0, x1, y1, fill)
        if colour is not None:
            stroke_rect(canvas, x0, y0, x1, y1, colour)


POINT_KEY = PointKey()
PATH_KEY = PathKey()
RECT_KEY = RectKey()
