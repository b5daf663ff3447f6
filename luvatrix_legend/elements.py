from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping, Protocol

import numpy as np

from luvatrix_legend.raster import RGBA, draw_text, fill_rect, stroke_rect, text_size
from luvatrix_legend.units import MM_PER_INCH

if TYPE_CHECKING:
    from luvatrix_legend.glyphs import KeyGlyph


@dataclass(frozen=True)
class PixelBox:
    """Half-open pixel rectangle [x0, x1) x [y0, y1)."""

    x0: int
    y0: int
    x1: int
    y1: int

    @property
    def width(self) -> int:
        return max(0, self.x1 - self.x0)

    @property
    def height(self) -> int:
        return max(0, self.y1 - self.y0)

    @property
    def center(self) -> tuple[float, float]:
        return ((self.x0 + self.x1) / 2.0, (self.y0 + self.y1) / 2.0)


class Drawable(Protocol):
    """A sized element that can paint itself into a cell of the legend grid."""

    @property
    def width_mm(self) -> float:
        ...

    @property
    def height_mm(self) -> float:
        ...

    def paint(self, canvas: np.ndarray, box: PixelBox, px_per_mm: float) -> None:
        ...


@dataclass(frozen=True)
class ZeroElement:
    width_mm: float = 0.0
    height_mm: float = 0.0

    def paint(self, canvas: np.ndarray, box: PixelBox, px_per_mm: float) -> None:
        return None


@dataclass(frozen=True)
class RectElement:
    fill: RGBA | None = None
    border: RGBA | None = None
    width_mm: float = 0.0
    height_mm: float = 0.0

    def paint(self, canvas: np.ndarray, box: PixelBox, px_per_mm: float) -> None:
        if box.width == 0 or box.height == 0:
            return
        if self.fill is not None:
            fill_rect(canvas, box.x0, box.y0, box.x1 - 1, box.y1 - 1, self.fill)
        if self.border is not None:
            stroke_rect(canvas, box.x0, box.y0, box.x1 - 1, box.y1 - 1, self.border)


@dataclass(frozen=True)
class TextElement:
    text: str
    font_family: str
    size_pt: float
    color: RGBA
    hjust: float
    vjust: float
    angle: float
    width_mm: float
    height_mm: float

    @classmethod
    def measured(
        cls,
        text: str,
        *,
        font_family: str,
        size_pt: float,
        color: RGBA,
        hjust: float = 0.0,
        vjust: float = 0.5,
        angle: float = 0,
        dpi: float = 96.0,
    ) -> "TextElement":
        font_px = size_pt * dpi / 72.0
        w_px, h_px = text_size(text, font_family=font_family, font_size_px=font_px, rotate_deg=angle)
        px_per_mm = dpi / MM_PER_INCH
        return cls(
            text=text,
            font_family=font_family,
            size_pt=size_pt,
            color=color,
            hjust=float(hjust),
            vjust=float(vjust),
            angle=float(angle),
            width_mm=w_px / px_per_mm,
            height_mm=h_px / px_per_mm,
        )

    def paint(self, canvas: np.ndarray, box: PixelBox, px_per_mm: float) -> None:
        font_px = self.size_pt / 72.0 * MM_PER_INCH * px_per_mm
        tw, th = text_size(self.text, font_family=self.font_family, font_size_px=font_px, rotate_deg=self.angle)
        x = box.x0 + int(round(self.hjust * (box.width - tw)))
        y = box.y0 + int(round((1.0 - self.vjust) * (box.height - th)))
        draw_text(
            canvas,
            x,
            y,
            self.text,
            self.color,
            font_family=self.font_family,
            font_size_px=font_px,
            rotate_deg=self.angle,
        )


@dataclass(frozen=True)
class KeyElement:
    """One layer's glyph for one legend row, drawn over the key background."""

    glyph: "KeyGlyph"
    row: Mapping[str, Any]
    params: Mapping[str, Any] = field(default_factory=dict)
    width_mm: float = 0.0
    height_mm: float = 0.0

    def paint(self, canvas: np.ndarray, box: PixelBox, px_per_mm: float) -> None:
        self.glyph.paint(canvas, box, self.row, self.params, px_per_mm)


def stroke_px(size_mm: float, px_per_mm: float) -> int:
    return max(1, int(round(size_mm * px_per_mm)))
