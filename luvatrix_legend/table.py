from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from luvatrix_legend.elements import Drawable, PixelBox
from luvatrix_legend.raster import RGBA, new_canvas
from luvatrix_legend.units import MM_PER_INCH


@dataclass(frozen=True)
class LayoutElement:
    """A drawable placed on the grid; spans are 1-based and inclusive."""

    name: str
    element: Drawable
    t: int
    l: int
    b: int
    r: int


@dataclass(frozen=True, eq=False)
class GuideTable:
    """Column widths, row heights (mm) and the elements to paint, in z-order."""

    widths: np.ndarray
    heights: np.ndarray
    elements: tuple[LayoutElement, ...]
    name: str = "legend"

    def __post_init__(self) -> None:
        widths = np.asarray(self.widths, dtype=np.float64)
        heights = np.asarray(self.heights, dtype=np.float64)
        if np.any(widths < 0) or np.any(heights < 0):
            raise ValueError("grid widths/heights must be >= 0")
        object.__setattr__(self, "widths", widths)
        object.__setattr__(self, "heights", heights)
        for item in self.elements:
            if not (1 <= item.t <= item.b <= self.nrow and 1 <= item.l <= item.r <= self.ncol):
                raise ValueError(f"element {item.name} span lies outside the {self.nrow}x{self.ncol} grid")

    @property
    def ncol(self) -> int:
        return int(self.widths.size)

    @property
    def nrow(self) -> int:
        return int(self.heights.size)

    @property
    def width_mm(self) -> float:
        return float(self.widths.sum())

    @property
    def height_mm(self) -> float:
        return float(self.heights.sum())

    def find(self, prefix: str) -> list[LayoutElement]:
        return [item for item in self.elements if item.name.startswith(prefix)]

    def pixel_size(self, dpi: float = 96.0) -> tuple[int, int]:
        px_per_mm = dpi / MM_PER_INCH
        return (int(round(self.width_mm * px_per_mm)), int(round(self.height_mm * px_per_mm)))

    def paint(self, canvas: np.ndarray, x0: int, y0: int, px_per_mm: float) -> None:
        col_edges = x0 + np.rint(np.concatenate(([0.0], np.cumsum(self.widths))) * px_per_mm).astype(np.int64)
        row_edges = y0 + np.rint(np.concatenate(([0.0], np.cumsum(self.heights))) * px_per_mm).astype(np.int64)
        for item in self.elements:
            box = PixelBox(
                x0=int(col_edges[item.l - 1]),
                y0=int(row_edges[item.t - 1]),
                x1=int(col_edges[item.r]),
                y1=int(row_edges[item.b]),
            )
            item.element.paint(canvas, box, px_per_mm)

    def to_rgba(self, dpi: float = 96.0, background: RGBA = (0, 0, 0, 0)) -> np.ndarray:
        width, height = self.pixel_size(dpi)
        canvas = new_canvas(width, height, color=background)
        self.paint(canvas, 0, 0, dpi / MM_PER_INCH)
        return canvas


@dataclass(frozen=True)
class TableElement:
    """A whole GuideTable used as one cell of an enclosing table."""

    table: GuideTable

    @property
    def width_mm(self) -> float:
        return self.table.width_mm

    @property
    def height_mm(self) -> float:
        return self.table.height_mm

    def paint(self, canvas: np.ndarray, box: PixelBox, px_per_mm: float) -> None:
        self.table.paint(canvas, box.x0, box.y0, px_per_mm)


def stack_guide_tables(tables: Sequence[GuideTable], *, box: str = "vertical", spacing: float = 0.0) -> GuideTable | None:
    """Stack legends along `box` with `spacing` mm between them, aligned top-left."""

    if not tables:
        return None
    if box not in {"vertical", "horizontal"}:
        raise ValueError(f"legend box must be 'vertical' or 'horizontal', got {box!r}")

    along: list[float] = []
    elements: list[LayoutElement] = []
    for i, table in enumerate(tables):
        if i:
            along.append(spacing)
        along.append(table.height_mm if box == "vertical" else table.width_mm)
        pos = len(along)
        if box == "vertical":
            elements.append(LayoutElement(f"guide-{i + 1}", TableElement(table), t=pos, l=1, b=pos, r=1))
        else:
            elements.append(LayoutElement(f"guide-{i + 1}", TableElement(table), t=1, l=pos, b=1, r=pos))

    if box == "vertical":
        widths = [max(table.width_mm for table in tables)]
        return GuideTable(widths=np.asarray(widths), heights=np.asarray(along), elements=tuple(elements), name="guide-box")
    heights = [max(table.height_mm for table in tables)]
    return GuideTable(widths=np.asarray(along), heights=np.asarray(heights), elements=tuple(elements), name="guide-box")
