from __future__ import annotations

import logging
from typing import Any

import numpy as np

from luvatrix_legend.elements import Drawable
from luvatrix_legend.layout import BlockSizes, GuideLayout, arrange_keys_and_labels, wrap_title
from luvatrix_legend.renderer import StyleRenderer, ThemeRenderer
from luvatrix_legend.resolve import first_of, is_waiver
from luvatrix_legend.spec import GuideSpec, validate_layout_options
from luvatrix_legend.table import GuideTable, LayoutElement
from luvatrix_legend.theme import LegendTheme


LOGGER = logging.getLogger(__name__)


def build_legend_table(
    guide: GuideSpec,
    renderer: StyleRenderer | None = None,
    theme: LegendTheme | None = None,
) -> GuideTable:
    """Measure, arrange and emit the grid for one trained legend guide."""

    if guide.key is None:
        raise ValueError("guide must be trained before it can be built")
    if renderer is None:
        renderer = ThemeRenderer(theme) if theme is not None else ThemeRenderer()
    theme = theme or renderer.theme

    direction = guide.resolved_direction(theme.legend_direction)
    label_position = guide.resolved_label_position()
    title_position = guide.resolved_title_position(direction)
    validate_layout_options(direction, label_position, title_position)

    n = len(guide.key)
    full_gap = theme.gap_mm

    title = _render_title(guide, renderer, theme)
    labels = _render_labels(guide, renderer, theme)
    if labels:
        label_widths = [label.width_mm for label in labels]
        label_heights = [label.height_mm for label in labels]
    else:
        label_widths = [0.0] * n
        label_heights = [0.0] * n

    sizes = BlockSizes.of(
        key_width=theme.length_mm(first_of(guide.key_width, theme.key_width, default=theme.key_size)),
        key_height=theme.length_mm(first_of(guide.key_height, theme.key_height, default=theme.key_size)),
        label_widths=label_widths,
        label_heights=label_heights,
        key_sizes=_key_sizes(guide, n),
    )
    block = arrange_keys_and_labels(direction, label_position, sizes, full_gap)
    layout = wrap_title(title_position, block, title.width_mm, title.height_mm, full_gap)

    elements = _emit(guide, renderer, layout, title, labels)
    LOGGER.debug(
        "legend %r: %d rows, grid %dx%d (%s, labels %s, title %s)",
        guide.title,
        n,
        len(layout.rows),
        len(layout.columns),
        direction,
        label_position,
        title_position,
    )
    return GuideTable(widths=layout.widths, heights=layout.heights, elements=tuple(elements))


def _render_title(guide: GuideSpec, renderer: StyleRenderer, theme: LegendTheme) -> Drawable:
    text = None if is_waiver(guide.title) else guide.title
    overrides: dict[str, Any] = dict(guide.title_theme or {})
    overrides["hjust"] = first_of(guide.title_hjust, theme.title_align, default=0.0)
    overrides["vjust"] = first_of(guide.title_vjust, default=0.5)
    if guide.title_angle is not None:
        overrides["angle"] = guide.title_angle
    return renderer.render("legend.title", text, overrides)


def _render_labels(guide: GuideSpec, renderer: StyleRenderer, theme: LegendTheme) -> list[Drawable]:
    if not guide.label or guide.key is None:
        return []
    overrides: dict[str, Any] = dict(guide.label_theme or {})
    overrides["hjust"] = first_of(guide.label_hjust, theme.text_align, default=0.0)
    overrides["vjust"] = first_of(guide.label_vjust, default=0.5)
    if guide.label_angle is not None:
        overrides["angle"] = guide.label_angle
    return [renderer.render("legend.text", label, overrides) for label in guide.key.labels]


def _key_sizes(guide: GuideSpec, n: int) -> np.ndarray:
    if not guide.marks:
        return np.zeros(n)
    per_mark = np.asarray([mark.minimum_sizes() for mark in guide.marks], dtype=np.float64)
    return per_mark.max(axis=0)


def _emit(
    guide: GuideSpec,
    renderer: StyleRenderer,
    layout: GuideLayout,
    title: Drawable,
    labels: list[Drawable],
) -> list[LayoutElement]:
    nrow, ncol = len(layout.rows), len(layout.columns)
    t, l, b, r = layout.title_span()
    elements = [
        LayoutElement("background", renderer.render("legend.background"), t=1, l=1, b=nrow, r=ncol),
        LayoutElement("title", title, t=t, l=l, b=b, r=r),
    ]
    assert guide.key is not None
    for i in range(len(guide.key)):
        row, col = layout.key_cell(i)
        elements.append(LayoutElement(f"key-{row}-{col}-bg", renderer.render("legend.key"), t=row, l=col, b=row, r=col))
        for j, mark in enumerate(guide.marks, start=1):
            glyph = mark.glyph.draw_key(mark.rows[i], mark.params)
            elements.append(LayoutElement(f"key-{row}-{col}-{j}", glyph, t=row, l=col, b=row, r=col))
    for i, label in enumerate(labels):
        row, col = layout.label_cell(i)
        elements.append(LayoutElement(f"label-{row}-{col}", label, t=row, l=col, b=row, r=col))
    return elements
