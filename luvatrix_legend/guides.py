from __future__ import annotations

import dataclasses
import logging
from typing import Any, Mapping, Sequence

from luvatrix_legend.aes import standardise_aes_mapping
from luvatrix_legend.engine import build_legend_table
from luvatrix_legend.errors import LegendConfigError
from luvatrix_legend.geoms import Layer
from luvatrix_legend.key_table import train_guide
from luvatrix_legend.marks import collect_marks
from luvatrix_legend.merge import merge_guides
from luvatrix_legend.renderer import StyleRenderer, ThemeRenderer
from luvatrix_legend.resolve import WAIVER, first_of, first_unwaived
from luvatrix_legend.scales import Scale
from luvatrix_legend.spec import GuideSpec
from luvatrix_legend.table import GuideTable, stack_guide_tables
from luvatrix_legend.theme import DEFAULT_LEGEND_THEME, LegendTheme


LOGGER = logging.getLogger(__name__)


def resolve_guide(scale: Scale, guides: Mapping[str, Any] | None = None) -> GuideSpec | None:
    """Guide for `scale`: the `guides` entry for any of its aesthetics, else the scale's own."""

    lookup = standardise_aes_mapping(guides)
    choice = next((lookup[aes] for aes in scale.aesthetics if aes in lookup), None)
    choice = first_of(choice, getattr(scale, "guide", None), default="legend")
    if isinstance(choice, GuideSpec):
        return choice
    if choice == "none":
        return None
    if choice == "legend":
        return GuideSpec()
    raise LegendConfigError(f"Unknown guide: {choice!r}")


def train_guides(
    scales: Sequence[Scale],
    theme: LegendTheme = DEFAULT_LEGEND_THEME,
    guides: Mapping[str, Any] | None = None,
    labels: Mapping[str, Any] | None = None,
) -> list[GuideSpec]:
    """Train one guide per scale; scales without breaks or with guide "none" are skipped."""

    plot_labels = standardise_aes_mapping(labels)
    trained: list[GuideSpec] = []
    for scale in scales:
        guide = resolve_guide(scale, guides)
        if guide is None:
            continue
        if "any" not in guide.available_aes and not set(guide.available_aes) & set(scale.aesthetics):
            raise LegendConfigError(f"guide {guide.name!r} cannot be used for {scale.aesthetics[0]!r}")
        output = scale.aesthetics[0]
        guide = dataclasses.replace(
            guide,
            title=first_unwaived(guide.title, scale.name, plot_labels.get(output, WAIVER), default=None),
            direction=first_of(guide.direction, default=theme.legend_direction),
        )
        result = train_guide(guide, scale)
        if result is not None:
            trained.append(result)
    return trained


def build_guide_tables(
    scales: Sequence[Scale],
    layers: Sequence[Layer],
    *,
    theme: LegendTheme = DEFAULT_LEGEND_THEME,
    guides: Mapping[str, Any] | None = None,
    labels: Mapping[str, Any] | None = None,
    default_mapping: Mapping[str, Any] | None = None,
    renderer: StyleRenderer | None = None,
) -> list[GuideTable]:
    renderer = renderer or ThemeRenderer(theme)
    merged = merge_guides(train_guides(scales, theme, guides, labels))
    tables: list[GuideTable] = []
    for guide in merged:
        guide = collect_marks(guide, layers, default_mapping)
        if not guide.marks:
            LOGGER.debug("legend %r omitted: no layer contributes a key", guide.title)
            continue
        tables.append(build_legend_table(guide, renderer, theme))
    return tables


def build_guides(
    scales: Sequence[Scale],
    layers: Sequence[Layer],
    *,
    theme: LegendTheme = DEFAULT_LEGEND_THEME,
    guides: Mapping[str, Any] | None = None,
    labels: Mapping[str, Any] | None = None,
    default_mapping: Mapping[str, Any] | None = None,
    renderer: StyleRenderer | None = None,
) -> GuideTable | None:
    """All legends for a plot, stacked into one box; None when there is nothing to show."""

    tables = build_guide_tables(
        scales,
        layers,
        theme=theme,
        guides=guides,
        labels=labels,
        default_mapping=default_mapping,
        renderer=renderer,
    )
    return stack_guide_tables(tables, box=theme.legend_box, spacing=theme.length_mm(theme.box_spacing))
