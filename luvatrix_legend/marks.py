from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
import logging
from typing import Any, Mapping, Sequence

from luvatrix_legend.aes import standardise_aes_mapping
from luvatrix_legend.geoms import Layer
from luvatrix_legend.glyphs import KeyGlyph
from luvatrix_legend.spec import GuideSpec


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkContribution:
    """One layer's glyph data for every row of a legend."""

    glyph: KeyGlyph
    rows: tuple[Mapping[str, Any], ...]
    params: Mapping[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.rows)

    def minimum_sizes(self) -> list[float]:
        return [self.glyph.minimum_size(row) for row in self.rows]


def matched_aesthetics(guide: GuideSpec, layer: Layer, default_mapping: Mapping[str, Any] | None = None) -> list[str]:
    """Key columns this layer can draw, excluding aesthetics it fixes to a constant."""

    if guide.key is None:
        return []
    available = set(layer.mapping) | set(standardise_aes_mapping(default_mapping)) | set(layer.stat_default_aes)
    drawable = set(layer.geom.aes_names)
    fixed = set(layer.geom_params)
    return [
        aes
        for aes in guide.key.aesthetics
        if aes in available and aes in drawable and aes not in fixed
    ]


def layer_contribution(
    guide: GuideSpec,
    layer: Layer,
    default_mapping: Mapping[str, Any] | None = None,
) -> MarkContribution | None:
    key = guide.key
    if key is None or len(key) == 0:
        return None
    matched = matched_aesthetics(guide, layer, default_mapping)
    if matched:
        if layer.show_legend is False:
            LOGGER.debug("layer %s opted out of the legend", layer.geom.name)
            return None
        rows = layer.resolve_defaults(key.select(matched))
    else:
        if layer.show_legend is not True:
            return None
        rows = layer.resolve_defaults(None) * len(key)

    out: list[Mapping[str, Any]] = []
    for entry, row in zip(key.entries, rows):
        resolved = dict(row)
        resolved.update(entry.overrides)
        resolved.update(guide.set_aes)
        out.append(resolved)
    return MarkContribution(glyph=layer.geom.glyph, rows=tuple(out), params=layer.params)


def collect_marks(
    guide: GuideSpec,
    layers: Sequence[Layer],
    default_mapping: Mapping[str, Any] | None = None,
) -> GuideSpec:
    """Return a copy of `guide` whose `marks` hold every contributing layer, in layer order."""

    marks: list[MarkContribution] = []
    for layer in layers:
        contribution = layer_contribution(guide, layer, default_mapping)
        if contribution is None or len(contribution) == 0:
            continue
        marks.append(contribution)
    return dataclasses.replace(guide, marks=tuple(marks))
