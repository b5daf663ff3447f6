from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Mapping

from luvatrix_legend.colors import is_hex_color
from luvatrix_legend.units import Length, as_length, points_to_mm


@dataclass(frozen=True)
class LegendTheme:
    """Style tokens consumed by the legend engine and the default renderer."""

    font_family: str = "Comic Mono"
    base_size_pt: float = 12.0
    line_height: float = 1.2
    title_size_pt: float = 12.0
    text_size_pt: float = 9.6
    title_color: str = "#000000"
    text_color: str = "#000000"
    title_align: float | None = None
    text_align: float | None = None
    key_size: Length = Length(1.2, "lines")
    key_width: Length | None = None
    key_height: Length | None = None
    key_fill: str = "#F2F2F2"
    key_border: str | None = "#FFFFFF"
    background_fill: str | None = "#FFFFFF"
    background_border: str | None = None
    legend_direction: str = "vertical"
    legend_box: str = "vertical"
    box_spacing: Length = Length(0.5, "lines")
    gap: Length = Length(0.3, "lines")
    dpi: float = 96.0

    @property
    def line_mm(self) -> float:
        return points_to_mm(self.base_size_pt * self.line_height)

    def length_mm(self, length: Length) -> float:
        return length.to_mm(line_mm=self.line_mm, dpi=self.dpi)

    @property
    def gap_mm(self) -> float:
        return self.length_mm(self.gap)


DEFAULT_LEGEND_THEME = LegendTheme()

_COLOR_TOKENS = ("title_color", "text_color", "key_fill")
_OPTIONAL_COLOR_TOKENS = ("key_border", "background_fill", "background_border")
_POSITIVE_TOKENS = ("base_size_pt", "line_height", "title_size_pt", "text_size_pt", "dpi")
_LENGTH_TOKENS = ("key_size", "box_spacing", "gap")
_OPTIONAL_LENGTH_TOKENS = ("key_width", "key_height")


def validate_legend_theme(overrides: Mapping[str, Any] | None = None) -> LegendTheme:
    """Validate and merge token overrides against the default legend theme."""

    raw: dict[str, Any] = {f.name: getattr(DEFAULT_LEGEND_THEME, f.name) for f in dataclasses.fields(LegendTheme)}
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown legend theme token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        if not is_hex_color(raw[key]):
            raise ValueError(f"Token `{key}` must be a hex color (#RRGGBB or #RRGGBBAA)")
    for key in _OPTIONAL_COLOR_TOKENS:
        if raw[key] is not None and not is_hex_color(raw[key]):
            raise ValueError(f"Token `{key}` must be a hex color or None")

    if not isinstance(raw["font_family"], str) or not raw["font_family"].strip():
        raise ValueError("Token `font_family` must be a non-empty string")

    for key in _POSITIVE_TOKENS:
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or float(value) <= 0:
            raise ValueError(f"Token `{key}` must be a positive number")
        raw[key] = float(value)

    for key in ("title_align", "text_align"):
        value = raw[key]
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= float(value) <= 1.0:
            raise ValueError(f"Token `{key}` must be a number in [0, 1] or None")
        raw[key] = float(value)

    for key in _LENGTH_TOKENS + _OPTIONAL_LENGTH_TOKENS:
        if raw[key] is None and key in _OPTIONAL_LENGTH_TOKENS:
            continue
        length = as_length(raw[key], default_unit="lines")
        if length is None or length.value < 0:
            raise ValueError(f"Token `{key}` must be a non-negative length")
        raw[key] = length

    if raw["legend_direction"] not in {"horizontal", "vertical"}:
        raise ValueError("Token `legend_direction` must be 'horizontal' or 'vertical'")
    if raw["legend_box"] not in {"horizontal", "vertical"}:
        raise ValueError("Token `legend_box` must be 'horizontal' or 'vertical'")

    return LegendTheme(**raw)
