from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping, Protocol

from luvatrix_legend.colors import to_rgba
from luvatrix_legend.elements import Drawable, RectElement, TextElement, ZeroElement
from luvatrix_legend.errors import LegendConfigError
from luvatrix_legend.raster import RGBA
from luvatrix_legend.resolve import first_of
from luvatrix_legend.theme import DEFAULT_LEGEND_THEME, LegendTheme


class StyleRenderer(Protocol):
    """Resolves a style key plus content into a sized drawable.

    Implementations must be deterministic for a given input.
    """

    theme: LegendTheme

    def render(self, style_key: str, content: Any = None, overrides: Mapping[str, Any] | None = None) -> Drawable:
        ...


class ThemeRenderer:
    """Default renderer: text measured with Pillow, rectangles from theme colours."""

    def __init__(self, theme: LegendTheme = DEFAULT_LEGEND_THEME) -> None:
        self.theme = theme

    def render(self, style_key: str, content: Any = None, overrides: Mapping[str, Any] | None = None) -> Drawable:
        opts = dict(overrides or {})
        if style_key in {"legend.title", "legend.text"}:
            if content is None:
                return ZeroElement()
            return self._render_text(style_key, str(content), opts)
        if style_key == "legend.key":
            return RectElement(
                fill=to_rgba(first_of(opts.get("fill"), default=self.theme.key_fill)),
                border=to_rgba(opts.get("border", self.theme.key_border)),
            )
        if style_key == "legend.background":
            return RectElement(
                fill=to_rgba(opts.get("fill", self.theme.background_fill)),
                border=to_rgba(opts.get("border", self.theme.background_border)),
            )
        raise LegendConfigError(f"unknown legend style key: {style_key}")

    def _render_text(self, style_key: str, text: str, opts: Mapping[str, Any]) -> TextElement:
        theme = self.theme
        is_title = style_key == "legend.title"
        color = first_of(opts.get("color"), opts.get("colour"), default=theme.title_color if is_title else theme.text_color)
        return _measure_text(
            text,
            font_family=first_of(opts.get("font_family"), default=theme.font_family),
            size_pt=float(first_of(opts.get("size_pt"), default=theme.title_size_pt if is_title else theme.text_size_pt)),
            color=to_rgba(color) or (0, 0, 0, 0),
            hjust=float(first_of(opts.get("hjust"), default=0.0)),
            vjust=float(first_of(opts.get("vjust"), default=0.5)),
            angle=float(first_of(opts.get("angle"), default=0.0)),
            dpi=theme.dpi,
        )


@lru_cache(maxsize=512)
def _measure_text(
    text: str,
    *,
    font_family: str,
    size_pt: float,
    color: RGBA,
    hjust: float,
    vjust: float,
    angle: float,
    dpi: float,
) -> TextElement:
    return TextElement.measured(
        text,
        font_family=font_family,
        size_pt=size_pt,
        color=color,
        hjust=hjust,
        vjust=vjust,
        angle=angle,
        dpi=dpi,
    )
