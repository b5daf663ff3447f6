from .canvas import RGBA, blend_coverage, blend_mask, fill_rect, new_canvas, stroke_rect
from .shapes import dash_pattern, draw_disc, draw_hstroke
from .text import DEFAULT_FONT_FAMILY, draw_text, quarter_turns, text_size

__all__ = [
    "DEFAULT_FONT_FAMILY",
    "RGBA",
    "blend_coverage",
    "blend_mask",
    "dash_pattern",
    "draw_disc",
    "draw_hstroke",
    "draw_text",
    "fill_rect",
    "new_canvas",
    "quarter_turns",
    "stroke_rect",
    "text_size",
]
