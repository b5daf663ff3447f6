from luvatrix_legend.engine import build_legend_table
from luvatrix_legend.errors import LegendConfigError, LegendError
from luvatrix_legend.geoms import GEOM_BAR, GEOM_LINE, GEOM_PATH, GEOM_POINT, GEOM_TILE, GEOMS, Geom, Layer
from luvatrix_legend.guides import build_guide_tables, build_guides, train_guides
from luvatrix_legend.key_table import KeyEntry, KeyTable, train_guide
from luvatrix_legend.layout import arrange_keys_and_labels, wrap_title
from luvatrix_legend.marks import MarkContribution, collect_marks
from luvatrix_legend.merge import merge_guide_pair, merge_guides
from luvatrix_legend.renderer import StyleRenderer, ThemeRenderer
from luvatrix_legend.resolve import WAIVER
from luvatrix_legend.scales import ContinuousScale, DiscreteScale
from luvatrix_legend.spec import GuideSpec, legend_guide
from luvatrix_legend.table import GuideTable, LayoutElement
from luvatrix_legend.theme import DEFAULT_LEGEND_THEME, LegendTheme, validate_legend_theme
from luvatrix_legend.units import Length

__all__ = [
    "ContinuousScale",
    "DEFAULT_LEGEND_THEME",
    "DiscreteScale",
    "GEOM_BAR",
    "GEOM_LINE",
    "GEOM_PATH",
    "GEOM_POINT",
    "GEOM_TILE",
    "GEOMS",
    "Geom",
    "GuideSpec",
    "GuideTable",
    "KeyEntry",
    "KeyTable",
    "Layer",
    "LayoutElement",
    "LegendConfigError",
    "LegendError",
    "LegendTheme",
    "Length",
    "MarkContribution",
    "StyleRenderer",
    "ThemeRenderer",
    "WAIVER",
    "arrange_keys_and_labels",
    "build_guide_tables",
    "build_guides",
    "build_legend_table",
    "collect_marks",
    "legend_guide",
    "merge_guide_pair",
    "merge_guides",
    "train_guide",
    "train_guides",
    "validate_legend_theme",
    "wrap_title",
]
