from __future__ import annotations

from dataclasses import dataclass
import unittest

import numpy as np

from luvatrix_legend.engine import build_legend_table
from luvatrix_legend.errors import LegendConfigError
from luvatrix_legend.geoms import GEOM_LINE, GEOM_POINT, Layer
from luvatrix_legend.key_table import train_guide
from luvatrix_legend.marks import collect_marks
from luvatrix_legend.renderer import ThemeRenderer
from luvatrix_legend.scales import DiscreteScale
from luvatrix_legend.spec import GuideSpec
from luvatrix_legend.theme import LegendTheme
from luvatrix_legend.units import Length


LABEL_WIDTHS = {"a": 5.0, "bb": 8.0, "ccc": 6.0}


@dataclass(frozen=True)
class _Box:
    width_mm: float = 0.0
    height_mm: float = 0.0

    def paint(self, canvas, box, px_per_mm) -> None:
        return None


class _FixedRenderer:
    """Labels get fixed sizes by text; the title is 20x4 mm; everything is recorded."""

    def __init__(self, theme: LegendTheme) -> None:
        self.theme = theme
        self.calls: list[tuple[str, object]] = []

    def render(self, style_key, content=None, overrides=None):
        self.calls.append((style_key, content))
        if content is None:
            return _Box()
        if style_key == "legend.text":
            return _Box(LABEL_WIDTHS[content], 3.0)
        if style_key == "legend.title":
            return _Box(20.0, 4.0)
        return _Box()


THEME = LegendTheme(gap=Length(2.0, "mm"), key_size=Length(10.0, "mm"))


def _guide(layers=None, **spec):
    spec.setdefault("title", None)
    scale = DiscreteScale(aesthetics=("colour",), levels=("a", "bb", "ccc"), palette=("#FF0000", "#00FF00", "#0000FF"))
    guide = train_guide(GuideSpec(**spec), scale)
    assert guide is not None
    if layers is None:
        layers = [Layer(geom=GEOM_POINT, mapping={"colour": "grp"})]
    return collect_marks(guide, layers)


class LegendEngineTests(unittest.TestCase):
    def test_horizontal_right_total_width(self) -> None:
        guide = _guide(direction="horizontal", label_position="right", title_position="top")
        table = build_legend_table(guide, _FixedRenderer(THEME), THEME)
        self.assertAlmostEqual(table.width_mm, 56.0)
        self.assertEqual(table.heights.tolist(), [0.0, 2.0, 10.0])

    def test_elements_emitted_in_paint_order(self) -> None:
        guide = _guide(direction="horizontal", label_position="right", title_position="top")
        table = build_legend_table(guide, _FixedRenderer(THEME), THEME)

        self.assertEqual(
            [item.name for item in table.elements],
            [
                "background",
                "title",
                "key-3-1-bg",
                "key-3-1-1",
                "key-3-5-bg",
                "key-3-5-1",
                "key-3-9-bg",
                "key-3-9-1",
                "label-3-3",
                "label-3-7",
                "label-3-11",
            ],
        )
        background = table.elements[0]
        self.assertEqual((background.t, background.l, background.b, background.r), (1, 1, 3, 12))
        title = table.elements[1]
        self.assertEqual((title.t, title.l, title.b, title.r), (1, 1, 1, 12))

    def test_long_title_on_top_grows_fill_column(self) -> None:
        guide = _guide(title="Group", direction="vertical", label_position="right")
        table = build_legend_table(guide, _FixedRenderer(THEME), THEME)
        self.assertEqual(table.widths.tolist(), [10.0, 2.0, 8.0, 0.0])
        self.assertEqual(table.heights.tolist(), [4.0, 2.0, 10.0, 10.0, 10.0])

        narrow = LegendTheme(gap=Length(2.0, "mm"), key_size=Length(4.0, "mm"))
        table = build_legend_table(guide, _FixedRenderer(narrow), narrow)
        self.assertEqual(table.widths.tolist(), [4.0, 2.0, 8.0, 6.0])
        self.assertAlmostEqual(table.width_mm, 20.0)

    def test_invalid_position_raises_before_measuring(self) -> None:
        for options in ({"label_position": "middle"}, {"title_position": "centre"}, {"direction": "diagonal"}):
            renderer = _FixedRenderer(THEME)
            with self.subTest(options=options):
                with self.assertRaises(LegendConfigError):
                    build_legend_table(_guide(**options), renderer, THEME)
                self.assertEqual(renderer.calls, [])

    def test_disabled_labels_emit_no_label_cells(self) -> None:
        renderer = _FixedRenderer(THEME)
        table = build_legend_table(_guide(label=False, direction="vertical"), renderer, THEME)
        self.assertEqual(table.find("label-"), [])
        self.assertNotIn("legend.text", [key for key, _ in renderer.calls])
        self.assertEqual(len(table.find("key-")), 6)

    def test_each_mark_overlays_the_same_key_cell(self) -> None:
        layers = [
            Layer(geom=GEOM_LINE, mapping={"colour": "grp"}),
            Layer(geom=GEOM_POINT, mapping={"colour": "grp"}),
        ]
        table = build_legend_table(_guide(layers=layers, direction="vertical"), _FixedRenderer(THEME), THEME)
        first_row = [item for item in table.find("key-") if item.name.startswith("key-3-1-")]
        self.assertEqual([item.name for item in first_row], ["key-3-1-bg", "key-3-1-1", "key-3-1-2"])
        self.assertEqual({(item.t, item.l, item.b, item.r) for item in first_row}, {(3, 1, 3, 1)})

    def test_large_point_enlarges_key_cells(self) -> None:
        guide = _guide(direction="vertical", label_position="right", set_aes={"size": 14.0})
        table = build_legend_table(guide, _FixedRenderer(THEME), THEME)
        self.assertAlmostEqual(table.widths[0], 14.5)
        self.assertEqual(table.heights.tolist()[2:], [14.5, 14.5, 14.5])

    def test_guide_key_width_overrides_theme(self) -> None:
        guide = _guide(direction="vertical", label_position="right", key_width=Length(7.0, "mm"))
        table = build_legend_table(guide, _FixedRenderer(THEME), THEME)
        self.assertEqual(table.widths[0], 7.0)
        self.assertEqual(table.heights[2], 10.0)

    def test_untrained_guide_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            build_legend_table(GuideSpec(), _FixedRenderer(THEME), THEME)


class ThemeRendererTests(unittest.TestCase):
    def test_rasterized_legend_matches_grid_size(self) -> None:
        guide = _guide(title="grp", direction="vertical", label_position="right")
        table = build_legend_table(guide, ThemeRenderer())
        canvas = table.to_rgba(dpi=96)

        width, height = table.pixel_size(96)
        self.assertEqual(canvas.shape, (height, width, 4))
        self.assertEqual(canvas[-1, -1].tolist(), [255, 255, 255, 255])
        self.assertTrue(np.any(canvas[..., :3] != 255))

    def test_sequence_colour_in_title_theme_is_accepted(self) -> None:
        guide = _guide(title="T", title_theme={"colour": [255, 0, 0]}, direction="vertical")
        table = build_legend_table(guide, ThemeRenderer())
        (title,) = table.find("title")
        self.assertEqual(title.element.color, (255, 0, 0, 255))

    def test_title_angle_keeps_quarter_turns_and_rejects_others(self) -> None:
        table = build_legend_table(_guide(title="Title", title_angle=90, direction="vertical"), ThemeRenderer())
        (title,) = table.find("title")
        self.assertEqual(title.element.angle, 90.0)
        self.assertGreater(title.element.height_mm, title.element.width_mm)

        with self.assertRaises(ValueError):
            build_legend_table(_guide(title="Title", title_angle=90.5, direction="vertical"), ThemeRenderer())

    def test_missing_text_renders_as_empty_element(self) -> None:
        element = ThemeRenderer().render("legend.title", None)
        self.assertEqual((element.width_mm, element.height_mm), (0.0, 0.0))

    def test_unknown_style_key_is_a_config_error(self) -> None:
        with self.assertRaises(LegendConfigError):
            ThemeRenderer().render("legend.ticks")


if __name__ == "__main__":
    unittest.main()
