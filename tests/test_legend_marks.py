from __future__ import annotations

import dataclasses
import unittest

from luvatrix_legend.geoms import GEOM_LINE, GEOM_POINT, GEOM_TILE, Layer
from luvatrix_legend.glyphs import PATH_KEY, POINT_KEY
from luvatrix_legend.key_table import train_guide
from luvatrix_legend.marks import collect_marks, matched_aesthetics
from luvatrix_legend.scales import DiscreteScale
from luvatrix_legend.spec import GuideSpec


def _colour_guide(**spec):
    scale = DiscreteScale(aesthetics=("colour",), levels=("a", "b", "c"), palette=("#FF0000", "#00FF00", "#0000FF"))
    guide = train_guide(GuideSpec(title="grp", **spec), scale)
    assert guide is not None
    return guide


class MarkCollectorTests(unittest.TestCase):
    def test_mapped_layer_contributes_one_row_per_entry(self) -> None:
        layer = Layer(geom=GEOM_POINT, mapping={"x": "t", "y": "v", "colour": "grp"})
        guide = collect_marks(_colour_guide(), [layer])

        self.assertEqual(len(guide.marks), 1)
        mark = guide.marks[0]
        self.assertIs(mark.glyph, POINT_KEY)
        self.assertEqual([row["colour"] for row in mark.rows], ["#FF0000", "#00FF00", "#0000FF"])
        self.assertEqual(mark.rows[0]["size"], 2.0)
        self.assertEqual(mark.rows[0]["shape"], 19)

    def test_opted_out_layer_never_contributes(self) -> None:
        layer = Layer(geom=GEOM_POINT, mapping={"colour": "grp"}, show_legend=False)
        self.assertEqual(collect_marks(_colour_guide(), [layer]).marks, ())

    def test_unrelated_layer_is_skipped_unless_opted_in(self) -> None:
        plain = Layer(geom=GEOM_LINE, mapping={"x": "t", "y": "v"})
        self.assertEqual(collect_marks(_colour_guide(), [plain]).marks, ())

        forced = Layer(geom=GEOM_LINE, mapping={"x": "t", "y": "v"}, geom_params={"linewidth": 2.0}, show_legend=True)
        marks = collect_marks(_colour_guide(), [forced]).marks
        self.assertEqual(len(marks), 1)
        self.assertIs(marks[0].glyph, PATH_KEY)
        self.assertEqual(len(marks[0].rows), 3)
        self.assertTrue(all(row == marks[0].rows[0] for row in marks[0].rows))
        self.assertEqual(marks[0].rows[0]["linewidth"], 2.0)

    def test_aesthetic_fixed_on_layer_is_not_matched(self) -> None:
        layer = Layer(geom=GEOM_POINT, mapping={"colour": "grp"}, geom_params={"colour": "#123456"})
        guide = _colour_guide()
        self.assertEqual(matched_aesthetics(guide, layer), [])
        self.assertEqual(collect_marks(guide, [layer]).marks, ())

        opted_in = Layer(geom=GEOM_POINT, mapping={"colour": "grp"}, geom_params={"colour": "#123456"}, show_legend=True)
        rows = collect_marks(guide, [opted_in]).marks[0].rows
        self.assertEqual({row["colour"] for row in rows}, {"#123456"})

    def test_default_mapping_and_stat_defaults_count_as_available(self) -> None:
        layer = Layer(geom=GEOM_POINT)
        guide = _colour_guide()
        self.assertEqual(matched_aesthetics(guide, layer, default_mapping={"color": "grp"}), ["colour"])
        stat_layer = Layer(geom=GEOM_POINT, stat_default_aes={"colour": "..level.."})
        self.assertEqual(matched_aesthetics(guide, stat_layer), ["colour"])

    def test_geom_must_understand_the_aesthetic(self) -> None:
        layer = Layer(geom=GEOM_TILE, mapping={"colour": "grp"})
        self.assertEqual(matched_aesthetics(_colour_guide(), layer), ["colour"])
        fill_scale = DiscreteScale(aesthetics=("shape",), levels=("a",), palette=(19,))
        shape_guide = train_guide(GuideSpec(title="s"), fill_scale)
        self.assertEqual(matched_aesthetics(shape_guide, Layer(geom=GEOM_TILE, mapping={"shape": "g"})), [])

    def test_set_aes_overrides_every_row(self) -> None:
        layer = Layer(geom=GEOM_POINT, mapping={"colour": "grp"}, geom_params={"alpha": 0.1})
        guide = collect_marks(_colour_guide(set_aes={"alpha": 1.0, "color": "#000000"}), [layer])
        rows = guide.marks[0].rows
        self.assertEqual({row["alpha"] for row in rows}, {1.0})
        self.assertEqual({row["colour"] for row in rows}, {"#000000"})

    def test_entry_overrides_apply_before_set_aes(self) -> None:
        guide = _colour_guide(set_aes={"size": 4.0})
        guide = dataclasses.replace(guide, key=guide.key.with_override(1, size=9.0, shape=15))
        rows = collect_marks(guide, [Layer(geom=GEOM_POINT, mapping={"colour": "grp"})]).marks[0].rows
        self.assertEqual(rows[1]["shape"], 15)
        self.assertEqual(rows[1]["size"], 4.0)
        self.assertEqual(rows[0]["shape"], 19)

    def test_marks_keep_layer_order(self) -> None:
        layers = [
            Layer(geom=GEOM_LINE, mapping={"colour": "grp"}),
            Layer(geom=GEOM_POINT, mapping={"colour": "grp"}, show_legend=False),
            Layer(geom=GEOM_POINT, mapping={"colour": "grp"}, geom_params={"na_rm": True}),
        ]
        marks = collect_marks(_colour_guide(), layers).marks
        self.assertEqual([mark.glyph for mark in marks], [PATH_KEY, POINT_KEY])
        self.assertEqual(marks[1].params, {"na_rm": True})


if __name__ == "__main__":
    unittest.main()
