from __future__ import annotations

import unittest

from luvatrix_legend.key_table import build_key_table, guide_hash, train_guide
from luvatrix_legend.scales import ContinuousScale, DiscreteScale
from luvatrix_legend.spec import GuideSpec


class _BrokenScale:
    aesthetics = ("colour",)
    name = "broken"
    guide = "legend"

    def breaks(self):
        return [1, 2]

    def map(self, values):
        return ["#000000", "#FFFFFF"]

    def labels(self):
        return ["one"]


class KeyTableTests(unittest.TestCase):
    def test_rows_follow_scale_break_order(self) -> None:
        scale = DiscreteScale(aesthetics=("colour",), levels=("z", "a", "m"), palette=("#FF0000", "#00FF00", "#0000FF"))
        guide = train_guide(GuideSpec(title="grp"), scale)
        assert guide is not None
        self.assertEqual(guide.key.labels, ("z", "a", "m"))
        self.assertEqual(guide.key.column("colour"), ["#FF0000", "#00FF00", "#0000FF"])
        self.assertEqual(guide.key.columns, ("colour", ".label"))

    def test_continuous_scale_breaks_are_nice_ticks_inside_limits(self) -> None:
        scale = ContinuousScale(aesthetics=("size",), limits=(0.0, 10.0), output_range=(1.0, 6.0))
        key = build_key_table(scale)
        self.assertEqual(key.labels, ("0", "2", "4", "6", "8", "10"))
        self.assertAlmostEqual(key.column("size")[0], 1.0)
        self.assertAlmostEqual(key.column("size")[-1], 6.0)

    def test_continuous_colour_scale_interpolates_hex(self) -> None:
        scale = ContinuousScale(aesthetics=("fill",), limits=(0.0, 1.0), output_range=("#000000", "#FFFFFF"), explicit_breaks=(0.0, 0.5, 1.0))
        key = build_key_table(scale)
        self.assertEqual(key.column("fill"), ["#000000", "#808080", "#FFFFFF"])
        self.assertEqual(key.labels, ("0", "0.5", "1"))

    def test_scale_without_breaks_fails_training(self) -> None:
        scale = DiscreteScale(aesthetics=("colour",), levels=(), palette=())
        self.assertIsNone(train_guide(GuideSpec(title="empty"), scale))

    def test_mismatched_scale_vectors_are_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "2 breaks"):
            build_key_table(_BrokenScale())

    def test_hash_depends_on_title_labels_direction_and_name(self) -> None:
        base = guide_hash("grp", ["a", "b"], "vertical", "legend")
        self.assertEqual(base, guide_hash("grp", ["a", "b"], "vertical", "legend"))
        self.assertNotEqual(base, guide_hash("grp", ["a", "b"], "horizontal", "legend"))
        self.assertNotEqual(base, guide_hash("other", ["a", "b"], "vertical", "legend"))
        self.assertNotEqual(base, guide_hash("grp", ["b", "a"], "vertical", "legend"))

    def test_hash_ignores_key_appearance(self) -> None:
        colour = DiscreteScale(aesthetics=("colour",), levels=("a", "b"), palette=("#FF0000", "#0000FF"))
        shape = DiscreteScale(aesthetics=("shape",), levels=("a", "b"), palette=(19, 15))
        g1 = train_guide(GuideSpec(title="grp", direction="vertical", set_aes={"alpha": 0.5}), colour)
        g2 = train_guide(GuideSpec(title="grp", direction="vertical"), shape)
        assert g1 is not None and g2 is not None
        self.assertEqual(g1.hash, g2.hash)

    def test_with_override_marks_single_entry(self) -> None:
        scale = DiscreteScale(aesthetics=("colour",), levels=("a", "b"), palette=("#FF0000", "#0000FF"))
        key = build_key_table(scale).with_override(1, color="#000000")
        self.assertEqual(key[0].overrides, {})
        self.assertEqual(key[1].overrides, {"colour": "#000000"})
        self.assertEqual(key[1].as_row(), {"colour": "#0000FF", ".label": "b"})


if __name__ == "__main__":
    unittest.main()
