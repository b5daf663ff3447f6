import contextlib
import io
from pathlib import Path
import tempfile
import unittest

from PIL import Image

from luvatrix_legend.cli import main


class LegendCliTests(unittest.TestCase):
    def test_demo_prints_one_summary_line_per_guide(self) -> None:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            main(["demo"])
        lines = out.getvalue().splitlines()
        self.assertTrue(lines[0].startswith("legend box:"))
        self.assertEqual(len([line for line in lines if line.startswith("  guide-")]), 2)

    def test_demo_writes_png(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "legend.png"
            with contextlib.redirect_stdout(io.StringIO()):
                main(["demo", "--direction", "horizontal", "--label-position", "bottom", "--out", str(target)])
            self.assertTrue(target.exists())
            with Image.open(target) as image:
                self.assertEqual(image.mode, "RGBA")
                self.assertGreater(image.size[0], image.size[1])

    def test_unknown_position_is_rejected_by_argparse(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main(["demo", "--label-position", "middle"])


if __name__ == "__main__":
    unittest.main()
