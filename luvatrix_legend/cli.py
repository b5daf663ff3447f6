from __future__ import annotations

import argparse
import logging
from pathlib import Path

from PIL import Image

from luvatrix_legend.geoms import GEOM_LINE, GEOM_POINT, Layer
from luvatrix_legend.guides import build_guides
from luvatrix_legend.scales import ContinuousScale, DiscreteScale
from luvatrix_legend.spec import legend_guide
from luvatrix_legend.theme import validate_legend_theme


DEMO_PALETTE = ("#E41A1C", "#377EB8", "#4DAF4A", "#984EA3")


def demo_guides(args: argparse.Namespace):
    theme = validate_legend_theme({"legend_direction": args.direction, "legend_box": args.box, "dpi": args.dpi})
    spec = legend_guide(label_position=args.label_position, title_position=args.title_position)
    scales = [
        DiscreteScale(aesthetics=("colour",), levels=("alpha", "beta", "gamma", "delta"), palette=DEMO_PALETTE, name="series"),
        ContinuousScale(aesthetics=("size",), limits=(0.0, 40.0), output_range=(1.5, 6.0), name="weight"),
    ]
    layers = [
        Layer(geom=GEOM_POINT, mapping={"x": "t", "y": "v", "colour": "series", "size": "weight"}),
        Layer(geom=GEOM_LINE, mapping={"x": "t", "y": "v", "colour": "series"}),
    ]
    return build_guides(scales, layers, theme=theme, guides={"colour": spec, "size": spec})


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="luvatrix-legend")
    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="Build a sample colour + size legend and print its grid.")
    demo.add_argument("--direction", choices=["horizontal", "vertical"], default="vertical")
    demo.add_argument("--label-position", choices=["top", "bottom", "left", "right"], default=None)
    demo.add_argument("--title-position", choices=["top", "bottom", "left", "right"], default=None)
    demo.add_argument("--box", choices=["horizontal", "vertical"], default="vertical")
    demo.add_argument("--dpi", type=float, default=96.0)
    demo.add_argument("--out", type=Path, default=None, help="Write the rendered legend as a PNG.")
    demo.add_argument("--verbose", action="store_true")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    table = demo_guides(args)
    if table is None:
        print("no legend to draw")
        return
    print(f"legend box: {table.width_mm:.1f} x {table.height_mm:.1f} mm, {len(table.elements)} guides")
    for item in table.elements:
        inner = getattr(item.element, "table", None)
        if inner is None:
            continue
        print(f"  {item.name}: {inner.nrow} rows x {inner.ncol} cols, {len(inner.elements)} elements")
    if args.out is not None:
        rgba = table.to_rgba(dpi=args.dpi, background=(255, 255, 255, 255))
        Image.fromarray(rgba).save(args.out)
        print(f"wrote {args.out}")


if __name__ == "__main__":
    main()
