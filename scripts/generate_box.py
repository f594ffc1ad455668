#!/usr/bin/env python3
"""
Generate a banker box die-cut pattern (box + lid) as SVG, and optionally DXF.

Usage:
    python scripts/generate_box.py --width 150 --depth 100 --height 80
    python scripts/generate_box.py --mode laser --dxf --output patterns
    python scripts/generate_box.py --no-lid --thickness 3 --tab-width 20

All dimensions are in millimetres. Values that do not parse as numbers are
treated as 0 unless --strict is given.
"""
import sys
import argparse
import logging
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from assembly_sequence import format_steps
from box_dimensions import Dimensions, DimensionError, LayoutConfig, StyleMode
from pipeline import PipelineConfig, run_pipeline
from sheet_composer import DEFAULT_PADDING, pattern_summary
from svg_exporter import ExportError

DEFAULTS = Dimensions()


def build_parser():
    parser = argparse.ArgumentParser(
        description="Generate a banker box die-cut pattern with a separate lid"
    )

    # Box dimensions (kept as text and coerced like the web form)
    parser.add_argument("--width", default=DEFAULTS.width, help="Inside width (default: %(default)s)")
    parser.add_argument("--depth", default=DEFAULTS.depth, help="Inside depth (default: %(default)s)")
    parser.add_argument("--height", default=DEFAULTS.height, help="Inside height (default: %(default)s)")
    parser.add_argument(
        "--lid-height", default=DEFAULTS.lid_height,
        help="Lid wall height (default: %(default)s)",
    )

    # Advanced settings
    parser.add_argument(
        "--thickness", dest="material_thickness", default=DEFAULTS.material_thickness,
        help="Material thickness (default: %(default)s)",
    )
    parser.add_argument(
        "--tab-width", default=DEFAULTS.tab_width,
        help="Width of locking tabs (default: %(default)s)",
    )
    parser.add_argument(
        "--tab-spacing", default=DEFAULTS.tab_spacing,
        help="Spacing between tabs (default: %(default)s)",
    )
    parser.add_argument(
        "--clearance", default=DEFAULTS.clearance,
        help="Assembly clearance (default: %(default)s)",
    )

    # Display / export options
    parser.add_argument("--no-box", action="store_true", help="Omit the bottom box net")
    parser.add_argument("--no-lid", action="store_true", help="Omit the lid net")
    parser.add_argument(
        "--mode", type=str, default=StyleMode.SCREEN.value,
        choices=[m.value for m in StyleMode],
        help="screen = red fold lines, laser = dashed fold lines (default: screen)",
    )
    parser.add_argument(
        "--padding", type=float, default=DEFAULT_PADDING,
        help="Sheet border and gap between nets (default: %(default)s)",
    )
    parser.add_argument("--dxf", action="store_true", help="Also export a DXF file")
    parser.add_argument("--no-summary", action="store_true", help="Skip summary.json")
    parser.add_argument("--output", type=str, default="output", help="Output directory")
    parser.add_argument(
        "--strict", action="store_true",
        help="Reject non-positive or unparseable dimensions instead of drawing them",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    dims = Dimensions.from_mapping({
        "width": args.width,
        "depth": args.depth,
        "height": args.height,
        "lid_height": args.lid_height,
        "material_thickness": args.material_thickness,
        "tab_width": args.tab_width,
        "tab_spacing": args.tab_spacing,
        "clearance": args.clearance,
    })

    config = PipelineConfig(
        output_dir=args.output,
        layout=LayoutConfig(
            show_box=not args.no_box,
            show_lid=not args.no_lid,
            style_mode=StyleMode(args.mode),
            padding=args.padding,
        ),
        export_dxf=args.dxf,
        write_summary=not args.no_summary,
        strict=args.strict,
    )

    try:
        result = run_pipeline(dims, config)
    except DimensionError as e:
        print(f"Error: {e}")
        return 2
    except ExportError as e:
        print(f"Error: {e}")
        return 1

    print("\nPattern Size Summary")
    for line in pattern_summary(dims).lines():
        print(f"  {line}")
    print(f"  Sheet: {result.layout.width:.1f} x {result.layout.height:.1f} mm")

    for shell, steps in result.assembly.items():
        print(f"\n{shell.capitalize()} assembly")
        for line in format_steps(steps):
            print(f"  {line}")

    if result.svg_path:
        print(f"\nSVG: {result.svg_path}")
    if result.dxf_path:
        print(f"DXF: {result.dxf_path}")
    if result.summary_path:
        print(f"Summary: {result.summary_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
