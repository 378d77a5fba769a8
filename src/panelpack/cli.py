"""
Command-line interface: lay out circles in a panel and print or plot the result.
"""

import argparse
import json
import sys
from typing import List, Optional

from .config import (
    DEFAULT_CLEARANCE,
    DEFAULT_DIAMETER,
    DEFAULT_HEIGHT,
    DEFAULT_LATTICE_ANGLE,
    DEFAULT_WIDTH,
    UNIT_LABEL,
    ConfigurationError,
    PackingConfig,
    PackingInputs,
    PackingPattern,
)
from .packer import CirclePacker


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parses command-line arguments.

    Returns:
        Parsed arguments holding panel dimensions, pattern options and output choices.
    """
    parser = argparse.ArgumentParser(
        prog="panelpack",
        description="Lay out equal circles on a rectangular or triangular lattice inside a panel.",
    )
    parser.add_argument("--diameter", type=float, default=DEFAULT_DIAMETER, help="circle diameter.")
    parser.add_argument("--clearance", type=float, default=DEFAULT_CLEARANCE, help="minimum gap between circles.")
    parser.add_argument("--width", type=float, default=DEFAULT_WIDTH, help="panel width.")
    parser.add_argument("--height", type=float, default=DEFAULT_HEIGHT, help="panel height.")
    parser.add_argument(
        "--pattern",
        choices=[p.value for p in PackingPattern],
        default=PackingPattern.TRIANGULAR.value,
        help="lattice pattern.",
    )
    parser.add_argument(
        "--spread",
        action="store_true",
        help="stretch the layout so the outer circles touch the panel edges.",
    )
    parser.add_argument(
        "--angle",
        type=float,
        default=None,
        help=f"triangular lattice angle in degrees, clamped to [30, 60] (default {DEFAULT_LATTICE_ANGLE:g}).",
    )
    parser.add_argument(
        "--optimize",
        action="store_true",
        help="search nearby row counts for the triangular layout with most circles (always spread).",
    )
    parser.add_argument("--rows", type=int, default=None, help="force the number of triangular rows.")
    parser.add_argument("--unit", type=str, default=UNIT_LABEL, help="unit label used in output.")
    parser.add_argument("--json", action="store_true", help="print the result as JSON.")
    parser.add_argument("--plot", type=str, default=None, help="path of an image file to render the layout to.")
    parser.add_argument("--show", action="store_true", help="display the layout in a window.")
    parser.add_argument("--verbose", action="store_true", help="print progress while packing.")

    args = parser.parse_args(argv)

    rectangular = args.pattern == PackingPattern.RECTANGULAR.value
    if rectangular:
        for flag, value in (("--optimize", args.optimize), ("--angle", args.angle), ("--rows", args.rows)):
            if value is not None and value is not False:
                parser.error(f"{flag} applies to the triangular pattern only")
    if args.optimize:
        if args.rows is not None:
            parser.error("--rows cannot be combined with --optimize")
        if args.angle is not None:
            parser.error("--angle cannot be combined with --optimize")
    if args.angle is None:
        args.angle = DEFAULT_LATTICE_ANGLE

    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    try:
        inputs = PackingInputs(
            diameter=args.diameter,
            clearance=args.clearance,
            width=args.width,
            height=args.height,
        )
        config = PackingConfig(
            pattern=PackingPattern(args.pattern),
            spread=args.spread,
            angle=args.angle,
            optimize_angle=args.optimize,
            forced_rows=args.rows,
            verbose=args.verbose,
        )
        result = CirclePacker(inputs, config).pack()
    except ConfigurationError as exc:
        print(f"panelpack: error: {exc}", file=sys.stderr)
        return 2

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(result.summary(unit=args.unit))

    if args.plot or args.show:
        from .visualization import save_packing_plot, show_packing

        if args.plot:
            save_packing_plot(result, inputs, args.plot, unit=args.unit)
        if args.show:
            show_packing(result, inputs, unit=args.unit)

    return 0


if __name__ == "__main__":
    sys.exit(main())
