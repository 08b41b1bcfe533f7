"""
Command line entry point: ``python -m hyperdice``.

Opens the interactive viewer, or with ``--summary`` prints what one pass of
the engine produces and exits.
"""
import argparse
import logging
import sys
from collections import Counter

from hyperdice.colors import parse_color
from hyperdice.config import DEFAULT_COLOR
from hyperdice.die import Die4D
from hyperdice.logging_config import setup_logging
from hyperdice.polytopes import PolytopeKind


def kind_arg(value):
    try:
        return PolytopeKind.parse(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def color_arg(value):
    try:
        return parse_color(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser():
    parser = argparse.ArgumentParser(prog="hyperdice", description="Interactive 4D dice viewer")
    parser.add_argument("--kind", type=kind_arg, default=PolytopeKind.TESSERACT,
                        help="5-cell, 8-cell, 16-cell or 24-cell (default: 8-cell)")
    parser.add_argument("--color", type=color_arg, default=DEFAULT_COLOR,
                        help="die color, any matplotlib color spec (default: crimson)")
    parser.add_argument("--wireframe", action="store_true", help="start in wireframe mode")
    parser.add_argument("--auto-spin", action="store_true", help="start with random auto-spin")
    parser.add_argument("--rotate", type=float, nargs=3, metavar=("XW", "YW", "ZW"),
                        default=(0.0, 0.0, 0.0), help="initial 4D angles in radians")
    parser.add_argument("--summary", action="store_true",
                        help="print geometry statistics instead of opening a window")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--engine-log-level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="threshold for the per-frame engine logs (default: WARNING)")
    parser.add_argument("--log-file", default=None)
    return parser


def summarize(die, color, wireframe=False):
    primitives = die.create_geometry(color, wireframe=wireframe)
    kinds = Counter(type(p).__name__ for p in primitives)
    lines = [
        repr(die),
        f"vertices: {die.polytope.vertex_count}",
        f"cells: {die.polytope.cell_count} ({die.polytope.cell_shape.name.lower()})",
        f"visible cells: {len(die.scored_cells)}",
        f"W angle: {die.w_angle:+.2f} deg",
    ]
    lines.extend(f"{name}: {count}" for name, count in sorted(kinds.items()))
    return "\n".join(lines)


def main(argv=None):
    args = build_parser().parse_args(argv)
    engine_level = getattr(logging, args.engine_log_level) if args.engine_log_level else None
    logger = setup_logging(getattr(logging, args.log_level), args.log_file, engine_level)

    if args.summary:
        die = Die4D(args.kind)
        die.rotate(*args.rotate)
        print(summarize(die, args.color, wireframe=args.wireframe))
        return 0

    # imported late so --summary works without a display
    from hyperdice.viewer import DiceViewer

    viewer = DiceViewer(args.kind, args.color, wireframe=args.wireframe,
                        auto_spin=args.auto_spin)
    viewer.rotate(args.rotate)
    logger.info("Starting viewer with %s", viewer.die.kind.value)
    viewer.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
