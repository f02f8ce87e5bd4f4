"""Command line entry point: lay out a YAML layout and print the frames."""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from .core.view import View
from .errors import KeepLayoutError
from .layout.loader import LayoutLoader


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="keeplayout",
        description="Keep Layout - solve a YAML view layout and print the frames",
    )
    parser.add_argument("layout", type=Path, help="Path to the layout YAML file")
    parser.add_argument(
        "--format",
        choices=("tree", "yaml"),
        default="tree",
        help="Output format (default: tree)",
    )
    parser.add_argument(
        "--global",
        dest="global_frames",
        action="store_true",
        help="Print frames in root coordinates instead of superview coordinates",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Log constraint and solver activity (-vv for debug)",
    )
    return parser.parse_args(argv)


def _frame_of(view: View, global_frames: bool) -> list[float]:
    frame = view.global_frame() if global_frames else view.frame
    # Adding 0.0 turns -0.0 into 0.0
    return [round(v, 3) + 0.0 for v in (frame.x, frame.y, frame.width, frame.height)]


def format_tree(root: View, global_frames: bool = False) -> str:
    """Render the hierarchy as an indented list of views and frames."""
    lines = []
    for view in root.iter_views():
        indent = "  " * view.depth
        x, y, width, height = _frame_of(view, global_frames)
        constraints = f" [{len(view.constraints)} constraints]" if view.constraints else ""
        lines.append(f"{indent}- {view.name}: x={x:g} y={y:g} w={width:g} h={height:g}{constraints}")
    return "\n".join(lines)


def format_yaml(root: View, global_frames: bool = False) -> str:
    frames = {view.name: _frame_of(view, global_frames) for view in root.iter_views()}
    return yaml.safe_dump({"name": root.name, "frames": frames}, sort_keys=False)


def main(argv: list[str] | None = None) -> int:
    """Run the keeplayout tool."""
    args = parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        root = LayoutLoader().load(args.layout)
        root.layout_if_needed()
    except (KeepLayoutError, ValueError, OSError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.format == "yaml":
        print(format_yaml(root, args.global_frames), end="")
    else:
        print(f"Layout '{root.name}' ({len(list(root.iter_views()))} views):")
        print(format_tree(root, args.global_frames))
    return 0


if __name__ == "__main__":
    sys.exit(main())
