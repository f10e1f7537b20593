"""
Command-line interface for teastri.
"""

import argparse
import json
import logging
import sys
from typing import Dict, List

from . import config
from .colors import Colors
from .report import ChartExplorer


class ColoredFormatter(logging.Formatter):
    """Bare messages at INFO, level-prefixed otherwise."""

    def format(self, record):
        if record.levelno == logging.INFO:
            return record.getMessage()
        return f"{record.levelname}: {record.getMessage()}"


def setup_logging(quiet: bool = False) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(ColoredFormatter())
    logger = logging.getLogger("teastri")
    logger.handlers = [handler]
    logger.setLevel(logging.WARNING if quiet else logging.INFO)
    logger.propagate = False


def parse_weights(items: List[str]) -> Dict[str, float]:
    """Parse NAME=WEIGHT arguments, keeping their order."""
    weights: Dict[str, float] = {}
    for item in items:
        name, sep, value = item.rpartition("=")
        if not sep or not name:
            raise ValueError(f"Expected NAME=WEIGHT, got {item!r}")
        weights[name.strip()] = float(value)
    return weights


def main(argv=None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="teastri: TEAS solubility triangle toolkit",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s locate 0.5 -0.2                 # Report for a plane point
  %(prog)s describe 50 30 20               # Report for fd/fp/fh
  %(prog)s nearest 50 30 20 -k 3           # Closest solvents
  %(prog)s region "Paraloid B72"           # Polymer reach region
  %(prog)s mix Acetone=40 Ethanol=60       # Blend aggregate + miscibility
        """,
    )
    parser.add_argument(
        "--data-dir",
        "-d",
        default=str(config.DATA_DIR),
        help="Directory holding the catalog and compatibility files",
    )
    parser.add_argument("--json", "-j", action="store_true", help="Output as JSON")
    parser.add_argument("--no-color", action="store_true", help="Disable colors")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only warnings")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    locate_parser = subparsers.add_parser("locate", help="Report for a plane point")
    locate_parser.add_argument("x", type=float)
    locate_parser.add_argument("y", type=float)

    describe_parser = subparsers.add_parser(
        "describe", help="Report for a fraction triple"
    )
    for name in ("fd", "fp", "fh"):
        describe_parser.add_argument(name, type=float)

    nearest_parser = subparsers.add_parser("nearest", help="Nearest solvents")
    for name in ("fd", "fp", "fh"):
        nearest_parser.add_argument(name, type=float)
    nearest_parser.add_argument(
        "-k", type=int, default=config.NEAREST_COUNT, help="Number of solvents"
    )

    region_parser = subparsers.add_parser("region", help="Polymer reach regions")
    region_parser.add_argument("names", nargs="*", help="Polymer names (default: all)")

    mix_parser = subparsers.add_parser("mix", help="Aggregate a solvent blend")
    mix_parser.add_argument("components", nargs="+", metavar="NAME=WEIGHT")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.no_color or args.json:
        Colors.disable()
    setup_logging(quiet=args.quiet or args.json)

    try:
        explorer = ChartExplorer.from_directory(args.data_dir)
        if args.command == "locate":
            locate_point(explorer, args)
        elif args.command == "describe":
            describe_point(explorer, args)
        elif args.command == "nearest":
            nearest_solvents(explorer, args)
        elif args.command == "region":
            show_regions(explorer, args)
        elif args.command == "mix":
            show_mixture(explorer, args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def locate_point(explorer: ChartExplorer, args) -> None:
    """Report on a plane point."""
    report = explorer.locate(args.x, args.y)
    if report is None:
        raise ValueError(f"Point ({args.x}, {args.y}) is outside the triangle")
    print(json.dumps(report.to_dict(), indent=2) if args.json else report.summary())


def describe_point(explorer: ChartExplorer, args) -> None:
    """Report on a fraction triple."""
    report = explorer.describe((args.fd, args.fp, args.fh))
    print(json.dumps(report.to_dict(), indent=2) if args.json else report.summary())


def nearest_solvents(explorer: ChartExplorer, args) -> None:
    """List the solvents closest to a fraction triple."""
    neighbors = explorer.nearest((args.fd, args.fp, args.fh), args.k)
    if args.json:
        print(json.dumps([n.to_dict() for n in neighbors], indent=2))
        return
    C = Colors
    for i, n in enumerate(neighbors, 1):
        f = n.fractions
        color = config.SOLVENT_COLORS[(i - 1) % len(config.SOLVENT_COLORS)]
        print(
            f"{i}. {C.swatch(color)} {n.name:<28} fd={f.fd:.1f} fp={f.fp:.1f} fh={f.fh:.1f}  Δ={n.distance:.1f}"
        )


def show_regions(explorer: ChartExplorer, args) -> None:
    """Print polymer reach regions."""
    regions = explorer.polymer_regions(args.names or None)
    if args.json:
        print(json.dumps([r.to_dict() for r in regions], indent=2))
        return
    C = Colors
    for i, region in enumerate(regions):
        color = config.POLYMER_COLORS[i % len(config.POLYMER_COLORS)]
        print(
            f"{C.swatch(color)} {C.BOLD}{region.name}{C.RESET}  "
            f"{len(region.hull)} vertices, area {region.area:.3f}, "
            f"centre ({region.center.x:.3f}, {region.center.y:.3f})"
        )


def show_mixture(explorer: ChartExplorer, args) -> None:
    """Aggregate a blend and report miscibility."""
    report = explorer.mix(parse_weights(args.components))
    print(json.dumps(report.to_dict(), indent=2) if args.json else report.summary())


if __name__ == "__main__":
    main()
