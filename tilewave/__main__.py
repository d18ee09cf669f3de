"""Command-line demo: collapse a built-in catalog and print the result."""

from __future__ import annotations

import argparse
import logging
import sys

from tilewave import config
from tilewave.demo import CATALOGS
from tilewave.wfc.engine import WaveFunctionCollapse
from tilewave.wfc.errors import GenerationFailed, WFCError
from tilewave.wfc.render import render


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tilewave", description="Wave Function Collapse tile grid demo"
    )
    parser.add_argument("--width", type=int, default=config.DEMO_WIDTH)
    parser.add_argument("--height", type=int, default=config.DEMO_HEIGHT)
    parser.add_argument(
        "--catalog",
        choices=sorted(CATALOGS),
        default="pipes",
        help="Built-in tile catalog (default: pipes)",
    )
    parser.add_argument("--seed", type=int, default=config.RANDOM_SEED)
    parser.add_argument("--wrap", action="store_true", help="Wrap around the edges")
    restarts = parser.add_mutually_exclusive_group()
    restarts.add_argument(
        "--max-restarts",
        type=int,
        default=config.MAX_RESTARTS,
        help=f"Give up after this many restarts (default: {config.MAX_RESTARTS})",
    )
    restarts.add_argument(
        "--no-restart-limit",
        dest="max_restarts",
        action="store_const",
        const=None,
        help="Keep restarting until the grid collapses",
    )
    parser.add_argument(
        "--time-budget",
        type=float,
        default=config.TIME_BUDGET_SECONDS,
        help="Give up after this many seconds",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=config.LOG_FORMAT,
    )

    try:
        engine = WaveFunctionCollapse(
            args.width,
            args.height,
            CATALOGS[args.catalog](),
            args.seed,
            wrap=args.wrap,
            max_restarts=args.max_restarts,
            time_budget=args.time_budget,
        )
        grid = engine.run()
    except GenerationFailed as e:
        print(f"Generation failed after {e.restarts} restart(s): {e}", file=sys.stderr)
        return 1
    except WFCError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    print(render(grid))
    print(f"seed={engine.seed} restarts={engine.restart_count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
