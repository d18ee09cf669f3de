#!/usr/bin/env python3
"""Benchmark the Wave Function Collapse engine on the built-in catalogs."""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path

from tilewave.demo import CATALOGS
from tilewave.wfc.engine import WaveFunctionCollapse
from tilewave.wfc.tiles import TileCatalog

GRID_SIZES: tuple[tuple[int, int], ...] = (
    (10, 10),
    (20, 20),
    (40, 30),
    (60, 60),
)


class WFCBenchmark:
    """Times full runs (restarts included) per catalog and grid size."""

    def __init__(self, iterations: int, catalog: str) -> None:
        self.iterations = iterations
        self.catalog_name = catalog
        # Compiled once and shared read-only by every engine
        self.catalog = TileCatalog(CATALOGS[catalog]())
        self.results: dict[str, dict[str, float]] = {}

    def _run_case(self, width: int, height: int) -> tuple[float, float]:
        """Return (average run time in ms, average restarts) for one size."""
        elapsed_total = 0.0
        restarts_total = 0

        for i in range(self.iterations):
            seed = (width * 1_000_000) + (height * 1_000) + i + 1
            engine = WaveFunctionCollapse(
                width, height, self.catalog, seed, max_restarts=None
            )

            start = time.perf_counter()
            engine.run()
            elapsed_total += time.perf_counter() - start
            restarts_total += engine.restart_count

        return (
            (elapsed_total / self.iterations) * 1000.0,
            restarts_total / self.iterations,
        )

    def run(self) -> None:
        """Run all configured grid-size benchmarks."""
        print(f"WFC Benchmark ({self.catalog_name})")
        print("=" * 42)
        print(f"Iterations per size: {self.iterations}")
        print()
        print(f"{'Size':>12} {'Run (ms)':>14} {'Restarts':>12}")
        print("-" * 42)

        for width, height in GRID_SIZES:
            run_ms, restarts = self._run_case(width, height)

            size_key = f"{width}x{height}"
            self.results[size_key] = {
                "run_ms": run_ms,
                "restarts": restarts,
            }

            print(f"{size_key:>12} {run_ms:14.2f} {restarts:12.2f}")

    def save_results(self, filename: str) -> None:
        """Save benchmark output to a JSON file."""
        with Path(filename).open("w") as f:
            json.dump(self.results, f, indent=2)
        print(f"\nSaved benchmark results to {filename}")

    def compare_with_baseline(self, baseline_file: str) -> None:
        """Compare current run with a saved baseline JSON file."""
        try:
            with Path(baseline_file).open() as f:
                baseline: dict[str, dict[str, float]] = json.load(f)
        except FileNotFoundError:
            print(f"\nBaseline file not found: {baseline_file}")
            return

        print(f"\nComparison vs baseline: {baseline_file}")
        print("=" * 64)

        for size_key, current in self.results.items():
            if size_key not in baseline:
                continue

            print(format_comparison(size_key, current, baseline[size_key]))


def format_comparison(
    size_key: str, current: dict[str, float], baseline: dict[str, float]
) -> str:
    """One comparison line covering run time and restart count.

    Timing is only comparable when the baseline recorded a positive time.
    Restarts are always shown since a seed change or a catalog change shows
    up there first.
    """
    new_ms = current["run_ms"]
    old_ms = baseline.get("run_ms", 0.0)
    if old_ms > 0:
        delta_pct = ((new_ms - old_ms) / old_ms) * 100.0
        speed_ratio = old_ms / new_ms if new_ms > 0 else 0.0
        trend = "faster" if speed_ratio > 1.0 else "slower"
        timing = (
            f"{new_ms:8.2f}ms vs {old_ms:8.2f}ms | {speed_ratio:5.2f}x {trend} "
            f"({delta_pct:+6.1f}%)"
        )
    else:
        timing = f"{new_ms:8.2f}ms (no baseline time)"

    new_restarts = current["restarts"]
    old_restarts = baseline.get("restarts")
    if old_restarts is None:
        restarts = f"restarts {new_restarts:.2f} (no baseline)"
    else:
        restarts = (
            f"restarts {new_restarts:.2f} vs {old_restarts:.2f} "
            f"({new_restarts - old_restarts:+.2f})"
        )

    return f"{size_key:>12}: {timing} | {restarts}"


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Benchmark the WFC engine")
    parser.add_argument(
        "--iterations",
        type=int,
        default=5,
        help="Number of runs per grid size (default: 5)",
    )
    parser.add_argument(
        "--catalog",
        choices=sorted(CATALOGS),
        default="pipes",
        help="Built-in tile catalog (default: pipes)",
    )
    parser.add_argument("--save", type=str, help="Save current results to JSON")
    parser.add_argument(
        "--compare",
        type=str,
        help="Compare current results against baseline JSON",
    )
    args = parser.parse_args(argv)

    benchmark = WFCBenchmark(iterations=args.iterations, catalog=args.catalog)
    benchmark.run()

    if args.save:
        benchmark.save_results(args.save)

    if args.compare:
        benchmark.compare_with_baseline(args.compare)


if __name__ == "__main__":
    main()
