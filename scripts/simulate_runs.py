"""Play a batch of headless sessions and print a summary.

Usage:
    uv run python scripts/simulate_runs.py [--runs 200] [--seed 42] [--max-ticks 2000]
"""

from __future__ import annotations

import argparse
import logging
import time
from collections import Counter

from shaft_crawler.config import GameConfig
from shaft_crawler.sim.runner import BatchRunner


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate shaft descents")
    parser.add_argument("--runs", type=int, default=200, help="Number of sessions")
    parser.add_argument("--seed", type=int, default=42, help="Base seed")
    parser.add_argument("--max-ticks", type=int, default=2000, help="Tick cap per session")
    parser.add_argument("--max-time", type=int, default=900, help="Countdown length in ticks")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    runner = BatchRunner(config=GameConfig(max_time=args.max_time))

    print(f"Running {args.runs:,} sessions...")
    t0 = time.perf_counter()
    results = runner.run_batch(args.runs, base_seed=args.seed, max_ticks=args.max_ticks)
    elapsed = time.perf_counter() - t0
    print(f"Done in {elapsed:.1f}s")

    outcomes = Counter(r.final_result for r in results)
    n = len(results) or 1
    print()
    for outcome in ("victory", "gameover", "timeout"):
        print(f"  {outcome:<10} {outcomes[outcome]:>6}  ({outcomes[outcome] / n:.1%})")
    print()
    print(f"  mean depth     {sum(r.max_depth for r in results) / n:.1f}")
    print(f"  mean level     {sum(r.final_level for r in results) / n:.1f}")
    print(f"  mean kills     {sum(r.mobs_killed for r in results) / n:.1f}")
    print(f"  bosses killed  {sum(r.bosses_killed for r in results)}")
    print(f"  items looted   {sum(r.items_looted for r in results)}")


if __name__ == "__main__":
    main()
