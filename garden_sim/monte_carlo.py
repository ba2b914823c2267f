"""Monte Carlo analysis: run N garden sessions with different seeds, aggregate statistics."""

from __future__ import annotations

import csv
import os
import statistics
import time
from dataclasses import dataclass

import numpy as np

from garden_sim.core.config import DEMO_DURATION_MS


@dataclass
class RunResult:
    """Summary of a single garden session."""
    seed: int
    offspring: int
    hybrids: int
    inbred: int
    bee_pollinations: int
    wind_pollinations: int
    self_pollinations: int
    harvest_small: int
    harvest_normal: int
    harvest_large: int
    notifications: int
    elapsed_seconds: float

    @property
    def hybrid_rate(self) -> float:
        return self.hybrids / max(1, self.offspring)

    @property
    def inbreeding_rate(self) -> float:
        return self.inbred / max(1, self.offspring)


def run_single(seed: int, duration_ms: int = DEMO_DURATION_MS) -> RunResult:
    """Run one scripted session and return its summary."""
    from garden_sim.simulation.engine import GardenEngine
    from garden_sim.simulation.scenario import run_demo_session
    from garden_sim.viz.logger import SimLogger

    engine = GardenEngine(seed=seed, logger=SimLogger(verbosity=-1))

    t0 = time.time()
    run_demo_session(engine, duration_ms=duration_ms)
    elapsed = time.time() - t0

    m = engine.metrics
    return RunResult(
        seed=seed,
        offspring=m.total_offspring,
        hybrids=m.offspring.get("hybrid", 0),
        inbred=m.offspring.get("inbreeding", 0),
        bee_pollinations=m.pollinations.get("bee", 0),
        wind_pollinations=m.pollinations.get("wind", 0),
        self_pollinations=m.pollinations.get("self", 0) + m.pollinations.get("bean", 0),
        harvest_small=m.harvests["small"],
        harvest_normal=m.harvests["normal"],
        harvest_large=m.harvests["large"],
        notifications=len(engine.notifications.history),
        elapsed_seconds=elapsed,
    )


def stat_line(label: str, values: list[float], fmt: str = ".1f") -> str:
    if not values:
        return f"  {label}: no data"
    avg = statistics.mean(values)
    med = statistics.median(values)
    std = statistics.stdev(values) if len(values) > 1 else 0
    return (f"  {label:<24s}  mean={avg:{fmt}}  median={med:{fmt}}  std={std:{fmt}}  "
            f"min={min(values):{fmt}}  max={max(values):{fmt}}")


def monte_carlo(
    n_runs: int = 20,
    duration_ms: int = DEMO_DURATION_MS,
    output_dir: str = "results/monte_carlo",
    verbose: bool = True,
) -> list[RunResult]:
    """Run N sessions with generated seeds and report aggregate stats."""
    os.makedirs(output_dir, exist_ok=True)
    rng = np.random.default_rng(0)
    seeds = [int(s) for s in rng.integers(0, 100_000, size=n_runs)]
    results: list[RunResult] = []

    if verbose:
        print("=== Monte Carlo Garden Sessions ===")
        print(f"Runs: {n_runs} | Duration/run: {duration_ms / 1000:.0f}s")
        print()

    for i, seed in enumerate(seeds):
        result = run_single(seed, duration_ms)
        results.append(result)
        if verbose:
            print(
                f"  Run {i+1:>3}/{n_runs} | seed={seed:>5} | "
                f"offspring={result.offspring:>3} | hybrids={result.hybrids:>2} | "
                f"inbred={result.inbred:>2} | {result.elapsed_seconds:.2f}s"
            )

    if verbose:
        print("\nAGGREGATE RESULTS")
        print(stat_line("Offspring", [r.offspring for r in results]))
        print(stat_line("Hybrid rate", [r.hybrid_rate for r in results], ".2f"))
        print(stat_line("Inbreeding rate", [r.inbreeding_rate for r in results], ".2f"))
        print(stat_line("Bee pollinations", [r.bee_pollinations for r in results]))
        print(stat_line("Wind pollinations", [r.wind_pollinations for r in results]))
        print(stat_line("Large harvests", [r.harvest_large for r in results]))

    csv_path = os.path.join(output_dir, "monte_carlo_results.csv")
    with open(csv_path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "seed", "offspring", "hybrids", "inbred", "bee", "wind", "self",
            "small", "normal", "large", "notifications", "elapsed_s",
        ])
        for r in results:
            writer.writerow([
                r.seed, r.offspring, r.hybrids, r.inbred, r.bee_pollinations,
                r.wind_pollinations, r.self_pollinations, r.harvest_small,
                r.harvest_normal, r.harvest_large, r.notifications,
                f"{r.elapsed_seconds:.2f}",
            ])
    if verbose:
        print(f"\nResults exported to {csv_path}")

    return results


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Monte Carlo garden simulation")
    parser.add_argument("--runs", type=int, default=20, help="Number of runs")
    parser.add_argument("--duration", type=float, default=DEMO_DURATION_MS / 1000, help="Seconds per run")
    parser.add_argument("--output-dir", type=str, default="results/monte_carlo")
    args = parser.parse_args()

    monte_carlo(
        n_runs=args.runs,
        duration_ms=int(args.duration * 1000),
        output_dir=args.output_dir,
    )
