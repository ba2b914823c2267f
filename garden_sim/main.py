"""Entry point for the garden pollination simulation."""

from __future__ import annotations

import argparse
import os
import time

from garden_sim.core.config import DEMO_DURATION_MS, DEMO_WEATHER_INTERVAL_MS, SNAPSHOT_INTERVAL_MS


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Garden Genetics & Pollination Simulation",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility")
    parser.add_argument("--duration", type=float, default=DEMO_DURATION_MS / 1000,
                        help="Seconds of model time to simulate")
    parser.add_argument("--weather-every", type=float, default=DEMO_WEATHER_INTERVAL_MS / 1000,
                        help="Seconds between scripted weather changes")
    parser.add_argument("--auto-weather", type=float, default=None,
                        help="Also advance weather on its own every N seconds")
    parser.add_argument("--verbosity", type=int, default=1, choices=[0, 1, 2, 3], help="Log verbosity level")
    parser.add_argument("--output-dir", type=str, default="results", help="Output directory for results")
    parser.add_argument("--log-file", type=str, default=None, help="Path to log file")
    parser.add_argument("--no-plots", action="store_true", help="Skip PNG reports")

    args = parser.parse_args()

    # Import here to allow --help without loading everything
    from garden_sim.simulation.engine import GardenEngine
    from garden_sim.simulation.scenario import run_demo_session
    from garden_sim.viz.logger import SimLogger

    print("=== Garden Genetics & Pollination Simulation ===")
    print(f"Seed: {args.seed} | Duration: {args.duration:.0f}s | Output: {args.output_dir}")
    print()

    logger = SimLogger(
        verbosity=args.verbosity,
        log_file=args.log_file or os.path.join(args.output_dir, "simulation.log"),
        stdout=(args.verbosity > 0),
    )
    auto_weather_ms = int(args.auto_weather * 1000) if args.auto_weather else None
    engine = GardenEngine(
        seed=args.seed,
        auto_weather_ms=auto_weather_ms,
        snapshot_interval_ms=SNAPSHOT_INTERVAL_MS,
        logger=logger,
    )

    t0 = time.time()
    try:
        run_demo_session(
            engine,
            duration_ms=int(args.duration * 1000),
            weather_interval_ms=int(args.weather_every * 1000),
        )
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user")
    elapsed = time.time() - t0
    print(f"\nSimulated {engine.now / 1000:.0f}s of garden time in {elapsed:.2f}s")

    # Export results
    os.makedirs(args.output_dir, exist_ok=True)
    csv_path = os.path.join(args.output_dir, "metrics.csv")
    engine.metrics.export_csv(csv_path)
    print(f"Metrics exported to {csv_path}")

    if not args.no_plots:
        try:
            from garden_sim.viz.dashboard import Dashboard
            for path in Dashboard.comprehensive_report(engine.metrics, args.output_dir):
                print(f"Report saved to {path}")
        except Exception as e:
            print(f"Could not generate plots: {e}")

    print()
    print(engine.metrics.summary_report())
    print()
    print(f"Notifications: {len(engine.notifications.history)} "
          f"({engine.notifications.unread_count} unread)")

    engine.logger.export_json(os.path.join(args.output_dir, "events.json"))
    engine.logger.close()

    print(f"\nAll results saved to {args.output_dir}/")


if __name__ == "__main__":
    main()
