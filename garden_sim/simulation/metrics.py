"""Data collection, outcome counters, and export."""

from __future__ import annotations

import csv
import os
from dataclasses import dataclass, field
from typing import Optional

from garden_sim.world.plants import PlantSize, Species, Stage


@dataclass
class GardenSnapshot:
    """A snapshot of garden state at one instant of model time."""

    time_ms: int = 0
    weather: str = "sunny"
    bee_state: str = "hidden"
    plants_by_species: dict[str, int] = field(default_factory=dict)
    sprouts: int = 0
    grown: int = 0
    empty_plots: int = 0
    fertilized_plots: int = 0
    harvested_total: int = 0


class MetricsCollector:
    """Counts simulation outcomes and keeps a time series of snapshots."""

    def __init__(self) -> None:
        self.snapshots: list[GardenSnapshot] = []
        self.pollinations: dict[str, int] = {}
        self.offspring: dict[str, int] = {"hybrid": 0, "inbreeding": 0, "normal": 0}
        self.harvests: dict[str, int] = {size.value: 0 for size in PlantSize}
        self.rejections: dict[str, int] = {}

    def record_pollination(self, source: str) -> None:
        self.pollinations[source] = self.pollinations.get(source, 0) + 1

    def record_offspring(self, label: str) -> None:
        self.offspring[label] = self.offspring.get(label, 0) + 1

    def record_harvest(self, size: PlantSize) -> None:
        self.harvests[size.value] += 1

    def record_rejection(self, reason: str) -> None:
        self.rejections[reason] = self.rejections.get(reason, 0) + 1

    @property
    def total_offspring(self) -> int:
        return sum(self.offspring.values())

    def rate(self, label: str) -> float:
        """Share of offspring with a given genetics outcome."""
        return self.offspring.get(label, 0) / max(1, self.total_offspring)

    def collect(
        self,
        time_ms: int,
        grid: "GardenGrid",  # noqa: F821
        inventory: "Inventory",  # noqa: F821
        weather: str,
        bee_state: str,
    ) -> GardenSnapshot:
        """Store a snapshot of the current garden."""
        by_species = {s.value: 0 for s in Species}
        sprouts = grown = 0
        for plot in grid:
            if plot.plant is None:
                continue
            by_species[plot.plant.species.value] += 1
            if plot.plant.stage == Stage.SPROUT:
                sprouts += 1
            else:
                grown += 1

        snapshot = GardenSnapshot(
            time_ms=time_ms,
            weather=weather,
            bee_state=bee_state,
            plants_by_species=by_species,
            sprouts=sprouts,
            grown=grown,
            empty_plots=len(grid.empty_plot_ids()),
            fertilized_plots=sum(1 for p in grid if p.has_fertilizer),
            harvested_total=inventory.total(),
        )
        self.snapshots.append(snapshot)
        return snapshot

    def export_csv(self, filepath: str) -> None:
        """Export all snapshots to CSV."""
        os.makedirs(os.path.dirname(filepath) if os.path.dirname(filepath) else ".", exist_ok=True)
        species = [s.value for s in Species]
        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(
                ["time_ms", "weather", "bee_state", "sprouts", "grown", "empty",
                 "fertilized", "harvested"] + species
            )
            for s in self.snapshots:
                writer.writerow(
                    [s.time_ms, s.weather, s.bee_state, s.sprouts, s.grown,
                     s.empty_plots, s.fertilized_plots, s.harvested_total]
                    + [s.plants_by_species.get(name, 0) for name in species]
                )

    def summary_report(self, start_ms: int = 0, end_ms: Optional[int] = None) -> str:
        """Generate a human-readable summary of the session."""
        relevant = [
            s for s in self.snapshots
            if s.time_ms >= start_ms and (end_ms is None or s.time_ms <= end_ms)
        ]

        lines = ["=== Garden Summary ==="]
        if relevant:
            first, last = relevant[0], relevant[-1]
            lines.append(
                f"Window: {first.time_ms / 1000:.1f}s to {last.time_ms / 1000:.1f}s "
                f"({len(relevant)} snapshots)"
            )
            lines.append(f"Plants: {first.sprouts + first.grown} -> {last.sprouts + last.grown}")
            lines.append(f"Harvested: {last.harvested_total}")

        lines.append("")
        lines.append("Pollinations:")
        if self.pollinations:
            for source, count in sorted(self.pollinations.items(), key=lambda x: -x[1]):
                lines.append(f"  {source}: {count}")
        else:
            lines.append("  none")

        lines.append("")
        lines.append(f"Offspring: {self.total_offspring}")
        for label in ("hybrid", "inbreeding", "normal"):
            lines.append(f"  {label}: {self.offspring.get(label, 0)} ({self.rate(label):.0%})")

        lines.append("")
        lines.append("Harvest sizes:")
        for size, count in self.harvests.items():
            lines.append(f"  {size}: {count}")

        if self.rejections:
            lines.append("")
            lines.append("Rejected attempts:")
            for reason, count in sorted(self.rejections.items()):
                lines.append(f"  {reason}: {count}")

        return "\n".join(lines)
