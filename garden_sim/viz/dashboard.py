"""Static matplotlib reports for a finished garden session."""

from __future__ import annotations

import os

import matplotlib
matplotlib.use("Agg")  # Reports are written to disk, no window
import matplotlib.pyplot as plt


class Dashboard:
    """Renders the metrics of a session to PNG files."""

    @staticmethod
    def comprehensive_report(metrics: "MetricsCollector", output_dir: str) -> list[str]:  # noqa: F821
        """Save population and outcome plots. Returns the written paths."""
        os.makedirs(output_dir, exist_ok=True)
        written: list[str] = []

        snapshots = metrics.snapshots
        if snapshots:
            times = [s.time_ms / 1000 for s in snapshots]
            fig, ax = plt.subplots(figsize=(10, 5))
            species = sorted(snapshots[-1].plants_by_species.keys())
            for name in species:
                ax.plot(times, [s.plants_by_species.get(name, 0) for s in snapshots],
                        linewidth=1.5, label=name)
            ax.plot(times, [s.empty_plots for s in snapshots], "k--", alpha=0.5, label="empty")
            ax.set_title("Plants by Species")
            ax.set_xlabel("Model time (s)")
            ax.set_ylabel("Plots")
            ax.legend(fontsize=8)
            ax.grid(True, alpha=0.3)
            path = os.path.join(output_dir, "plants_by_species.png")
            fig.savefig(path, dpi=120, bbox_inches="tight")
            plt.close(fig)
            written.append(path)

        fig, axes = plt.subplots(1, 3, figsize=(15, 4))
        _bar(axes[0], metrics.offspring, "Offspring Genetics", ["#2ecc71", "#e74c3c", "#95a5a6"])
        _bar(axes[1], metrics.pollinations, "Pollinations by Source", None)
        _bar(axes[2], metrics.harvests, "Harvest Sizes", ["#f1c40f", "#3498db", "#9b59b6"])
        plt.tight_layout()
        path = os.path.join(output_dir, "outcomes.png")
        fig.savefig(path, dpi=120, bbox_inches="tight")
        plt.close(fig)
        written.append(path)

        return written


def _bar(ax, counts: dict[str, int], title: str, colors) -> None:
    labels = list(counts.keys())
    values = [counts[k] for k in labels]
    if labels:
        ax.bar(labels, values, color=colors[:len(labels)] if colors else None)
    ax.set_title(title)
    ax.grid(True, axis="y", alpha=0.3)
