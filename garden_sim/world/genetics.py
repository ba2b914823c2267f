"""Offspring trait resolution: inbreeding depression and hybrid vigor."""

from __future__ import annotations

from dataclasses import dataclass

from garden_sim.world.grid import Plot
from garden_sim.world.plants import Plant, PlantSize


@dataclass(frozen=True)
class GeneticsOutcome:
    """Result of crossing two parents."""

    is_inbreeding: bool
    is_hybrid: bool

    @property
    def label(self) -> str:
        if self.is_hybrid:
            return "hybrid"
        if self.is_inbreeding:
            return "inbreeding"
        return "normal"


def are_related(parent_a: Plant, parent_b: Plant) -> bool:
    """Self, or one plant is a recorded parent of the other."""
    return (
        parent_a.instance_id == parent_b.instance_id
        or parent_a.is_parent_of(parent_b)
        or parent_b.is_parent_of(parent_a)
    )


def resolve_offspring_genetics(parent_a: Plant, parent_b: Plant) -> GeneticsOutcome:
    """
    Compute offspring genetics from two parents.

    Inbreeding is decided first from lineage. Hybrid vigor needs two small
    parents that are not related; two small relatives stay inbred.
    """
    is_inbreeding = are_related(parent_a, parent_b)
    is_hybrid = parent_a.is_small and parent_b.is_small and not is_inbreeding
    return GeneticsOutcome(is_inbreeding=is_inbreeding, is_hybrid=is_hybrid)


def harvest_size(plant: Plant, plot: Plot) -> PlantSize:
    """Size class of a plant harvested from `plot`."""
    if plant.is_hybrid or plot.has_fertilizer or plant.is_boosted:
        return PlantSize.LARGE
    if plant.is_small:
        return PlantSize.SMALL
    return PlantSize.NORMAL
