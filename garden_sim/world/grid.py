"""Fixed-size plot grid with 8-neighbor geometry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from garden_sim.core.config import GRID_SIZE, NEIGHBOR_OFFSETS
from garden_sim.world.plants import Plant, Species


@dataclass
class Plot:
    """A single cell in the garden grid."""

    id: int
    plant: Optional[Plant] = None
    is_watered: bool = False
    organic_fertilizer: bool = False
    chemical_fertilizer: bool = False
    green_manure: bool = False

    @property
    def is_empty(self) -> bool:
        return self.plant is None

    @property
    def has_fertilizer(self) -> bool:
        return self.organic_fertilizer or self.chemical_fertilizer or self.green_manure

    def holds(self, instance_id: str) -> bool:
        """True if this plot still holds the plant with `instance_id`."""
        return self.plant is not None and self.plant.instance_id == instance_id

    def reset(self) -> None:
        """Clear the plant and all soil treatments."""
        self.plant = None
        self.is_watered = False
        self.organic_fertilizer = False
        self.chemical_fertilizer = False
        self.green_manure = False

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "plant": self.plant.to_dict() if self.plant else None,
            "is_watered": self.is_watered,
            "organic_fertilizer": self.organic_fertilizer,
            "chemical_fertilizer": self.chemical_fertilizer,
            "green_manure": self.green_manure,
        }


class GardenGrid:
    """Square grid of plots, index = row * size + col."""

    def __init__(self, size: int = GRID_SIZE) -> None:
        self.size = size
        self.plots: list[Plot] = [Plot(id=i) for i in range(size * size)]

    def __len__(self) -> int:
        return len(self.plots)

    def __iter__(self) -> Iterator[Plot]:
        return iter(self.plots)

    def get_plot(self, plot_id: int) -> Plot:
        """Get the plot with `plot_id`."""
        if not 0 <= plot_id < len(self.plots):
            raise IndexError(f"plot id {plot_id} outside 0..{len(self.plots) - 1}")
        return self.plots[plot_id]

    def set_plot(self, plot_id: int, mutation: Callable[[Plot], None]) -> Plot:
        """Apply `mutation` to the current state of a plot and return it."""
        plot = self.get_plot(plot_id)
        mutation(plot)
        return plot

    def coords(self, plot_id: int) -> tuple[int, int]:
        """(row, col) of a plot id."""
        return divmod(plot_id, self.size)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def neighbors8(self, plot_id: int) -> list[int]:
        """Ids at Chebyshev distance 1, in NW, N, NE, W, E, SW, S, SE order."""
        row, col = self.coords(self.get_plot(plot_id).id)
        result: list[int] = []
        for dr, dc in NEIGHBOR_OFFSETS:
            nr, nc = row + dr, col + dc
            if self.in_bounds(nr, nc):
                result.append(nr * self.size + nc)
        return result

    def find_nearest_empty(
        self, center_id: int, exclude: Optional[set[int]] = None
    ) -> Optional[int]:
        """First empty neighbor in scan order, else first empty plot by id."""
        exclude = exclude or set()
        for nid in self.neighbors8(center_id):
            if self.plots[nid].is_empty and nid not in exclude:
                return nid
        for plot in self.plots:
            if plot.is_empty and plot.id not in exclude:
                return plot.id
        return None

    def empty_plot_ids(self) -> list[int]:
        return [p.id for p in self.plots if p.is_empty]

    def grown_plots(self, species: Optional[Species] = None) -> list[Plot]:
        """Plots holding a grown plant, optionally of one species, in id order."""
        return [
            p for p in self.plots
            if p.plant is not None
            and p.plant.is_grown
            and (species is None or p.plant.species == species)
        ]

    def plots_with(self, species: Species) -> list[Plot]:
        """Plots holding any plant of `species`, sprout or grown."""
        return [p for p in self.plots if p.plant is not None and p.plant.species == species]

    def has_pesticide(self) -> bool:
        return any(p.chemical_fertilizer for p in self.plots)

    def has_grown(self, species: Species) -> bool:
        return any(
            p.plant is not None and p.plant.is_grown and p.plant.species == species
            for p in self.plots
        )

    def occupied_plot_ids(self) -> list[int]:
        return [p.id for p in self.plots if not p.is_empty]

    def to_list(self) -> list[dict]:
        return [p.to_dict() for p in self.plots]
