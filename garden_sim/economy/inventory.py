"""Harvest inventory: species -> size class -> count."""

from __future__ import annotations

from dataclasses import dataclass, field

from garden_sim.world.plants import PlantSize, Species


@dataclass
class HarvestRecord:
    """Counts for one species."""

    counts: dict[PlantSize, int] = field(
        default_factory=lambda: {size: 0 for size in PlantSize}
    )
    # How many of the counted plants grew under pesticide, per size
    chemical: dict[PlantSize, int] = field(
        default_factory=lambda: {size: 0 for size in PlantSize}
    )

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def chemical_total(self) -> int:
        return sum(self.chemical.values())


class Inventory:
    """Append-only tally of harvested plants."""

    def __init__(self) -> None:
        self.records: dict[Species, HarvestRecord] = {}

    def add(self, species: Species, size: PlantSize, chemical: bool = False) -> None:
        """Count one harvested plant."""
        record = self.records.setdefault(Species(species), HarvestRecord())
        record.counts[size] += 1
        if chemical:
            record.chemical[size] += 1

    def count(self, species: Species, size: PlantSize) -> int:
        record = self.records.get(Species(species))
        return record.counts[size] if record else 0

    def total(self) -> int:
        return sum(r.total for r in self.records.values())

    def is_empty(self) -> bool:
        return self.total() == 0

    def size_totals(self) -> dict[PlantSize, int]:
        totals = {size: 0 for size in PlantSize}
        for record in self.records.values():
            for size, n in record.counts.items():
                totals[size] += n
        return totals

    def to_dict(self) -> dict[str, dict]:
        return {
            species.value: {
                **{size.value: n for size, n in record.counts.items()},
                "chemical": {size.value: n for size, n in record.chemical.items()},
            }
            for species, record in self.records.items()
            if record.total > 0
        }
