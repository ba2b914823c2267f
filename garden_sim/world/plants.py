"""Plant species, plant instances, and the factory that mints them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from numpy.random import Generator

from garden_sim.core.config import INSTANCE_ID_ALPHABET, INSTANCE_ID_LENGTH


class Species(str, Enum):
    PUMPKIN = "pumpkin"
    CORN = "corn"
    SUNFLOWER = "sunflower"
    APPLE = "apple"
    BEAN = "bean"


class Stage(str, Enum):
    SPROUT = "sprout"
    GROWN = "grown"


class PlantSize(str, Enum):
    SMALL = "small"
    NORMAL = "normal"
    LARGE = "large"


# Display metadata for the presentation layer
SPECIES_INFO: dict[Species, dict[str, str]] = {
    Species.PUMPKIN: {"label": "Abóbora", "phenotype": "🎃", "pollinator": "bees"},
    Species.CORN: {"label": "Milho", "phenotype": "🌽", "pollinator": "wind"},
    Species.SUNFLOWER: {"label": "Girassol", "phenotype": "🌻", "pollinator": "bees"},
    Species.APPLE: {"label": "Maçã", "phenotype": "🍎", "pollinator": "bees"},
    Species.BEAN: {"label": "Feijão", "phenotype": "🫘", "pollinator": "self"},
}


@dataclass
class Plant:
    """A single plant living in exactly one plot."""

    instance_id: str
    species: Species
    stage: Stage = Stage.SPROUT
    parent_ids: tuple[str, ...] = ()
    is_small: bool = False
    is_hybrid: bool = False
    is_boosted: bool = False

    @property
    def is_grown(self) -> bool:
        return self.stage == Stage.GROWN

    @property
    def phenotype(self) -> str:
        if self.stage == Stage.SPROUT:
            return "🌱"
        return SPECIES_INFO[self.species]["phenotype"]

    def is_parent_of(self, other: "Plant") -> bool:
        return self.instance_id in other.parent_ids

    def to_dict(self) -> dict:
        return {
            "instance_id": self.instance_id,
            "species": self.species.value,
            "stage": self.stage.value,
            "parent_ids": list(self.parent_ids),
            "is_small": self.is_small,
            "is_hybrid": self.is_hybrid,
            "is_boosted": self.is_boosted,
        }


class PlantFactory:
    """Creates plants with fresh, never-reused instance ids."""

    def __init__(self, rng: Generator) -> None:
        self._rng = rng
        self._issued: set[str] = set()

    def create_plant(
        self,
        species: Species,
        parent_ids: Optional[list[str]] = None,
        is_small: bool = False,
        is_hybrid: bool = False,
    ) -> Plant:
        """Create a new Sprout."""
        return Plant(
            instance_id=self._fresh_id(),
            species=Species(species),
            parent_ids=tuple(parent_ids or ()),
            is_small=is_small,
            is_hybrid=is_hybrid,
        )

    def _fresh_id(self) -> str:
        alphabet = INSTANCE_ID_ALPHABET
        while True:
            idx = self._rng.integers(0, len(alphabet), size=INSTANCE_ID_LENGTH)
            candidate = "".join(alphabet[i] for i in idx)
            if candidate not in self._issued:
                self._issued.add(candidate)
                return candidate
