"""Pollinator presence: Hidden -> Visible -> Dying -> Hidden."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class BeeState(str, Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"
    DYING = "dying"


class BeeColony:
    """Derives bee visibility from garden conditions.

    Pesticide only kills bees that are present; Hidden bees stay Hidden while
    it is on the soil. Dying is left only through `finish_dying()`.
    """

    def __init__(self) -> None:
        self.state: BeeState = BeeState.HIDDEN
        self.manual_mode: bool = False

    @property
    def is_visible(self) -> bool:
        return self.state == BeeState.VISIBLE

    def toggle_manual(self) -> bool:
        self.manual_mode = not self.manual_mode
        return self.manual_mode

    def evaluate(
        self, has_pesticide: bool, has_grown_sunflower: bool
    ) -> Optional[tuple[BeeState, BeeState]]:
        """Apply the transition rules. Returns (old, new) if the state changed."""
        old = self.state
        if has_pesticide:
            if old == BeeState.VISIBLE:
                self.state = BeeState.DYING
        elif has_grown_sunflower or self.manual_mode:
            if old == BeeState.HIDDEN:
                self.state = BeeState.VISIBLE
        elif old == BeeState.VISIBLE:
            self.state = BeeState.HIDDEN

        if self.state != old:
            return old, self.state
        return None

    def finish_dying(self) -> bool:
        """End of the dying animation. True if the colony was dying."""
        if self.state != BeeState.DYING:
            return False
        self.state = BeeState.HIDDEN
        return True
