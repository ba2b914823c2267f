"""Sprout -> Grown transitions gated by watering."""

from __future__ import annotations

from garden_sim.core.config import GROWTH_DELAY_MS
from garden_sim.simulation.scheduler import ScheduledEvent
from garden_sim.world.plants import Stage


class GrowthScheduler:
    """One pending growth timer per plot at most."""

    def __init__(self, engine: "GardenEngine") -> None:  # noqa: F821
        self._engine = engine
        self._in_flight: dict[int, ScheduledEvent] = {}

    @property
    def in_flight(self) -> set[int]:
        return set(self._in_flight)

    def is_growing(self, plot_id: int) -> bool:
        return plot_id in self._in_flight

    def schedule(self, plot_id: int) -> bool:
        """Start the growth timer for the sprout on `plot_id`. False if not started."""
        if plot_id in self._in_flight:
            return False
        plot = self._engine.grid.get_plot(plot_id)
        if plot.plant is None or plot.plant.stage != Stage.SPROUT:
            return False
        instance_id = plot.plant.instance_id
        self._in_flight[plot_id] = self._engine.scheduler.schedule(
            GROWTH_DELAY_MS,
            lambda: self._complete(plot_id, instance_id),
            label=f"grow:{plot_id}",
        )
        return True

    def water(self, plot_id: int) -> bool:
        """Water a dry sprout and schedule its growth."""
        plot = self._engine.grid.get_plot(plot_id)
        if plot.plant is None or plot.plant.stage != Stage.SPROUT or plot.is_watered:
            return False
        plot.is_watered = True
        self.schedule(plot_id)
        return True

    def rain(self) -> int:
        """Water every plot and schedule every sprout. Returns sprouts scheduled."""
        scheduled = 0
        for plot in self._engine.grid:
            plot.is_watered = True
            if plot.plant is not None and plot.plant.stage == Stage.SPROUT:
                if self.schedule(plot.id):
                    scheduled += 1
        return scheduled

    def cancel(self, plot_id: int) -> None:
        """Drop a pending growth timer, e.g. when the sprout is removed."""
        self._engine.scheduler.cancel(self._in_flight.pop(plot_id, None))

    def _complete(self, plot_id: int, instance_id: str) -> None:
        self._in_flight.pop(plot_id, None)
        engine = self._engine
        plot = engine.grid.get_plot(plot_id)
        if not plot.holds(instance_id) or plot.plant.stage != Stage.SPROUT:
            engine.logger.log(
                engine.logger.GROWTH,
                f"Plot {plot_id}: growth timer expired on a replaced plant, ignored",
                plot_ids=[plot_id],
                time_ms=engine.now,
            )
            return
        plot.plant.stage = Stage.GROWN
        engine.logger.log(
            engine.logger.GROWTH,
            f"Plot {plot_id}: {plot.plant.species.value} is fully grown",
            plot_ids=[plot_id],
            time_ms=engine.now,
        )
        engine.on_plant_grown(plot_id)
