"""Simulation context: owns all garden state and funnels every mutation."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

import numpy as np
from numpy.random import Generator

from garden_sim.core.config import BEE_DEATH_DELAY_MS
from garden_sim.economy.inventory import Inventory
from garden_sim.simulation.events import NotificationLog
from garden_sim.simulation.growth import GrowthScheduler
from garden_sim.simulation.messages import message_for
from garden_sim.simulation.metrics import MetricsCollector
from garden_sim.simulation.pollination import PollinationEngine
from garden_sim.simulation.scheduler import EventScheduler, ScheduledEvent
from garden_sim.viz.logger import SimLogger
from garden_sim.world.bees import BeeColony, BeeState
from garden_sim.world.climate import Climate, Weather
from garden_sim.world.genetics import GeneticsOutcome, harvest_size
from garden_sim.world.grid import GardenGrid, Plot
from garden_sim.world.plants import PlantFactory, Species


class Tool(str, Enum):
    WATERING_CAN = "watering_can"
    ORGANIC_FERTILIZER = "organic_fertilizer"
    PESTICIDE = "pesticide"
    SHOVEL = "shovel"
    POLLINATION_BRUSH = "pollination_brush"


SelectedTool = Union[Species, Tool]


class GardenEngine:
    """Orchestrates the garden simulation.

    User commands (`select_tool`, `click_plot`, `toggle_manual_bees`,
    `advance_weather`) and deferred callbacks are the only writers of state.
    Model time moves only through `advance`.
    """

    def __init__(
        self,
        seed: int = 42,
        rng: Optional[Generator] = None,
        climate: Optional[Climate] = None,
        auto_weather_ms: Optional[int] = None,
        snapshot_interval_ms: Optional[int] = None,
        logger: Optional[SimLogger] = None,
    ) -> None:
        self.rng: Generator = rng if rng is not None else np.random.default_rng(seed)

        # Core systems
        self.scheduler = EventScheduler()
        self.clock = self.scheduler.clock
        self.grid = GardenGrid()
        self.factory = PlantFactory(self.rng)
        self.climate = climate if climate is not None else Climate(self.rng)
        self.bees = BeeColony()

        # Player-facing state
        self.inventory = Inventory()
        self.notifications = NotificationLog()
        self.selected_tool: Optional[SelectedTool] = None

        # Reactions
        self.growth = GrowthScheduler(self)
        self.pollination = PollinationEngine(self)

        # Observability
        self.metrics = MetricsCollector()
        self.logger = logger if logger is not None else SimLogger()

        self._bee_death: Optional[ScheduledEvent] = None
        self._auto_weather: Optional[ScheduledEvent] = None
        if auto_weather_ms:
            self._auto_weather = self.scheduler.schedule_interval(
                auto_weather_ms, self.advance_weather, label="auto_weather"
            )
        if snapshot_interval_ms:
            self.scheduler.schedule_interval(
                snapshot_interval_ms, self.collect_snapshot, label="snapshot"
            )

    @property
    def now(self) -> int:
        return self.clock.now

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------

    def advance(self, delta_ms: int) -> int:
        """Advance model time, firing every deferred action that falls due."""
        fired = self.scheduler.advance(delta_ms)
        self.logger.flush()
        return fired

    def collect_snapshot(self) -> None:
        self.metrics.collect(
            self.now,
            self.grid,
            self.inventory,
            self.climate.current_weather.value,
            self.bees.state.value,
        )

    # ------------------------------------------------------------------
    # User commands
    # ------------------------------------------------------------------

    def select_tool(self, tool: Optional[SelectedTool]) -> Optional[SelectedTool]:
        """Select a seed or tool. Selecting the active one deselects it."""
        if tool is not None and not isinstance(tool, (Species, Tool)):
            tool = _parse_tool(tool)
        if tool == self.selected_tool:
            tool = None
        if self.selected_tool == Tool.POLLINATION_BRUSH and tool != Tool.POLLINATION_BRUSH:
            self.pollination.cancel_manual()
        self.selected_tool = tool
        self.logger.log(
            self.logger.ACTION,
            f"Selected {tool.value if tool else 'nothing'}",
            time_ms=self.now,
        )
        return tool

    def click_plot(self, plot_id: int) -> None:
        """Apply the selected tool to a plot. Unknown combinations are ignored."""
        plot = self.grid.get_plot(plot_id)
        tool = self.selected_tool
        if tool is None:
            return

        if isinstance(tool, Species):
            if plot.is_empty:
                self._plant_seed(plot, tool)
        elif tool == Tool.WATERING_CAN:
            if self.growth.water(plot_id):
                self.logger.log(
                    self.logger.ACTION, f"Watered plot {plot_id}",
                    plot_ids=[plot_id], time_ms=self.now,
                )
        elif tool in (Tool.ORGANIC_FERTILIZER, Tool.PESTICIDE):
            self._fertilize(plot, tool)
        elif tool == Tool.SHOVEL:
            if plot.plant is not None and plot.plant.is_grown:
                self._harvest(plot)
        elif tool == Tool.POLLINATION_BRUSH:
            self.pollination.manual_click(plot_id)

        self.refresh_bees()
        self.logger.flush()

    def toggle_manual_bees(self) -> bool:
        """Switch manual bee mode and re-evaluate the colony."""
        enabled = self.bees.toggle_manual()
        self.logger.log(
            self.logger.BEES,
            f"Manual bee mode {'on' if enabled else 'off'}",
            time_ms=self.now,
        )
        self.refresh_bees()
        self.logger.flush()
        return enabled

    def advance_weather(self) -> Weather:
        """Move the forecast on by one and apply rain and wind edges."""
        transition = self.climate.advance()
        self.logger.log(
            self.logger.WEATHER,
            f"Weather {transition.previous.value} -> {transition.current.value}",
            time_ms=self.now,
        )

        if transition.started_raining:
            scheduled = self.growth.rain()
            self.logger.log(
                self.logger.WEATHER,
                f"Rain watered the garden, {scheduled} sprouts growing",
                time_ms=self.now,
            )
        elif transition.stopped_raining:
            for plot in self.grid:
                plot.is_watered = False

        if transition.started_wind:
            self.pollination.on_wind_started()
        elif transition.stopped_wind:
            self.pollination.on_wind_stopped()

        self.logger.flush()
        return self.climate.current_weather

    # ------------------------------------------------------------------
    # Command handlers
    # ------------------------------------------------------------------

    def _plant_seed(self, plot: Plot, species: Species) -> None:
        plot.plant = self.factory.create_plant(species)
        self.logger.log(
            self.logger.ACTION, f"Planted {species.value} in plot {plot.id}",
            plot_ids=[plot.id], time_ms=self.now,
        )
        if self.climate.is_raining:
            plot.is_watered = True
        if plot.is_watered:
            self.growth.schedule(plot.id)

    def _fertilize(self, plot: Plot, tool: Tool) -> None:
        if plot.plant is None or plot.organic_fertilizer or plot.chemical_fertilizer:
            return
        if tool == Tool.ORGANIC_FERTILIZER:
            plot.organic_fertilizer = True
        else:
            plot.chemical_fertilizer = True
        self.logger.log(
            self.logger.ACTION, f"Applied {tool.value} to plot {plot.id}",
            plot_ids=[plot.id], time_ms=self.now,
        )

    def _harvest(self, plot: Plot) -> None:
        plant = plot.plant
        size = harvest_size(plant, plot)
        self.inventory.add(plant.species, size, chemical=plot.chemical_fertilizer)
        self.metrics.record_harvest(size)
        self.growth.cancel(plot.id)
        plot.reset()
        plot.is_watered = self.climate.is_raining
        self.logger.log(
            self.logger.HARVEST,
            f"Harvested a {size.value} {plant.species.value} from plot {plot.id}",
            plot_ids=[plot.id], time_ms=self.now,
        )
        self.pollination.on_harvest(plot.id, plant)
        self.pollination.request_bee_tick()

    # ------------------------------------------------------------------
    # Shared mutations used by deferred callbacks
    # ------------------------------------------------------------------

    def on_plant_grown(self, plot_id: int) -> None:
        self.refresh_bees()
        self.pollination.on_grown(plot_id)

    def place_offspring(
        self,
        anchor_id: int,
        species: Species,
        parent_ids: list[str],
        outcome: GeneticsOutcome,
        source: str,
    ) -> Optional[Plot]:
        """Plant a seed at the nearest empty spot around `anchor_id`."""
        spot = self.grid.find_nearest_empty(anchor_id)
        if spot is None:
            self.metrics.record_rejection("no_space")
            self.logger.log(
                self.logger.POLLINATION,
                f"No empty plot for the {species.value} seed from plot {anchor_id}",
                plot_ids=[anchor_id], time_ms=self.now,
            )
            self.notify("no_space")
            return None
        return self.spawn_offspring(spot, species, parent_ids, outcome, source)

    def spawn_offspring(
        self,
        plot_id: int,
        species: Species,
        parent_ids: list[str],
        outcome: GeneticsOutcome,
        source: str,
    ) -> Optional[Plot]:
        """Plant a seed on a specific plot. Skipped if the plot got filled."""
        plot = self.grid.get_plot(plot_id)
        if not plot.is_empty:
            return None
        plot.plant = self.factory.create_plant(
            species,
            parent_ids=parent_ids,
            is_small=outcome.is_inbreeding,
            is_hybrid=outcome.is_hybrid,
        )
        self.metrics.record_pollination(source)
        self.metrics.record_offspring(outcome.label)
        self.logger.log(
            self.logger.GENETICS,
            f"New {outcome.label} {species.value} sprout in plot {plot_id} ({source})",
            plot_ids=[plot_id], time_ms=self.now,
            parents=list(parent_ids),
        )
        if plot.is_watered:
            self.growth.schedule(plot_id)
        return plot

    def notify(self, kind: str) -> int:
        """Emit a catalog notification."""
        title, message = message_for(kind)
        self.logger.log(self.logger.NOTIFY, title, time_ms=self.now, kind=kind)
        return self.notifications.emit(title, message, timestamp=self.now, kind=kind)

    def refresh_bees(self) -> None:
        """Re-evaluate the bee state machine against the garden."""
        change = self.bees.evaluate(
            has_pesticide=self.grid.has_pesticide(),
            has_grown_sunflower=self.grid.has_grown(Species.SUNFLOWER),
        )
        if change is None:
            return
        old, new = change
        self.logger.log(self.logger.BEES, f"Bees {old.value} -> {new.value}", time_ms=self.now)
        if new == BeeState.VISIBLE:
            self.pollination.start_bee_wave()
        elif new == BeeState.DYING:
            self._bee_death = self.scheduler.schedule(
                BEE_DEATH_DELAY_MS, self._finish_bee_death, label="bee_death"
            )

    def _finish_bee_death(self) -> None:
        self._bee_death = None
        if self.bees.finish_dying():
            self.logger.log(self.logger.BEES, "Bees died from pesticide", time_ms=self.now)
            self.notify("bee_death")
            self.refresh_bees()

    # ------------------------------------------------------------------
    # Presentation view
    # ------------------------------------------------------------------

    def snapshot(self) -> dict:
        """Plain-data view of everything the presentation layer renders."""
        current = self.notifications.current
        return {
            "time_ms": self.now,
            "plots": self.grid.to_list(),
            "selected_tool": self.selected_tool.value if self.selected_tool else None,
            "bee_state": self.bees.state.value,
            "manual_bees": self.bees.manual_mode,
            "weather": self.climate.current_weather.value,
            "forecast": [w.value for w in self.climate.forecast],
            "connections": [c.to_dict() for c in self.pollination.connections],
            "inventory": self.inventory.to_dict(),
            "unread_notifications": self.notifications.unread_count,
            "modal": current.to_dict() if current else None,
        }


def _parse_tool(name: str) -> SelectedTool:
    """Resolve a tool or seed from its string value."""
    for enum_cls in (Species, Tool):
        try:
            return enum_cls(name)
        except ValueError:
            continue
    raise KeyError(f"unknown tool or seed: {name!r}")
