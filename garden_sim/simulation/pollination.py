"""Reproduction policies per species: bees, wind, selfing and beans."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from garden_sim.core.config import (
    BEAN_NITROGEN_DELAY_MS,
    BEAN_SELF_POLLINATION_DELAY_MS,
    BEE_CONNECTION_MS,
    BEE_FALLBACK_SPECIES,
    BEE_PRIMARY_SPECIES,
    BEE_RECHECK_DELAY_MS,
    CONNECTION_COLORS,
    CORN_CONNECTION_MS,
    CORN_HINT_DELAY_MS,
    CORN_INTERVAL_MS,
    GREEN_MANURE_DELAY_MS,
    MANUAL_POLLINATION_MS,
    MIN_CORN_FOR_WIND,
    NOTIFICATION_DELAY_MS,
    SELF_POLLINATING_SPECIES,
    SELF_POLLINATION_DELAY_MS,
)
from garden_sim.simulation.scheduler import ScheduledEvent
from garden_sim.world.genetics import GeneticsOutcome, are_related, resolve_offspring_genetics
from garden_sim.world.grid import GardenGrid, Plot
from garden_sim.world.plants import Plant, Species


@dataclass
class Connection:
    """A pollen transfer being shown between two plots."""

    from_plot: int
    to_plot: int
    color: str
    bidirectional: bool = False

    def to_dict(self) -> dict:
        return {
            "from": self.from_plot,
            "to": self.to_plot,
            "color": self.color,
            "bidirectional": self.bidirectional,
        }


@dataclass
class CornPairing:
    """Two corn plants sharing pollen and the spot claimed for their seed."""

    plot_a: int
    plant_a: Plant
    plot_b: int
    plant_b: Plant
    spot: int


def select_mates(
    grid: GardenGrid, species: Species, reproduced: set[str]
) -> Optional[tuple[Plot, Plot]]:
    """
    Pick a (seeker, partner) pair for one bee visit.

    The seeker is the first grown plant of the species that has not reproduced
    this wave. Partners are every other grown plant of the species, unused ones
    first, keeping grid order inside each group. Never mutates anything.
    """
    grown = grid.grown_plots(species)
    seekers = [p for p in grown if p.plant.instance_id not in reproduced]
    if not seekers:
        return None
    seeker = seekers[0]
    partners = [p for p in grown if p.plant.instance_id != seeker.plant.instance_id]
    if not partners:
        return None
    partners.sort(key=lambda p: p.plant.instance_id in reproduced)
    return seeker, partners[0]


def outcome_kind(outcome: GeneticsOutcome, default_kind: str) -> str:
    """Notification kind for an offspring outcome."""
    if outcome.is_hybrid:
        return "heterosis"
    if outcome.is_inbreeding:
        return "inbreeding"
    return default_kind


# =============================================================================
# Species policies
# =============================================================================

class PollinationPolicy:
    """Uniform capability set every species policy answers to."""

    species: Species

    def __init__(self, engine: "GardenEngine", species: Species) -> None:  # noqa: F821
        self._engine = engine
        self.species = species

    @property
    def _pollination(self) -> "PollinationEngine":
        return self._engine.pollination

    def try_ambient(self) -> bool:
        """React to ambient conditions (bees, wind). True if a pollination started."""
        return False

    def try_on_growth(self, plot_id: int) -> None:
        """React to a plant of this species becoming Grown."""

    def try_self_fallback(self, plot_id: int, instance_id: str) -> bool:
        """Self-pollinate if nothing better happened. True on success."""
        return False

    def on_harvest(self, plot_id: int, plant: Plant) -> None:
        """React to a plant of this species being harvested."""


class BeePolicy(PollinationPolicy):
    """Bee-mediated cross-pollination with optional timed selfing."""

    def __init__(
        self,
        engine: "GardenEngine",  # noqa: F821
        species: Species,
        cross_kind: str,
        self_kind: Optional[str] = None,
        self_incompatible: bool = False,
    ) -> None:
        super().__init__(engine, species)
        self.cross_kind = cross_kind
        self.self_kind = self_kind
        self.self_incompatible = self_incompatible

    def try_ambient(self) -> bool:
        engine = self._engine
        if not engine.bees.is_visible:
            return False
        pollination = self._pollination
        match = select_mates(engine.grid, self.species, pollination.reproduced)
        if match is None:
            return False

        seeker, partner = match
        plant_a, plant_b = seeker.plant, partner.plant
        pollination.mark_reproduced(plant_a.instance_id, plant_b.instance_id)

        if self.self_incompatible and (
            plant_a.is_parent_of(plant_b) or plant_b.is_parent_of(plant_a)
        ):
            engine.logger.log(
                engine.logger.POLLINATION,
                f"Bees rejected {self.species.value} pair {seeker.id}x{partner.id}: self-incompatible",
                plot_ids=[seeker.id, partner.id],
                time_ms=engine.now,
            )
            engine.metrics.record_rejection("self_incompatible")
            engine.notify("apple_incompatible")
            pollination.bump_trigger()
            return True

        connection = pollination.show_connection(
            seeker.id, partner.id, CONNECTION_COLORS[self.species.value]
        )
        engine.logger.log(
            engine.logger.POLLINATION,
            f"Bees carry {self.species.value} pollen {partner.id} -> {seeker.id}",
            plot_ids=[seeker.id, partner.id],
            time_ms=engine.now,
        )
        engine.scheduler.schedule(
            BEE_CONNECTION_MS,
            lambda: self._commit(connection, seeker.id, plant_a, plant_b),
            label=f"bee:{self.species.value}",
        )
        return True

    def _commit(self, connection: Connection, seeker_id: int, seeker: Plant, partner: Plant) -> None:
        engine = self._engine
        pollination = self._pollination
        pollination.clear_connection(connection)

        if not engine.grid.get_plot(seeker_id).holds(seeker.instance_id):
            engine.logger.log(
                engine.logger.POLLINATION,
                f"Plot {seeker_id}: pollinated plant is gone, no seed set",
                plot_ids=[seeker_id],
                time_ms=engine.now,
            )
            pollination.bump_trigger()
            return

        outcome = resolve_offspring_genetics(seeker, partner)
        child_plot = engine.place_offspring(
            seeker_id,
            self.species,
            [seeker.instance_id, partner.instance_id],
            outcome,
            source="bee",
        )
        if child_plot is None:
            pollination.bump_trigger()
            return

        kind = outcome_kind(outcome, self.cross_kind)

        def announce() -> None:
            engine.notify(kind)
            pollination.bump_trigger()

        engine.scheduler.schedule(NOTIFICATION_DELAY_MS, announce, label="announce")

    def try_on_growth(self, plot_id: int) -> None:
        if self.self_kind is None:
            return
        instance_id = self._engine.grid.get_plot(plot_id).plant.instance_id
        self._engine.scheduler.schedule(
            SELF_POLLINATION_DELAY_MS,
            lambda: self.try_self_fallback(plot_id, instance_id),
            label=f"self:{plot_id}",
        )

    def try_self_fallback(self, plot_id: int, instance_id: str) -> bool:
        engine = self._engine
        pollination = self._pollination
        if self.self_kind is None:
            return False
        plot = engine.grid.get_plot(plot_id)
        if not plot.holds(instance_id) or instance_id in pollination.reproduced:
            return False
        if engine.bees.is_visible:
            return False
        if pollination.has_available_partner(self.species, instance_id):
            return False

        plant = plot.plant
        outcome = resolve_offspring_genetics(plant, plant)
        child_plot = engine.place_offspring(
            plot_id, self.species, [instance_id], outcome, source="self"
        )
        if child_plot is None:
            return False
        pollination.mark_reproduced(instance_id)
        engine.notify(self.self_kind)
        return True


class WindPolicy(PollinationPolicy):
    """Corn: pollen carried by wind between unused grown plants."""

    def __init__(self, engine: "GardenEngine", species: Species = Species.CORN) -> None:  # noqa: F821
        super().__init__(engine, species)
        self._hinted: set[str] = set()
        self._hint_timer: Optional[tuple[str, ScheduledEvent]] = None
        self._no_space_reported = False

    def start_wave(self) -> None:
        """New windy period: a crowded garden may be reported again."""
        self._no_space_reported = False

    def available(self) -> list[Plot]:
        reproduced = self._pollination.wind_reproduced
        return [
            p for p in self._engine.grid.grown_plots(self.species)
            if p.plant.instance_id not in reproduced
        ]

    def try_ambient(self) -> bool:
        engine = self._engine
        pollination = self._pollination
        available = self.available()
        if len(available) < MIN_CORN_FOR_WIND:
            return False

        order = engine.rng.permutation(len(available))
        shuffled = [available[int(i)] for i in order]
        claimed: set[int] = set()
        pairings: list[CornPairing] = []
        for i in range(len(shuffled) // 2):
            plot_a, plot_b = shuffled[2 * i], shuffled[2 * i + 1]
            spot = self._claim_spot(plot_a.id, plot_b.id, claimed)
            if spot is None:
                continue
            claimed.add(spot)
            pairings.append(CornPairing(plot_a.id, plot_a.plant, plot_b.id, plot_b.plant, spot))

        if not pairings:
            if not self._no_space_reported:
                self._no_space_reported = True
                engine.notify("no_space")
            return False

        connections: list[Connection] = []
        color = CONNECTION_COLORS[self.species.value]
        for pairing in pairings:
            pollination.mark_wind_reproduced(pairing.plant_a.instance_id, pairing.plant_b.instance_id)
            connections.append(
                pollination.show_connection(pairing.plot_a, pairing.plot_b, color, bidirectional=True)
            )
            engine.logger.log(
                engine.logger.POLLINATION,
                f"Wind carries corn pollen between {pairing.plot_a} and {pairing.plot_b}",
                plot_ids=[pairing.plot_a, pairing.plot_b],
                time_ms=engine.now,
            )

        engine.scheduler.schedule(
            CORN_CONNECTION_MS,
            lambda: self._commit(pairings, connections),
            label="wind:corn",
        )
        return True

    def _claim_spot(self, plot_a: int, plot_b: int, claimed: set[int]) -> Optional[int]:
        """Random empty neighbor of either parent, else the nearest empty plot."""
        grid = self._engine.grid
        candidates: list[int] = []
        for nid in grid.neighbors8(plot_a) + grid.neighbors8(plot_b):
            if grid.get_plot(nid).is_empty and nid not in claimed and nid not in candidates:
                candidates.append(nid)
        if candidates:
            return candidates[int(self._engine.rng.integers(0, len(candidates)))]
        return grid.find_nearest_empty(plot_a, exclude=claimed)

    def _commit(self, pairings: list[CornPairing], connections: list[Connection]) -> None:
        engine = self._engine
        for connection in connections:
            self._pollination.clear_connection(connection)

        for pairing in pairings:
            if not engine.grid.get_plot(pairing.spot).is_empty:
                engine.logger.log(
                    engine.logger.POLLINATION,
                    f"Plot {pairing.spot} was filled before the corn seed landed",
                    plot_ids=[pairing.spot],
                    time_ms=engine.now,
                )
                continue
            outcome = resolve_offspring_genetics(pairing.plant_a, pairing.plant_b)
            engine.spawn_offspring(
                pairing.spot,
                self.species,
                [pairing.plant_a.instance_id, pairing.plant_b.instance_id],
                outcome,
                source="wind",
            )
            engine.notify(outcome_kind(outcome, "corn_cross"))

    def try_on_growth(self, plot_id: int) -> None:
        self.arm_hint()

    def arm_hint(self) -> None:
        """Start the hint timer if the garden now holds exactly one grown corn."""
        engine = self._engine
        corn = engine.grid.plots_with(self.species)
        if len(corn) != 1 or not corn[0].plant.is_grown:
            return
        instance_id = corn[0].plant.instance_id
        if instance_id in self._hinted:
            return
        if self._hint_timer is not None:
            pending_id, timer = self._hint_timer
            if pending_id == instance_id and timer.active:
                return
        timer = engine.scheduler.schedule(
            CORN_HINT_DELAY_MS,
            lambda: self._hint(instance_id),
            label="corn_hint",
        )
        self._hint_timer = (instance_id, timer)

    def _hint(self, instance_id: str) -> None:
        engine = self._engine
        corn = engine.grid.plots_with(self.species)
        if len(corn) != 1 or not corn[0].holds(instance_id) or not corn[0].plant.is_grown:
            return
        if instance_id in self._hinted:
            return
        self._hinted.add(instance_id)
        engine.notify("corn_hint")


class BeanPolicy(PollinationPolicy):
    """Autogamous beans: nitrogen boost, then selfing without inbreeding cost."""

    def __init__(self, engine: "GardenEngine", species: Species = Species.BEAN) -> None:  # noqa: F821
        super().__init__(engine, species)

    def try_on_growth(self, plot_id: int) -> None:
        instance_id = self._engine.grid.get_plot(plot_id).plant.instance_id
        self._engine.scheduler.schedule(
            BEAN_NITROGEN_DELAY_MS,
            lambda: self._fix_nitrogen(plot_id, instance_id),
            label=f"nitrogen:{plot_id}",
        )

    def _fix_nitrogen(self, plot_id: int, instance_id: str) -> None:
        engine = self._engine
        plot = engine.grid.get_plot(plot_id)
        if not plot.holds(instance_id):
            return
        plot.plant.is_boosted = True
        engine.logger.log(
            engine.logger.GENETICS,
            f"Plot {plot_id}: bean fixed nitrogen and is boosted",
            plot_ids=[plot_id],
            time_ms=engine.now,
        )
        engine.notify("bean_nitrogen")
        engine.scheduler.schedule(
            BEAN_SELF_POLLINATION_DELAY_MS,
            lambda: self.try_self_fallback(plot_id, instance_id),
            label=f"bean_self:{plot_id}",
        )

    def try_self_fallback(self, plot_id: int, instance_id: str) -> bool:
        engine = self._engine
        pollination = self._pollination
        plot = engine.grid.get_plot(plot_id)
        if not plot.holds(instance_id) or instance_id in pollination.reproduced:
            return False
        # Beans carry no inbreeding penalty
        outcome = GeneticsOutcome(is_inbreeding=False, is_hybrid=False)
        child_plot = engine.place_offspring(
            plot_id, self.species, [instance_id], outcome, source="bean"
        )
        if child_plot is None:
            return False
        pollination.mark_reproduced(instance_id)
        engine.notify("bean_self")
        return True

    def on_harvest(self, plot_id: int, plant: Plant) -> None:
        engine = self._engine
        targets = [
            (p.id, p.plant.instance_id)
            for p in engine.grid
            if p.plant is not None and p.id != plot_id
        ]
        engine.notify("green_manure_tip")
        engine.scheduler.schedule(
            GREEN_MANURE_DELAY_MS,
            lambda: self._apply_green_manure(targets),
            label="green_manure",
        )

    def _apply_green_manure(self, targets: list[tuple[int, str]]) -> None:
        engine = self._engine
        applied: list[int] = []
        for plot_id, instance_id in targets:
            plot = engine.grid.get_plot(plot_id)
            if plot.holds(instance_id):
                plot.green_manure = True
                applied.append(plot_id)
        if not applied:
            return
        engine.logger.log(
            engine.logger.HARVEST,
            f"Green manure enriched {len(applied)} plots",
            plot_ids=applied,
            time_ms=engine.now,
        )
        engine.notify("green_manure")


# =============================================================================
# Pollination engine
# =============================================================================

class PollinationEngine:
    """Dispatches reproduction to species policies and owns the wave state."""

    def __init__(self, engine: "GardenEngine") -> None:  # noqa: F821
        self._engine = engine
        # Bee and selfing wave; wind pairs corn in its own wave
        self.reproduced: set[str] = set()
        self.wind_reproduced: set[str] = set()
        self.connections: list[Connection] = []
        self.trigger: int = 0
        self._bee_tick: Optional[ScheduledEvent] = None
        self._wind_interval: Optional[ScheduledEvent] = None
        self._manual_source: Optional[tuple[int, str]] = None

        self.policies: dict[Species, PollinationPolicy] = {
            Species.PUMPKIN: BeePolicy(
                engine, Species.PUMPKIN, "pumpkin_cross",
                self_kind="pumpkin_self" if "pumpkin" in SELF_POLLINATING_SPECIES else None,
            ),
            Species.SUNFLOWER: BeePolicy(
                engine, Species.SUNFLOWER, "sunflower_cross",
                self_kind="sunflower_self" if "sunflower" in SELF_POLLINATING_SPECIES else None,
            ),
            Species.APPLE: BeePolicy(
                engine, Species.APPLE, "apple_cross", self_incompatible=True,
            ),
            Species.CORN: WindPolicy(engine),
            Species.BEAN: BeanPolicy(engine),
        }

    def policy(self, species: Species) -> PollinationPolicy:
        return self.policies[Species(species)]

    # ── Wave state ──────────────────────────────────────────────────────

    def mark_reproduced(self, *instance_ids: str) -> None:
        self.reproduced.update(instance_ids)

    def mark_wind_reproduced(self, *instance_ids: str) -> None:
        self.wind_reproduced.update(instance_ids)

    def clear_reproduced(self) -> None:
        self.reproduced.clear()
        self.wind_reproduced.clear()

    def has_available_partner(self, species: Species, instance_id: str) -> bool:
        """Another grown, unused plant of the species exists."""
        return any(
            p.plant.instance_id != instance_id and p.plant.instance_id not in self.reproduced
            for p in self._engine.grid.grown_plots(species)
        )

    def show_connection(
        self, from_plot: int, to_plot: int, color: str, bidirectional: bool = False
    ) -> Connection:
        connection = Connection(from_plot, to_plot, color, bidirectional)
        self.connections.append(connection)
        return connection

    def clear_connection(self, connection: Connection) -> None:
        if connection in self.connections:
            self.connections.remove(connection)

    # ── Triggers ────────────────────────────────────────────────────────

    def on_grown(self, plot_id: int) -> None:
        plant = self._engine.grid.get_plot(plot_id).plant
        self.policy(plant.species).try_on_growth(plot_id)
        self.request_bee_tick()

    def on_harvest(self, plot_id: int, plant: Plant) -> None:
        self.policy(plant.species).on_harvest(plot_id, plant)
        # Losing a corn can leave a single one behind
        if plant.species == Species.CORN:
            self.policy(Species.CORN).arm_hint()

    def bump_trigger(self) -> None:
        """Count a finished attempt and queue the next bee check."""
        self.trigger += 1
        self.request_bee_tick()

    def start_bee_wave(self) -> None:
        self.reproduced.clear()
        self.request_bee_tick()

    def request_bee_tick(self) -> None:
        """Schedule one bee check unless bees are away or one is pending."""
        if not self._engine.bees.is_visible:
            return
        if self._bee_tick is not None and self._bee_tick.active:
            return
        self._bee_tick = self._engine.scheduler.schedule(
            BEE_RECHECK_DELAY_MS, self._run_bee_tick, label="bee_tick"
        )

    def _run_bee_tick(self) -> None:
        self._bee_tick = None
        if not self._engine.bees.is_visible:
            return
        started = False
        for name in BEE_PRIMARY_SPECIES:
            if self.policy(Species(name)).try_ambient():
                started = True
        if not started:
            for name in BEE_FALLBACK_SPECIES:
                if self.policy(Species(name)).try_ambient():
                    break

    # ── Wind ────────────────────────────────────────────────────────────

    def on_wind_started(self) -> None:
        engine = self._engine
        self.clear_reproduced()
        corn = self.policy(Species.CORN)
        corn.start_wave()
        if len(engine.grid.grown_plots(Species.CORN)) < MIN_CORN_FOR_WIND:
            engine.notify("no_corn")
        else:
            corn.try_ambient()
        self._engine.scheduler.cancel(self._wind_interval)
        self._wind_interval = engine.scheduler.schedule_interval(
            CORN_INTERVAL_MS, self._wind_tick, label="wind_interval"
        )
        self.request_bee_tick()

    def on_wind_stopped(self) -> None:
        self.clear_reproduced()
        self._engine.scheduler.cancel(self._wind_interval)
        self._wind_interval = None
        self.request_bee_tick()

    def _wind_tick(self) -> None:
        if not self._engine.climate.is_windy:
            self._engine.scheduler.cancel(self._wind_interval)
            self._wind_interval = None
            return
        self.policy(Species.CORN).try_ambient()

    @property
    def wind_active(self) -> bool:
        return self._wind_interval is not None and self._wind_interval.active

    # ── Manual pollination ──────────────────────────────────────────────

    @property
    def manual_source(self) -> Optional[int]:
        return self._manual_source[0] if self._manual_source else None

    def cancel_manual(self) -> None:
        self._manual_source = None

    def manual_click(self, plot_id: int) -> None:
        """First click picks the pollen donor, second click pollinates."""
        engine = self._engine
        plot = engine.grid.get_plot(plot_id)

        if self._manual_source is None:
            if plot.plant is None or not plot.plant.is_grown:
                engine.metrics.record_rejection("invalid_target")
                engine.notify("invalid_pollination")
                return
            self._manual_source = (plot_id, plot.plant.instance_id)
            return

        source_id, source_instance = self._manual_source
        self._manual_source = None
        source_plot = engine.grid.get_plot(source_id)
        if not source_plot.holds(source_instance):
            engine.metrics.record_rejection("invalid_target")
            engine.notify("invalid_pollination")
            return
        donor = source_plot.plant
        target = plot.plant
        if target is None or not target.is_grown or target.species != donor.species:
            engine.metrics.record_rejection("invalid_target")
            engine.notify("invalid_pollination")
            return

        if donor.species == Species.APPLE and are_related(donor, target):
            engine.metrics.record_rejection("self_incompatible")
            engine.notify("apple_incompatible")
            return

        connection = self.show_connection(source_id, plot_id, CONNECTION_COLORS["manual"])
        engine.scheduler.schedule(
            MANUAL_POLLINATION_MS,
            lambda: self._commit_manual(connection, plot_id, target, donor),
            label="manual",
        )

    def _commit_manual(self, connection: Connection, target_id: int, target: Plant, donor: Plant) -> None:
        engine = self._engine
        self.clear_connection(connection)
        if not engine.grid.get_plot(target_id).holds(target.instance_id):
            return
        if target.species == Species.BEAN:
            outcome = GeneticsOutcome(is_inbreeding=False, is_hybrid=False)
        else:
            outcome = resolve_offspring_genetics(target, donor)
        if target.instance_id == donor.instance_id:
            parent_ids = [target.instance_id]
        else:
            parent_ids = [target.instance_id, donor.instance_id]
        child_plot = engine.place_offspring(
            target_id, target.species, parent_ids, outcome, source="manual"
        )
        if child_plot is not None:
            engine.notify(outcome_kind(outcome, "manual_cross"))
