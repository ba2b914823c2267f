"""Scripted garden sessions used by the CLI and Monte Carlo runs."""

from __future__ import annotations

from garden_sim.core.config import DEMO_DURATION_MS, DEMO_WEATHER_INTERVAL_MS
from garden_sim.simulation.engine import GardenEngine, Tool
from garden_sim.world.plants import Species

# (plot id, species) planted at the start of a demo session
DEMO_LAYOUT: list[tuple[int, Species]] = [
    (0, Species.PUMPKIN),
    (15, Species.PUMPKIN),
    (5, Species.CORN),
    (6, Species.CORN),
    (10, Species.SUNFLOWER),
    (3, Species.APPLE),
    (12, Species.APPLE),
    (9, Species.BEAN),
]

STEP_MS: int = 500


def use(engine: GardenEngine, tool, plot_ids: list[int]) -> None:
    """Select a tool (if not already selected) and click each plot."""
    if engine.selected_tool != tool:
        engine.select_tool(tool)
    for plot_id in plot_ids:
        engine.click_plot(plot_id)


def plant_layout(engine: GardenEngine, layout: list[tuple[int, Species]]) -> None:
    for plot_id, species in layout:
        use(engine, species, [plot_id])


def water_sprouts(engine: GardenEngine) -> None:
    sprouts = [
        p.id for p in engine.grid
        if p.plant is not None and not p.plant.is_grown and not p.is_watered
    ]
    if sprouts:
        use(engine, Tool.WATERING_CAN, sprouts)


def harvest_grown(engine: GardenEngine) -> int:
    grown = [p.id for p in engine.grid.grown_plots()]
    if grown:
        use(engine, Tool.SHOVEL, grown)
    return len(grown)


def run_demo_session(
    engine: GardenEngine,
    duration_ms: int = DEMO_DURATION_MS,
    weather_interval_ms: int = DEMO_WEATHER_INTERVAL_MS,
    layout: list[tuple[int, Species]] = DEMO_LAYOUT,
) -> GardenEngine:
    """
    Plant a mixed garden and tend it for `duration_ms` of model time.

    Sprouts are watered every step, the weather moves on every
    `weather_interval_ms`, and everything grown is harvested at the end.
    """
    plant_layout(engine, layout)
    use(engine, Tool.ORGANIC_FERTILIZER, [layout[0][0]])
    engine.collect_snapshot()

    elapsed = 0
    since_weather = 0
    while elapsed < duration_ms:
        water_sprouts(engine)
        engine.advance(STEP_MS)
        elapsed += STEP_MS
        since_weather += STEP_MS
        if since_weather >= weather_interval_ms:
            engine.advance_weather()
            since_weather = 0

    harvest_grown(engine)
    engine.collect_snapshot()
    return engine
