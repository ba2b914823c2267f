from garden_sim.core.config import GROWTH_DELAY_MS
from garden_sim.simulation.engine import Tool
from garden_sim.world.climate import Weather
from garden_sim.world.plants import Species, Stage

from tests.garden_helpers import make_engine, place, set_weather, use


def test_dry_sprout_never_grows():
    engine = make_engine()
    use(engine, Species.PUMPKIN, 4)
    engine.advance(60_000)
    assert engine.grid.get_plot(4).plant.stage == Stage.SPROUT


def test_watered_sprout_grows_after_delay():
    engine = make_engine()
    use(engine, Species.CORN, 4)
    use(engine, Tool.WATERING_CAN, 4)
    assert engine.growth.is_growing(4)

    engine.advance(GROWTH_DELAY_MS - 1)
    assert engine.grid.get_plot(4).plant.stage == Stage.SPROUT
    engine.advance(1)
    assert engine.grid.get_plot(4).plant.stage == Stage.GROWN
    assert not engine.growth.is_growing(4)


def test_watering_twice_keeps_a_single_timer():
    engine = make_engine()
    use(engine, Species.CORN, 4)
    use(engine, Tool.WATERING_CAN, 4, 4)
    assert engine.growth.in_flight == {4}
    assert not engine.growth.schedule(4)


def test_watering_an_empty_plot_does_nothing():
    engine = make_engine()
    use(engine, Tool.WATERING_CAN, 7)
    assert not engine.grid.get_plot(7).is_watered
    assert engine.growth.in_flight == set()


def test_rain_grows_every_sprout_and_waters_new_seeds():
    engine = make_engine()
    use(engine, Species.PUMPKIN, 0, 1)
    set_weather(engine, Weather.RAINING)
    assert all(p.is_watered for p in engine.grid)
    assert engine.growth.in_flight == {0, 1}

    use(engine, Species.CORN, 2)
    assert engine.growth.is_growing(2)
    engine.advance(GROWTH_DELAY_MS)
    assert all(engine.grid.get_plot(i).plant.is_grown for i in (0, 1, 2))


def test_rain_stopping_dries_the_soil():
    engine = make_engine()
    set_weather(engine, Weather.RAINING)
    set_weather(engine, Weather.SUNNY)
    assert not any(p.is_watered for p in engine.grid)


def test_stale_timer_does_not_grow_a_replacement():
    engine = make_engine()
    use(engine, Species.PUMPKIN, 4)
    use(engine, Tool.WATERING_CAN, 4)
    replacement = place(engine, 4, Species.CORN, stage=Stage.SPROUT)
    engine.advance(GROWTH_DELAY_MS)
    assert engine.grid.get_plot(4).plant is replacement
    assert replacement.stage == Stage.SPROUT
