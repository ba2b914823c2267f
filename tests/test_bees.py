from garden_sim.core.config import BEE_DEATH_DELAY_MS
from garden_sim.simulation.engine import Tool
from garden_sim.world.bees import BeeColony, BeeState
from garden_sim.world.plants import Species, Stage

from tests.garden_helpers import grow, make_engine, place, use


def test_sunflower_brings_bees_and_losing_it_hides_them():
    colony = BeeColony()
    assert colony.evaluate(has_pesticide=False, has_grown_sunflower=True) == (
        BeeState.HIDDEN, BeeState.VISIBLE,
    )
    assert colony.evaluate(has_pesticide=False, has_grown_sunflower=True) is None
    assert colony.evaluate(has_pesticide=False, has_grown_sunflower=False) == (
        BeeState.VISIBLE, BeeState.HIDDEN,
    )


def test_manual_mode_keeps_bees_visible():
    colony = BeeColony()
    colony.toggle_manual()
    colony.evaluate(False, False)
    assert colony.is_visible
    colony.toggle_manual()
    colony.evaluate(False, False)
    assert colony.state == BeeState.HIDDEN


def test_pesticide_kills_visible_bees_but_never_summons_them():
    colony = BeeColony()
    assert colony.evaluate(has_pesticide=True, has_grown_sunflower=True) is None
    assert colony.state == BeeState.HIDDEN

    colony.evaluate(False, True)
    colony.evaluate(True, True)
    assert colony.state == BeeState.DYING
    # Dying is only left through the timer
    assert colony.evaluate(False, True) is None
    assert colony.finish_dying()
    assert colony.state == BeeState.HIDDEN
    assert not colony.finish_dying()


def test_growing_a_sunflower_makes_bees_visible():
    engine = make_engine()
    grow(engine, Species.SUNFLOWER, 6)
    assert engine.bees.state == BeeState.VISIBLE


def test_pesticide_on_the_garden_kills_bees_after_delay():
    engine = make_engine()
    engine.toggle_manual_bees()
    place(engine, 3, Species.PUMPKIN, stage=Stage.SPROUT)
    use(engine, Tool.PESTICIDE, 3)
    assert engine.bees.state == BeeState.DYING

    engine.advance(BEE_DEATH_DELAY_MS - 1)
    assert engine.bees.state == BeeState.DYING
    engine.advance(1)
    assert engine.bees.state == BeeState.HIDDEN
    assert engine.notifications.count("bee_death") == 1

    # Still poisoned: bees stay away
    engine.advance(10_000)
    assert engine.bees.state == BeeState.HIDDEN
    assert engine.notifications.count("bee_death") == 1
