from garden_sim.world.genetics import harvest_size, resolve_offspring_genetics
from garden_sim.world.grid import Plot
from garden_sim.world.plants import Plant, PlantSize, Species


def _plant(instance_id: str, parents=(), small: bool = False, **kwargs) -> Plant:
    return Plant(instance_id=instance_id, species=Species.PUMPKIN,
                 parent_ids=tuple(parents), is_small=small, **kwargs)


def test_self_cross_is_inbreeding_never_hybrid():
    for small in (False, True):
        plant = _plant("a", small=small)
        outcome = resolve_offspring_genetics(plant, plant)
        assert outcome.is_inbreeding
        assert not outcome.is_hybrid


def test_two_small_unrelated_lines_make_a_hybrid():
    outcome = resolve_offspring_genetics(_plant("a", small=True), _plant("b", small=True))
    assert outcome.is_hybrid
    assert not outcome.is_inbreeding
    assert outcome.label == "hybrid"


def test_parent_and_child_are_inbreeding():
    parent = _plant("a")
    child = _plant("b", parents=["a", "x"])
    assert resolve_offspring_genetics(parent, child).is_inbreeding
    assert resolve_offspring_genetics(child, parent).is_inbreeding


def test_small_relatives_stay_inbred():
    """Inbreeding is decided before hybrid vigor."""
    parent = _plant("a", small=True)
    child = _plant("b", parents=["a"], small=True)
    outcome = resolve_offspring_genetics(parent, child)
    assert outcome.is_inbreeding
    assert not outcome.is_hybrid


def test_unrelated_normal_plants():
    outcome = resolve_offspring_genetics(_plant("a"), _plant("b", small=True))
    assert not outcome.is_inbreeding
    assert not outcome.is_hybrid
    assert outcome.label == "normal"


def test_harvest_size_large_overrides_small():
    plot = Plot(id=0)
    assert harvest_size(_plant("a", small=True, is_hybrid=True), plot) == PlantSize.LARGE
    assert harvest_size(_plant("b", small=True, is_boosted=True), plot) == PlantSize.LARGE
    for flag in ("organic_fertilizer", "chemical_fertilizer", "green_manure"):
        fertilized = Plot(id=1, **{flag: True})
        assert harvest_size(_plant("c", small=True), fertilized) == PlantSize.LARGE


def test_harvest_size_small_and_normal():
    plot = Plot(id=0)
    assert harvest_size(_plant("a", small=True), plot) == PlantSize.SMALL
    assert harvest_size(_plant("b"), plot) == PlantSize.NORMAL
