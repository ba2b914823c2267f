import pytest

from garden_sim.world.grid import GardenGrid
from garden_sim.world.plants import Plant, Species


def _fill(grid: GardenGrid, *plot_ids: int) -> None:
    for i in plot_ids:
        grid.get_plot(i).plant = Plant(instance_id=f"p{i}", species=Species.PUMPKIN)


def test_neighbor_counts_by_position():
    """Corners have 3 neighbors, edges 5, the interior 8."""
    grid = GardenGrid()
    assert len(grid.neighbors8(0)) == 3
    assert len(grid.neighbors8(15)) == 3
    assert len(grid.neighbors8(1)) == 5
    assert len(grid.neighbors8(4)) == 5
    assert len(grid.neighbors8(5)) == 8


def test_neighbors_are_in_bounds_and_exclude_self():
    grid = GardenGrid()
    for plot_id in range(16):
        neighbors = grid.neighbors8(plot_id)
        assert 3 <= len(neighbors) <= 8
        assert plot_id not in neighbors
        assert all(0 <= n < 16 for n in neighbors)
        row, col = grid.coords(plot_id)
        for n in neighbors:
            nr, nc = grid.coords(n)
            assert max(abs(nr - row), abs(nc - col)) == 1


def test_neighbor_order_is_row_major():
    """NW, N, NE, W, E, SW, S, SE."""
    grid = GardenGrid()
    assert grid.neighbors8(5) == [0, 1, 2, 4, 6, 8, 9, 10]
    assert grid.neighbors8(0) == [1, 4, 5]
    assert grid.neighbors8(15) == [10, 11, 14]


def test_find_nearest_empty_prefers_first_neighbor():
    grid = GardenGrid()
    _fill(grid, 5, 0)
    assert grid.find_nearest_empty(5) == 1


def test_find_nearest_empty_falls_back_to_global_scan():
    """With every neighbor taken, the lowest empty id wins."""
    grid = GardenGrid()
    _fill(grid, 0, 1, 4, 5)
    assert grid.find_nearest_empty(0) == 2


def test_find_nearest_empty_full_grid():
    grid = GardenGrid()
    _fill(grid, *range(16))
    assert grid.find_nearest_empty(7) is None


def test_find_nearest_empty_respects_exclusions():
    grid = GardenGrid()
    _fill(grid, 5)
    assert grid.find_nearest_empty(5, exclude={0, 1}) == 2


def test_get_plot_out_of_range():
    grid = GardenGrid()
    with pytest.raises(IndexError):
        grid.get_plot(16)
    with pytest.raises(IndexError):
        grid.get_plot(-1)


def test_set_plot_applies_mutation_to_current_state():
    grid = GardenGrid()
    grid.set_plot(3, lambda p: setattr(p, "is_watered", True))
    assert grid.get_plot(3).is_watered


def test_plot_reset_clears_treatments():
    grid = GardenGrid()
    _fill(grid, 2)
    plot = grid.get_plot(2)
    plot.is_watered = True
    plot.organic_fertilizer = True
    plot.green_manure = True
    plot.reset()
    assert plot.is_empty
    assert not plot.is_watered
    assert not plot.has_fertilizer
