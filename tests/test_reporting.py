import csv
import json
import os

from garden_sim.economy.inventory import Inventory
from garden_sim.monte_carlo import monte_carlo
from garden_sim.simulation.metrics import MetricsCollector
from garden_sim.viz.dashboard import Dashboard
from garden_sim.viz.logger import SimLogger
from garden_sim.world.plants import PlantSize, Species

from tests.garden_helpers import make_engine, place


def test_inventory_tallies_by_species_and_size():
    inventory = Inventory()
    assert inventory.is_empty()
    inventory.add(Species.CORN, PlantSize.LARGE)
    inventory.add(Species.CORN, PlantSize.LARGE, chemical=True)
    inventory.add(Species.APPLE, PlantSize.SMALL)

    assert inventory.count(Species.CORN, PlantSize.LARGE) == 2
    assert inventory.count(Species.PUMPKIN, PlantSize.LARGE) == 0
    assert inventory.total() == 3
    assert inventory.size_totals()[PlantSize.LARGE] == 2
    assert inventory.to_dict()["corn"]["chemical"]["large"] == 1
    assert "pumpkin" not in inventory.to_dict()


def test_metrics_snapshot_and_csv(tmp_path):
    engine = make_engine()
    place(engine, 0, Species.PUMPKIN)
    place(engine, 1, Species.CORN)
    snapshot = engine.metrics.collect(0, engine.grid, engine.inventory, "sunny", "hidden")
    assert snapshot.grown == 2
    assert snapshot.empty_plots == 14
    assert snapshot.plants_by_species["corn"] == 1

    path = tmp_path / "metrics.csv"
    engine.metrics.export_csv(str(path))
    with open(path) as f:
        rows = list(csv.reader(f))
    assert rows[0][:3] == ["time_ms", "weather", "bee_state"]
    assert len(rows) == 2


def test_summary_report_lists_outcomes():
    metrics = MetricsCollector()
    metrics.record_pollination("bee")
    metrics.record_offspring("hybrid")
    metrics.record_offspring("normal")
    metrics.record_rejection("no_space")
    report = metrics.summary_report()
    assert report.startswith("=== Garden Summary ===")
    assert "bee: 1" in report
    assert "hybrid: 1 (50%)" in report
    assert "no_space: 1" in report
    assert metrics.rate("hybrid") == 0.5


def test_logger_filters_file_output_by_verbosity(tmp_path):
    path = tmp_path / "sim.log"
    logger = SimLogger(verbosity=0, log_file=str(path))
    logger.log(SimLogger.NOTIFY, "Polinização!", time_ms=1500)
    logger.log(SimLogger.GROWTH, "Plot 3 grown", plot_ids=[3], time_ms=1500)
    logger.flush()
    logger.close()

    text = path.read_text(encoding="utf-8")
    assert "Polinização!" in text
    assert "Plot 3 grown" not in text
    # Filtered lines are still kept in memory
    assert logger.count(SimLogger.GROWTH) == 1
    assert "Plot 3 grown" in logger.get_narrative()


def test_logger_exports_json(tmp_path):
    logger = SimLogger()
    logger.log(SimLogger.HARVEST, "Harvested", plot_ids=[2], time_ms=10, size="large")
    path = tmp_path / "out" / "events.json"
    logger.export_json(str(path))
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == [{
        "time_ms": 10, "category": "HARVEST", "message": "Harvested",
        "plot_ids": [2], "data": {"size": "large"},
    }]


def test_engine_logs_notifications():
    engine = make_engine()
    engine.notify("corn_hint")
    assert engine.logger.count(SimLogger.NOTIFY) == 1
    assert engine.notifications.current.kind == "corn_hint"


def test_dashboard_writes_reports(tmp_path):
    engine = make_engine()
    place(engine, 0, Species.SUNFLOWER)
    engine.collect_snapshot()
    engine.advance(1_000)
    engine.collect_snapshot()

    paths = Dashboard.comprehensive_report(engine.metrics, str(tmp_path))
    assert [os.path.basename(p) for p in paths] == ["plants_by_species.png", "outcomes.png"]
    assert all(os.path.getsize(p) > 0 for p in paths)


def test_monte_carlo_exports_one_row_per_run(tmp_path):
    results = monte_carlo(n_runs=2, duration_ms=20_000, output_dir=str(tmp_path), verbose=False)
    assert len(results) == 2
    with open(tmp_path / "monte_carlo_results.csv") as f:
        rows = list(csv.reader(f))
    assert len(rows) == 3
    assert all(0.0 <= r.hybrid_rate <= 1.0 for r in results)
