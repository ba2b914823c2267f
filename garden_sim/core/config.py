"""All tunable constants for the garden simulation.

Every magic number in the codebase must reference this file.
Times are milliseconds of model time.
"""

# =============================================================================
# GRID
# =============================================================================
GRID_SIZE: int = 4
PLOT_COUNT: int = GRID_SIZE * GRID_SIZE

# Neighbor scan order: row-major around the center (NW, N, NE, W, E, SW, S, SE)
NEIGHBOR_OFFSETS: list[tuple[int, int]] = [
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1), (0, 1),
    (1, -1), (1, 0), (1, 1),
]

# =============================================================================
# PLANTS
# =============================================================================
INSTANCE_ID_LENGTH: int = 7
INSTANCE_ID_ALPHABET: str = "0123456789abcdefghijklmnopqrstuvwxyz"

# =============================================================================
# GROWTH
# =============================================================================
GROWTH_DELAY_MS: int = 2000

# =============================================================================
# WEATHER
# =============================================================================
FORECAST_LENGTH: int = 4

# Sampling weights for the forecast tail (normalized at use)
WEATHER_WEIGHTS: dict[str, float] = {
    "sunny": 0.4,
    "raining": 0.2,
    "sunny_windy": 0.2,
    "raining_windy": 0.2,
}

# =============================================================================
# BEES
# =============================================================================
BEE_DEATH_DELAY_MS: int = 3500
BEE_RECHECK_DELAY_MS: int = 500
BEE_CONNECTION_MS: int = 2000

# Order in which bee-pollinated species are tried each tick. The last entry is
# only attempted when none of the others started a pollination.
BEE_PRIMARY_SPECIES: list[str] = ["pumpkin", "sunflower"]
BEE_FALLBACK_SPECIES: list[str] = ["apple"]

# =============================================================================
# POLLINATION
# =============================================================================
NOTIFICATION_DELAY_MS: int = 500
SELF_POLLINATION_DELAY_MS: int = 30000
SELF_POLLINATING_SPECIES: list[str] = ["pumpkin", "sunflower"]

CORN_CONNECTION_MS: int = 3500
CORN_INTERVAL_MS: int = 5000
CORN_HINT_DELAY_MS: int = 30000
MIN_CORN_FOR_WIND: int = 2

MANUAL_POLLINATION_MS: int = 1000

# =============================================================================
# BEANS / GREEN MANURE
# =============================================================================
BEAN_NITROGEN_DELAY_MS: int = 6000
BEAN_SELF_POLLINATION_DELAY_MS: int = 20000
GREEN_MANURE_DELAY_MS: int = 3000

# =============================================================================
# CONNECTION COLOURS (consumed by the presentation layer)
# =============================================================================
CONNECTION_COLORS: dict[str, str] = {
    "pumpkin": "#FF8C00",
    "sunflower": "#FFC300",
    "apple": "#ff4d4d",
    "corn": "#FFD700",
    "bean": "#3CB371",
    "manual": "#9B59B6",
}

# =============================================================================
# REPORTING
# =============================================================================
SNAPSHOT_INTERVAL_MS: int = 1000
DEMO_WEATHER_INTERVAL_MS: int = 8000
DEMO_DURATION_MS: int = 120000
