"""Weather forecast queue and rain/wind transitions."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from numpy.random import Generator

from garden_sim.core.config import FORECAST_LENGTH, WEATHER_WEIGHTS


class Weather(str, Enum):
    SUNNY = "sunny"
    RAINING = "raining"
    SUNNY_WINDY = "sunny_windy"
    RAINING_WINDY = "raining_windy"

    @property
    def is_raining(self) -> bool:
        return self in (Weather.RAINING, Weather.RAINING_WINDY)

    @property
    def is_windy(self) -> bool:
        return self in (Weather.SUNNY_WINDY, Weather.RAINING_WINDY)


@dataclass(frozen=True)
class WeatherTransition:
    """Edge-triggered changes between two consecutive weather values."""

    previous: Weather
    current: Weather

    @property
    def started_raining(self) -> bool:
        return self.current.is_raining and not self.previous.is_raining

    @property
    def stopped_raining(self) -> bool:
        return self.previous.is_raining and not self.current.is_raining

    @property
    def started_wind(self) -> bool:
        return self.current.is_windy and not self.previous.is_windy

    @property
    def stopped_wind(self) -> bool:
        return self.previous.is_windy and not self.current.is_windy


class Climate:
    """Current weather plus a fixed-length FIFO forecast."""

    def __init__(
        self,
        rng: Generator,
        initial: Weather = Weather.SUNNY,
        forecast: Optional[list[Weather]] = None,
        forecast_length: int = FORECAST_LENGTH,
    ) -> None:
        self._rng = rng
        self.current_weather: Weather = initial
        self.forecast_length = forecast_length
        if forecast is None:
            forecast = [self.sample() for _ in range(forecast_length)]
        if len(forecast) != forecast_length:
            raise ValueError(
                f"forecast must hold {forecast_length} values, got {len(forecast)}"
            )
        self.forecast: deque[Weather] = deque(Weather(w) for w in forecast)

    @property
    def is_raining(self) -> bool:
        return self.current_weather.is_raining

    @property
    def is_windy(self) -> bool:
        return self.current_weather.is_windy

    def sample(self) -> Weather:
        """Draw one weather value from the weighted distribution."""
        kinds = list(WEATHER_WEIGHTS.keys())
        weights = [WEATHER_WEIGHTS[k] for k in kinds]
        total = sum(weights)
        weights = [w / total for w in weights]
        return Weather(str(self._rng.choice(kinds, p=weights)))

    def advance(self) -> WeatherTransition:
        """Pop the front of the forecast into current weather, refill the back."""
        previous = self.current_weather
        self.current_weather = self.forecast.popleft()
        self.forecast.append(self.sample())
        return WeatherTransition(previous=previous, current=self.current_weather)

    def set_forecast(self, values: list[Weather]) -> None:
        """Replace the upcoming forecast (same length required)."""
        if len(values) != self.forecast_length:
            raise ValueError(
                f"forecast must hold {self.forecast_length} values, got {len(values)}"
            )
        self.forecast = deque(Weather(w) for w in values)
