"""Core abstractions for the forecast domain."""
from __future__ import annotations

from typing import Optional, Protocol, Tuple

from forecast_core.entities import ForecastData, Location


class GeocodeResolver(Protocol):
    """Converts a free-text address into a :class:`Location`."""

    def resolve(self, address: str) -> Location:
        """Raise ``ResolutionError`` when the address cannot be located."""
        ...


class WeatherFetcher(Protocol):
    """Returns the forecast for a resolved location."""

    def fetch(self, location: Location) -> ForecastData:
        """Raise ``FetchError`` when no forecast can be obtained."""
        ...


class ForecastStore(Protocol):
    """Time-bounded storage of forecasts keyed by postal code."""

    def get(self, key: str) -> Tuple[Optional[ForecastData], bool]:
        ...

    def put(self, key: str, value: ForecastData) -> None:
        ...
