from __future__ import annotations

from datetime import date
from typing import Dict, List

from forecast_core.entities import ForecastData, ForecastDay, Location
from forecast_core.providers.base import FailureReason, FetchError, ResolutionError


CUPERTINO = Location(latitude=37.3318, longitude=-122.0312, country_code="us", postal_code="95014")

NOMINATIM_CUPERTINO = [
    {
        "place_id": 1,
        "lat": "37.3318",
        "lon": "-122.0312",
        "display_name": "1, Infinite Loop, Cupertino, Santa Clara County, California, 95014, United States",
        "address": {
            "house_number": "1",
            "road": "Infinite Loop",
            "city": "Cupertino",
            "state": "California",
            "postcode": "95014",
            "country": "United States",
            "country_code": "us",
        },
    }
]

OPEN_METEO_CUPERTINO = {
    "latitude": 37.33,
    "longitude": -122.03,
    "current": {"time": "2024-05-01T12:00", "temperature_2m": 68.4},
    "daily": {
        "time": ["2024-05-01", "2024-05-02"],
        "temperature_2m_max": [74.1, 71.0],
        "temperature_2m_min": [51.3, 50.2],
        "weather_code": [0, 61],
    },
}


class TimeController:
    def __init__(self) -> None:
        self.now = 0.0

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


class FakeGeocoder:
    def __init__(self, locations: Dict[str, Location] | None = None) -> None:
        self._locations = locations or {}
        self.calls: List[str] = []

    def resolve(self, address: str) -> Location:
        self.calls.append(address)
        location = self._locations.get(address)
        if location is None:
            raise ResolutionError(FailureReason.NO_MATCH, provider="fake")
        return location


class FakeWeather:
    def __init__(self, temperatures: List[float] | None = None, error: FetchError | None = None) -> None:
        self._temperatures = list(temperatures or [68.4])
        self.error = error
        self.calls: List[Location] = []

    def fetch(self, location: Location) -> ForecastData:
        self.calls.append(location)
        if self.error is not None:
            raise self.error
        temperature = self._temperatures[min(len(self.calls), len(self._temperatures)) - 1]
        return ForecastData(
            current_temperature=temperature,
            high=temperature + 5,
            low=temperature - 10,
            extended=(ForecastDay(day=date(2024, 5, 1), high=temperature + 5, low=temperature - 10, summary="Clear sky"),),
        )
