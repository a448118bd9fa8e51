"""OpenWeather current weather provider."""
from __future__ import annotations

from typing import Mapping, Optional

from .base import FailureReason, FetchError, HttpProvider, safe_float
from ..entities import ForecastData, Location


_UNITS = {"fahrenheit": "imperial", "celsius": "metric"}


class OpenWeatherProvider(HttpProvider):
    """Integration with the OpenWeather current weather endpoint.

    The endpoint has no multi-day block, so ``extended`` is always empty.
    """

    name = "openweather"
    error_class = FetchError
    base_url = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(
        self,
        *,
        api_key: str,
        base_url: Optional[str] = None,
        temperature_unit: str = "fahrenheit",
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        if temperature_unit not in _UNITS:
            raise ValueError(f"unsupported temperature unit: {temperature_unit}")
        self.api_key = api_key
        self.base_url = base_url or self.base_url
        self.temperature_unit = temperature_unit

    def fetch(self, location: Location) -> ForecastData:  # noqa: D401
        """Return the current conditions from OpenWeather."""
        params = {
            "lat": location.latitude,
            "lon": location.longitude,
            "appid": self.api_key,
            "units": _UNITS[self.temperature_unit],
        }
        response = self._get(self.base_url, params)
        data = self._json(response)
        main = data.get("main") if isinstance(data, Mapping) else None
        if not isinstance(main, Mapping):
            main = {}

        temperature = safe_float(main.get("temp"))
        if temperature is None:
            raise self._fail(FailureReason.MISSING_CURRENT_TEMPERATURE, "missing main.temp")
        return ForecastData(
            current_temperature=temperature,
            high=safe_float(main.get("temp_max")),
            low=safe_float(main.get("temp_min")),
        )


__all__ = ["OpenWeatherProvider"]
