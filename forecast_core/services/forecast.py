"""Forecast service that combines geocoding, weather lookups and caching."""
from __future__ import annotations

import logging

from forecast_core.abstractions import ForecastStore, GeocodeResolver, WeatherFetcher
from forecast_core.entities import ForecastResult


logger = logging.getLogger(__name__)


class ForecastService:
    """Resolve an address and return its forecast, reusing cached data per postal code.

    Concurrent misses for the same postal code each fetch upstream; the last
    write wins in the cache.
    """

    def __init__(
        self,
        *,
        geocoder: GeocodeResolver,
        weather: WeatherFetcher,
        cache: ForecastStore,
    ) -> None:
        self.geocoder = geocoder
        self.weather = weather
        self.cache = cache

    def get_forecast(self, address: str) -> ForecastResult:
        location = self.geocoder.resolve(address)

        cached, found = self.cache.get(location.postal_code)
        if found:
            logger.debug("Forecast cache hit for %s", location.postal_code)
            return ForecastResult(location=location, forecast=cached, from_cache=True)

        logger.debug("Forecast cache miss for %s", location.postal_code)
        forecast = self.weather.fetch(location)
        self.cache.put(location.postal_code, forecast)
        logger.info("Fetched fresh forecast for %s", location.postal_code)
        return ForecastResult(location=location, forecast=forecast, from_cache=False)


__all__ = ["ForecastService"]
