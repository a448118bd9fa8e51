from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Location:
    """A geocoded address.

    ``postal_code`` is the cache key for forecasts, so the geocoder never
    builds a location without one.
    """

    latitude: float
    longitude: float
    country_code: str
    postal_code: str

    def to_payload(self) -> Dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "country_code": self.country_code,
            "postal_code": self.postal_code,
        }


@dataclass(frozen=True)
class ForecastDay:
    day: date
    high: Optional[float]
    low: Optional[float]
    summary: Optional[str]

    def to_payload(self) -> Dict[str, Any]:
        return {
            "day": self.day.isoformat(),
            "high": self.high,
            "low": self.low,
            "summary": self.summary,
        }


@dataclass(frozen=True)
class ForecastData:
    """Normalized forecast for a single location.

    Only ``current_temperature`` is guaranteed. The remaining fields are
    enrichments a provider may not supply; they stay ``None`` (or empty)
    rather than being defaulted.
    """

    current_temperature: float
    high: Optional[float] = None
    low: Optional[float] = None
    extended: Tuple[ForecastDay, ...] = field(default_factory=tuple)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"current_temperature": self.current_temperature}
        if self.high is not None:
            payload["high"] = self.high
        if self.low is not None:
            payload["low"] = self.low
        if self.extended:
            payload["extended"] = [day.to_payload() for day in self.extended]
        return payload


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: ForecastData
    stored_at: float


@dataclass(frozen=True)
class ForecastResult:
    location: Location
    forecast: ForecastData
    from_cache: bool

    def to_payload(self) -> Dict[str, Any]:
        return {
            "location": self.location.to_payload(),
            "forecast": self.forecast.to_payload(),
            "from_cache": self.from_cache,
            "source": "cache" if self.from_cache else "fresh",
        }


__all__ = ["Location", "ForecastDay", "ForecastData", "CacheEntry", "ForecastResult"]
