from __future__ import annotations

import math
from datetime import date
from typing import Any, List, Mapping, Optional, Tuple

from .base import FailureReason, FetchError, HttpProvider, safe_float
from ..entities import ForecastData, ForecastDay, Location


# WMO weather interpretation codes used by Open-Meteo.
WEATHER_CODES = {
    0: "Clear sky",
    1: "Mainly clear",
    2: "Partly cloudy",
    3: "Overcast",
    45: "Fog",
    48: "Depositing rime fog",
    51: "Light drizzle",
    53: "Moderate drizzle",
    55: "Dense drizzle",
    56: "Light freezing drizzle",
    57: "Dense freezing drizzle",
    61: "Slight rain",
    63: "Moderate rain",
    65: "Heavy rain",
    66: "Light freezing rain",
    67: "Heavy freezing rain",
    71: "Slight snow fall",
    73: "Moderate snow fall",
    75: "Heavy snow fall",
    77: "Snow grains",
    80: "Slight rain showers",
    81: "Moderate rain showers",
    82: "Violent rain showers",
    85: "Slight snow showers",
    86: "Heavy snow showers",
    95: "Thunderstorm",
    96: "Thunderstorm with slight hail",
    99: "Thunderstorm with heavy hail",
}


class OpenMeteoProvider(HttpProvider):
    name = "open-meteo"
    error_class = FetchError
    base_url = "https://api.open-meteo.com/v1/forecast"
    units = ("fahrenheit", "celsius")
    max_days = 16

    def __init__(
        self,
        base_url: Optional[str] = None,
        temperature_unit: str = "fahrenheit",
        days: int = 7,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        if temperature_unit not in self.units:
            raise ValueError(f"unsupported temperature unit: {temperature_unit}")
        if not 1 <= days <= self.max_days:
            raise ValueError(f"days must be between 1 and {self.max_days}")
        self.base_url = base_url or self.base_url
        self.temperature_unit = temperature_unit
        self.days = days

    def fetch(self, location: Location) -> ForecastData:
        params = {
            "latitude": location.latitude,
            "longitude": location.longitude,
            "current": "temperature_2m",
            "daily": "temperature_2m_max,temperature_2m_min,weather_code",
            "temperature_unit": self.temperature_unit,
            "forecast_days": self.days,
            "timezone": "auto",
        }
        response = self._get(self.base_url, params)
        data = self._json(response)
        if not isinstance(data, Mapping):
            raise self._fail(FailureReason.INVALID_PAYLOAD, "expected an object")

        current = data.get("current") or {}
        temperature = safe_float(current.get("temperature_2m")) if isinstance(current, Mapping) else None
        if temperature is None:
            raise self._fail(FailureReason.MISSING_CURRENT_TEMPERATURE, "missing current temperature")

        extended = self._parse_daily(data.get("daily"))
        today = extended[0] if extended else None
        return ForecastData(
            current_temperature=temperature,
            high=today.high if today else None,
            low=today.low if today else None,
            extended=extended,
        )

    # helpers ------------------------------------------------------------
    def _parse_daily(self, daily: Any) -> Tuple[ForecastDay, ...]:
        if not isinstance(daily, Mapping):
            return ()
        dates = daily.get("time")
        if not isinstance(dates, list):
            return ()
        highs = _series(daily, "temperature_2m_max")
        lows = _series(daily, "temperature_2m_min")
        codes = _series(daily, "weather_code")
        result: List[ForecastDay] = []
        for idx, value in enumerate(dates):
            day = _parse_date(value)
            if day is None:
                self._log.warning("Skipping daily row with bad date %r", value)
                continue
            result.append(
                ForecastDay(
                    day=day,
                    high=_safe_index(highs, idx),
                    low=_safe_index(lows, idx),
                    summary=_summary(_safe_index(codes, idx)),
                )
            )
        return tuple(result)


def _parse_date(value: Any) -> Optional[date]:
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def _series(daily: Mapping[str, Any], key: str) -> List[Any]:
    values = daily.get(key)
    return values if isinstance(values, list) else []


def _safe_index(values: List[Any], index: int) -> Optional[float]:
    if index >= len(values):
        return None
    return safe_float(values[index])


def _summary(code: Optional[float]) -> Optional[str]:
    if code is None or not math.isfinite(code):
        return None
    return WEATHER_CODES.get(int(code))


__all__ = ["OpenMeteoProvider", "WEATHER_CODES"]
