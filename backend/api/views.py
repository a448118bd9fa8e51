"""REST API views for address forecasts."""
from __future__ import annotations

import logging
from functools import lru_cache

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView


from forecast_core.cache import ForecastCache
from forecast_core.entities import ForecastResult
from forecast_core.providers.base import FetchError, RequestConfig, ResolutionError
from forecast_core.providers.nominatim import NominatimGeocoder
from forecast_core.providers.openmeteo import OpenMeteoProvider
from forecast_core.providers.openweather import OpenWeatherProvider
from forecast_core.services.forecast import ForecastService


logger = logging.getLogger(__name__)

RESOLUTION_FAILED = "We could not find that address. Please check it and try again."
FETCH_FAILED = "The weather service is unavailable right now. Please try again later."


@lru_cache(maxsize=1)
def get_forecast_service() -> ForecastService:
    geocoder = NominatimGeocoder(
        base_url=settings.FORECAST_GEOCODER_URL,
        request_config=RequestConfig(
            timeout=settings.FORECAST_HTTP_TIMEOUT,
            user_agent=settings.FORECAST_GEOCODER_USER_AGENT,
        ),
    )
    weather_config = RequestConfig(timeout=settings.FORECAST_HTTP_TIMEOUT)
    if settings.FORECAST_WEATHER_PROVIDER == "openweather":
        weather = OpenWeatherProvider(
            api_key=settings.OPENWEATHER_API_KEY,
            base_url=settings.FORECAST_WEATHER_URL,
            temperature_unit=settings.FORECAST_TEMPERATURE_UNIT,
            request_config=weather_config,
        )
    else:
        weather = OpenMeteoProvider(
            base_url=settings.FORECAST_WEATHER_URL,
            temperature_unit=settings.FORECAST_TEMPERATURE_UNIT,
            days=settings.FORECAST_EXTENDED_DAYS,
            request_config=weather_config,
        )
    return ForecastService(
        geocoder=geocoder,
        weather=weather,
        cache=ForecastCache(max_entries=settings.FORECAST_CACHE_MAX_ENTRIES),
    )


def serialize_result(result: ForecastResult) -> dict:
    payload = result.to_payload()
    payload["temperature_unit"] = settings.FORECAST_TEMPERATURE_UNIT
    return payload


class ForecastView(APIView):
    """Return the forecast for a free-text address."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the forecast, flagging whether it was served from cache."""
        address = request.query_params.get("address", "")
        if not address.strip():
            return Response({"detail": "address query parameter is required"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            result = get_forecast_service().get_forecast(address)
        except ResolutionError as exc:
            logger.info("Address resolution failed (%s): %s", exc.reason.value, exc)
            return Response(
                {"detail": RESOLUTION_FAILED, "reason": exc.reason.value},
                status=status.HTTP_422_UNPROCESSABLE_ENTITY,
            )
        except FetchError as exc:
            logger.warning("Forecast fetch failed (%s): %s", exc.reason.value, exc)
            return Response({"detail": FETCH_FAILED, "reason": exc.reason.value}, status=status.HTTP_502_BAD_GATEWAY)

        return Response(serialize_result(result), status=status.HTTP_200_OK)
