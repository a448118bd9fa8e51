from .base import FailureReason, FetchError, ProviderError, RequestConfig, ResolutionError
from .nominatim import NominatimGeocoder
from .openmeteo import OpenMeteoProvider
from .openweather import OpenWeatherProvider

__all__ = [
    "FailureReason",
    "FetchError",
    "ProviderError",
    "RequestConfig",
    "ResolutionError",
    "NominatimGeocoder",
    "OpenMeteoProvider",
    "OpenWeatherProvider",
]
