"""Address to forecast resolution with a postal-code keyed cache."""
from .cache import ForecastCache
from .entities import ForecastData, ForecastDay, ForecastResult, Location
from .providers.base import FailureReason, FetchError, ProviderError, ResolutionError
from .services.forecast import ForecastService

__all__ = [
    "ForecastCache",
    "ForecastData",
    "ForecastDay",
    "ForecastResult",
    "Location",
    "FailureReason",
    "FetchError",
    "ProviderError",
    "ResolutionError",
    "ForecastService",
]
