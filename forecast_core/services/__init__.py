from .forecast import ForecastService

__all__ = ["ForecastService"]
