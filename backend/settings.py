"""Base Django settings for the forecast service."""
from __future__ import annotations

from pathlib import Path
import os
from typing import Optional, Sequence

from django.core.exceptions import ImproperlyConfigured

BASE_DIR = Path(__file__).resolve().parent.parent


def env(name: str, default: Optional[str] = None) -> str:
    """Return ``name`` from the environment, or ``default``; fail when neither is set."""

    value = os.environ.get(name) or default
    if value is None:
        raise ImproperlyConfigured(f"Environment variable {name} is required")
    return value


def env_choice(name: str, default: str, choices: Sequence[str]) -> str:
    value = env(name, default).strip().lower()
    if value not in choices:
        raise ImproperlyConfigured(f"{name} must be one of {', '.join(choices)}, got {value!r}")
    return value


def env_int(name: str, default: Optional[int], minimum: int = 1, maximum: Optional[int] = None) -> Optional[int]:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ImproperlyConfigured(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum or (maximum is not None and value > maximum):
        upper = maximum if maximum is not None else "inf"
        raise ImproperlyConfigured(f"{name} must be within [{minimum}, {upper}], got {value}")
    return value


def env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ImproperlyConfigured(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ImproperlyConfigured(f"{name} must be positive, got {value}")
    return value


SECRET_KEY = env("DJANGO_SECRET_KEY")
DEBUG = os.environ.get("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = os.environ.get("DJANGO_ALLOWED_HOSTS", "*").split(",")

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "rest_framework",
    "backend.api",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "backend.urls"

WSGI_APPLICATION = "backend.wsgi.application"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Nothing is persisted; the database only satisfies the contrib apps.
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.environ.get("DB_NAME", str(BASE_DIR / "db.sqlite3")),
    }
}

FORECAST_GEOCODER_URL = env("FORECAST_GEOCODER_URL", "https://nominatim.openstreetmap.org/search")
FORECAST_GEOCODER_USER_AGENT = env("FORECAST_GEOCODER_USER_AGENT", "forecast-cache/0.1")

FORECAST_WEATHER_PROVIDER = env_choice("FORECAST_WEATHER_PROVIDER", "openmeteo", ("openmeteo", "openweather"))
FORECAST_WEATHER_URL = os.environ.get("FORECAST_WEATHER_URL") or None
OPENWEATHER_API_KEY = env("OPENWEATHER_API_KEY") if FORECAST_WEATHER_PROVIDER == "openweather" else ""

FORECAST_TEMPERATURE_UNIT = env_choice("FORECAST_TEMPERATURE_UNIT", "fahrenheit", ("fahrenheit", "celsius"))
# Open-Meteo serves at most 16 forecast days.
FORECAST_EXTENDED_DAYS = env_int("FORECAST_EXTENDED_DAYS", 7, minimum=1, maximum=16)
FORECAST_HTTP_TIMEOUT = env_float("FORECAST_HTTP_TIMEOUT", 10.0)
FORECAST_CACHE_MAX_ENTRIES = env_int("FORECAST_CACHE_MAX_ENTRIES", None)

# Read-only JSON API without accounts.
REST_FRAMEWORK = {
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "UNAUTHENTICATED_USER": None,
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "forecast_core": {"handlers": ["console"], "level": os.environ.get("FORECAST_LOG_LEVEL", "INFO")},
        "backend": {"handlers": ["console"], "level": os.environ.get("FORECAST_LOG_LEVEL", "INFO")},
    },
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True
