from __future__ import annotations

import os

import django


os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret")
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings")
os.environ.setdefault("FORECAST_GEOCODER_URL", "https://geocoder.test/search")
os.environ.setdefault("FORECAST_WEATHER_URL", "https://weather.test/forecast")

django.setup()
