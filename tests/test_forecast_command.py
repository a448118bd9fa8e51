from __future__ import annotations

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from backend.api.views import get_forecast_service

from helpers import NOMINATIM_CUPERTINO, OPEN_METEO_CUPERTINO


@pytest.fixture(autouse=True)
def fresh_service():
    get_forecast_service.cache_clear()
    yield
    get_forecast_service.cache_clear()


def test_forecast_fetch_prints_payload(requests_mock) -> None:
    requests_mock.get("https://geocoder.test/search", json=NOMINATIM_CUPERTINO)
    requests_mock.get("https://weather.test/forecast", json=OPEN_METEO_CUPERTINO)
    out = StringIO()

    call_command("forecast_fetch", "--address", "1 Infinite Loop, Cupertino, California", stdout=out)

    payload = json.loads(out.getvalue())
    assert payload["location"]["postal_code"] == "95014"
    assert payload["from_cache"] is False


def test_forecast_fetch_reports_failure_reason(requests_mock) -> None:
    requests_mock.get("https://geocoder.test/search", status_code=503, text="busy")

    with pytest.raises(CommandError, match="bad_status"):
        call_command("forecast_fetch", "--address", "1 Infinite Loop")
