from __future__ import annotations

import threading

import pytest

from forecast_core.cache import ForecastCache
from forecast_core.entities import ForecastData
from forecast_core.providers.base import FailureReason, FetchError, RequestConfig, ResolutionError
from forecast_core.providers.nominatim import NominatimGeocoder
from forecast_core.providers.openmeteo import OpenMeteoProvider
from forecast_core.services.forecast import ForecastService

from helpers import CUPERTINO, NOMINATIM_CUPERTINO, OPEN_METEO_CUPERTINO, FakeGeocoder, FakeWeather


ADDRESS = "1 Infinite Loop, Cupertino, California"
OTHER_ADDRESS = "10600 N Tantau Ave, Cupertino, CA"


class RecordingCache(ForecastCache):
    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.gets = []
        self.puts = []

    def get(self, key):
        self.gets.append(key)
        return super().get(key)

    def put(self, key, value):
        self.puts.append(key)
        super().put(key, value)


def make_service(cache, weather=None, geocoder=None) -> ForecastService:
    geocoder = geocoder or FakeGeocoder({ADDRESS: CUPERTINO, OTHER_ADDRESS: CUPERTINO})
    return ForecastService(geocoder=geocoder, weather=weather or FakeWeather(), cache=cache)


def test_second_call_for_same_postal_code_is_served_from_cache(cache) -> None:
    weather = FakeWeather([68.4, 99.0])
    service = make_service(cache, weather)

    first = service.get_forecast(ADDRESS)
    second = service.get_forecast(OTHER_ADDRESS)

    assert first.from_cache is False
    assert second.from_cache is True
    assert second.forecast == first.forecast
    assert second.forecast.current_temperature == 68.4
    assert len(weather.calls) == 1


def test_call_after_window_fetches_again(cache, clock) -> None:
    weather = FakeWeather([68.4, 70.1])
    service = make_service(cache, weather)

    service.get_forecast(ADDRESS)
    clock.advance(31 * 60)
    result = service.get_forecast(ADDRESS)

    assert result.from_cache is False
    assert result.forecast.current_temperature == 70.1
    assert len(weather.calls) == 2


def test_result_carries_resolved_location(cache) -> None:
    result = make_service(cache).get_forecast(ADDRESS)

    assert result.location == CUPERTINO
    assert result.to_payload()["source"] == "fresh"


def test_resolution_failure_skips_cache_and_weather(clock) -> None:
    cache = RecordingCache(time_func=clock)
    weather = FakeWeather()
    service = make_service(cache, weather)

    with pytest.raises(ResolutionError) as excinfo:
        service.get_forecast("unknown place")

    assert excinfo.value.reason is FailureReason.NO_MATCH
    assert weather.calls == []
    assert cache.gets == []
    assert cache.puts == []


def test_fetch_failure_is_not_cached_and_next_call_retries(cache) -> None:
    weather = FakeWeather([55.0], error=FetchError(FailureReason.BAD_STATUS, "HTTP 500", provider="fake"))
    service = make_service(cache, weather)

    with pytest.raises(FetchError):
        service.get_forecast(ADDRESS)
    assert cache.get(CUPERTINO.postal_code) == (None, False)

    weather.error = None
    result = service.get_forecast(ADDRESS)

    assert result.from_cache is False
    assert len(weather.calls) == 2


def test_cached_entry_is_reported_from_cache(cache) -> None:
    cache.put(CUPERTINO.postal_code, ForecastData(current_temperature=42.0))
    weather = FakeWeather()

    result = make_service(cache, weather).get_forecast(ADDRESS)

    assert result.from_cache is True
    assert result.forecast.current_temperature == 42.0
    assert weather.calls == []


def test_concurrent_misses_may_fetch_twice_but_agree_afterwards() -> None:
    cache = ForecastCache()
    barrier = threading.Barrier(2)

    class SlowWeather(FakeWeather):
        def fetch(self, location):
            barrier.wait(timeout=5)
            return super().fetch(location)

    weather = SlowWeather([68.4])
    service = make_service(cache, weather)
    results = []

    threads = [threading.Thread(target=lambda: results.append(service.get_forecast(ADDRESS))) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert [result.from_cache for result in results] == [False, False]
    assert len(weather.calls) == 2
    assert service.get_forecast(ADDRESS).from_cache is True


def test_end_to_end_with_http_providers(requests_mock, cache) -> None:
    requests_mock.get("https://nominatim.test/search", json=NOMINATIM_CUPERTINO)
    requests_mock.get("https://openmeteo.test/forecast", json=OPEN_METEO_CUPERTINO)
    service = ForecastService(
        geocoder=NominatimGeocoder(base_url="https://nominatim.test/search", request_config=RequestConfig(user_agent="t")),
        weather=OpenMeteoProvider(base_url="https://openmeteo.test/forecast"),
        cache=cache,
    )

    first = service.get_forecast(ADDRESS)
    second = service.get_forecast(ADDRESS)

    assert first.location.postal_code == "95014"
    assert first.from_cache is False
    assert second.from_cache is True
    assert second.forecast.current_temperature == first.forecast.current_temperature == 68.4
    # two geocoding calls, one weather call
    assert requests_mock.call_count == 3


def test_missing_postal_code_creates_no_cache_entry(requests_mock, cache) -> None:
    match = [dict(NOMINATIM_CUPERTINO[0], address={"country_code": "us"})]
    requests_mock.get("https://nominatim.test/search", json=match)
    service = ForecastService(
        geocoder=NominatimGeocoder(base_url="https://nominatim.test/search"),
        weather=FakeWeather(),
        cache=cache,
    )

    with pytest.raises(ResolutionError) as excinfo:
        service.get_forecast(ADDRESS)

    assert excinfo.value.reason is FailureReason.MISSING_POSTAL_CODE
    assert len(cache) == 0
