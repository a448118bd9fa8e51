from __future__ import annotations

import pytest

from forecast_core.cache import ForecastCache

from helpers import TimeController


@pytest.fixture
def clock() -> TimeController:
    return TimeController()


@pytest.fixture
def cache(clock: TimeController) -> ForecastCache:
    return ForecastCache(time_func=clock)
