# -*- coding: utf-8 -*-
"""
Общие фикстуры тестов: место, окно, прогноз, временный кэш.
"""
import pytest

from _support import make_forecast
from core.db.local_db_weather import ForecastCache
from core.models.weather_response import ForecastResponse, Location, TimeWindow


@pytest.fixture
def tokyo() -> Location:
    return Location(latitude=35.6762, longitude=139.6503, city="Tokyo", country="Japan", timezone_id="Asia/Tokyo")


@pytest.fixture
def window() -> TimeWindow:
    return TimeWindow(start_iso="2025-10-30T05:00", end_iso="2025-10-30T15:00")


@pytest.fixture
def forecast() -> ForecastResponse:
    # 11 часовых замеров 05:00..15:00
    return make_forecast([-2.0, -1.5, 0.0, 3.2, 8.0, 15.5, 22.0, 30.1, 36.4, 39.9, 41.0])


@pytest.fixture
def cache(tmp_path) -> ForecastCache:
    return ForecastCache(db_path=tmp_path / "weather_cache.db")
