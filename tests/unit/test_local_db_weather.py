# -*- coding: utf-8 -*-
"""
Тесты для core/db/local_db_weather.py
"""
import sqlite3
import threading

from _support import make_forecast
from core.db.local_db_weather import ForecastCache


def test_empty_cache_returns_none(cache):
    assert cache.get() is None


def test_put_then_get_round_trip(cache, forecast):
    cache.put(forecast)
    cached = cache.get()
    assert cached == forecast
    assert cached is not forecast
    print("✅ test_put_then_get_round_trip passed")


def test_put_overwrites_single_slot(cache):
    first = make_forecast([1.0, 2.0])
    second = make_forecast([30.0], date="2025-10-31")
    cache.put(first)
    cache.put(second)
    assert cache.get() == second

    conn = sqlite3.connect(cache.db_path)
    try:
        (count,) = conn.execute("SELECT COUNT(*) FROM forecast_slot").fetchone()
    finally:
        conn.close()
    assert count == 1


def test_cache_survives_new_instance(tmp_path, forecast):
    db_path = tmp_path / "nested" / "weather_cache.db"
    ForecastCache(db_path=db_path).put(forecast)
    assert ForecastCache(db_path=db_path).get() == forecast


def test_slots_are_independent(tmp_path, forecast):
    db_path = tmp_path / "weather_cache.db"
    today = ForecastCache(db_path=db_path, slot="today")
    other = ForecastCache(db_path=db_path, slot="other")
    today.put(forecast)
    assert other.get() is None
    assert today.get() == forecast


def test_no_expiry_for_old_forecast(cache):
    old = make_forecast([5.0, 6.0], date="2020-01-01")
    cache.put(old)
    assert cache.get() == old


def test_corrupt_blob_is_treated_as_empty(cache):
    conn = sqlite3.connect(cache.db_path)
    try:
        conn.execute(
            "INSERT OR REPLACE INTO forecast_slot (slot, data_json, stored_at) VALUES (?, ?, ?)",
            (cache.slot, "{not json", "2025-10-30T06:00:00+00:00"),
        )
        conn.commit()
    finally:
        conn.close()
    assert cache.get() is None


def test_clear(cache, forecast):
    cache.put(forecast)
    cache.clear()
    assert cache.get() is None


def test_concurrent_puts_leave_one_complete_entry(cache):
    forecasts = [make_forecast([float(i)] * 5) for i in range(8)]
    threads = [threading.Thread(target=cache.put, args=(f,)) for f in forecasts]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    cached = cache.get()
    assert cached in forecasts
    assert len(cached.samples) == 5


if __name__ == "__main__":
    import tempfile
    from pathlib import Path
    with tempfile.TemporaryDirectory() as tmp:
        test_cache_survives_new_instance(Path(tmp), make_forecast([1.0]))
