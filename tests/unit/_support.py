# -*- coding: utf-8 -*-
"""
Вспомогательные функции тестов: фальшивые HTTP-ответы и прогнозы.
"""
import json
from datetime import datetime, timezone

import requests

from core.models.weather_response import ForecastResponse, ForecastSample

# 2025-10-30 15:00 в Токио
TOKYO_NOW_UTC = datetime(2025, 10, 30, 6, 0, tzinfo=timezone.utc)


def make_response(payload=None, status_code: int = 200, raw: bytes = None) -> requests.Response:
    """Настоящий requests.Response без сети."""
    response = requests.Response()
    response.status_code = status_code
    response.url = "https://example.test/"
    response.encoding = "utf-8"
    response._content = raw if raw is not None else json.dumps(payload).encode("utf-8")
    return response


def make_forecast(temperatures, start_hour: int = 5, date: str = "2025-10-30", unit: str = "°C") -> ForecastResponse:
    samples = [
        ForecastSample(timestamp=f"{date}T{start_hour + i:02d}:00", temperature=float(t))
        for i, t in enumerate(temperatures)
    ]
    return ForecastResponse(latitude=35.7, longitude=139.625, timezone="Asia/Tokyo", samples=samples, unit=unit)


def hourly_payload(temperatures, start_hour: int = 5, date: str = "2025-10-30") -> dict:
    return {
        "latitude": 35.7,
        "longitude": 139.625,
        "timezone": "Asia/Tokyo",
        "hourly_units": {"time": "iso8601", "temperature_2m": "°C"},
        "hourly": {
            "time": [f"{date}T{start_hour + i:02d}:00" for i in range(len(temperatures))],
            "temperature_2m": list(temperatures),
        },
    }


def current_payload() -> dict:
    return {
        "latitude": 35.7,
        "longitude": 139.625,
        "current_units": {"temperature_2m": "°C", "relative_humidity_2m": "%", "wind_speed_10m": "km/h"},
        "current": {
            "time": "2025-10-30T15:00",
            "temperature_2m": 18.4,
            "relative_humidity_2m": 62,
            "weather_code": 0,
            "wind_speed_10m": 7.2,
        },
    }


def ipwho_payload(**overrides) -> dict:
    payload = {
        "ip": "203.0.113.7",
        "success": True,
        "city": "Osaka",
        "country": "Japan",
        "latitude": 34.6937,
        "longitude": 135.5023,
        "timezone": {"id": "Asia/Tokyo", "abbr": "JST", "utc": "+09:00"},
    }
    payload.update(overrides)
    return payload
