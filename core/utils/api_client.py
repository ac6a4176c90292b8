# -*- coding: utf-8 -*-
"""
Обёртка для Open-Meteo Forecast API.

Поддерживает два режима запроса:
- Почасовой ряд в окне: get_hourly_window(lat, lon, timezone_id, window)
- Текущие условия: get_current(lat, lon)

Один вызов — один HTTP-запрос: без повторов, пакетов и задержек.
Любая проблема (сеть, таймаут, HTTP-статус, битый или чужой ответ)
превращается в FetchFailed с исходной причиной в `cause`.
"""

import requests
import logging
from typing import Dict, Optional

from config.bot_config import FORECAST_API_URL
from core.models.weather_response import CurrentConditions, ForecastResponse, ForecastSample, TimeWindow
from core.utils.error_handler import FetchFailed

logger = logging.getLogger("api_client")

# === КОНФИГУРАЦИЯ API ===
API_TIMEOUT = 10  # секунд
HOURLY_FIELD = "temperature_2m"
CURRENT_FIELDS = ["temperature_2m", "relative_humidity_2m", "weather_code", "wind_speed_10m"]


class MalformedResponse(ValueError):
    """Ответ API не соответствует ожидаемой форме."""


class OpenMeteoClient:
    """Клиент для Open-Meteo API."""
    BASE_URL = FORECAST_API_URL

    def __init__(self, base_url: Optional[str] = None, timeout: float = API_TIMEOUT):
        self.base_url = base_url or self.BASE_URL
        self.timeout = timeout

    def _get_json(self, params: Dict) -> Dict:
        """Один GET-запрос; любая ошибка транспорта, статуса или JSON → FetchFailed."""
        try:
            response = requests.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.Timeout as e:
            logger.error(f"⏱️ Open-Meteo: таймаут {self.timeout} с")
            raise FetchFailed(f"Таймаут запроса прогноза ({self.timeout} с)", cause=e) from e
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            logger.error(f"❌ Open-Meteo: HTTP {status}")
            raise FetchFailed(f"HTTP error! status: {status}", cause=e) from e
        except ValueError as e:
            # requests.JSONDecodeError наследует и ValueError, и RequestException
            logger.error(f"❌ Open-Meteo: ответ не является JSON: {e}")
            raise FetchFailed("Ответ прогноза не является JSON", cause=e) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"❌ Open-Meteo: ошибка сети: {e}")
            raise FetchFailed(f"Ошибка сети: {e}", cause=e) from e

    def get_hourly_window(self, lat: float, lon: float, timezone_id: str, window: TimeWindow) -> ForecastResponse:
        """
        Почасовая температура в окне [window.start_iso, window.end_iso].

        Args:
            lat (float): Широта
            lon (float): Долгота
            timezone_id (str): IANA-таймзона, в которой заданы границы окна
            window (TimeWindow): Границы окна

        Returns:
            ForecastResponse: Ряд замеров по возрастанию времени

        Raises:
            FetchFailed: ошибка транспорта, статуса или формата ответа
        """
        params = {
            "latitude": lat,
            "longitude": lon,
            "hourly": HOURLY_FIELD,
            "timezone": timezone_id,
            "start_hour": window.start_iso,
            "end_hour": window.end_iso,
        }
        data = self._get_json(params)
        try:
            forecast = parse_hourly_response(data)
        except MalformedResponse as e:
            logger.error(f"❌ Open-Meteo: некорректный почасовой ответ: {e}")
            raise FetchFailed(f"Некорректный ответ прогноза: {e}", cause=e) from e

        logger.info(f"✅ Open-Meteo: {len(forecast.samples)} замеров для ({lat}, {lon})")
        return forecast

    def get_current(self, lat: float, lon: float) -> CurrentConditions:
        """
        Текущие условия: температура, влажность, код погоды, ветер.

        Raises:
            FetchFailed: ошибка транспорта, статуса или формата ответа
        """
        params = {
            "latitude": lat,
            "longitude": lon,
            "current": ",".join(CURRENT_FIELDS),
        }
        data = self._get_json(params)
        try:
            conditions = parse_current_response(data)
        except MalformedResponse as e:
            logger.error(f"❌ Open-Meteo: некорректный ответ текущей погоды: {e}")
            raise FetchFailed(f"Некорректный ответ прогноза: {e}", cause=e) from e

        logger.info(f"✅ Open-Meteo: текущая погода для ({lat}, {lon}): {conditions.temperature}{conditions.temperature_unit}")
        return conditions


def _units(data: Dict, key: str) -> Dict:
    """Единицы измерения ряда; отсутствие допустимо, чужой тип — нет."""
    units = data.get(key)
    if units is None:
        return {}
    if not isinstance(units, dict):
        raise MalformedResponse(f"'{key}' не является объектом: {type(units).__name__}")
    return units


def parse_hourly_response(data) -> ForecastResponse:
    """Разбирает почасовой ответ. Ответ в форме `current` отвергается."""
    if not isinstance(data, dict):
        raise MalformedResponse("тело ответа не является объектом")
    hourly = data.get("hourly")
    if not isinstance(hourly, dict):
        raise MalformedResponse("ключ 'hourly' отсутствует в ответе")

    times = hourly.get("time")
    temps = hourly.get(HOURLY_FIELD)
    if not isinstance(times, list) or not isinstance(temps, list):
        raise MalformedResponse(f"нет массивов 'time'/'{HOURLY_FIELD}'")
    if len(times) != len(temps):
        raise MalformedResponse(f"длины массивов различаются: {len(times)} ≠ {len(temps)}")

    samples = []
    for timestamp, value in zip(times, temps):
        if value is None:
            logger.warning(f"⚠️ Пропуск замера без значения: {timestamp}")
            continue
        try:
            samples.append(ForecastSample(timestamp=str(timestamp), temperature=float(value)))
        except (TypeError, ValueError) as e:
            raise MalformedResponse(f"нечисловая температура {value!r} в {timestamp}") from e
    samples.sort(key=lambda s: s.timestamp)

    units = _units(data, "hourly_units")
    try:
        return ForecastResponse(
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            timezone=str(data.get("timezone", "")),
            samples=samples,
            unit=str(units.get(HOURLY_FIELD, "°C")),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedResponse(f"нет координат в ответе: {e!r}") from e


def parse_current_response(data) -> CurrentConditions:
    """Разбирает ответ текущей погоды. Ответ в форме `hourly` отвергается."""
    if not isinstance(data, dict):
        raise MalformedResponse("тело ответа не является объектом")
    current = data.get("current")
    if not isinstance(current, dict):
        raise MalformedResponse("ключ 'current' отсутствует в ответе")

    units = _units(data, "current_units")
    try:
        return CurrentConditions(
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            time=str(current["time"]),
            temperature=float(current["temperature_2m"]),
            humidity=float(current["relative_humidity_2m"]),
            weather_code=int(current["weather_code"]),
            wind_speed=float(current["wind_speed_10m"]),
            temperature_unit=str(units.get("temperature_2m", "°C")),
            humidity_unit=str(units.get("relative_humidity_2m", "%")),
            wind_speed_unit=str(units.get("wind_speed_10m", "km/h")),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedResponse(f"неполный объект 'current': {e!r}") from e
