# -*- coding: utf-8 -*-
"""
Менеджер координат: определение местоположения по публичному IP.

Функции:
- Определение города/страны/таймзоны по IP (ipwho.is)
- Валидация координат
- Запасной город для режима «текущая погода»

Кэша нет: местоположение по IP может меняться (VPN, роуминг),
поэтому каждый вызов заново обращается к сервису.

Использование:
>>> from core.utils.coordinate_manager import LocationResolver
>>> location = LocationResolver().resolve()
>>> print(location.city, location.timezone_id)
'Osaka Asia/Tokyo'
"""

import requests
import logging

from config.bot_config import GEO_API_URL
from core.models.weather_response import Location
from core.utils.error_handler import LocationUnavailable, log_and_raise

logger = logging.getLogger("coordinate_manager")

# === КОНФИГУРАЦИЯ ===
REQUEST_TIMEOUT = 10  # секунд


def validate_coordinates(lat: float, lon: float) -> bool:
    """
    Проверяет, что координаты в допустимом диапазоне.

    Args:
        lat (float): Широта (-90 .. 90)
        lon (float): Долгота (-180 .. 180)

    Returns:
        bool: True, если координаты корректны
    """
    try:
        lat, lon = float(lat), float(lon)
    except (TypeError, ValueError):
        return False
    return -90 <= lat <= 90 and -180 <= lon <= 180


class LocationResolver:
    """Определяет приблизительное местоположение по IP вызывающего."""

    def __init__(self, url: str = GEO_API_URL, timeout: float = REQUEST_TIMEOUT):
        self.url = url
        self.timeout = timeout

    def resolve(self) -> Location:
        """
        Запрашивает геолокацию без параметров (IP берётся из соединения).

        Returns:
            Location: Координаты, город, страна и таймзона

        Raises:
            LocationUnavailable: сетевая ошибка, HTTP-ошибка, битый ответ
                или success=false в теле ответа (квота, неверный IP и т.п.)
        """
        try:
            response = requests.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except ValueError as e:
            logger.error(f"❌ Ответ геолокации не является JSON: {e}")
            raise LocationUnavailable("Сервис геолокации вернул некорректный ответ") from e
        except requests.exceptions.RequestException as e:
            logger.error(f"❌ Ошибка геолокации по IP: {e}")
            raise LocationUnavailable(f"Сервис геолокации недоступен: {e}") from e

        if not isinstance(data, dict) or data.get("success") is not True:
            message = data.get("message", "success=false") if isinstance(data, dict) else "неизвестный формат"
            log_and_raise(
                "❌ Геолокация вернула отказ",
                LocationUnavailable(f"Геолокация не удалась: {message}"),
                context={"url": self.url},
            )

        try:
            timezone = data.get("timezone") or {}
            location = Location(
                latitude=float(data["latitude"]),
                longitude=float(data["longitude"]),
                city=str(data.get("city") or ""),
                country=str(data.get("country") or ""),
                timezone_id=str(timezone["id"]),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"❌ Ошибка обработки ответа геолокации: {e!r}")
            raise LocationUnavailable("В ответе геолокации нет координат или таймзоны") from e

        if not validate_coordinates(location.latitude, location.longitude):
            log_and_raise(
                "❌ Неверные координаты",
                LocationUnavailable("Геолокация вернула недопустимые координаты"),
                context={"lat": location.latitude, "lon": location.longitude},
            )

        logger.info(f"🌍 Местоположение: {location.city}, {location.country} ({location.timezone_id})")
        return location


def fallback_location(config) -> Location:
    """Фиксированный запасной город из конфигурации (по умолчанию Токио)."""
    return Location(
        latitude=config.fallback_latitude,
        longitude=config.fallback_longitude,
        city=config.fallback_city,
        country=config.fallback_country,
        timezone_id=config.fallback_timezone,
    )


# === УДОБНЫЕ ФУНКЦИИ ===
def resolve_location() -> Location:
    """Определить местоположение по IP с настройками по умолчанию."""
    return LocationResolver().resolve()
