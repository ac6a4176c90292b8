# -*- coding: utf-8 -*-
"""
Получение прогноза через api_client с подменой из кэша.
"""

import logging
import sqlite3
from typing import Tuple

from core.db.local_db_weather import ForecastCache
from core.models.weather_response import ForecastResponse, TimeWindow
from core.utils.api_client import OpenMeteoClient
from core.utils.error_handler import FetchFailed, NoFallbackAvailable, log_exception

logger = logging.getLogger("data_fetcher")


def fetch_with_fallback(
    client: OpenMeteoClient,
    cache: ForecastCache,
    lat: float,
    lon: float,
    timezone_id: str,
    window: TimeWindow,
) -> Tuple[ForecastResponse, bool]:
    """
    Получает почасовой прогноз; при ошибке подставляет последний удачный.

    Args:
        client (OpenMeteoClient): Клиент прогноза
        cache (ForecastCache): Слот последнего удачного ответа
        lat (float): Широта
        lon (float): Долгота
        timezone_id (str): Таймзона окна
        window (TimeWindow): Окно запроса

    Returns:
        (ForecastResponse, bool): Прогноз и флаг «устаревший»

    Raises:
        NoFallbackAvailable: запрос не удался, а кэш пуст
    """
    try:
        forecast = client.get_hourly_window(lat, lon, timezone_id, window)
    except FetchFailed as e:
        logger.warning(f"⚠️ Прогноз не получен ({e}), пробуем кэш")
        try:
            cached = cache.get()
        except (sqlite3.Error, OSError) as cache_error:
            log_exception(cache_error, "Не удалось прочитать кэш прогноза")
            cached = None
        if cached is None:
            logger.error("❌ Кэш пуст, подменить прогноз нечем")
            raise NoFallbackAvailable("Прогноз не получен, сохранённых данных нет", cause=e) from e
        logger.info(f"💾 Используем устаревший прогноз из кэша ({len(cached.samples)} замеров)")
        return cached, True

    # Запись в кэш не должна ломать уже полученный отчёт
    try:
        cache.put(forecast)
    except (sqlite3.Error, OSError) as e:
        log_exception(e, "Не удалось сохранить прогноз в кэш", {"lat": lat, "lon": lon})

    return forecast, False
