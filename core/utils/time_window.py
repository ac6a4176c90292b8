# -*- coding: utf-8 -*-
"""
Окно запроса «сегодня с утра до сейчас» в таймзоне наблюдаемого места.

Обе границы считаются по местному времени целевой таймзоны (zoneinfo),
а не по таймзоне машины, на которой запущен бот.

Граничный случай: до 05:00 местного времени конец окна лексически меньше
начала (та же дата). Окно не сдвигается на вчера — оно уходит в API как есть,
и сервис сам решает, вернуть ли пустой ряд.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from core.models.weather_response import TimeWindow

logger = logging.getLogger("time_window")

WINDOW_START_HOUR = 5
ISO_MINUTE_FORMAT = "%Y-%m-%dT%H:%M"


def local_now(timezone_id: str, now_utc: Optional[datetime] = None) -> datetime:
    """
    Текущее время в заданной таймзоне.

    Наивный `now_utc` считается временем в UTC.

    Raises:
        ValueError: неизвестная таймзона
    """
    try:
        tz = ZoneInfo(timezone_id)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Неизвестная таймзона: {timezone_id!r}") from e

    if now_utc is None:
        now_utc = datetime.now(timezone.utc)
    elif now_utc.tzinfo is None:
        now_utc = now_utc.replace(tzinfo=timezone.utc)
    return now_utc.astimezone(tz)


def compute_window(now_utc: Optional[datetime], timezone_id: str, start_hour: int = WINDOW_START_HOUR) -> TimeWindow:
    """
    Вычисляет окно [start_hour:00 местного времени, текущее местное время].

    Args:
        now_utc (datetime): Момент времени (aware или наивный UTC); None — сейчас
        timezone_id (str): IANA-таймзона места, например "Asia/Tokyo"
        start_hour (int): Час начала окна (по умолчанию 5)

    Returns:
        TimeWindow: Границы в формате YYYY-MM-DDTHH:MM без смещения
    """
    now_local = local_now(timezone_id, now_utc)
    start = now_local.replace(hour=start_hour, minute=0, second=0, microsecond=0)
    end = now_local.replace(second=0, microsecond=0)

    window = TimeWindow(start_iso=start.strftime(ISO_MINUTE_FORMAT), end_iso=end.strftime(ISO_MINUTE_FORMAT))
    if window.end_iso < window.start_iso:
        logger.warning(f"⚠️ Конец окна раньше начала ({window.start_iso} → {window.end_iso}), запрашиваем как есть")
    else:
        logger.debug(f"🕔 Окно запроса: {window.start_iso} → {window.end_iso} ({timezone_id})")
    return window
