# -*- coding: utf-8 -*-
"""
Локальная база данных для последнего удачного прогноза.

Используется только как запасной путь:
- после каждого удачного запроса слот перезаписывается (put)
- при ошибке запроса слот читается (get), а отчёт помечается устаревшим

Ёмкость — ровно одна запись на слот, срока годности нет:
вчерашний прогноз остаётся валидной подменой до следующего успеха.

Таблицы:
- forecast_slot: один JSON-блоб на имя слота
"""

import sqlite3
import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from config.db_config import WEATHER_CACHE_DB, DB_CONNECTION_TIMEOUT
from core.models.weather_response import ForecastResponse

logger = logging.getLogger("local_db_weather")

DEFAULT_SLOT = "today"

# === SQL ЗАПРОСЫ ===
CREATE_TABLES_SQL = """
-- Последний удачный прогноз (один слот на имя)
CREATE TABLE IF NOT EXISTS forecast_slot (
    slot TEXT PRIMARY KEY,
    data_json TEXT NOT NULL,
    stored_at TIMESTAMP NOT NULL
);
"""


class ForecastCache:
    """
    Кэш на одну запись с безусловной перезаписью.

    Доступ к слоту сериализован блокировкой: обработчики бота
    выполняются в пуле потоков.
    """

    def __init__(self, db_path: Union[str, Path] = WEATHER_CACHE_DB, slot: str = DEFAULT_SLOT):
        self.db_path = Path(db_path)
        self.slot = slot
        self._lock = threading.Lock()
        self.init_db()

    def _connect(self):
        conn = sqlite3.connect(self.db_path, timeout=DB_CONNECTION_TIMEOUT)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self):
        """Инициализирует файл кэша."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        conn = self._connect()
        try:
            conn.executescript(CREATE_TABLES_SQL)
            conn.commit()
            logger.info("Кэш прогноза инициализирован: %s [%s]", self.db_path, self.slot)
        except sqlite3.Error as e:
            logger.error("Ошибка инициализации кэша прогноза: %s", e)
            raise
        finally:
            conn.close()

    def put(self, forecast: ForecastResponse) -> None:
        """Безусловно перезаписывает слот."""
        payload = json.dumps(forecast.to_dict(), ensure_ascii=False)
        with self._lock:
            conn = self._connect()
            try:
                conn.execute(
                    "INSERT OR REPLACE INTO forecast_slot (slot, data_json, stored_at) VALUES (?, ?, ?)",
                    (self.slot, payload, datetime.now(timezone.utc).isoformat())
                )
                conn.commit()
            finally:
                conn.close()
        logger.info(f"💾 Прогноз закэширован: {len(forecast.samples)} замеров ({forecast.latitude}, {forecast.longitude})")

    def get(self) -> Optional[ForecastResponse]:
        """
        Возвращает сохранённый прогноз.

        Returns:
            Optional[ForecastResponse]: Прогноз или None, если кэш пуст
                или запись повреждена
        """
        with self._lock:
            conn = self._connect()
            try:
                row = conn.execute(
                    "SELECT data_json, stored_at FROM forecast_slot WHERE slot = ?",
                    (self.slot,)
                ).fetchone()
            finally:
                conn.close()

        if row is None:
            logger.info("📭 Кэш прогноза пуст")
            return None

        try:
            forecast = ForecastResponse.from_dict(json.loads(row["data_json"]))
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"❌ Повреждённая запись кэша прогноза: {e!r}")
            return None

        logger.info(f"📂 Прогноз из кэша от {row['stored_at']}")
        return forecast

    def clear(self) -> None:
        """Очищает слот."""
        with self._lock:
            conn = self._connect()
            try:
                conn.execute("DELETE FROM forecast_slot WHERE slot = ?", (self.slot,))
                conn.commit()
            finally:
                conn.close()
        logger.info("🧹 Кэш прогноза очищен [%s]", self.slot)
