# -*- coding: utf-8 -*-
"""
Конфигурация путей к локальным данным проекта.
Кэш последнего прогноза хранится в SQLite (sqlite3).
"""

from pathlib import Path
import os

# === Корень проекта ===
PROJECT_ROOT = Path(__file__).parent.parent.resolve()

# === Папка данных ===
DATA_DIR = Path(os.getenv("DATA_DIR", PROJECT_ROOT / "data"))

LOCAL_DB_DIR = DATA_DIR / "local_db"

# === ЛОКАЛЬНЫЙ КЭШ: последний удачный прогноз ===
WEATHER_CACHE_DB = LOCAL_DB_DIR / "weather_cache.db"

# === ПАРАМЕТРЫ ПОДКЛЮЧЕНИЯ ===
DB_CONNECTION_TIMEOUT = 30  # секунд
