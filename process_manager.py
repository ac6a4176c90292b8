# process_manager.py
# -*- coding: utf-8 -*-
"""
Координатор зависимостей.
Инициализирует все сервисы один раз и предоставляет к ним доступ.

Экземпляр создаётся в bot.py и кладётся в application.bot_data,
обработчики берут зависимости оттуда.
"""

from typing import Optional
from pathlib import Path
import logging
from config.bot_config import BotConfig
from config.db_config import WEATHER_CACHE_DB
from config.logging_config import setup_logging
from core.db.local_db_weather import ForecastCache
from core.models.weather_response import Location
from core.utils.api_client import OpenMeteoClient
from core.utils.coordinate_manager import LocationResolver, fallback_location

logger = logging.getLogger("process_manager")


class ProcessManager:
    """
    Единый контекст приложения. Все зависимости инициализируются здесь.
    """

    def __init__(self, config: Optional[BotConfig] = None, cache_path: Optional[Path] = None):
        self._initialized = False
        self._cache_path = cache_path or WEATHER_CACHE_DB
        # Конфигурация
        self.config: Optional[BotConfig] = config
        # Сервисы
        self.resolver: Optional[LocationResolver] = None
        self.client: Optional[OpenMeteoClient] = None
        # Кэш последнего удачного прогноза
        self.cache: Optional[ForecastCache] = None

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize_sync(self, configure_logging: bool = True):
        """Синхронная инициализация всех компонентов."""
        if self._initialized:
            return

        # 1. Загрузка конфигурации
        if self.config is None:
            self.config = BotConfig.load()
        if configure_logging:
            setup_logging(self.config.log_level)

        # 2. Сервисы
        self.resolver = LocationResolver(url=self.config.geo_api_url, timeout=self.config.fetch_timeout_sec)
        self.client = OpenMeteoClient(base_url=self.config.forecast_api_url, timeout=self.config.fetch_timeout_sec)

        # 3. Кэш
        self.cache = ForecastCache(db_path=self._cache_path)

        self._initialized = True
        logger.info("✅ ProcessManager: initialized (cache ready)")

    def fallback_location(self) -> Location:
        return fallback_location(self.config)

    def shutdown_sync(self):
        """Синхронное завершение (закрытие ресурсов)."""
        if not self._initialized:
            return

        # Соединения SQLite открываются на каждый запрос, закрывать нечего
        self.cache = None
        self.client = None
        self.resolver = None
        self._initialized = False
        logger.info("🛑 ProcessManager: shut down")
