# -*- coding: utf-8 -*-
"""
Утилита для централизованной обработки ошибок.

Виды ошибок отчёта о температуре:
- LocationUnavailable — геолокация по IP не удалась (сеть или success=false)
- FetchFailed — прогноз не получен (сеть, HTTP-статус, битый ответ)
- NoFallbackAvailable — прогноз не получен, а в кэше пусто
"""

import logging
from typing import Optional

logger = logging.getLogger("error_handler")


class TemperatureError(Exception):
    """Базовая ошибка отчёта о температуре."""


class LocationUnavailable(TemperatureError):
    """Не удалось определить местоположение по IP."""


class FetchFailed(TemperatureError):
    """Не удалось получить прогноз. Исходная причина хранится в `cause`."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class NoFallbackAvailable(TemperatureError):
    """Прогноз не получен и подменить его из кэша нечем."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


def log_and_raise(message: str, exception: Exception, context: Optional[dict] = None):
    """
    Логирует ошибку и выбрасывает её дальше.

    Args:
        message (str): Пользовательское сообщение
        exception (Exception): Исключение, которое обрабатывается
        context (dict): Дополнительный контекст (например, lat, lon)
    """
    log_context = f" | Контекст: {context}" if context else ""
    logger.error(f"{message}{log_context} | Ошибка: {exception!r}", exc_info=exception)
    raise exception


def log_exception(exception: Exception, message: str = "Необработанное исключение", context: Optional[dict] = None):
    """
    Просто логирует исключение без выбрасывания.

    Args:
        exception (Exception): Исключение
        message (str): Описание
        context (dict): Контекст (координаты, таймзона и т.п.)
    """
    log_context = f" | Контекст: {context}" if context else ""
    logger.error(f"{message}{log_context} | Ошибка: {exception!r}", exc_info=exception)
