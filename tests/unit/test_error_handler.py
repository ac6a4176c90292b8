# -*- coding: utf-8 -*-
"""
Тесты для core/utils/error_handler.py
"""
import logging

import pytest

from core.utils.error_handler import FetchFailed, LocationUnavailable, log_and_raise, log_exception


def test_log_and_raise_logs_context_and_reraises(caplog):
    error = LocationUnavailable("quota")
    with caplog.at_level(logging.ERROR, logger="error_handler"):
        with pytest.raises(LocationUnavailable) as excinfo:
            log_and_raise("Геолокация не удалась", error, context={"lat": 1.0})

    assert excinfo.value is error
    record = caplog.records[-1]
    assert "Геолокация не удалась | Контекст: {'lat': 1.0}" in record.getMessage()
    assert record.exc_info[1] is error


def test_log_exception_does_not_raise(caplog):
    with caplog.at_level(logging.ERROR, logger="error_handler"):
        log_exception(FetchFailed("busy"), "Кэш не записан")
    assert "Кэш не записан | Ошибка: FetchFailed('busy')" in caplog.records[-1].getMessage()
