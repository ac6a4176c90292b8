# -*- coding: utf-8 -*-
"""
Сценарий отчёта о температуре за сегодня.

Один последовательный проход по состояниям:
    RESOLVING_LOCATION → COMPUTING_WINDOW → FETCHING →
    {RENDERED | RENDERED_STALE | HARD_FAILED}

Ошибка геолокации завершает сценарий в LOCATION_UNAVAILABLE (кэш не читается:
без координат подменять нечего). Ни одна ожидаемая ошибка не выходит наружу,
каждый путь заканчивается отчётом, который можно показать пользователю.
Повторов нет: обновление запускает сценарий заново.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from config.bot_config import CHART_API_URL
from core.db.local_db_weather import ForecastCache
from core.models.weather_response import Location, ReportOutcome, ReportState
from core.utils.api_client import OpenMeteoClient
from core.utils.coordinate_manager import LocationResolver
from core.utils.error_handler import FetchFailed, LocationUnavailable, NoFallbackAvailable
from core.utils.time_window import WINDOW_START_HOUR, compute_window
from scripts.weather._processes.data_fetcher import fetch_with_fallback
from scripts.weather._processes.formatter import (
    render_current_report,
    render_fetch_error,
    render_location_error,
    render_report,
)

logger = logging.getLogger("temperature_workflow")

StateCallback = Callable[[ReportState], None]


def _notify(on_state: Optional[StateCallback], state: ReportState) -> None:
    logger.debug(f"➡️ Состояние отчёта: {state.value}")
    if on_state is not None:
        on_state(state)


def generate_today_report(
    resolver: LocationResolver,
    client: OpenMeteoClient,
    cache: ForecastCache,
    now: Optional[datetime] = None,
    on_state: Optional[StateCallback] = None,
    start_hour: int = WINDOW_START_HOUR,
    chart_base_url: str = CHART_API_URL,
) -> ReportOutcome:
    """
    Формирует отчёт о температуре с 05:00 до текущего момента.

    Args:
        resolver (LocationResolver): Геолокация по IP
        client (OpenMeteoClient): Клиент прогноза
        cache (ForecastCache): Слот последнего удачного прогноза
        now (datetime): Момент отчёта в UTC (None — сейчас)
        on_state (callable): Наблюдатель переходов состояний

    Returns:
        ReportOutcome: Отчёт в одном из конечных состояний
    """
    _notify(on_state, ReportState.RESOLVING_LOCATION)
    try:
        location = resolver.resolve()
    except LocationUnavailable as e:
        logger.error(f"❌ Отчёт прерван: {e}")
        _notify(on_state, ReportState.LOCATION_UNAVAILABLE)
        report = render_location_error()
        return ReportOutcome(state=ReportState.LOCATION_UNAVAILABLE, text=report.text, error=e)

    _notify(on_state, ReportState.COMPUTING_WINDOW)
    try:
        window = compute_window(now, location.timezone_id, start_hour)
    except ValueError as e:
        logger.error(f"❌ Таймзона места не распознана: {e}")
        _notify(on_state, ReportState.LOCATION_UNAVAILABLE)
        report = render_location_error(str(e))
        return ReportOutcome(
            state=ReportState.LOCATION_UNAVAILABLE,
            text=report.text,
            location=location,
            error=LocationUnavailable(str(e)),
        )

    _notify(on_state, ReportState.FETCHING)
    try:
        forecast, is_stale = fetch_with_fallback(
            client, cache, location.latitude, location.longitude, location.timezone_id, window
        )
    except NoFallbackAvailable as e:
        _notify(on_state, ReportState.HARD_FAILED)
        report = render_fetch_error(str(e.cause) if e.cause else None)
        return ReportOutcome(
            state=ReportState.HARD_FAILED,
            text=report.text,
            location=location,
            window=window,
            error=e,
        )

    state = ReportState.RENDERED_STALE if is_stale else ReportState.RENDERED
    report = render_report(location, window, forecast, is_stale, chart_base_url)
    _notify(on_state, state)
    logger.info(f"✅ Отчёт сформирован: {location.city}, {len(forecast.samples)} замеров, {state.value}")
    return ReportOutcome(
        state=state,
        text=report.text,
        chart_url=report.chart_url,
        location=location,
        window=window,
        forecast=forecast,
    )


def generate_current_report(client: OpenMeteoClient, location: Location) -> ReportOutcome:
    """
    Текущая погода для фиксированного места (без кэша).

    Returns:
        ReportOutcome: RENDERED или HARD_FAILED
    """
    try:
        conditions = client.get_current(location.latitude, location.longitude)
    except FetchFailed as e:
        logger.error(f"❌ Текущая погода не получена: {e}")
        report = render_fetch_error(str(e))
        return ReportOutcome(state=ReportState.HARD_FAILED, text=report.text, location=location, error=e)

    report = render_current_report(location, conditions)
    return ReportOutcome(state=ReportState.RENDERED, text=report.text, location=location)
