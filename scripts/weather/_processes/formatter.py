# -*- coding: utf-8 -*-
"""
Форматирование отчёта о температуре (HTML для Telegram, ссылка на график).

Всё здесь чистое: никакого ввода-вывода, один и тот же вход даёт
побайтно одинаковый текст. График строится внешним сервисом QuickChart,
мы только собираем для него конфигурацию Chart.js и кладём её в URL.
"""

import json
import math
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple
from urllib.parse import quote

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from config.bot_config import CHART_API_URL
from core.models.weather_response import CurrentConditions, ForecastResponse, Location, Report, TimeWindow
from core.utils.wmo_codes import wmo_description

logger = logging.getLogger("formatter")

TEMPLATES_DIR = Path(__file__).parent.parent / "_io" / "templates"

# === ГРАНИЦЫ ОСИ Y ===
DEFAULT_Y_MIN = 0
DEFAULT_Y_MAX = 40
Y_MAX_HEADROOM = 2

CHART_WIDTH = 800
CHART_HEIGHT = 400
CHART_COLOR = "rgba(135, 206, 250, 1)"
CHART_FILL = "rgba(135, 206, 250, 0.3)"
CHART_FONT = "Helvetica"

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def format_number(value) -> str:
    """12.0 → '12', 12.5 → '12.5'."""
    if isinstance(value, float):
        return f"{value:g}"
    return str(value)


def _build_environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["num"] = format_number
    return env


_ENV = _build_environment()


def compute_axis_bounds(temperatures: Sequence[float]) -> Tuple[int, int]:
    """
    Границы оси Y: 0..40, расширенные вниз ниже нуля и вверх выше 40.

    y_min = floor(min), если min < 0, иначе 0
    y_max = ceil(max) + 2, если max > 40, иначе 40
    """
    if not temperatures:
        return DEFAULT_Y_MIN, DEFAULT_Y_MAX
    lowest, highest = min(temperatures), max(temperatures)
    y_min = math.floor(lowest) if lowest < 0 else DEFAULT_Y_MIN
    y_max = math.ceil(highest) + Y_MAX_HEADROOM if highest > DEFAULT_Y_MAX else DEFAULT_Y_MAX
    return y_min, y_max


def time_labels(timestamps: Sequence[str]) -> List[str]:
    """'2025-10-30T15:00' → '15:00'. Время уже местное, сдвигать не нужно."""
    return [ts.split("T", 1)[1] if "T" in ts else ts for ts in timestamps]


def format_title_date(window: TimeWindow) -> str:
    """Дата начала окна в виде 'October 30, 2025'."""
    day = datetime.strptime(window.start_iso[:10], "%Y-%m-%d")
    return f"{MONTHS[day.month - 1]} {day.day}, {day.year}"


def build_chart_config(location: Location, window: TimeWindow, forecast: ForecastResponse) -> Dict:
    """Конфигурация Chart.js (синтаксис v2, который понимает QuickChart)."""
    temperatures = forecast.temperatures
    y_min, y_max = compute_axis_bounds(temperatures)
    title = f"{location.city}, {location.country} - {format_title_date(window)}"

    return {
        "type": "line",
        "data": {
            "labels": time_labels([s.timestamp for s in forecast.samples]),
            "datasets": [
                {
                    "label": f"Температура ({forecast.unit})",
                    "data": temperatures,
                    "borderColor": CHART_COLOR,
                    "backgroundColor": CHART_FILL,
                    "tension": 0.4,
                    "fill": True,
                }
            ],
        },
        "options": {
            "title": {
                "display": True,
                "text": title,
                "fontSize": 20,
                "fontColor": "#333",
                "fontFamily": CHART_FONT,
            },
            "legend": {"display": False},
            "scales": {
                "yAxes": [
                    {
                        "scaleLabel": {"display": False},
                        "ticks": {
                            "beginAtZero": False,
                            "min": y_min,
                            "max": y_max,
                            "fontStyle": "bold",
                            "fontFamily": CHART_FONT,
                        },
                        "gridLines": {"color": "rgba(0, 0, 0, 0.05)"},
                    }
                ],
                "xAxes": [
                    {
                        "scaleLabel": {"display": False},
                        "ticks": {"fontStyle": "bold", "fontFamily": CHART_FONT},
                        "gridLines": {"display": False},
                    }
                ],
            },
            "plugins": {
                "datalabels": {
                    "display": True,
                    "anchor": "end",
                    "align": "top",
                    "font": {"weight": "bold", "size": 14, "family": CHART_FONT},
                    "color": "#555",
                }
            },
        },
    }


def serialize_chart_config(config: Dict) -> str:
    """Стабильная компактная сериализация: одинаковый конфиг → одинаковая строка."""
    return json.dumps(config, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def build_chart_url(config: Dict, base_url: str = CHART_API_URL) -> str:
    """URL QuickChart с конфигурацией в параметре `c` (как encodeURIComponent)."""
    encoded = quote(serialize_chart_config(config), safe="-_.!~*'()")
    return f"{base_url}?w={CHART_WIDTH}&h={CHART_HEIGHT}&bkg=white&c={encoded}"


def render_report(
    location: Location,
    window: TimeWindow,
    forecast: ForecastResponse,
    is_stale: bool,
    chart_base_url: str = CHART_API_URL,
) -> Report:
    """
    Формирует отчёт: HTML-текст для Telegram и ссылку на график.

    Args:
        location (Location): Место (город, страна)
        window (TimeWindow): Запрошенное окно
        forecast (ForecastResponse): Живой или подменённый из кэша прогноз
        is_stale (bool): Прогноз из кэша — добавить предупреждение перед заголовком

    Returns:
        Report: {text, chart_url}
    """
    chart_url = build_chart_url(build_chart_config(location, window, forecast), chart_base_url)
    text = _ENV.get_template("temperature_today.html.j2").render(
        location=location,
        window=window,
        forecast=forecast,
        chart_url=chart_url,
        is_stale=is_stale,
    )
    return Report(text=text, chart_url=chart_url)


def render_current_report(location: Location, conditions: CurrentConditions) -> Report:
    """Отчёт о текущей погоде (без графика)."""
    text = _ENV.get_template("current_weather.html.j2").render(
        location=location,
        conditions=conditions,
        description=wmo_description(conditions.weather_code),
    )
    return Report(text=text)


def _render_error_panel(title: str, hints: List[str], detail: Optional[str] = None) -> Report:
    text = _ENV.get_template("error_panel.html.j2").render(title=title, hints=hints, detail=detail)
    return Report(text=text)


def render_location_error(detail: Optional[str] = None) -> Report:
    """Панель ошибки геолокации."""
    return _render_error_panel(
        "Не удалось определить местоположение",
        [
            "Подождите несколько секунд и повторите запрос",
            "Если используете VPN, попробуйте временно его отключить",
            "Местоположение определяется по IP, через VPN оно может быть неточным",
        ],
        detail,
    )


def render_fetch_error(detail: Optional[str] = None) -> Report:
    """Панель ошибки получения прогноза, когда подменить его нечем."""
    return _render_error_panel(
        "Не удалось получить данные о погоде",
        [
            "Подождите несколько секунд и повторите запрос",
            "Если не помогло, попробуйте позже: у бесплатного API есть лимиты",
            "Проверьте подключение к интернету",
        ],
        detail,
    )
