# -*- coding: utf-8 -*-
"""
Тесты для scripts/weather/_processes/formatter.py
"""
import json
from urllib.parse import unquote

import pytest

from _support import make_forecast
from core.models.weather_response import CurrentConditions, Location
from scripts.weather._processes.formatter import (
    build_chart_config,
    build_chart_url,
    compute_axis_bounds,
    format_number,
    render_current_report,
    render_fetch_error,
    render_location_error,
    render_report,
    serialize_chart_config,
)


@pytest.mark.parametrize("temps, expected", [
    ([-2.0, 41.0], (-2, 43)),
    ([10.0, 25.0], (0, 40)),
    ([-0.5, 12.0], (-1, 40)),
    ([0.0, 40.0], (0, 40)),
    ([5.0, 40.2], (0, 43)),
    ([-12.3, -3.1], (-13, 40)),
    ([], (0, 40)),
])
def test_compute_axis_bounds(temps, expected):
    assert compute_axis_bounds(temps) == expected


def test_chart_widened_for_extreme_day(tokyo, window, forecast):
    config = build_chart_config(tokyo, window, forecast)
    ticks = config["options"]["scales"]["yAxes"][0]["ticks"]
    assert (ticks["min"], ticks["max"]) == (-2, 43)
    assert config["type"] == "line"
    assert config["data"]["labels"] == [f"{h:02d}:00" for h in range(5, 16)]
    assert config["data"]["datasets"][0]["data"] == forecast.temperatures
    assert config["data"]["datasets"][0]["fill"] is True
    assert config["options"]["title"]["text"] == "Tokyo, Japan - October 30, 2025"
    print("✅ test_chart_widened_for_extreme_day passed")


def test_chart_default_bounds_for_mild_day(tokyo, window):
    mild = make_forecast([10.0, 11.0, 12.5, 14.0, 16.0, 18.0, 20.0, 22.0, 24.0, 25.0, 23.5])
    ticks = build_chart_config(tokyo, window, mild)["options"]["scales"]["yAxes"][0]["ticks"]
    assert (ticks["min"], ticks["max"]) == (0, 40)


def test_chart_url_embeds_config(tokyo, window, forecast):
    config = build_chart_config(tokyo, window, forecast)
    url = build_chart_url(config)
    prefix = "https://quickchart.io/chart?w=800&h=400&bkg=white&c="
    assert url.startswith(prefix)
    encoded = url[len(prefix):]
    assert " " not in encoded and "{" not in encoded
    assert json.loads(unquote(encoded)) == config


def test_chart_serialization_is_stable(tokyo, window, forecast):
    first = serialize_chart_config(build_chart_config(tokyo, window, forecast))
    second = serialize_chart_config(build_chart_config(tokyo, window, forecast))
    assert first == second
    assert first.startswith('{"data":')


def test_report_contents(tokyo, window, forecast):
    report = render_report(tokyo, window, forecast, is_stale=False)
    text = report.text

    assert text.startswith("🌡 <b>Tokyo, Japan: температура сегодня</b>")
    assert "<b>Период</b>: 2025-10-30T05:00 — 2025-10-30T15:00" in text
    assert "<b>Координаты</b>: широта 35.7, долгота 139.625" in text
    assert "<b>Таймзона</b>: Asia/Tokyo" in text
    assert "<b>Замеров</b>: 11" in text
    assert f'<a href="{report.chart_url.replace("&", "&amp;")}">' in text
    assert "| 2025-10-30T05:00 | -2°C |" in text
    assert "| 2025-10-30T08:00 | 3.2°C |" in text
    assert "| 2025-10-30T15:00 | 41°C |" in text
    assert sum(1 for line in text.splitlines() if line.startswith("| 2025-10-30T")) == 11
    assert "Устаревшие" not in text and "устаревшие" not in text


def test_stale_banner_before_title(tokyo, window, forecast):
    text = render_report(tokyo, window, forecast, is_stale=True).text
    assert text.startswith("<blockquote>⚠️")
    assert text.index("устаревшие данные") < text.index("<b>Tokyo, Japan")


def test_render_is_idempotent(tokyo, window, forecast):
    first = render_report(tokyo, window, forecast, is_stale=False)
    second = render_report(tokyo, window, forecast, is_stale=False)
    assert first.text == second.text
    assert first.chart_url == second.chart_url


def test_render_with_no_samples(tokyo, window):
    report = render_report(tokyo, window, make_forecast([]), is_stale=False)
    assert "<b>Замеров</b>: 0" in report.text
    assert "| Время | Температура |" in report.text


def test_current_report(tokyo):
    conditions = CurrentConditions(
        latitude=35.7, longitude=139.625, time="2025-10-30T15:00",
        temperature=18.4, humidity=62.0, weather_code=3, wind_speed=7.2,
    )
    text = render_current_report(tokyo, conditions).text
    assert text.startswith("🌤 <b>Tokyo: погода сейчас</b>")
    assert "<b>Время</b>: 2025-10-30T15:00" in text
    assert "<b>Температура</b>: 18.4°C" in text
    assert "<b>Влажность</b>: 62%" in text
    assert "<b>Ветер</b>: 7.2km/h" in text
    assert "<b>Код погоды</b>: 3 (пасмурно)" in text


def test_current_report_unknown_code(tokyo):
    conditions = CurrentConditions(
        latitude=35.7, longitude=139.625, time="2025-10-30T15:00",
        temperature=18.0, humidity=60.0, weather_code=42, wind_speed=1.0,
    )
    assert render_current_report(tokyo, conditions).text.rstrip().endswith("<b>Код погоды</b>: 42")


def test_error_panels():
    location_text = render_location_error().text
    assert location_text.startswith("❌ <b>Не удалось определить местоположение</b>")
    assert "VPN" in location_text
    assert "Подробности" not in location_text

    fetch_text = render_fetch_error("HTTP error! status: 503").text
    assert fetch_text.startswith("❌ <b>Не удалось получить данные о погоде</b>")
    assert "<b>Подробности</b>: <code>HTTP error! status: 503</code>" in fetch_text


def test_interpolated_values_are_escaped(window, forecast):
    odd = Location(35.7, 139.6, "A&B <Town>", "X\"Y", "Asia/Tokyo")
    text = render_report(odd, window, forecast, is_stale=False).text
    assert "<b>A&amp;B &lt;Town&gt;, X&#34;Y: температура сегодня</b>" in text
    assert "<Town>" not in text

    detail = render_fetch_error("status <503> & retry").text
    assert "<code>status &lt;503&gt; &amp; retry</code>" in detail


def test_format_number():
    assert format_number(12.0) == "12"
    assert format_number(-2.0) == "-2"
    assert format_number(12.5) == "12.5"
    assert format_number(62) == "62"


if __name__ == "__main__":
    test_format_number()
