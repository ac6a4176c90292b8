# -*- coding: utf-8 -*-
"""
Расшифровка кодов погоды WMO (поле weather_code в Open-Meteo).
https://open-meteo.com/en/docs
"""

WMO_DESCRIPTIONS = {
    0: "ясно",
    1: "преимущественно ясно",
    2: "переменная облачность",
    3: "пасмурно",
    45: "туман",
    48: "туман с изморозью",
    51: "слабая морось",
    53: "морось",
    55: "сильная морось",
    56: "ледяная морось",
    57: "сильная ледяная морось",
    61: "слабый дождь",
    63: "дождь",
    65: "сильный дождь",
    66: "ледяной дождь",
    67: "сильный ледяной дождь",
    71: "слабый снег",
    73: "снег",
    75: "сильный снег",
    77: "снежные зёрна",
    80: "слабый ливень",
    81: "ливень",
    82: "сильный ливень",
    85: "снегопад",
    86: "сильный снегопад",
    95: "гроза",
    96: "гроза с градом",
    99: "гроза с сильным градом",
}


def wmo_description(code) -> str:
    """Описание кода погоды; пустая строка для неизвестного кода."""
    try:
        return WMO_DESCRIPTIONS.get(int(code), "")
    except (TypeError, ValueError):
        return ""
