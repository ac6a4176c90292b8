# config/bot_config.py
import os
from dataclasses import dataclass
from dotenv import load_dotenv
load_dotenv()

# === ВНЕШНИЕ СЕРВИСЫ ===
GEO_API_URL = "https://ipwho.is/"
FORECAST_API_URL = "https://api.open-meteo.com/v1/forecast"
CHART_API_URL = "https://quickchart.io/chart"

# === ЗАПАСНОЙ ГОРОД (Токио) ===
FALLBACK_CITY = "Tokyo"
FALLBACK_COUNTRY = "Japan"
FALLBACK_LATITUDE = 35.6762
FALLBACK_LONGITUDE = 139.6503
FALLBACK_TIMEZONE = "Asia/Tokyo"


@dataclass
class BotConfig:
    telegram_token: str
    log_level: str = "INFO"
    geo_api_url: str = GEO_API_URL
    forecast_api_url: str = FORECAST_API_URL
    chart_api_url: str = CHART_API_URL
    fetch_timeout_sec: float = 10.0
    window_start_hour: int = 5
    fallback_city: str = FALLBACK_CITY
    fallback_country: str = FALLBACK_COUNTRY
    fallback_latitude: float = FALLBACK_LATITUDE
    fallback_longitude: float = FALLBACK_LONGITUDE
    fallback_timezone: str = FALLBACK_TIMEZONE

    def __post_init__(self):
        if not 0 <= self.window_start_hour <= 23:
            raise ValueError(f"WINDOW_START_HOUR должен быть от 0 до 23, получено {self.window_start_hour}")

    @classmethod
    def load(cls):
        return cls(
            telegram_token=os.getenv("TELEGRAM_BOT_TOKEN", ""),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            geo_api_url=os.getenv("GEO_API_URL", GEO_API_URL),
            forecast_api_url=os.getenv("FORECAST_API_URL", FORECAST_API_URL),
            chart_api_url=os.getenv("CHART_API_URL", CHART_API_URL),
            fetch_timeout_sec=float(os.getenv("FETCH_TIMEOUT_SEC", "10")),
            window_start_hour=int(os.getenv("WINDOW_START_HOUR", "5")),
            fallback_city=os.getenv("FALLBACK_CITY", FALLBACK_CITY),
            fallback_country=os.getenv("FALLBACK_COUNTRY", FALLBACK_COUNTRY),
            fallback_latitude=float(os.getenv("FALLBACK_LATITUDE", str(FALLBACK_LATITUDE))),
            fallback_longitude=float(os.getenv("FALLBACK_LONGITUDE", str(FALLBACK_LONGITUDE))),
            fallback_timezone=os.getenv("FALLBACK_TIMEZONE", FALLBACK_TIMEZONE),
        )
