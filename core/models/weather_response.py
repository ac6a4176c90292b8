# core/models/weather_response.py
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float
    city: str
    country: str
    timezone_id: str


@dataclass(frozen=True)
class TimeWindow:
    start_iso: str  # "YYYY-MM-DDTHH:MM", локальное время без смещения
    end_iso: str


@dataclass(frozen=True)
class ForecastSample:
    timestamp: str
    temperature: float


@dataclass
class ForecastResponse:
    latitude: float
    longitude: float
    timezone: str
    samples: List[ForecastSample]
    unit: str

    @property
    def temperatures(self) -> List[float]:
        return [s.temperature for s in self.samples]

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "ForecastResponse":
        return cls(
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            timezone=str(data["timezone"]),
            samples=[
                ForecastSample(timestamp=str(s["timestamp"]), temperature=float(s["temperature"]))
                for s in data["samples"]
            ],
            unit=str(data["unit"]),
        )


@dataclass
class CurrentConditions:
    latitude: float
    longitude: float
    time: str
    temperature: float
    humidity: float
    weather_code: int
    wind_speed: float
    temperature_unit: str = "°C"
    humidity_unit: str = "%"
    wind_speed_unit: str = "km/h"


@dataclass(frozen=True)
class Report:
    text: str
    chart_url: Optional[str] = None


class ReportState(str, Enum):
    RESOLVING_LOCATION = "resolving_location"
    COMPUTING_WINDOW = "computing_window"
    FETCHING = "fetching"
    RENDERED = "rendered"
    RENDERED_STALE = "rendered_stale"
    HARD_FAILED = "hard_failed"
    LOCATION_UNAVAILABLE = "location_unavailable"


@dataclass
class ReportOutcome:
    state: ReportState
    text: str
    chart_url: Optional[str] = None
    location: Optional[Location] = None
    window: Optional[TimeWindow] = None
    forecast: Optional[ForecastResponse] = None
    error: Optional[Exception] = field(default=None, repr=False)

    @property
    def is_stale(self) -> bool:
        return self.state == ReportState.RENDERED_STALE

    @property
    def is_error(self) -> bool:
        return self.state in (ReportState.HARD_FAILED, ReportState.LOCATION_UNAVAILABLE)
