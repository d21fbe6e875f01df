# ABOUTME: Pydantic BaseModels for the time tools and the normalized Open-Meteo results.
# ABOUTME: Every model is built fresh per call and handed back to the agent via model_dump().

from pydantic import BaseModel, Field


class TimeDifference(BaseModel):
    """Signed duration between two wall-clock times.

    Totals truncate toward zero; the remainder fields carry the same sign as the duration.
    """

    start: str
    end: str
    days: int
    hours: int
    minutes: int
    seconds: int
    milliseconds: int
    remainder_hours: int
    remainder_minutes: int
    remainder_seconds: int
    summary: str


class FullTimeInfo(BaseModel):
    """Snapshot of the clock, every field derived from one reading."""

    current_time: str
    current_utc_time: str
    timestamp: int
    timestamp_seconds: int
    day_of_week: str
    year: int
    month: int
    day: int
    is_leap_year: bool


class Coordinates(BaseModel):
    """Geocoded or caller-supplied position."""

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    elevation: float = 0.0
    name: str | None = None


class WeatherSnapshot(BaseModel):
    """Current conditions at a location."""

    location: str
    latitude: float
    longitude: float
    temperature: float
    feels_like: float
    humidity: int
    pressure: float
    wind_speed: float
    wind_direction: float
    precipitation: float
    weather_code: int
    description: str
    update_time: str


class ForecastDay(BaseModel):
    """One day of the daily forecast."""

    date: str
    max_temp: float
    min_temp: float
    precipitation: float
    wind_speed: float
    weather_code: int
    description: str


class WeatherForecast(BaseModel):
    """Daily forecast for a location, in the provider's chronological order."""

    location: str
    latitude: float
    longitude: float
    forecast: list[ForecastDay] = []


class AirQualityReading(BaseModel):
    """Current pollutant concentrations with a PM2.5-derived level."""

    latitude: float
    longitude: float
    pm10: float
    pm2_5: float
    co: float
    no2: float
    o3: float
    update_time: str
    aqi_level: str
