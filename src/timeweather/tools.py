# ABOUTME: Agent tool definitions for the time computations and weather lookups.
# ABOUTME: Registers each core operation under a stable name; core failures become ModelRetry.

from typing import Annotated

from pydantic import Field
from pydantic_ai import ModelRetry, RunContext

from timeweather import time_service, weather_service
from timeweather.agent import agent
from timeweather.deps import ToolDeps
from timeweather.errors import TimeServiceError, WeatherServiceError

Latitude = Annotated[float, Field(ge=-90, le=90)]
Longitude = Annotated[float, Field(ge=-180, le=180)]


@agent.tool_plain
def get_current_time() -> str:
    """Get the current local time in yyyy-MM-dd HH:mm:ss format."""
    return time_service.now_local()


@agent.tool_plain
def get_current_utc_time() -> str:
    """Get the current UTC time in yyyy-MM-dd HH:mm:ss format."""
    return time_service.now_utc()


@agent.tool_plain
def get_time_in_zone(zone_id: str) -> str:
    """Get the current time in a given timezone.

    Args:
        zone_id: IANA timezone ID, e.g. "Asia/Shanghai", "America/New_York", "Europe/London", "UTC".
    """
    try:
        return time_service.now_in_zone(zone_id)
    except TimeServiceError as e:
        raise ModelRetry(str(e)) from e


@agent.tool_plain
def get_current_timestamp() -> int:
    """Get the current Unix timestamp in milliseconds."""
    return time_service.now_epoch_millis()


@agent.tool_plain
def get_current_timestamp_seconds() -> int:
    """Get the current Unix timestamp in seconds."""
    return time_service.now_epoch_seconds()


@agent.tool_plain
def timestamp_to_datetime(timestamp: int) -> str:
    """Convert a Unix timestamp in milliseconds to local time.

    Args:
        timestamp: Milliseconds since the epoch, e.g. 1703123456789.
    """
    try:
        return time_service.epoch_millis_to_time(timestamp)
    except TimeServiceError as e:
        raise ModelRetry(str(e)) from e


@agent.tool_plain
def datetime_to_timestamp(date_time: str) -> int:
    """Convert a local time to a Unix timestamp in milliseconds.

    Args:
        date_time: Time in yyyy-MM-dd HH:mm:ss format, e.g. "2023-12-21 10:30:00".
    """
    try:
        return time_service.time_to_epoch_millis(date_time)
    except TimeServiceError as e:
        raise ModelRetry(str(e)) from e


@agent.tool_plain
def calculate_time_difference(start_time: str, end_time: str) -> dict:
    """Calculate the difference between two times, in totals and as days/hours/minutes/seconds.

    Args:
        start_time: Start time in yyyy-MM-dd HH:mm:ss format, e.g. "2023-12-21 10:00:00".
        end_time: End time in yyyy-MM-dd HH:mm:ss format, e.g. "2023-12-21 15:30:00".
    """
    try:
        return time_service.difference(start_time, end_time).model_dump()
    except TimeServiceError as e:
        raise ModelRetry(str(e)) from e


@agent.tool_plain
def add_time(date_time: str, amount: int, unit: str) -> str:
    """Add an amount of time to a given time; use a negative amount to subtract.

    Args:
        date_time: Base time in yyyy-MM-dd HH:mm:ss format, e.g. "2023-12-21 10:00:00".
        amount: Number of units to add, e.g. 5 or -3.
        unit: One of years, months, days, hours, minutes, seconds.
    """
    try:
        return time_service.add(date_time, amount, unit)
    except TimeServiceError as e:
        raise ModelRetry(str(e)) from e


@agent.tool_plain
def format_datetime(date_time: str, pattern: str) -> str:
    """Format a time using a custom pattern.

    Args:
        date_time: Time in yyyy-MM-dd HH:mm:ss format, e.g. "2023-12-21 10:30:00".
        pattern: Target pattern, e.g. "yyyy年MM月dd日", "MM/dd/yyyy", "EEEE, MMMM d", "hh:mm a".
    """
    try:
        return time_service.format_time(date_time, pattern)
    except TimeServiceError as e:
        raise ModelRetry(str(e)) from e


@agent.tool_plain
def get_day_of_week() -> str:
    """Get today's day of the week."""
    return time_service.weekday_name()


@agent.tool_plain
def get_current_year() -> int:
    """Get the current year."""
    return time_service.current_year()


@agent.tool_plain
def get_current_month() -> int:
    """Get the current month (1-12)."""
    return time_service.current_month()


@agent.tool_plain
def get_current_day() -> int:
    """Get the current day of the month."""
    return time_service.current_day()


@agent.tool_plain
def is_leap_year(year: int) -> bool:
    """Check whether a year is a leap year.

    Args:
        year: The year to check, e.g. 2024.
    """
    return time_service.is_leap_year(year)


@agent.tool_plain
def get_full_time_info() -> dict:
    """Get the full current time information: local and UTC time, timestamps, weekday, date parts, leap year."""
    return time_service.full_info().model_dump()


@agent.tool
async def get_current_weather(ctx: RunContext[ToolDeps], city_name: str) -> dict:
    """Get the current weather for a city: temperature, feels-like, humidity, pressure, wind, precipitation.

    Args:
        ctx: Agent run context with HTTP client.
        city_name: City name in Chinese or English, e.g. "北京", "Beijing", "New York".
    """
    try:
        result = await weather_service.get_current_weather(ctx.deps.http_client, city_name)
    except WeatherServiceError as e:
        raise ModelRetry(f"Current weather lookup failed for '{city_name}': {e}") from e
    return result.model_dump(mode="json")


@agent.tool
async def get_weather_by_coordinates(ctx: RunContext[ToolDeps], lat: Latitude, lon: Longitude) -> dict:
    """Get the current weather at a latitude/longitude.

    Args:
        ctx: Agent run context with HTTP client.
        lat: Latitude, -90 to 90, e.g. 39.9042.
        lon: Longitude, -180 to 180, e.g. 116.4074.
    """
    try:
        result = await weather_service.get_current_weather_at(ctx.deps.http_client, lat, lon)
    except WeatherServiceError as e:
        raise ModelRetry(f"Current weather lookup failed: {e}") from e
    return result.model_dump(mode="json")


@agent.tool
async def get_weather_forecast(ctx: RunContext[ToolDeps], city_name: str) -> dict:
    """Get the daily weather forecast (usually 7 days) for a city.

    Args:
        ctx: Agent run context with HTTP client.
        city_name: City name in Chinese or English, e.g. "上海", "Shanghai".
    """
    try:
        result = await weather_service.get_forecast(ctx.deps.http_client, city_name)
    except WeatherServiceError as e:
        raise ModelRetry(f"Forecast lookup failed for '{city_name}': {e}") from e
    return result.model_dump(mode="json")


@agent.tool
async def get_forecast_by_coordinates(
    ctx: RunContext[ToolDeps],
    lat: Latitude,
    lon: Longitude,
    city_name: str | None = None,
) -> dict:
    """Get the daily weather forecast (usually 7 days) at a latitude/longitude.

    Args:
        ctx: Agent run context with HTTP client.
        lat: Latitude, -90 to 90, e.g. 39.9042.
        lon: Longitude, -180 to 180, e.g. 116.4074.
        city_name: Optional display name for the location, e.g. "Beijing".
    """
    try:
        result = await weather_service.get_forecast_at(ctx.deps.http_client, lat, lon, city_name)
    except WeatherServiceError as e:
        raise ModelRetry(f"Forecast lookup failed: {e}") from e
    return result.model_dump(mode="json")


@agent.tool
async def get_air_quality(ctx: RunContext[ToolDeps], lat: Latitude, lon: Longitude) -> dict:
    """Get current air quality at a latitude/longitude: PM2.5, PM10, CO, NO2, O3 and a quality level.

    Args:
        ctx: Agent run context with HTTP client.
        lat: Latitude, -90 to 90, e.g. 39.9042.
        lon: Longitude, -180 to 180, e.g. 116.4074.
    """
    try:
        result = await weather_service.get_air_quality(ctx.deps.http_client, lat, lon)
    except WeatherServiceError as e:
        raise ModelRetry(f"Air quality lookup failed: {e}") from e
    return result.model_dump(mode="json")
