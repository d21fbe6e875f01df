# ABOUTME: Service layer for Open-Meteo geocoding, forecast and air-quality calls.
# ABOUTME: Sends exactly one request per lookup and normalizes the payload into models.py types.

import logging
from contextlib import contextmanager
from datetime import date

import httpx

from timeweather.config import AIR_QUALITY_URL, FORECAST_URL, GEOCODING_LANGUAGE, GEOCODING_URL
from timeweather.errors import LocationNotFound, UpstreamError
from timeweather.models import AirQualityReading, Coordinates, ForecastDay, WeatherForecast, WeatherSnapshot
from timeweather.weather_codes import aqi_level, describe_weather_code

logger = logging.getLogger(__name__)

CURRENT_PARAMS = (
    "temperature_2m,relative_humidity_2m,apparent_temperature,precipitation,"
    "weather_code,surface_pressure,wind_speed_10m,wind_direction_10m"
)

DAILY_PARAMS = "weather_code,temperature_2m_max,temperature_2m_min,precipitation_sum,wind_speed_10m_max"

AIR_QUALITY_PARAMS = "pm10,pm2_5,carbon_monoxide,nitrogen_dioxide,ozone"

# Parallel arrays expected in the "daily" object, all of equal length
DAILY_COLUMNS = (
    "time",
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "wind_speed_10m_max",
    "weather_code",
)

UNKNOWN_LOCATION = "unknown location"


async def _get_json(client: httpx.AsyncClient, url: str, params: dict, source: str) -> dict:
    """GET url once and return the decoded JSON object, mapping every failure to UpstreamError."""
    try:
        resp = await client.get(url, params=params)
        resp.raise_for_status()
        data = resp.json()
    except httpx.TimeoutException as e:
        logger.error("%s request timed out: %s", source, e)
        raise UpstreamError(f"{source} request timed out") from e
    except httpx.HTTPStatusError as e:
        logger.error("%s API returned HTTP %s", source, e.response.status_code)
        raise UpstreamError(f"{source} API returned HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        logger.error("%s request failed: %s", source, e)
        raise UpstreamError(f"{source} request failed: {e}") from e
    except ValueError as e:
        logger.error("%s API returned a non-JSON body", source)
        raise UpstreamError(f"{source} API returned a non-JSON body") from e

    if not isinstance(data, dict):
        raise UpstreamError(f"{source} API returned {type(data).__name__}, expected a JSON object")
    return data


@contextmanager
def _unexpected_payload(source: str):
    """Turn missing keys and badly typed values in a provider payload into UpstreamError."""
    try:
        yield
    except (KeyError, IndexError, TypeError, AttributeError, ValueError) as e:
        logger.error("Unexpected %s payload: %s", source, e)
        raise UpstreamError(f"Unexpected {source} payload: {e}") from e


def _checked_coordinates(latitude: float, longitude: float) -> Coordinates:
    """Raises pydantic's ValidationError for out-of-range coordinates, before any request is sent."""
    return Coordinates(latitude=latitude, longitude=longitude)


def _section(data: dict, key: str, source: str) -> dict:
    section = data.get(key)
    if not isinstance(section, dict):
        raise UpstreamError(f"{source} response has no '{key}' object")
    return section


async def geocode(client: httpx.AsyncClient, name: str) -> Coordinates:
    """Resolve a place name to coordinates; the first match wins."""
    logger.info("Geocoding '%s'", name)
    data = await _get_json(
        client,
        GEOCODING_URL,
        {"name": name, "count": 1, "language": GEOCODING_LANGUAGE, "format": "json"},
        "Geocoding",
    )

    results = data.get("results")
    if not results:
        raise LocationNotFound(f"Could not find location: {name}")

    with _unexpected_payload("geocoding"):
        first = results[0]
        elevation = first.get("elevation")
        return Coordinates(
            latitude=first["latitude"],
            longitude=first["longitude"],
            elevation=0.0 if elevation is None else elevation,
            name=first.get("name"),
        )


def _label(name: str, coords: Coordinates) -> str | None:
    """The caller's wording, or the geocoder's name when the caller's is blank."""
    return name if name.strip() else coords.name


async def get_current_weather(client: httpx.AsyncClient, name: str) -> WeatherSnapshot:
    """Current conditions for a place name."""
    coords = await geocode(client, name)
    return await get_current_weather_at(client, coords.latitude, coords.longitude, _label(name, coords))


async def get_current_weather_at(
    client: httpx.AsyncClient,
    latitude: float,
    longitude: float,
    label: str | None = None,
) -> WeatherSnapshot:
    """Current conditions at explicit coordinates."""
    coords = _checked_coordinates(latitude, longitude)
    logger.info("Fetching current weather for lat=%s, lon=%s", latitude, longitude)
    data = await _get_json(
        client,
        FORECAST_URL,
        {"latitude": coords.latitude, "longitude": coords.longitude, "current": CURRENT_PARAMS, "timezone": "auto"},
        "Forecast",
    )
    current = _section(data, "current", "Forecast")

    with _unexpected_payload("current weather"):
        code = int(current["weather_code"])
        return WeatherSnapshot(
            location=label or UNKNOWN_LOCATION,
            latitude=latitude,
            longitude=longitude,
            temperature=current["temperature_2m"],
            feels_like=current["apparent_temperature"],
            humidity=current["relative_humidity_2m"],
            pressure=current["surface_pressure"],
            wind_speed=current["wind_speed_10m"],
            wind_direction=current["wind_direction_10m"],
            precipitation=current["precipitation"],
            weather_code=code,
            description=describe_weather_code(code),
            update_time=current["time"],
        )


async def get_forecast(client: httpx.AsyncClient, name: str) -> WeatherForecast:
    """Daily forecast for a place name."""
    coords = await geocode(client, name)
    return await get_forecast_at(client, coords.latitude, coords.longitude, _label(name, coords))


async def get_forecast_at(
    client: httpx.AsyncClient,
    latitude: float,
    longitude: float,
    label: str | None = None,
) -> WeatherForecast:
    """Daily forecast at explicit coordinates (the provider decides the length, usually 7 days)."""
    coords = _checked_coordinates(latitude, longitude)
    logger.info("Fetching daily forecast for lat=%s, lon=%s", latitude, longitude)
    data = await _get_json(
        client,
        FORECAST_URL,
        {"latitude": coords.latitude, "longitude": coords.longitude, "daily": DAILY_PARAMS, "timezone": "auto"},
        "Forecast",
    )
    days = parse_daily_forecast(_section(data, "daily", "Forecast"))
    logger.info("Parsed %d forecast days", len(days))

    return WeatherForecast(
        location=label or UNKNOWN_LOCATION,
        latitude=latitude,
        longitude=longitude,
        forecast=days,
    )


def parse_daily_forecast(raw: dict) -> list[ForecastDay]:
    """Turn Open-Meteo's column-oriented daily arrays into one ForecastDay per index.

    Every column in DAILY_COLUMNS must be present and all must have the same length;
    anything else is reported as UpstreamError instead of being truncated.
    """
    columns = {}
    for key in DAILY_COLUMNS:
        col = raw.get(key)
        if not isinstance(col, list):
            raise UpstreamError(f"Daily forecast is missing the '{key}' array")
        columns[key] = col

    lengths = {key: len(col) for key, col in columns.items()}
    if len(set(lengths.values())) > 1:
        raise UpstreamError(f"Daily forecast arrays differ in length: {lengths}")

    result = []
    with _unexpected_payload("daily forecast"):
        for i, day in enumerate(columns["time"]):
            code = int(columns["weather_code"][i])
            result.append(
                ForecastDay(
                    date=day,
                    max_temp=columns["temperature_2m_max"][i],
                    min_temp=columns["temperature_2m_min"][i],
                    precipitation=columns["precipitation_sum"][i],
                    wind_speed=columns["wind_speed_10m_max"][i],
                    weather_code=code,
                    description=describe_weather_code(code),
                )
            )
    return result


async def get_air_quality(client: httpx.AsyncClient, latitude: float, longitude: float) -> AirQualityReading:
    """Current pollutant concentrations for today, classified by PM2.5."""
    coords = _checked_coordinates(latitude, longitude)
    today = date.today().isoformat()
    logger.info("Fetching air quality for lat=%s, lon=%s on %s", latitude, longitude, today)
    data = await _get_json(
        client,
        AIR_QUALITY_URL,
        {
            "latitude": coords.latitude,
            "longitude": coords.longitude,
            "current": AIR_QUALITY_PARAMS,
            "start_date": today,
            "end_date": today,
        },
        "Air quality",
    )
    current = _section(data, "current", "Air quality")

    with _unexpected_payload("air quality"):
        pm2_5 = float(current["pm2_5"])
        return AirQualityReading(
            latitude=latitude,
            longitude=longitude,
            pm10=current["pm10"],
            pm2_5=pm2_5,
            co=current["carbon_monoxide"],
            no2=current["nitrogen_dioxide"],
            o3=current["ozone"],
            update_time=current["time"],
            aqi_level=aqi_level(pm2_5),
        )
