# ABOUTME: Lookup tables turning Open-Meteo weather codes and PM2.5 readings into descriptions.
# ABOUTME: Both lookups are total: unknown codes and out-of-range readings hit an explicit default.

# WMO weather interpretation codes as used by Open-Meteo
WEATHER_CODES: dict[int, str] = {
    0: "clear",
    1: "cloudy",
    2: "cloudy",
    3: "cloudy",
    45: "fog",
    48: "fog",
    51: "light rain",
    53: "light rain",
    55: "light rain",
    56: "freezing rain",
    57: "freezing rain",
    66: "freezing rain",
    67: "freezing rain",
    61: "rain",
    63: "rain",
    65: "rain",
    71: "snow",
    73: "snow",
    75: "snow",
    77: "snow grains",
    80: "showers",
    81: "showers",
    82: "showers",
    85: "snow showers",
    86: "snow showers",
    95: "thunderstorm",
    96: "thunderstorm with hail",
    99: "thunderstorm with hail",
}

UNKNOWN_WEATHER = "unknown weather"

# (inclusive upper bound in µg/m³, level), checked in order
AQI_LEVELS: tuple[tuple[float, str], ...] = (
    (12.0, "excellent"),
    (35.0, "good"),
    (55.0, "moderate"),
    (150.0, "poor"),
)

AQI_ABOVE_MAX = "very poor"


def describe_weather_code(code: int) -> str:
    """Map a weather code to its description, falling back to UNKNOWN_WEATHER."""
    return WEATHER_CODES.get(code, UNKNOWN_WEATHER)


def aqi_level(pm2_5: float) -> str:
    """Classify air quality from the PM2.5 concentration alone."""
    for upper_bound, level in AQI_LEVELS:
        if pm2_5 <= upper_bound:
            return level
    return AQI_ABOVE_MAX
