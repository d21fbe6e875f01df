# ABOUTME: Exception hierarchy for the time and weather services.
# ABOUTME: Callers branch on the exception class; the message is meant for humans (and the LLM).


class TimeWeatherError(Exception):
    """Base class for every failure raised by the core services."""


class TimeServiceError(TimeWeatherError):
    """A date/time argument could not be interpreted."""


class InvalidTimeFormat(TimeServiceError):
    """Text did not match the expected pattern, or a format pattern was invalid."""


class InvalidTimezone(TimeServiceError):
    """Timezone identifier is not known to the tz database."""


class UnsupportedUnit(TimeServiceError):
    """Unit for date arithmetic is not one of years/months/days/hours/minutes/seconds."""


class WeatherServiceError(TimeWeatherError):
    """A weather, forecast or air-quality lookup failed."""


class LocationNotFound(WeatherServiceError):
    """Geocoding returned no match for the requested place name."""


class UpstreamError(WeatherServiceError):
    """Provider unreachable, timed out, or returned a payload we cannot use."""
