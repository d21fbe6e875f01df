# ABOUTME: Pydantic AI agent definition exposing the time and weather tools.
# ABOUTME: Configures the LLM, system instructions, and imports the tool registrations.

from pydantic_ai import Agent, RunContext

from timeweather import time_service
from timeweather.config import OPENROUTER_MODEL
from timeweather.deps import ToolDeps

# The "openrouter:" shorthand reads OPENROUTER_API_KEY from the environment on first run
agent = Agent(
    f"openrouter:{OPENROUTER_MODEL}",
    deps_type=ToolDeps,
    retries=2,
    defer_model_check=True,
    system_prompt=(
        "You are an assistant that answers questions about dates, times, weather and air quality "
        "using the tools provided.\n\n"
        "When answering questions:\n"
        "1. Never compute dates, durations or timestamps in your head; use the time tools.\n"
        "2. Time tools read and write times as yyyy-MM-dd HH:mm:ss unless you ask format_datetime "
        "for another pattern.\n"
        "3. Timezones are IANA identifiers such as Asia/Shanghai, America/New_York or UTC.\n"
        "4. For weather by place name use get_current_weather or get_weather_forecast; when you "
        "already have coordinates use the *_by_coordinates tools.\n"
        "5. Air quality needs coordinates. If you only have a place name, get them from the weather "
        "tools first.\n"
        "6. Present temperatures in Celsius, wind in km/h, precipitation in mm, pollutants in µg/m³.\n"
        "7. If a tool reports an error, fix the arguments it complains about or tell the user plainly.\n"
    ),
)


@agent.instructions
def add_current_time(ctx: RunContext[ToolDeps]) -> str:
    """Inject the current time so the LLM knows what 'now', 'today' and 'tomorrow' mean."""
    info = time_service.full_info()
    return f"The current local time is {info.current_time} ({info.day_of_week})."


# Import tools module to register @agent.tool decorators
import timeweather.tools  # noqa: E402, F401
