# ABOUTME: ASGI web entry point for the time and weather assistant UI.
# ABOUTME: Creates a Starlette app via agent.to_web() with one shared HTTP client for the tools.

import logging

from timeweather.agent import agent
from timeweather.config import OPENROUTER_EXTRA_MODEL, OPENROUTER_MODEL
from timeweather.deps import ToolDeps, create_http_client
from timeweather.logging_config import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

# The agent's default model is always included automatically by to_web().
_models: dict[str, str] = {
    "Claude Haiku 4.5": "openrouter:anthropic/claude-haiku-4.5",
}

_extra_model = OPENROUTER_EXTRA_MODEL
if _extra_model:
    _label = _extra_model.split("/")[-1].replace("-", " ").title()
    _models[_label] = f"openrouter:{_extra_model}"

logger.info("Starting time and weather assistant with default model %s", OPENROUTER_MODEL)

app = agent.to_web(
    deps=ToolDeps(http_client=create_http_client()),
    models=_models,
)
