"""Configuration settings for the forecast bot."""

import os
from dataclasses import dataclass

NOMINATIM_SEARCH_URL = "https://nominatim.openstreetmap.org/search"
NWS_API_URL = "https://api.weather.gov"
ACCUWEATHER_API_URL = "https://dataservice.accuweather.com"

HTTP_TIMEOUT_S: float = float(os.environ.get("FORECAST_BOT_HTTP_TIMEOUT", "10"))
USER_AGENT: str = os.environ.get(
    "FORECAST_BOT_USER_AGENT",
    "ForecastBot/1.0 (LXMF weather bot)",
)
ACCUWEATHER_API_KEY: str = os.environ.get("ACCUWEATHER_API_KEY", "")

STATE_KEY = "pipeline_state"
"""Storage key holding the persisted lookup caches."""

SUBSCRIPTIONS_KEY = "subscriptions"
"""Storage key holding scheduled-report subscribers, by place name."""

DEFAULT_STORAGE_PATH = "data/forecast"


@dataclass(frozen=True)
class BotConfig:
    name: str = "Forecast Bot"
    storage_path: str = DEFAULT_STORAGE_PATH
    config_path: str | None = None
    identity_path: str | None = None
    log_dir: str | None = None
    debug: bool = False
    enrich: bool = False
    schedule: str | None = None
    accuweather_api_key: str = ACCUWEATHER_API_KEY

    @property
    def enrichment_available(self) -> bool:
        return bool(self.accuweather_api_key)
