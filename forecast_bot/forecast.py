"""Forecast text for an NWS grid station. Results are never cached."""

import logging

from forecast_bot.config import NWS_API_URL
from forecast_bot.fetch import get_json

logger = logging.getLogger(__name__)


def fetch_forecast(station: str) -> str | None:
    """Return the first period's detailed forecast for ``station``, or None."""
    payload = get_json(f"{NWS_API_URL}/gridpoints/{station}/forecast")
    if payload is None:
        logger.error("NWS forecast lookup for %s failed", station)
        return None

    try:
        periods = payload["properties"]["periods"]
    except (KeyError, TypeError):
        periods = None

    if not periods or not isinstance(periods, list):
        logger.warning("NWS forecast for %s has no periods", station)
        return None

    today = periods[0]
    text = today.get("detailedForecast") if isinstance(today, dict) else None
    return text or None
