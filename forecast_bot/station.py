"""Coordinate to NWS grid station lookups."""

import logging

from forecast_bot.config import NWS_API_URL
from forecast_bot.fetch import get_json

logger = logging.getLogger(__name__)


def format_station(grid_id, grid_x, grid_y) -> str:
    return f"{grid_id}/{grid_x},{grid_y}"


def lookup_station(coordinate: str) -> str | None:
    """Resolve an encoded coordinate to a ``<gridId>/<x>,<y>`` station reference."""
    payload = get_json(f"{NWS_API_URL}/points/{coordinate}")
    if payload is None:
        logger.error("Failed to fetch NWS stations for %s", coordinate)
        return None

    properties = payload.get("properties") if isinstance(payload, dict) else None
    if not isinstance(properties, dict):
        logger.warning("NWS points response for %s has no properties", coordinate)
        return None

    grid_id = properties.get("gridId")
    grid_x = properties.get("gridX")
    grid_y = properties.get("gridY")
    if grid_id is None or grid_x is None or grid_y is None:
        logger.warning("NWS points response for %s is missing grid fields", coordinate)
        return None

    station = format_station(grid_id, grid_x, grid_y)
    logger.info("Got station %s for %s", station, coordinate)
    return station
