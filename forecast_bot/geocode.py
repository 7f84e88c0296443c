"""Place name to coordinate lookups via OpenStreetMap Nominatim.

Nominatim asks consumers to cache results and may block clients that
repeat the same queries, so callers must consult the resolution cache
before calling :func:`lookup_coordinate`.
"""

import logging
from urllib.parse import quote

from forecast_bot.config import NOMINATIM_SEARCH_URL
from forecast_bot.fetch import get_json

logger = logging.getLogger(__name__)

ADMINISTRATIVE_TYPE = "administrative"


def _importance(result: dict) -> float:
    try:
        return float(result.get("importance"))
    except (TypeError, ValueError):
        return float("-inf")


def encode_coordinate(lat, lon) -> str:
    """Return the percent-encoded ``lat,lon`` form used as a cache key and URL segment."""
    return quote(f"{lat},{lon}", safe="")


def pick_administrative(results: list) -> dict | None:
    """Return the most important administrative-area result, if any."""
    admin_results = [
        r for r in results if isinstance(r, dict) and r.get("type") == ADMINISTRATIVE_TYPE
    ]
    if not admin_results:
        return None
    admin_results.sort(key=_importance, reverse=True)
    return admin_results[0]


def lookup_coordinate(place_name: str) -> str | None:
    """Resolve a free-text place name to an encoded coordinate, or None."""
    logger.info('Fetching lat,lon for "%s"...', place_name)
    results = get_json(NOMINATIM_SEARCH_URL, params={"q": place_name, "format": "json"})
    if results is None:
        return None
    if not isinstance(results, list):
        logger.warning('Unexpected geocoding payload for "%s": %r', place_name, results)
        return None

    best = pick_administrative(results)
    if best is None:
        logger.warning('No admin results for "%s"!', place_name)
        return None

    lat, lon = best.get("lat"), best.get("lon")
    if lat is None or lon is None:
        logger.warning('Admin result for "%s" has no coordinates', place_name)
        return None

    logger.info('Got %s,%s for "%s"', lat, lon, place_name)
    return encode_coordinate(lat, lon)
