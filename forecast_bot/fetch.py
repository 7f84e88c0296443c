"""Single-attempt JSON requests against the upstream lookup services."""

import logging
from typing import Any

import requests

from forecast_bot.config import HTTP_TIMEOUT_S, USER_AGENT

logger = logging.getLogger(__name__)


def get_json(
    url: str,
    params: dict[str, Any] | None = None,
    timeout: float = HTTP_TIMEOUT_S,
) -> Any | None:
    """GET ``url`` and return the decoded JSON body.

    Returns None when the request raises, the status is not OK, or the body
    is not JSON. Each call is a single attempt.
    """
    headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}
    try:
        response = requests.get(url, params=params, headers=headers, timeout=timeout)
    except requests.exceptions.RequestException as e:
        logger.error("Fetch failed: %s: %s", url, type(e).__name__)
        return None

    if not response.ok:
        logger.error("Fetch failed: %s (status %s)", url, response.status_code)
        return None

    try:
        return response.json()
    except ValueError as e:
        logger.error("Invalid JSON from %s: %s", url, e)
        return None
