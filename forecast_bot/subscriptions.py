"""Recipients of the scheduled report, kept in the bot's key-value storage."""

import logging

from forecast_bot.config import SUBSCRIPTIONS_KEY

logger = logging.getLogger(__name__)


def load_subscriptions(storage) -> dict[str, list[str]]:
    return dict(storage.get(SUBSCRIPTIONS_KEY, None) or {})


def subscribe(storage, place_name: str, destination: str) -> dict[str, list[str]]:
    """Subscribe ``destination`` to ``place_name``, replacing any earlier place."""
    subscriptions = _without(load_subscriptions(storage), destination)
    subscriptions[place_name] = [*subscriptions.get(place_name, []), destination]
    storage.set(SUBSCRIPTIONS_KEY, subscriptions)
    logger.info('%s subscribed to "%s"', destination, place_name)
    return subscriptions


def unsubscribe(storage, destination: str) -> bool:
    """Remove ``destination`` from every place. Returns whether it was subscribed."""
    current = load_subscriptions(storage)
    remaining = _without(current, destination)
    if remaining == current:
        return False
    storage.set(SUBSCRIPTIONS_KEY, remaining)
    logger.info("%s unsubscribed", destination)
    return True


def _without(subscriptions: dict[str, list[str]], destination: str) -> dict[str, list[str]]:
    result = {}
    for place, destinations in subscriptions.items():
        kept = [d for d in destinations if d != destination]
        if kept:
            result[place] = kept
    return result
