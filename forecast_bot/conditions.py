"""Current conditions from AccuWeather, used to enrich scheduled reports.

AccuWeather identifies locations by its own city key, so a place name is
first resolved to a key (cached by the pipeline) and the key is then used
to fetch the current observation.
"""

import logging
from dataclasses import dataclass

from forecast_bot.config import ACCUWEATHER_API_URL
from forecast_bot.fetch import get_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentConditions:
    text: str | None = None
    temperature_f: float | None = None
    temperature_c: float | None = None
    real_feel_f: float | None = None
    wind_direction: str | None = None
    wind_mph: float | None = None
    wind_gust_mph: float | None = None
    pressure_inhg: float | None = None
    pressure_tendency: str | None = None
    humidity: int | None = None
    has_precipitation: bool = False
    precipitation_type: str | None = None
    precipitation_past_hour_in: float | None = None
    link: str | None = None


def _dig(data, *path):
    for key in path:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


class AccuWeatherClient:
    """Thin client for the two AccuWeather endpoints the bot needs."""

    def __init__(self, api_key: str, base_url: str = ACCUWEATHER_API_URL):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

    def resolve_city_id(self, place_name: str) -> str | None:
        """Return the AccuWeather city key for ``place_name``, or None."""
        results = get_json(
            f"{self.base_url}/locations/v1/cities/search",
            params={"apikey": self.api_key, "q": place_name},
        )
        if not results or not isinstance(results, list):
            logger.warning('No AccuWeather city found for "%s"', place_name)
            return None

        key = _dig(results[0], "Key")
        if not key:
            logger.warning('AccuWeather city result for "%s" has no key', place_name)
            return None
        return str(key)

    def fetch_conditions(self, city_id: str) -> CurrentConditions | None:
        """Return the current observation for ``city_id``, or None."""
        results = get_json(
            f"{self.base_url}/currentconditions/v1/{city_id}",
            params={"apikey": self.api_key, "details": "true"},
        )
        if not results or not isinstance(results, list) or not isinstance(results[0], dict):
            logger.warning("No AccuWeather conditions for city %s", city_id)
            return None
        return parse_conditions(results[0])


def parse_conditions(observation: dict) -> CurrentConditions:
    """Build :class:`CurrentConditions` from one currentconditions entry."""
    return CurrentConditions(
        text=observation.get("WeatherText"),
        temperature_f=_dig(observation, "Temperature", "Imperial", "Value"),
        temperature_c=_dig(observation, "Temperature", "Metric", "Value"),
        real_feel_f=_dig(observation, "RealFeelTemperature", "Imperial", "Value"),
        wind_direction=_dig(observation, "Wind", "Direction", "English"),
        wind_mph=_dig(observation, "Wind", "Speed", "Imperial", "Value"),
        wind_gust_mph=_dig(observation, "WindGust", "Speed", "Imperial", "Value"),
        pressure_inhg=_dig(observation, "Pressure", "Imperial", "Value"),
        pressure_tendency=_dig(observation, "PressureTendency", "LocalizedText"),
        humidity=observation.get("RelativeHumidity"),
        has_precipitation=bool(observation.get("HasPrecipitation")),
        precipitation_type=observation.get("PrecipitationType"),
        precipitation_past_hour_in=_dig(
            observation, "PrecipitationSummary", "PastHour", "Imperial", "Value"
        ),
        link=observation.get("Link") or observation.get("MobileLink"),
    )


def render_conditions(conditions: CurrentConditions) -> str:
    """Lay out the enrichment fields as labelled plain-text lines."""
    output = []
    if conditions.text:
        output.append(f"Currently: {conditions.text}")
    if conditions.temperature_f is not None:
        temp = f"Temperature: {conditions.temperature_f:.0f}°F"
        if conditions.temperature_c is not None:
            temp += f" ({conditions.temperature_c:.0f}°C)"
        if conditions.real_feel_f is not None:
            temp += f", feels like {conditions.real_feel_f:.0f}°F"
        output.append(temp)
    if conditions.wind_mph is not None:
        wind = f"Wind: {conditions.wind_mph:.0f} mph"
        if conditions.wind_direction:
            wind += f" from {conditions.wind_direction}"
        if conditions.wind_gust_mph is not None:
            wind += f", gusts {conditions.wind_gust_mph:.0f} mph"
        output.append(wind)
    if conditions.pressure_inhg is not None:
        pressure = f"Pressure: {conditions.pressure_inhg:.2f} inHg"
        if conditions.pressure_tendency:
            pressure += f" ({conditions.pressure_tendency.lower()})"
        output.append(pressure)
    if conditions.humidity is not None:
        output.append(f"Humidity: {conditions.humidity}%")
    if conditions.has_precipitation:
        precip = f"Precipitation: {conditions.precipitation_type or 'yes'}"
        if conditions.precipitation_past_hour_in:
            precip += f" ({conditions.precipitation_past_hour_in:.2f} in past hour)"
        output.append(precip)
    elif conditions.precipitation_past_hour_in is not None:
        output.append("Precipitation: none")
    if conditions.link:
        output.append(f"Source: {conditions.link}")
    return "\n".join(output)
