"""Place name -> coordinate -> station -> forecast, with cached lookups."""

import logging
from dataclasses import dataclass
from typing import Callable

from forecast_bot.cache import PipelineState, ResolutionCache
from forecast_bot.conditions import AccuWeatherClient, CurrentConditions
from forecast_bot.forecast import fetch_forecast
from forecast_bot.geocode import lookup_coordinate
from forecast_bot.station import lookup_station

logger = logging.getLogger(__name__)


def not_found_message(place_name: str) -> str:
    return f'Unable to find results for "{place_name}"!'


@dataclass(frozen=True)
class PipelineResult:
    forecast: str
    state: PipelineState
    found: bool = False
    conditions: CurrentConditions | None = None


class PipelineOrchestrator:
    """Runs the lookup chain for a place name.

    Geocoding and station lookups are only made on a cache miss, and only
    successful results are cached. State is written back at most once per
    run. The forecast itself is always fetched fresh.
    """

    def __init__(
        self,
        cache: ResolutionCache,
        geocode: Callable[[str], str | None] = lookup_coordinate,
        station: Callable[[str], str | None] = lookup_station,
        forecast: Callable[[str], str | None] = fetch_forecast,
        conditions: AccuWeatherClient | None = None,
    ):
        self.cache = cache
        self.geocode = geocode
        self.station = station
        self.forecast = forecast
        self.conditions = conditions

    def lookup(self, place_name: str, enrich: bool = False) -> PipelineResult:
        """Load the persisted state and run the pipeline against it."""
        return self.run(place_name, self.cache.load(), enrich=enrich)

    def run(self, place_name: str, state: PipelineState, enrich: bool = False) -> PipelineResult:
        cache = self.cache

        coordinate = cache.get_coordinate(state, place_name)
        if coordinate is None:
            coordinate = self.geocode(place_name)
            if coordinate:
                state = cache.record_coordinate(state, place_name, coordinate)
        else:
            logger.debug('Coordinate cache hit for "%s"', place_name)

        if not coordinate:
            logger.error('Geocoding lookup failed for "%s"!', place_name)
            return PipelineResult(forecast=not_found_message(place_name), state=state)

        station = cache.get_station(state, coordinate)
        if not station:
            station = self.station(coordinate)
            if station:
                state = cache.record_station(state, coordinate, station)
        else:
            logger.debug("Station cache hit for %s", coordinate)

        city_id = None
        if enrich and self.conditions is not None:
            city_id = cache.get_provider_id(state, place_name)
            if not city_id:
                city_id = self.conditions.resolve_city_id(place_name)
                if city_id:
                    state = cache.record_provider_id(state, place_name, city_id)

        state = cache.flush(state)

        text = None
        if not station:
            logger.error("NWS station lookup failed for %s!", coordinate)
        else:
            text = self.forecast(station)

        current = None
        if city_id:
            current = self.conditions.fetch_conditions(city_id)

        if not text:
            return PipelineResult(
                forecast=not_found_message(place_name), state=state, conditions=current
            )
        return PipelineResult(forecast=text, state=state, found=True, conditions=current)
