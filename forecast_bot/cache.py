"""Persistent lookup caches backing the forecast pipeline.

Three append-only maps are kept in a single persisted document:

* ``luCache``: place name -> encoded coordinate
* ``staCache``: encoded coordinate -> NWS station reference
* ``awCache``: place name -> AccuWeather city key

Only successful lookups are recorded. A failed lookup leaves no entry, so
it is attempted again on the next run.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Protocol

logger = logging.getLogger(__name__)

LOOKUP_CACHE = "luCache"
STATION_CACHE = "staCache"
PROVIDER_CACHE = "awCache"


class StateStore(Protocol):
    """Coarse get/set access to the persisted state document."""

    def get(self) -> dict[str, Any] | None: ...

    def set(self, value: dict[str, Any]) -> None: ...


@dataclass(frozen=True)
class PipelineState:
    lookups: dict[str, str] = field(default_factory=dict)
    stations: dict[str, str] = field(default_factory=dict)
    provider_ids: dict[str, str] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)
    # In-memory only, never written to the store.
    dirty: bool = field(default=False, compare=False)

    @classmethod
    def from_dict(cls, raw: dict[str, Any] | None) -> "PipelineState":
        raw = dict(raw or {})
        lookups = raw.pop(LOOKUP_CACHE, None) or {}
        stations = raw.pop(STATION_CACHE, None) or {}
        provider_ids = raw.pop(PROVIDER_CACHE, None) or {}
        raw.pop("__dirty", None)
        return cls(
            lookups={k: v for k, v in lookups.items() if v},
            stations={k: v for k, v in stations.items() if v},
            provider_ids={k: v for k, v in provider_ids.items() if v},
            extra=raw,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.extra,
            LOOKUP_CACHE: dict(self.lookups),
            STATION_CACHE: dict(self.stations),
            PROVIDER_CACHE: dict(self.provider_ids),
        }


class ResolutionCache:
    """Reads, updates and writes back :class:`PipelineState`.

    The ``record_*`` methods are pure: they return a new state marked dirty
    and never overwrite an existing entry. :meth:`flush` writes only dirty
    state, so a run that filled several caches still costs a single write.
    """

    def __init__(self, store: StateStore):
        self.store = store

    def load(self) -> PipelineState:
        return PipelineState.from_dict(self.store.get())

    @staticmethod
    def get_coordinate(state: PipelineState, place_name: str) -> str | None:
        return state.lookups.get(place_name)

    @staticmethod
    def get_station(state: PipelineState, coordinate: str) -> str | None:
        return state.stations.get(coordinate)

    @staticmethod
    def get_provider_id(state: PipelineState, place_name: str) -> str | None:
        return state.provider_ids.get(place_name)

    @staticmethod
    def record_coordinate(state: PipelineState, place_name: str, coordinate: str) -> PipelineState:
        if not coordinate or state.lookups.get(place_name):
            return state
        logger.debug('Caching coordinate %s for "%s"', coordinate, place_name)
        return replace(state, lookups={**state.lookups, place_name: coordinate}, dirty=True)

    @staticmethod
    def record_station(state: PipelineState, coordinate: str, station: str) -> PipelineState:
        if coordinate not in state.lookups.values():
            raise ValueError(f"Coordinate {coordinate!r} is not a cached lookup result")
        if not station or state.stations.get(coordinate):
            return state
        logger.debug("Caching station %s for %s", station, coordinate)
        return replace(state, stations={**state.stations, coordinate: station}, dirty=True)

    @staticmethod
    def record_provider_id(state: PipelineState, place_name: str, city_id: str) -> PipelineState:
        if not city_id or state.provider_ids.get(place_name):
            return state
        logger.debug('Caching provider id %s for "%s"', city_id, place_name)
        return replace(state, provider_ids={**state.provider_ids, place_name: city_id}, dirty=True)

    def flush(self, state: PipelineState) -> PipelineState:
        """Persist ``state`` if dirty and return it with the dirty marker cleared."""
        if not state.dirty:
            return state
        clean = replace(state, dirty=False)
        self.store.set(clean.to_dict())
        logger.info("Persisted lookup caches")
        return clean


class InMemoryStateStore:
    """Dict-backed :class:`StateStore`, mainly for tests and one-off runs."""

    def __init__(self, value: dict[str, Any] | None = None):
        self.value = value
        self.writes = 0

    def get(self) -> dict[str, Any] | None:
        return self.value

    def set(self, value: dict[str, Any]) -> None:
        self.value = value
        self.writes += 1


class KeyValueStateStore:
    """Adapts a ``get(key, default)``/``set(key, value)`` storage to a :class:`StateStore`."""

    def __init__(self, storage, key: str):
        self.storage = storage
        self.key = key

    def get(self) -> dict[str, Any] | None:
        return self.storage.get(self.key, None)

    def set(self, value: dict[str, Any]) -> None:
        self.storage.set(self.key, value)
