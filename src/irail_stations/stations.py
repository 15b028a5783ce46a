"""Query surface: free-text station lookup and identifier resolution."""

from typing import Any

from .catalog import Catalog, get_catalog
from .jsonld import station_document, stations_document
from .matcher import match
from .models import QueryOptions, StationRecord
from .ranker import rank
from .resolver import resolve


def find_stations(
    query: str = "",
    options: QueryOptions | None = None,
    catalog: Catalog | None = None,
) -> list[StationRecord]:
    """Return the stations matching a query, best match first."""
    options = options or QueryOptions()
    if catalog is None:
        catalog = get_catalog()
    candidates = match(catalog.index, query, options.country)
    return [catalog.by_id[station_id] for station_id in rank(candidates, options.sorted)]


def get_stations(
    query: str = "",
    country: str | None = None,
    sorted: bool = False,
    catalog: Catalog | None = None,
) -> dict[str, Any]:
    """Look up stations and return them as a JSON-LD document.

    Args:
        query: Free-text station name; empty lists the whole catalog
        country: Country code filter (e.g. "be"); empty or None for all
        sorted: Order equally good matches by station traffic

    Returns:
        JSON-LD document whose @graph holds the ranked stations.
    """
    options = QueryOptions(country=country, sorted=sorted)
    stations = find_stations(query, options, catalog)
    return stations_document(stations, query=query, country=options.country)


def get_station_from_id(identifier: str, catalog: Catalog | None = None) -> dict[str, Any]:
    """Resolve a bare code, BE.NMBS. code or station URI to its JSON-LD node.

    Raises:
        StationNotFound: if no station has that code.
    """
    if catalog is None:
        catalog = get_catalog()
    station = resolve(catalog, identifier)
    return station_document(station)
