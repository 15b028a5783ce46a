"""JSON-LD documents for station lookups."""

from typing import Any, Iterable
from urllib.parse import urlencode

from .config import BASE_URI
from .models import StationRecord

CONTEXT: dict[str, Any] = {
    "gtfs": "http://vocab.gtfs.org/terms#",
    "name": "http://xmlns.com/foaf/0.1/name",
    "alternative": {
        "@id": "http://purl.org/dc/terms/alternative",
        "@container": "@language",
    },
    "longitude": "http://www.w3.org/2003/01/geo/wgs84_pos#long",
    "latitude": "http://www.w3.org/2003/01/geo/wgs84_pos#lat",
    "country": {
        "@id": "http://www.geonames.org/ontology#parentCountry",
        "@type": "@id",
    },
    "avgStopTimes": "http://semweb.mmlab.be/ns/stoptimes#avgStopTimes",
    "officialTransferTime": "http://semweb.mmlab.be/ns/stoptimes#officialTransferTime",
}

# GeoNames country resources, by catalog country code
COUNTRIES = {
    "be": "http://sws.geonames.org/2802361/",
    "nl": "http://sws.geonames.org/2750405/",
    "de": "http://sws.geonames.org/2921044/",
    "fr": "http://sws.geonames.org/3017382/",
    "lu": "http://sws.geonames.org/2960313/",
    "gb": "http://sws.geonames.org/2635167/",
}


def document_id(query: str = "", country: str | None = None) -> str:
    """Identity of a result document: the listing URI, scoped by the query."""
    params = {}
    if query:
        params["q"] = query
    if country:
        params["country"] = country.lower()
    if not params:
        return BASE_URI
    return f"{BASE_URI}?{urlencode(params)}"


def station_node(station: StationRecord) -> dict[str, Any]:
    """Serialize one station into its graph node."""
    node: dict[str, Any] = {
        "@id": station.id,
        "@type": "gtfs:Station",
        "name": station.name,
        "alternative": [
            {"@value": name, "@language": lang}
            for lang, name in station.alternatives.items()
        ],
        "longitude": station.location.longitude,
        "latitude": station.location.latitude,
        "avgStopTimes": station.popularity,
    }
    if station.country_code in COUNTRIES:
        node["country"] = COUNTRIES[station.country_code]
    if station.official_transfer_time is not None:
        node["officialTransferTime"] = station.official_transfer_time
    return node


def stations_document(
    stations: Iterable[StationRecord],
    query: str = "",
    country: str | None = None,
) -> dict[str, Any]:
    """Wrap ranked stations into a JSON-LD document."""
    return {
        "@context": CONTEXT,
        "@id": document_id(query, country),
        "@graph": [station_node(s) for s in stations],
    }


def station_document(station: StationRecord) -> dict[str, Any]:
    """A single station node with its context."""
    return {"@context": CONTEXT, **station_node(station)}
