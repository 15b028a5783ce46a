"""Railway station lookup: normalization, fuzzy matching and ranking."""

from .exceptions import CatalogError, StationNotFound, StationsError
from .models import CanonicalForm, QueryOptions, StationRecord, Tier
from .normalizer import normalize
from .stations import find_stations, get_station_from_id, get_stations

__version__ = "0.1.0"

__all__ = [
    "CanonicalForm",
    "CatalogError",
    "QueryOptions",
    "StationNotFound",
    "StationRecord",
    "StationsError",
    "Tier",
    "find_stations",
    "get_station_from_id",
    "get_stations",
    "normalize",
]
