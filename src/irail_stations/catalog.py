"""Station catalog: loads the bundled iRail stations.csv once per process.

The CSV follows the upstream iRail/stations layout (URI, name,
alternative-fr/nl/de/en, country-code, longitude, latitude, avg_stop_times,
official_transfer_time). Extra free-text aliases come from a second file
with URI and alias columns.
"""

import csv
import io
import logging
import threading
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from pydantic import ValidationError

from . import config
from .exceptions import CatalogError
from .index import AliasIndex
from .models import Location, StationRecord

logger = logging.getLogger(__name__)

ALTERNATIVE_LANGUAGES = ("fr", "nl", "de", "en")
REQUIRED_COLUMNS = ("URI", "name", "longitude", "latitude")


def code_from_uri(uri: str) -> str:
    """Return the bare code, the last path segment of a station URI."""
    return uri.rstrip("/").rsplit("/", 1)[-1]


def _optional_number(value: str | None, cast):
    value = (value or "").strip()
    return cast(value) if value else None


def parse_stations(csv_text: str, aliases: dict[str, list[str]] | None = None) -> list[StationRecord]:
    """Parse stations.csv text into records, in file order.

    Raises:
        CatalogError: if a column is missing, a row is invalid or two rows
            share a URI.
    """
    aliases = aliases or {}
    reader = csv.DictReader(io.StringIO(csv_text))
    missing = [c for c in REQUIRED_COLUMNS if c not in (reader.fieldnames or [])]
    if missing:
        raise CatalogError(f"stations.csv is missing columns: {', '.join(missing)}")

    stations: list[StationRecord] = []
    seen: set[str] = set()
    for line, row in enumerate(reader, start=2):
        uri = (row.get("URI") or "").strip()
        name = (row.get("name") or "").strip()
        if not uri or not name:
            raise CatalogError(f"stations.csv line {line}: URI and name are required")
        if uri in seen:
            raise CatalogError(f"stations.csv line {line}: duplicate station {uri}")
        seen.add(uri)

        alternatives = {}
        for lang in ALTERNATIVE_LANGUAGES:
            alternative = (row.get(f"alternative-{lang}") or "").strip()
            if alternative:
                alternatives[lang] = alternative

        try:
            station = StationRecord(
                id=uri,
                code=code_from_uri(uri),
                name=name,
                alternatives=alternatives,
                aliases=tuple(aliases.get(uri, ())),
                country_code=(row.get("country-code") or "").strip().lower(),
                location=Location(
                    longitude=float(row["longitude"]),
                    latitude=float(row["latitude"]),
                ),
                popularity=_optional_number(row.get("avg_stop_times"), float) or 0.0,
                official_transfer_time=_optional_number(
                    row.get("official_transfer_time"), int
                ),
            )
        except (TypeError, ValueError, ValidationError) as e:
            raise CatalogError(f"stations.csv line {line}: {e}") from e
        stations.append(station)

    return stations


def parse_aliases(csv_text: str) -> dict[str, list[str]]:
    """Parse aliases.csv text into a URI -> aliases mapping."""
    reader = csv.DictReader(io.StringIO(csv_text))
    if not {"URI", "alias"} <= set(reader.fieldnames or []):
        raise CatalogError("aliases.csv needs URI and alias columns")

    aliases: dict[str, list[str]] = {}
    for row in reader:
        uri = (row.get("URI") or "").strip()
        alias = (row.get("alias") or "").strip()
        if uri and alias:
            aliases.setdefault(uri, []).append(alias)
    return aliases


def _read_text(override: str | None, filename: str) -> str:
    if override:
        return Path(override).read_text(encoding="utf-8")
    data_files = resources.files("irail_stations") / "data"
    return data_files.joinpath(filename).read_text(encoding="utf-8")


def read_aliases(aliases_csv: str | None = None) -> dict[str, list[str]]:
    """Read the aliases file: the given path, the override, or the bundled one."""
    text = _read_text(aliases_csv or config.aliases_csv_override(), config.ALIASES_FILE)
    return parse_aliases(text)


@dataclass(frozen=True)
class Catalog:
    """Immutable, ordered station collection with its alias index."""

    stations: tuple[StationRecord, ...]
    index: AliasIndex = field(repr=False)
    by_id: Mapping[str, StationRecord] = field(repr=False)
    by_code: Mapping[str, StationRecord] = field(repr=False)

    @classmethod
    def from_records(cls, records) -> "Catalog":
        stations = tuple(records)
        by_code: dict[str, StationRecord] = {}
        for station in stations:
            if station.code in by_code:
                raise CatalogError(f"Duplicate station code {station.code}")
            by_code[station.code] = station
        return cls(
            stations=stations,
            index=AliasIndex.build(stations),
            by_id=MappingProxyType({s.id: s for s in stations}),
            by_code=MappingProxyType(by_code),
        )

    def __len__(self) -> int:
        return len(self.stations)


def load_catalog(stations_csv: str | None = None, aliases_csv: str | None = None) -> Catalog:
    """Read the catalog files and build the catalog.

    Paths default to the environment overrides, then to the bundled data.
    """
    stations_text = _read_text(stations_csv or config.stations_csv_override(), config.STATIONS_FILE)
    catalog = Catalog.from_records(parse_stations(stations_text, read_aliases(aliases_csv)))
    logger.info(
        "Loaded %d stations (%d name variants)",
        len(catalog),
        catalog.index.variant_count,
    )
    return catalog


_lock = threading.Lock()
_catalog: Catalog | None = None


def get_catalog() -> Catalog:
    """Return the process-wide catalog, loading it on first use."""
    global _catalog
    if _catalog is None:
        with _lock:
            if _catalog is None:
                _catalog = load_catalog()
    return _catalog


def reload_catalog(stations_csv: str | None = None, aliases_csv: str | None = None) -> Catalog:
    """Load the catalog again and swap it in for subsequent queries."""
    global _catalog
    catalog = load_catalog(stations_csv, aliases_csv)
    with _lock:
        _catalog = catalog
    return catalog
