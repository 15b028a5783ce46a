"""Configuration constants for the station lookup service."""

import os
from pathlib import Path

BASE_URI = "http://irail.be/stations/NMBS"
STATIONS_CSV_URL = (
    "https://raw.githubusercontent.com/iRail/stations/master/stations.csv"
)
USER_AGENT = "irail-stations/0.1.0"
HTTP_TIMEOUT = 30.0  # seconds

STATIONS_FILE = "stations.csv"
ALIASES_FILE = "aliases.csv"

# Environment overrides for the catalog files
STATIONS_CSV_ENV = "IRAIL_STATIONS_CSV"
ALIASES_CSV_ENV = "IRAIL_ALIASES_CSV"


def bundled_data_dir() -> Path:
    """Directory holding the catalog files shipped with the package."""
    return Path(__file__).resolve().parent / "data"


def stations_csv_override() -> str | None:
    return os.environ.get(STATIONS_CSV_ENV) or None


def aliases_csv_override() -> str | None:
    return os.environ.get(ALIASES_CSV_ENV) or None
