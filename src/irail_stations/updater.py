"""Refresh of the bundled station catalog from the upstream iRail repository."""

import logging
from pathlib import Path

import httpx

from . import config
from .catalog import Catalog, parse_stations, read_aliases
from .exceptions import CatalogError

logger = logging.getLogger(__name__)


class StationsSourceClient:
    """Client for downloading the upstream stations.csv."""

    def __init__(self, url: str = config.STATIONS_CSV_URL, transport: httpx.AsyncBaseTransport | None = None):
        self.url = url
        self.transport = transport
        self.client: httpx.AsyncClient | None = None

    async def __aenter__(self):
        """Async context manager entry."""
        self.client = httpx.AsyncClient(
            timeout=config.HTTP_TIMEOUT,
            headers={"User-Agent": config.USER_AGENT},
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        if self.client:
            await self.client.aclose()

    async def fetch_csv(self) -> str:
        """Download the stations CSV text."""
        if not self.client:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        try:
            response = await self.client.get(self.url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                raise CatalogError(f"Station catalog not found at {self.url}.") from e
            raise CatalogError(
                f"Station catalog download failed ({e.response.status_code})."
            ) from e
        except httpx.TransportError as e:
            raise CatalogError(f"Could not reach {self.url}: {e}") from e
        return response.text


async def refresh_catalog(output: Path | None = None, client: StationsSourceClient | None = None) -> int:
    """Download stations.csv, validate it and write it to ``output``.

    Defaults to overwriting the bundled catalog. The download is built into a
    full catalog with the current aliases first; nothing is written when that
    fails. The file is replaced through a temporary sibling.

    Returns:
        Number of stations written.
    """
    output = output or config.bundled_data_dir() / config.STATIONS_FILE
    async with client or StationsSourceClient() as source:
        csv_text = await source.fetch_csv()

    catalog = Catalog.from_records(parse_stations(csv_text, read_aliases()))
    logger.info("Fetched %d stations from %s", len(catalog), source.url)

    output.parent.mkdir(parents=True, exist_ok=True)
    partial = output.with_name(output.name + ".tmp")
    partial.write_text(csv_text, encoding="utf-8")
    partial.replace(output)
    logger.info("Wrote %s", output)
    return len(catalog)
