"""Tests for the catalog refresh."""

import httpx
import pytest

from irail_stations.exceptions import CatalogError
from irail_stations.updater import StationsSourceClient, refresh_catalog

CSV = (
    "URI,name,alternative-fr,alternative-nl,alternative-de,alternative-en,"
    "country-code,longitude,latitude,avg_stop_times,official_transfer_time\n"
    "http://irail.be/stations/NMBS/008895000,Aalst,Alost,,,,be,4.039653,50.942813,220.0,\n"
    "http://irail.be/stations/NMBS/008892007,Gent-Sint-Pieters,,,,,be,3.710675,51.035896,610.0,\n"
)


def make_client(status_code=200, text=CSV, seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, text=text)

    return StationsSourceClient(url="https://example.test/stations.csv", transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_client_initialization():
    """Test client context manager."""
    async with StationsSourceClient() as client:
        assert client.client is not None


@pytest.mark.asyncio
async def test_client_requires_context_manager():
    with pytest.raises(RuntimeError):
        await StationsSourceClient().fetch_csv()


@pytest.mark.asyncio
async def test_fetch_sends_user_agent():
    seen = []
    async with make_client(seen=seen) as client:
        text = await client.fetch_csv()
    assert text == CSV
    assert seen[0].headers["User-Agent"].startswith("irail-stations/")


@pytest.mark.asyncio
async def test_refresh_writes_validated_catalog(tmp_path):
    output = tmp_path / "data" / "stations.csv"
    count = await refresh_catalog(output, make_client())
    assert count == 2
    assert output.read_text(encoding="utf-8") == CSV


@pytest.mark.asyncio
async def test_refresh_rejects_malformed_download(tmp_path):
    output = tmp_path / "stations.csv"
    with pytest.raises(CatalogError):
        await refresh_catalog(output, make_client(text="<html>moved</html>"))
    assert not output.exists()


@pytest.mark.asyncio
@pytest.mark.parametrize("status_code", [404, 500])
async def test_refresh_http_errors(tmp_path, status_code):
    with pytest.raises(CatalogError):
        await refresh_catalog(tmp_path / "stations.csv", make_client(status_code=status_code))


@pytest.mark.asyncio
async def test_refresh_rejects_duplicate_codes(tmp_path):
    output = tmp_path / "stations.csv"
    output.write_text(CSV, encoding="utf-8")
    duplicate = CSV + (
        "http://irail.be/stations/SNCB/008892007,Gent-Sint-Pieters,,,,,be,3.710675,51.035896,610.0,\n"
    )
    with pytest.raises(CatalogError, match="008892007"):
        await refresh_catalog(output, make_client(text=duplicate))
    assert output.read_text(encoding="utf-8") == CSV
    assert list(tmp_path.iterdir()) == [output]


@pytest.mark.asyncio
async def test_refresh_replaces_existing_file(tmp_path):
    output = tmp_path / "stations.csv"
    output.write_text("stale\n", encoding="utf-8")
    await refresh_catalog(output, make_client())
    assert output.read_text(encoding="utf-8") == CSV
    assert list(tmp_path.iterdir()) == [output]
