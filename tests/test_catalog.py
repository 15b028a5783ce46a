"""Tests for catalog loading and indexing."""

import threading

import pytest

from irail_stations import catalog as catalog_module
from irail_stations.catalog import (
    Catalog,
    code_from_uri,
    get_catalog,
    load_catalog,
    parse_aliases,
    parse_stations,
)
from irail_stations.exceptions import CatalogError
from irail_stations.normalizer import normalize

HEADER = (
    "URI,name,alternative-fr,alternative-nl,alternative-de,alternative-en,"
    "country-code,longitude,latitude,avg_stop_times,official_transfer_time\n"
)
GENT = (
    "http://irail.be/stations/NMBS/008892007,Gent-Sint-Pieters,Gand-Saint-Pierre,,,"
    "Ghent-Sint-Pieters,be,3.710675,51.035896,610.0,420\n"
)
AALST = "http://irail.be/stations/NMBS/008895000,Aalst,Alost,,,,BE,4.039653,50.942813,,\n"


class TestParsing:
    def test_parse_station(self):
        [station] = parse_stations(HEADER + GENT)
        assert station.id == "http://irail.be/stations/NMBS/008892007"
        assert station.code == "008892007"
        assert station.name == "Gent-Sint-Pieters"
        assert station.alternatives == {"fr": "Gand-Saint-Pierre", "en": "Ghent-Sint-Pieters"}
        assert station.country_code == "be"
        assert station.location.latitude == pytest.approx(51.035896)
        assert station.popularity == 610.0
        assert station.official_transfer_time == 420

    def test_optional_columns_empty(self):
        [station] = parse_stations(HEADER + AALST)
        assert station.popularity == 0.0
        assert station.official_transfer_time is None
        assert station.country_code == "be"

    def test_file_order_kept(self):
        stations = parse_stations(HEADER + GENT + AALST)
        assert [s.name for s in stations] == ["Gent-Sint-Pieters", "Aalst"]

    def test_aliases_attached(self):
        aliases = parse_aliases("URI,alias\nhttp://irail.be/stations/NMBS/008895000,Aalst Centrum\n")
        [station] = parse_stations(HEADER + AALST, aliases)
        assert station.aliases == ("Aalst Centrum",)
        assert station.variants == ["Aalst", "Alost", "Aalst Centrum"]

    def test_missing_column(self):
        with pytest.raises(CatalogError, match="latitude"):
            parse_stations("URI,name,longitude\nhttp://x/1,A,4.0\n")

    def test_missing_name(self):
        with pytest.raises(CatalogError, match="line 2"):
            parse_stations(HEADER + "http://irail.be/stations/NMBS/1,,,,,,be,4.0,50.0,,\n")

    def test_bad_coordinates(self):
        with pytest.raises(CatalogError, match="line 2"):
            parse_stations(HEADER + "http://irail.be/stations/NMBS/1,A,,,,,be,east,50.0,,\n")

    def test_negative_popularity_rejected(self):
        with pytest.raises(CatalogError):
            parse_stations(HEADER + "http://irail.be/stations/NMBS/1,A,,,,,be,4.0,50.0,-3,\n")

    def test_duplicate_station(self):
        with pytest.raises(CatalogError, match="duplicate"):
            parse_stations(HEADER + GENT + GENT)

    def test_aliases_need_columns(self):
        with pytest.raises(CatalogError):
            parse_aliases("id,name\n1,A\n")

    def test_code_from_uri(self):
        assert code_from_uri("http://irail.be/stations/NMBS/008892007/") == "008892007"


class TestIndex:
    def test_variants_normalized_and_deduplicated(self):
        catalog = Catalog.from_records(parse_stations(HEADER + GENT))
        [entry] = catalog.index.stations
        assert entry.variants == (
            normalize("Gent-Sint-Pieters"),
            normalize("Gand-Saint-Pierre"),
            normalize("Ghent-Sint-Pieters"),
        )
        assert catalog.index.variant_count == 3

    def test_exact_and_token_set_lookup(self):
        catalog = Catalog.from_records(parse_stations(HEADER + GENT + AALST))
        gent = "http://irail.be/stations/NMBS/008892007"
        assert catalog.index.exact_ids(normalize("gent sint pieters")) == (gent,)
        assert catalog.index.token_set_ids(normalize("pieters sint gent")) == (gent,)
        assert catalog.index.exact_ids(normalize("gent")) == ()

    def test_duplicate_code(self):
        stations = parse_stations(
            HEADER + GENT + GENT.replace("stations/NMBS", "stations/SNCB")
        )
        with pytest.raises(CatalogError, match="008892007"):
            Catalog.from_records(stations)


class TestLoading:
    def test_bundled_catalog(self):
        catalog = load_catalog()
        assert len(catalog) > 40
        assert "008892007" in catalog.by_code
        assert catalog.by_code["008011068"].aliases

    def test_lookup_maps_are_read_only(self):
        catalog = Catalog.from_records(parse_stations(HEADER + GENT))
        with pytest.raises(TypeError):
            catalog.by_code["008895000"] = catalog.stations[0]
        with pytest.raises(TypeError):
            del catalog.by_id[catalog.stations[0].id]
        with pytest.raises(TypeError):
            catalog.index.exact[("x",)] = ()

    def test_environment_override(self, tmp_path, monkeypatch):
        stations = tmp_path / "stations.csv"
        stations.write_text(HEADER + AALST, encoding="utf-8")
        aliases = tmp_path / "aliases.csv"
        aliases.write_text("URI,alias\n", encoding="utf-8")
        monkeypatch.setenv("IRAIL_STATIONS_CSV", str(stations))
        monkeypatch.setenv("IRAIL_ALIASES_CSV", str(aliases))

        catalog = load_catalog()
        assert [s.name for s in catalog.stations] == ["Aalst"]

    def test_loaded_once_under_concurrency(self, monkeypatch):
        calls = []
        barrier = threading.Barrier(8)
        sentinel = Catalog.from_records(parse_stations(HEADER + AALST))

        def fake_load():
            calls.append(1)
            return sentinel

        monkeypatch.setattr(catalog_module, "_catalog", None)
        monkeypatch.setattr(catalog_module, "load_catalog", fake_load)

        results = []

        def worker():
            barrier.wait()
            results.append(get_catalog())

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert all(r is sentinel for r in results)

    def test_reload(self, tmp_path):
        stations = tmp_path / "stations.csv"
        stations.write_text(HEADER + GENT, encoding="utf-8")
        previous = get_catalog()
        try:
            reloaded = catalog_module.reload_catalog(str(stations))
            assert get_catalog() is reloaded
            assert len(reloaded) == 1
        finally:
            catalog_module._catalog = previous
