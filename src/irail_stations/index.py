"""Alias index: canonical forms of every station name variant."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from .models import CanonicalForm, StationRecord
from .normalizer import index_forms


@dataclass(frozen=True)
class IndexedStation:
    station: StationRecord
    position: int  # catalog order
    variants: tuple[CanonicalForm, ...]


@dataclass(frozen=True)
class AliasIndex:
    """Read-only lookup structures built once from the catalog.

    ``stations`` keeps catalog order. ``exact`` and ``token_sets`` map a
    variant's token sequence / token set to the ids of the stations having
    that variant.
    """

    stations: tuple[IndexedStation, ...]
    exact: Mapping[tuple[str, ...], tuple[str, ...]]
    token_sets: Mapping[frozenset[str], tuple[str, ...]]

    @classmethod
    def build(cls, stations: Iterable[StationRecord]) -> "AliasIndex":
        indexed = []
        exact: dict[tuple[str, ...], list[str]] = {}
        token_sets: dict[frozenset[str], list[str]] = {}

        for position, station in enumerate(stations):
            variants: list[CanonicalForm] = []
            for text in station.variants:
                for form in index_forms(text):
                    if form not in variants:
                        variants.append(form)
            indexed.append(IndexedStation(station, position, tuple(variants)))

            for form in variants:
                _register(exact, form.tokens, station.id)
                _register(token_sets, form.token_set, station.id)

        return cls(
            stations=tuple(indexed),
            exact=MappingProxyType({k: tuple(v) for k, v in exact.items()}),
            token_sets=MappingProxyType({k: tuple(v) for k, v in token_sets.items()}),
        )

    @property
    def variant_count(self) -> int:
        return sum(len(entry.variants) for entry in self.stations)

    def exact_ids(self, form: CanonicalForm) -> tuple[str, ...]:
        return self.exact.get(form.tokens, ())

    def token_set_ids(self, form: CanonicalForm) -> tuple[str, ...]:
        return self.token_sets.get(form.token_set, ())


def _register(mapping: dict, key, station_id: str) -> None:
    ids = mapping.setdefault(key, [])
    if station_id not in ids:
        ids.append(station_id)
