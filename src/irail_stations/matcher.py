"""Tiered matching of a query against the alias index."""

from .index import AliasIndex, IndexedStation
from .models import CanonicalForm, MatchCandidate, Tier
from .normalizer import normalize


def _country_matches(entry: IndexedStation, country: str | None) -> bool:
    country = (country or "").strip().lower()
    return not country or entry.station.country_code == country


def partial_match(query: CanonicalForm, variant: CanonicalForm) -> bool:
    """True when every query token prefixes a variant token, or the query
    string occurs inside the variant string."""
    if all(any(token.startswith(q) for token in variant.tokens) for q in query.tokens):
        return True
    return query.text in variant.text


def best_tier(query: CanonicalForm, entry: IndexedStation, exact_ids, set_ids) -> tuple[Tier, CanonicalForm] | None:
    """Best tier reached by any of a station's variants, with that variant."""
    station_id = entry.station.id
    if station_id in exact_ids:
        return Tier.EXACT, query
    if station_id in set_ids:
        for variant in entry.variants:
            if variant.token_set == query.token_set:
                return Tier.TOKEN_SET, variant
    for variant in entry.variants:
        if partial_match(query, variant):
            return Tier.PARTIAL, variant
    return None


def match(index: AliasIndex, query: str | None, country: str | None = None) -> list[MatchCandidate]:
    """Match a free-text query against every station.

    Returns at most one candidate per station, its best tier, in catalog
    order. A query without any token matches every station at the top tier.
    """
    form = normalize(query)
    exact_ids = frozenset(index.exact_ids(form))
    set_ids = frozenset(index.token_set_ids(form))

    candidates = []
    for entry in index.stations:
        if not _country_matches(entry, country):
            continue

        if not form:
            found = (Tier.EXACT, form)
        else:
            found = best_tier(form, entry, exact_ids, set_ids)
        if found is None:
            continue

        tier, variant = found
        candidates.append(
            MatchCandidate(
                station_id=entry.station.id,
                tier=tier,
                matched_variant=variant,
                position=entry.position,
                popularity=entry.station.popularity,
            )
        )
    return candidates
