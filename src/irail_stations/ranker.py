"""Ordering of match candidates."""

from typing import Iterable

from .models import MatchCandidate


def _catalog_key(candidate: MatchCandidate):
    return (-candidate.tier, candidate.position)


def _popularity_key(candidate: MatchCandidate):
    return (-candidate.tier, -candidate.popularity, candidate.position)


def rank(candidates: Iterable[MatchCandidate], sorted: bool = False) -> list[str]:
    """Order candidates best tier first and return their station ids.

    Within a tier the catalog order is kept, unless ``sorted`` is set: then
    busier stations (higher popularity) come first, catalog order breaking
    ties.
    """
    ordered = list(candidates)
    ordered.sort(key=_popularity_key if sorted else _catalog_key)
    return [c.station_id for c in ordered]
