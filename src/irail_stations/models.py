"""Data models for the station catalog and the lookup pipeline."""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Location(BaseModel):
    """WGS84 coordinates of a station."""

    model_config = ConfigDict(frozen=True)

    longitude: float
    latitude: float


class StationRecord(BaseModel):
    """Represents one physical railway station in the catalog."""

    model_config = ConfigDict(frozen=True)

    id: str  # Station URI, e.g. "http://irail.be/stations/NMBS/008892007"
    code: str  # Bare code, e.g. "008892007"
    name: str
    alternatives: dict[str, str] = Field(default_factory=dict)  # language -> name
    aliases: tuple[str, ...] = ()
    country_code: str = ""
    location: Location
    popularity: float = Field(default=0.0, ge=0.0)  # average daily stop times
    official_transfer_time: int | None = None  # seconds

    @property
    def names(self) -> list[str]:
        """Primary name followed by the language-tagged alternatives."""
        return [self.name, *self.alternatives.values()]

    @property
    def variants(self) -> list[str]:
        """Every free-text form this station is known by."""
        return [*self.names, *self.aliases]


class CanonicalForm(BaseModel):
    """Normalized token representation of a name or a query."""

    model_config = ConfigDict(frozen=True)

    tokens: tuple[str, ...] = ()

    @property
    def text(self) -> str:
        """Canonical string: tokens joined by single spaces."""
        return " ".join(self.tokens)

    @property
    def token_set(self) -> frozenset[str]:
        return frozenset(self.tokens)

    def __bool__(self) -> bool:
        return bool(self.tokens)


class Tier(IntEnum):
    """Match quality, higher is better."""

    PARTIAL = 1  # every query token prefixes a variant token, or substring
    TOKEN_SET = 2  # same tokens, any order
    EXACT = 3  # same tokens, same order


class MatchCandidate(BaseModel):
    """A station matched by a query, with its best scoring variant."""

    model_config = ConfigDict(frozen=True)

    station_id: str
    tier: Tier
    matched_variant: CanonicalForm
    position: int  # catalog order
    popularity: float = 0.0


class QueryOptions(BaseModel):
    """Options of a free-text lookup."""

    model_config = ConfigDict(frozen=True)

    country: str | None = None  # country code filter, case-insensitive
    sorted: bool = False  # order equal tiers by popularity

    @field_validator("country")
    @classmethod
    def blank_country_is_no_filter(cls, value: str | None) -> str | None:
        value = (value or "").strip().lower()
        return value or None
