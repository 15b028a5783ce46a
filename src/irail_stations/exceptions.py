"""Errors raised by the station lookup service."""


class StationsError(Exception):
    """Base class for all station lookup errors."""


class StationNotFound(StationsError, LookupError):
    """No station has the bare code an identifier resolved to."""

    def __init__(self, identifier: str, code: str):
        self.identifier = identifier
        self.code = code
        super().__init__(f"No station found for '{identifier}' (code '{code}')")


class CatalogError(StationsError, ValueError):
    """The station catalog could not be loaded or is malformed."""
