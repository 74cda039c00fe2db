class Gw2RefsError(Exception):
    """Base class for every failure that aborts a reference-sheet run."""


class FetchError(Gw2RefsError):
    """Transport failure or a response body of the wrong shape."""


class ShapeError(Gw2RefsError):
    """A JSON value is missing an expected field or has the wrong type."""


class JoinError(Gw2RefsError):
    """A trait points at a specialization id that was never fetched."""


class ConfigError(Gw2RefsError):
    """Invalid settings file or option value."""
