"""Domain exceptions for catalog aggregation."""


class VocaworksError(Exception):
    """Base exception for vocaworks errors."""


class FetchError(VocaworksError):
    """Raised when a catalog record cannot be retrieved."""

    def __init__(self, identifier: int | str, message: str, status: int | None = None):
        self.identifier = identifier
        self.status = status
        super().__init__(message)


class MalformedRecordError(VocaworksError):
    """Raised when a fetched record is missing expected fields."""

    def __init__(self, identifier: int | str | None, message: str):
        self.identifier = identifier
        super().__init__(message)


class UnmappedRoleError(VocaworksError):
    """Raised when a credit role token has no display label."""

    def __init__(self, role: str, name: str):
        self.role = role
        self.name = name
        super().__init__(f"No display label for role {role!r} (credited to {name!r})")


class DiscoveryError(VocaworksError):
    """Raised when the discovery backend cannot resolve a producer or its songs."""
