"""Error taxonomy shared by the providers, the cache controllers and the routes."""


class ExplorerError(Exception):
    """Base class for every failure a lookup can surface to its caller."""


class InvalidQuery(ExplorerError):
    """The inbound query descriptor is missing or malformed."""


class NotFound(ExplorerError):
    """The provider returned no candidates for the query."""


class ProviderUnavailable(ExplorerError):
    """Network, timeout or non-2xx failure while calling an external provider."""

    def __init__(self, provider: str, message: str, status: int | None = None):
        self.provider = provider
        self.status = status
        super().__init__(f"{provider}: {message}")


class ProviderDecodingError(ExplorerError):
    """A provider answered 2xx but the payload is missing required fields."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"{provider}: {message}")


class StoreError(ExplorerError):
    """A query or write against the relational store failed."""
