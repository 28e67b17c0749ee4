class CatalogError(Exception):
    """Base class for catalog data-access failures."""


class ConnectionInitError(CatalogError):
    """The store handle could not be opened at startup."""


class NotReady(CatalogError):
    """A lookup was attempted while no store handle is available."""


class NotFound(CatalogError):
    """No record matches the requested id."""


class StoreError(CatalogError):
    """The underlying driver reported a failure. The driver error is the __cause__."""


class MalformedRecord(CatalogError):
    """A store document does not have the expected shape."""
