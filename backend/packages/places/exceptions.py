from common.core.exceptions import NotFoundError
from packages.metering.exceptions import OperationFailed


class NoPlacesFound(OperationFailed, NotFoundError):
    """The places source returned no results for the query."""

    pass
