"""GraphQL client for the Propel API."""

from . import operations
from .transport import PropelClient
from .types import ColumnType, DataPoolStatus, DataSourceStatus

__all__ = [
    "ColumnType",
    "DataPoolStatus",
    "DataSourceStatus",
    "PropelClient",
    "operations",
]
