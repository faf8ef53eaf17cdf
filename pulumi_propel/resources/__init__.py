"""Resource adapters implementing CRUD for each Propel resource kind."""

from .base import ResourceAdapter, Timeouts
from .data_pool import DataPoolAdapter
from .data_source import DataSourceAdapter
from .metric import MetricAdapter

ADAPTERS: dict[str, type[ResourceAdapter]] = {
    "data-source": DataSourceAdapter,
    "data-pool": DataPoolAdapter,
    "metric": MetricAdapter,
}

__all__ = [
    "ADAPTERS",
    "DataPoolAdapter",
    "DataSourceAdapter",
    "MetricAdapter",
    "ResourceAdapter",
    "Timeouts",
]
