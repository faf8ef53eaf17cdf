"""Pulumi dynamic providers for Propel resources."""

from .base import PropelProvider
from .data_pool import DataPool, DataPoolProvider
from .data_source import DataSource, DataSourceProvider
from .metric import Metric, MetricProvider

__all__ = [
    "DataPool",
    "DataPoolProvider",
    "DataSource",
    "DataSourceProvider",
    "Metric",
    "MetricProvider",
    "PropelProvider",
]
