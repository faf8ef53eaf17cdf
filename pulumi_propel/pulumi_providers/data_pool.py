"""Pulumi dynamic provider for Propel Data Pools."""

from typing import Any, Optional

import pulumi
from pulumi import Input, Output

from ..models import DataPoolInputs
from ..resources import DataPoolAdapter
from .base import PropelProvider


class DataPoolProvider(PropelProvider):
    """Creates Data Pools and blocks until they are LIVE."""

    adapter_class = DataPoolAdapter
    inputs_model = DataPoolInputs
    input_fields = (
        "unique_name",
        "description",
        "data_source",
        "table",
        "timestamp",
        "tenant_id",
        "columns",
    )
    replace_fields = ("table", "timestamp", "tenant_id")


class DataPool(pulumi.dynamic.Resource):
    """
    A Propel Data Pool.

    Args:
        name: Resource name
        data_source: ID of the Data Source the pool reads from
        table: Name of the Data Source table
        timestamp: Name of the timestamp column
        columns: Column records ``{"name", "type", "nullable"}``
        unique_name: The Data Pool's name
        description: The Data Pool's description
        tenant_id: Column used to restrict access between tenants
        timeouts: ``{"create": seconds, "delete": seconds}``
        opts: Standard Pulumi resource options
    """

    unique_name: Output[str]
    description: Output[str]
    status: Output[str]
    account: Output[str]
    environment: Output[str]
    data_source: Output[str]
    table: Output[str]
    timestamp: Output[str]
    tenant_id: Output[Optional[str]]
    columns: Output[list[dict[str, Any]]]

    def __init__(
        self,
        name: str,
        data_source: Input[str],
        table: Input[str],
        timestamp: Input[str],
        columns: Input[list[dict[str, Any]]],
        unique_name: Optional[Input[str]] = None,
        description: Optional[Input[str]] = None,
        tenant_id: Optional[Input[str]] = None,
        timeouts: Optional[dict[str, float]] = None,
        opts: Optional[pulumi.ResourceOptions] = None,
    ):
        super().__init__(
            DataPoolProvider(),
            name,
            {
                "unique_name": unique_name,
                "description": description,
                "data_source": data_source,
                "table": table,
                "timestamp": timestamp,
                "tenant_id": tenant_id,
                "columns": columns,
                "timeouts": timeouts,
                # Computed on create
                "status": None,
                "account": None,
                "environment": None,
            },
            opts,
        )
